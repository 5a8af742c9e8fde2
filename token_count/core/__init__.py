"""
Core modules for token-count.

This package contains the input collection, request building and
result reporting stages of the counting pipeline.
"""
