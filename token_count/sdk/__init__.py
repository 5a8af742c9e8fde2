"""
SDK for token-count.

Provides programmatic access to the count_tokens API.
"""

from .anthropic_client import TokenCountClient

__all__ = ["TokenCountClient"]
