"""
Error taxonomy for token-count.

Every failure in the pipeline is fatal; the CLI turns these into a
single stderr message and a non-zero exit code.
"""

from typing import Optional


class TokenCountError(Exception):
    """Base class for all token-count failures."""


class ConfigurationError(TokenCountError):
    """Missing credential or invalid settings."""


class FileReadError(TokenCountError):
    """A named input file could not be read."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"error reading file {path}: {cause}")


class InputReadError(TokenCountError):
    """Piped standard input could not be read or decoded."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"error reading piped input: {cause}")


class EmptyInputError(TokenCountError):
    """No text was supplied from any source."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "No input provided. Pipe text via stdin and/or provide file paths"
        )


class TransportError(TokenCountError):
    """The counting service could not be reached."""


class APIError(TokenCountError):
    """The counting service answered with a non-success status."""

    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(f"API error: {message}")


class ResponseParseError(TokenCountError):
    """A success response carried a body that is not a valid count."""
