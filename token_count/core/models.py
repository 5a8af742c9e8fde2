"""
Request and response models for the count_tokens API.

All models are immutable; each one is produced by a single pipeline
stage and consumed by the next.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import ResponseParseError


@dataclass(frozen=True)
class Message:
    """A single chat message."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class CountRequest:
    """Outbound payload for the count_tokens endpoint."""
    model: str
    messages: Tuple[Message, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape of the request, with no extra or omitted fields."""
        return {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }

    def to_json(self) -> bytes:
        """Serialize to compact UTF-8 JSON.

        Identical requests always serialize to identical bytes.
        """
        return json.dumps(
            self.to_dict(), ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")


@dataclass(frozen=True)
class CountResponse:
    """Token count returned by a successful API call."""
    input_tokens: int

    @classmethod
    def from_json(cls, body: bytes) -> "CountResponse":
        """Strictly decode a success body.

        Raises:
            ResponseParseError: If the body is not JSON, or input_tokens is
                missing, not an integer, or negative
        """
        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise ResponseParseError(f"error parsing response: {e}") from e

        if not isinstance(data, dict):
            raise ResponseParseError("error parsing response: expected a JSON object")

        if "input_tokens" not in data:
            raise ResponseParseError("error parsing response: missing 'input_tokens'")

        tokens = data["input_tokens"]
        # bool is an int subclass
        if isinstance(tokens, bool) or not isinstance(tokens, int):
            raise ResponseParseError("error parsing response: 'input_tokens' must be an integer")
        if tokens < 0:
            raise ResponseParseError("error parsing response: 'input_tokens' must be >= 0")

        return cls(input_tokens=tokens)


def extract_error_message(body: bytes) -> Optional[str]:
    """Best-effort decode of an API error body.

    Returns the service-provided message, or None when the body is not a
    recognizable error payload. Never raises.
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None

    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if not isinstance(message, str) or not message:
        return None
    return message
