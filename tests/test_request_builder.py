"""
Unit tests for request building and response models.
"""

import json

import pytest

from token_count.core.errors import EmptyInputError, ResponseParseError
from token_count.core.models import CountRequest, CountResponse, Message, extract_error_message
from token_count.core.request_builder import build_count_request


class TestBuildCountRequest:
    """Test the request envelope."""

    @pytest.mark.parametrize("text", [
        "Hello world",
        "  leading and trailing whitespace\n\n",
        "unicode: héllo wörld 你好 🚀",
        "x" * 100_000,
    ])
    def test_single_user_message_verbatim(self, text):
        """Test the request has one user message with the exact text."""
        request = build_count_request(text, "claude-3-sonnet-20240229")

        assert request.model == "claude-3-sonnet-20240229"
        assert len(request.messages) == 1
        assert request.messages[0].role == "user"
        assert request.messages[0].content == text

        decoded = json.loads(request.to_json())
        assert decoded["messages"][0]["content"] == text

    def test_empty_text_rejected(self):
        """Test empty text is rejected."""
        with pytest.raises(EmptyInputError):
            build_count_request("", "claude-3-sonnet-20240229")

    def test_model_passed_through(self):
        """Test the model identifier is not altered."""
        request = build_count_request("hi", "Some-Custom/Model:v1")
        assert request.to_dict()["model"] == "Some-Custom/Model:v1"

    def test_wire_shape(self):
        """Test serialization has exactly the modeled fields."""
        request = build_count_request("Hello", "claude-3-haiku-20240307")

        assert json.loads(request.to_json()) == {
            "model": "claude-3-haiku-20240307",
            "messages": [{"role": "user", "content": "Hello"}],
        }

    def test_serialization_is_deterministic(self):
        """Test identical inputs produce byte-identical requests."""
        first = build_count_request("same text", "claude-3-sonnet-20240229")
        second = build_count_request("same text", "claude-3-sonnet-20240229")

        assert first == second
        assert first.to_json() == second.to_json()

    def test_request_is_immutable(self):
        """Test requests cannot be modified after construction."""
        request = build_count_request("text", "model")
        with pytest.raises(AttributeError):
            request.model = "other"


class TestCountResponse:
    """Test strict success-body decoding."""

    def test_valid_body(self):
        """Test a valid body yields the count."""
        assert CountResponse.from_json(b'{"input_tokens": 42}').input_tokens == 42

    def test_extra_fields_ignored(self):
        """Test unrelated fields do not break decoding."""
        body = b'{"input_tokens": 7, "other": true}'
        assert CountResponse.from_json(body).input_tokens == 7

    @pytest.mark.parametrize("body", [
        b"not json",
        b"",
        b"[]",
        b"{}",
        b'{"input_tokens": "42"}',
        b'{"input_tokens": 4.2}',
        b'{"input_tokens": true}',
        b'{"input_tokens": -1}',
    ])
    def test_invalid_bodies(self, body):
        """Test malformed success bodies are hard errors."""
        with pytest.raises(ResponseParseError):
            CountResponse.from_json(body)


class TestExtractErrorMessage:
    """Test best-effort error-body decoding."""

    def test_message_extracted(self):
        """Test the service message is returned verbatim."""
        body = b'{"type": "error", "error": {"type": "invalid_request_error", "message": "invalid model"}}'
        assert extract_error_message(body) == "invalid model"

    @pytest.mark.parametrize("body", [
        b"<html>Bad Gateway</html>",
        b"",
        b'"just a string"',
        b'{"error": "flat"}',
        b'{"error": {"message": ""}}',
        b'{"error": {"message": 5}}',
        b'{"detail": "no error key"}',
    ])
    def test_unrecognized_bodies_return_none(self, body):
        """Test undecodable error bodies never raise."""
        assert extract_error_message(body) is None


def test_message_to_dict():
    """Test message wire shape."""
    assert Message(role="user", content="hi").to_dict() == {"role": "user", "content": "hi"}
    assert CountRequest(model="m", messages=()).to_dict() == {"model": "m", "messages": []}
