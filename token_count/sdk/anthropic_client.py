"""
Anthropic count_tokens client.

Performs exactly one authenticated POST per call. Failures are loud and
never retried.
"""

import logging
from typing import Optional

import httpx

from ..config.loader import ClientConfig
from ..core.errors import APIError, ConfigurationError, TransportError
from ..core.models import CountRequest, CountResponse, extract_error_message

logger = logging.getLogger(__name__)


class TokenCountClient:
    """Client for the count_tokens endpoint.

    Connection settings come from an injected ClientConfig so tests can
    point it at a double endpoint or pass an httpx transport directly.
    """

    def __init__(
        self,
        api_key: str,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Anthropic API key (required)
            config: Endpoint, API version and timeout (defaults to ClientConfig())
            transport: Optional httpx transport, mainly for tests

        Raises:
            ConfigurationError: If api_key is missing/empty
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("api_key is required and cannot be empty")

        self.api_key = api_key
        self.config = config or ClientConfig()
        self.transport = transport

    def _headers(self) -> dict:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.config.api_version,
            "content-type": "application/json",
        }

    def count_tokens(self, request: CountRequest) -> CountResponse:
        """Send the request and return the counted tokens.

        Args:
            request: Request built by build_count_request

        Returns:
            CountResponse with the input token count

        Raises:
            TransportError: On timeout or network failure
            APIError: On any non-200 status
            ResponseParseError: If a 200 body is not a valid count
        """
        body = request.to_json()
        logger.debug(
            "POST %s (model=%s, %d bytes)", self.config.endpoint, request.model, len(body)
        )

        try:
            with httpx.Client(
                timeout=httpx.Timeout(self.config.timeout), transport=self.transport
            ) as client:
                response = client.post(
                    self.config.endpoint, content=body, headers=self._headers()
                )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"request timed out after {self.config.timeout:g}s: {e}"
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"error sending request: {e}") from e

        logger.debug("Response status: %s", response.status_code)

        if response.status_code != httpx.codes.OK:
            raise self._api_error(response)

        return CountResponse.from_json(response.content)

    @staticmethod
    def _api_error(response: httpx.Response) -> APIError:
        """Build an APIError, preferring the service message over the status line."""
        message = extract_error_message(response.content)
        if message is None:
            message = f"{response.status_code} {response.reason_phrase}".strip()
        return APIError(message, response.status_code)
