"""HTTP executor implementation using httpx.

This module provides HTTP request handling using the httpx library and is the
default transport of the Gemini SDK.
"""

from typing_extensions import override

import httpx

from gemini_api.errors import (
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from gemini_api.executors.interface import HttpExecutor, HttpResponse
from gemini_api.helpers import (
    DEFAULT_API_URL,
    deserialize_response,
    get_gemini_client,
)

CONNECT_TIMEOUT_SECONDS: float = 30.0
KEEPALIVE_EXPIRY_SECONDS: float = 300.0


class HttpxHttpExecutor(HttpExecutor):
    """HTTP executor implementation using httpx.

    Holds one pooled httpx.Client for the lifetime of the executor. TLS
    certificates are always verified.
    """

    @override
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the HTTPX HTTP executor.

        Args:
            api_url: The base URL for the Gemini API. Defaults to DEFAULT_API_URL.
            transport: Optional httpx transport to send requests through,
                e.g. an httpx.MockTransport in tests.

        """
        self.api_url = api_url.rstrip("/")
        self.client = httpx.Client(
            timeout=httpx.Timeout(None, connect=CONNECT_TIMEOUT_SECONDS),
            limits=httpx.Limits(keepalive_expiry=KEEPALIVE_EXPIRY_SECONDS),
            headers={"User-Agent": get_gemini_client()},
            transport=transport,
        )

    @override
    def send_simple_request(self, path: str) -> HttpResponse:
        """Send a simple unauthenticated GET request.

        Args:
            path: The API endpoint path to request (will be appended to api_url).

        Returns:
            HttpResponse containing the status code and deserialized response body.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection or network error.
            TransportError: If any other transport-level error occurs.
            DeserializationError: If the response body is not JSON.

        """
        url = f"{self.api_url}{path}"
        try:
            response = self.client.get(url)
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"Request to {url} timed out", timeout_seconds=CONNECT_TIMEOUT_SECONDS
            ) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url),
        )

    @override
    def send_authorized_request(
        self,
        path: str,
        headers: dict[str, str],
    ) -> HttpResponse:
        """Send a signed POST request with an empty body.

        Args:
            path: The API endpoint path to request (will be appended to api_url).
            headers: The authentication headers for this request.

        Returns:
            HttpResponse containing the status code and deserialized response body.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection or network error.
            TransportError: If any other transport-level error occurs.
            DeserializationError: If the response body is not JSON.

        """
        url = f"{self.api_url}{path}"
        try:
            response = self.client.post(
                url,
                headers={
                    "Content-Type": "text/plain",
                    "Cache-Control": "no-cache",
                    **headers,
                },
            )
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"POST request to {url} timed out",
                timeout_seconds=CONNECT_TIMEOUT_SECONDS,
            ) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during POST request to {url}", url=url
            ) from e
        except Exception as e:
            raise TransportError(f"POST request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url),
        )

    @override
    def close(self) -> None:
        """Close the underlying httpx client."""
        self.client.close()
