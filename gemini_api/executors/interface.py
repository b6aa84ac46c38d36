"""Abstract interface for HTTP executors.

This module defines the abstract base class that all HTTP executor
implementations must follow, enabling pluggable transport layers.
"""

from abc import ABC, abstractmethod

from gemini_api.types import Json


class HttpResponse:
    """Container for HTTP response data.

    Encapsulates the status code, body, and headers from an HTTP response.
    """

    status: int
    body: Json
    headers: dict[str, str] | None

    __slots__ = ("status", "body", "headers")

    def __init__(
        self,
        *,
        status: int,
        body: Json | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize an HTTP response object.

        Args:
            status: The HTTP status code of the response.
            body: The JSON response body, an object or an array. Defaults to
                an empty dict if None.
            headers: Optional HTTP response headers as key-value pairs.

        """
        self.status = status
        self.body = body if body is not None else {}
        self.headers = headers


class HttpExecutor(ABC):
    """Abstract base class for HTTP request executors.

    Defines the interface for sending public GET requests and signed POST
    requests. Implementations must be safe to share between threads.
    """

    api_url: str

    @abstractmethod
    def __init__(self, api_url: str):
        """Initialize the HTTP executor.

        Args:
            api_url: The base API URL for making requests.

        """
        ...

    @abstractmethod
    def send_authorized_request(
        self,
        path: str,
        headers: dict[str, str],
    ) -> HttpResponse:
        """Send a signed HTTP POST request with an empty body.

        Args:
            path: The URL path for the request.
            headers: The authentication headers carrying key, payload and signature.

        Returns:
            An HttpResponse object containing the status, body, and headers.

        """
        ...

    @abstractmethod
    def send_simple_request(
        self,
        path: str,
    ) -> HttpResponse:
        """Send a simple HTTP GET request without authentication.

        Args:
            path: The URL path for the request, including any query string.

        Returns:
            An HttpResponse object containing the status, body, and headers.

        """
        ...

    def close(self) -> None:
        """Release the underlying connection pool."""
        return None
