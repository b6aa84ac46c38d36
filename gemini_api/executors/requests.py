from typing_extensions import override

import requests

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


class RequestsHttpExecutor(HttpExecutor):
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        # a session keeps connections alive between calls
        self.session = session if session is not None else requests.Session()

    @override
    def send_simple_request(self, path: str) -> HttpResponse:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": get_gemini_client()},
                timeout=(CONNECT_TIMEOUT_SECONDS, None),
            )
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"Request to {url} timed out", timeout_seconds=CONNECT_TIMEOUT_SECONDS
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url),
        )

    @override
    def send_authorized_request(
        self, path: str, headers: dict[str, str]
    ) -> HttpResponse:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.post(
                url,
                headers={
                    "User-Agent": get_gemini_client(),
                    "Content-Type": "text/plain",
                    "Cache-Control": "no-cache",
                    **headers,
                },
                timeout=(CONNECT_TIMEOUT_SECONDS, None),
            )
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"POST request to {url} timed out",
                timeout_seconds=CONNECT_TIMEOUT_SECONDS,
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"POST request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, url),
        )

    @override
    def close(self) -> None:
        self.session.close()
