"""Tests for the requests executor against an in-memory adapter."""

import pytest
import requests
from requests.adapters import BaseAdapter

from gemini_api import GeminiApiClient
from gemini_api.errors import (
    DeserializationError,
    HttpConnectionError,
    TransportTimeoutError,
)
from gemini_api.executors import RequestsHttpExecutor
from gemini_api.helpers import decode_payload, get_gemini_client, sign_payload


class StaticAdapter(BaseAdapter):
    def __init__(
        self,
        body: bytes = b"[]",
        status: int = 200,
        exception: Exception | None = None,
    ):
        super().__init__()
        self.body = body
        self.status = status
        self.exception = exception
        self.requests: list[requests.PreparedRequest] = []

    def send(self, request, **kwargs):  # type: ignore
        self.requests.append(request)
        if self.exception is not None:
            raise self.exception
        response = requests.Response()
        response.status_code = self.status
        response._content = self.body
        response.request = request
        response.url = request.url
        return response

    def close(self) -> None:
        pass


def session_with(adapter: StaticAdapter) -> requests.Session:
    session = requests.Session()
    session.mount("https://", adapter)
    return session


def test_signed_request():
    adapter = StaticAdapter(body=b'[{"currency": "BTC", "amount": "1", "available": "0.5"}]')
    executor = RequestsHttpExecutor(session=session_with(adapter))
    client = GeminiApiClient(api_key="my-key", api_secret="my-secret", executor=executor)

    balances = client.get_wallet_balances()

    assert list(balances) == ["BTC"]
    request = adapter.requests[0]
    assert request.method == "POST"
    assert request.url == "https://api.gemini.com/v1/balances"
    assert not request.body
    assert request.headers["Content-Length"] == "0"
    assert request.headers["User-Agent"] == get_gemini_client()
    payload = request.headers["X-GEMINI-PAYLOAD"]
    assert request.headers["X-GEMINI-SIGNATURE"] == sign_payload("my-secret", payload)
    assert decode_payload(payload)["request"] == "/v1/balances"


def test_simple_request():
    adapter = StaticAdapter(body=b'{"bids": [], "asks": []}')
    executor = RequestsHttpExecutor(
        api_url="https://api.sandbox.gemini.com", session=session_with(adapter)
    )

    response = executor.send_simple_request("/v1/book/btcusd?limit_bids=1")

    assert adapter.requests[0].method == "GET"
    assert adapter.requests[0].url == "https://api.sandbox.gemini.com/v1/book/btcusd?limit_bids=1"
    assert response.body == {"bids": [], "asks": []}


def test_non_json_body():
    executor = RequestsHttpExecutor(session=session_with(StaticAdapter(body=b"oops", status=500)))

    with pytest.raises(DeserializationError):
        executor.send_simple_request("/v1/pubticker/btcusd")


@pytest.mark.parametrize(
    "exception, expected",
    [
        (requests.ConnectionError("refused"), HttpConnectionError),
        (requests.ConnectTimeout("slow"), TransportTimeoutError),
        (requests.ReadTimeout("slow"), TransportTimeoutError),
    ],
)
def test_transport_failures(exception, expected):
    executor = RequestsHttpExecutor(session=session_with(StaticAdapter(exception=exception)))

    with pytest.raises(expected):
        executor.send_authorized_request("/v1/balances", {})


def test_caller_session_is_not_modified():
    adapter = StaticAdapter(body=b"[]")
    session = session_with(adapter)
    session.headers["User-Agent"] = "my-app/1.0"
    executor = RequestsHttpExecutor(session=session)

    executor.send_simple_request("/v1/trades/btcusd?")

    assert session.headers["User-Agent"] == "my-app/1.0"
    assert adapter.requests[0].headers["User-Agent"] == get_gemini_client()
