"""Tests for payload encoding, request signing and nonce generation."""

import base64
import hmac
import threading
from decimal import Decimal
from hashlib import sha384
from time import time_ns

import pytest

from gemini_api.executors.interface import HttpResponse
from gemini_api.helpers import (
    NonceSource,
    decode_payload,
    encode_payload,
    sign_payload,
)
from gemini_api.types import (
    ActiveOrdersRequest,
    BalancesRequest,
    CancelOrderRequest,
    NewOrderRequest,
    OrderStatusRequest,
    Side,
)
from tests.mock_executors import MockSuccessfulOutput, signed_params
from tests.unit.conftest import API_KEY, API_SECRET


def test_sign_payload_known_vector():
    # RFC 4231, test case 2
    assert sign_payload("Jefe", "what do ya want for nothing?") == (
        "af45d2e376484031617f78d2b58a6b1b9c7ef464f5a01b47e42ec373"
        "6322445e8e2240ca5e69e2c78b3239ecfab21649"
    )


def test_sign_payload_is_deterministic():
    payload = encode_payload({"request": "/v1/balances", "nonce": "1"})

    assert sign_payload("secret", payload) == sign_payload("secret", payload)
    assert len(sign_payload("secret", payload)) == 96


def test_sign_payload_changes_with_any_byte():
    payload = encode_payload({"request": "/v1/order/status", "order_id": 1, "nonce": "1"})
    signature = sign_payload("secret", payload)

    for i in range(len(payload)):
        replacement = "A" if payload[i] != "A" else "B"
        tampered = payload[:i] + replacement + payload[i + 1 :]
        assert sign_payload("secret", tampered) != signature


def test_sign_payload_changes_with_secret():
    payload = encode_payload({"request": "/v1/balances", "nonce": "1"})

    assert sign_payload("secret", payload) != sign_payload("secret2", payload)


def test_encode_payload_is_canonical():
    first = encode_payload({"request": "/v1/balances", "nonce": "123"})
    second = encode_payload({"nonce": "123", "request": "/v1/balances"})

    assert first == second
    assert base64.b64decode(first) == b'{"nonce":"123","request":"/v1/balances"}'
    assert decode_payload(first) == {"nonce": "123", "request": "/v1/balances"}


def test_request_params_omit_unset_fields():
    assert BalancesRequest().to_params() == {"request": "/v1/balances"}
    assert ActiveOrdersRequest().to_params() == {"request": "/v1/orders"}
    assert OrderStatusRequest(order_id=7).to_params() == {
        "request": "/v1/order/status",
        "order_id": 7,
    }
    assert CancelOrderRequest(order_id=7).to_params() == {
        "request": "/v1/order/cancel",
        "order_id": 7,
    }


def test_new_order_request_params():
    request = NewOrderRequest(
        symbol="btcusd",
        amount=Decimal("1.5"),
        price=Decimal("20000.25"),
        side=Side.SELL,
        client_order_id="my-order",
    )

    assert request.to_params() == {
        "request": "/v1/order/new",
        "symbol": "btcusd",
        "amount": "1.5",
        "price": "20000.25",
        "side": "sell",
        "type": "exchange limit",
        "client_order_id": "my-order",
    }


def test_signed_request_headers(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(MockSuccessfulOutput(output=HttpResponse(status=200, body=[])))

    client.get_active_orders()

    path, headers = mock_http.call_log[0].arg_pack
    assert path == "/v1/orders"
    assert set(headers) == {
        "X-GEMINI-APIKEY",
        "X-GEMINI-PAYLOAD",
        "X-GEMINI-SIGNATURE",
    }
    assert headers["X-GEMINI-APIKEY"] == API_KEY
    payload = headers["X-GEMINI-PAYLOAD"]
    expected = hmac.new(API_SECRET.encode(), payload.encode(), sha384).hexdigest()
    assert headers["X-GEMINI-SIGNATURE"] == expected


def test_consecutive_nonces_increase(mock_http_client):
    client, mock_http = mock_http_client

    mock_http.stage_output(
        [MockSuccessfulOutput(output=HttpResponse(status=200, body=[])) for _ in range(20)]
    )

    for _ in range(20):
        client.get_active_orders()

    nonces = [int(signed_params(call)["nonce"]) for call in mock_http.call_log]
    assert all(a < b for a, b in zip(nonces, nonces[1:]))


def test_nonce_source_stalled_clock():
    source = NonceSource(clock=lambda: 1000)

    assert [source.next_nonce() for _ in range(3)] == [1000, 1001, 1002]


def test_nonce_source_clock_going_backwards():
    ticks = iter([500, 400, 300, 900])
    source = NonceSource(clock=lambda: next(ticks))

    assert [source.next_nonce() for _ in range(4)] == [500, 501, 502, 900]


def test_nonce_source_uses_wall_clock_nanoseconds():
    before = time_ns()
    nonce = NonceSource().next_nonce()

    assert nonce >= before


@pytest.mark.parametrize("thread_count", [2, 8])
def test_nonce_source_concurrent(thread_count):
    source = NonceSource(clock=lambda: 1)
    per_thread = 500
    results: list[list[int]] = [[] for _ in range(thread_count)]

    def worker(out: list[int]) -> None:
        for _ in range(per_thread):
            out.append(source.next_nonce())

    threads = [threading.Thread(target=worker, args=(out,)) for out in results]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    all_nonces = [nonce for out in results for nonce in out]
    assert len(set(all_nonces)) == thread_count * per_thread
    for out in results:
        assert out == sorted(out)


def test_shared_client_nonces_are_unique_across_threads(mock_http_client):
    client, mock_http = mock_http_client
    thread_count = 4
    per_thread = 25

    mock_http.stage_output(
        [
            MockSuccessfulOutput(output=HttpResponse(status=200, body=[]))
            for _ in range(thread_count * per_thread)
        ]
    )

    def worker() -> None:
        for _ in range(per_thread):
            client.get_active_orders()

    threads = [threading.Thread(target=worker) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    nonces = [int(signed_params(call)["nonce"]) for call in mock_http.call_log]
    assert len(nonces) == thread_count * per_thread
    assert len(set(nonces)) == len(nonces)
