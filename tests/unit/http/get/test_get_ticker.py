from decimal import Decimal

import pytest

from gemini_api.errors import DeserializationError
from gemini_api.executors.interface import HttpResponse
from tests.mock_executors import MockSuccessfulOutput
from tests.unit.conftest import load_json_all_cases


@pytest.mark.parametrize("test_data", load_json_all_cases("response.ticker"))
def test_get_ticker(public_http_client, test_data):
    payload, path = test_data
    client, mock_http = public_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(
            output=HttpResponse(status=200, body=payload),
            call_validation=lambda call: call.function_name == "send_simple_request"
            and call.arg_pack == ("/v1/pubticker/btcusd",),
        )
    )

    ticker = client.get_ticker("BTCUSD")

    assert ticker.bid == Decimal(payload["bid"])
    assert ticker.ask == Decimal(payload["ask"])
    assert ticker.last == Decimal(payload["last"])
    assert ticker.timestamp == payload["volume"]["timestamp"]
    assert set(ticker.volume) == {"BTC", "USD"}
    assert ticker.volume["USD"] == Decimal(payload["volume"]["USD"])


def test_get_ticker_unexpected_shape(public_http_client):
    client, mock_http = public_http_client

    mock_http.stage_output(
        MockSuccessfulOutput(output=HttpResponse(status=200, body=["not", "a", "ticker"]))
    )

    with pytest.raises(DeserializationError):
        client.get_ticker("btcusd")
