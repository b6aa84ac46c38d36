"""HTTP API client for the Gemini exchange.

This module provides the main GeminiApiClient class for interacting with the
Gemini REST API, including market data queries, balances and order operations.
"""

import logging
from types import TracebackType
from typing import Callable, Self

from gemini_api.errors import (
    MissingCredentialsError,
    OrderMismatchError,
    ValidationError,
)
from gemini_api.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from gemini_api.executors.interface import HttpResponse
from gemini_api.helpers import (
    DEFAULT_API_URL,
    HEADER_API_KEY,
    HEADER_PAYLOAD,
    HEADER_SIGNATURE,
    NonceSource,
    build_path,
    create_with,
    decode_response,
    encode_payload,
    sign_payload,
)
from gemini_api.types import (
    ActiveOrdersRequest,
    BalancesRequest,
    CancelOrderRequest,
    CancelOrderResponse,
    GeminiNumericInput,
    Json,
    JsonArray,
    NewOrderRequest,
    Order,
    OrderBook,
    OrderBookEntry,
    OrderId,
    OrderStatusRequest,
    PrivateRequest,
    Side,
    Ticker,
    Trade,
    WalletBalance,
    WalletBalances,
    numeric_to_decimal,
)

log = logging.getLogger(__name__)


def as_list(body: Json) -> JsonArray:
    """Return the body if it is a JSON array, raise TypeError otherwise."""
    if not isinstance(body, list):
        raise TypeError(f"Expected a JSON array, got {type(body).__name__}")
    return body


def expect_order_id(order_id: OrderId) -> Callable[[Order | CancelOrderResponse], None]:
    """Build a check that the decoded order is the one that was requested."""

    def check(order: Order | CancelOrderResponse) -> None:
        if order.order_id != order_id:
            raise OrderMismatchError(
                f"Requested order {order_id} but received order {order.order_id}",
                expected_order_id=order_id,
                received_order_id=order.order_id,
            )

    return check


def require_order_id(order: Order) -> None:
    """Check that the exchange assigned an id to a new order."""
    if order.order_id == 0:
        raise OrderMismatchError(
            "Exchange did not assign an order id", received_order_id=order.order_id
        )


class GeminiApiClient:
    """Gemini API client for market data and trading operations.

    Examples:
        .. code-block:: python

            from gemini_api import GeminiApiClient
            from dotenv import load_dotenv
            import os

            load_dotenv()

            gemini = GeminiApiClient(
                api_key=os.environ.get('GEMINI_API_KEY', ""),
                api_secret=os.environ.get('GEMINI_API_SECRET', ""),
            )

            orderbook = gemini.get_orderbook("btcusd", limit_bids=5, limit_asks=5)
            print(f"Best bid: {orderbook.bids[0].price}")

            balances = gemini.get_wallet_balances()
            print(balances["USD"].available)
    """

    _api_key: str
    _api_secret: str
    _nonce_source: NonceSource
    _http_executor: HttpExecutor

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        api_url: str = "",
        executor: HttpExecutor | None = None,
    ):
        """Initialize the Gemini API client.

        No I/O is performed here.

        Args:
            api_key: Your API key (may be empty for public endpoints only)
            api_secret: Your API secret, used only to sign requests
            api_url: Base URL for the Gemini API (empty means the production URL).
                Only used to build the default executor; a custom executor
                keeps its own base URL.
            executor: Custom HTTP executor (optional, uses default if not provided)

        """
        self._api_key = api_key
        self._api_secret = api_secret
        self._nonce_source = NonceSource()
        self._http_executor = (
            executor
            if executor is not None
            else DEFAULT_HTTP_EXECUTOR(api_url=api_url or DEFAULT_API_URL)
        )

    @property
    def api_key(self) -> str:
        """Get the API key, empty for a public-only client."""
        return self._api_key

    @property
    def api_url(self) -> str:
        """Get the base URL requests are sent to."""
        return self._http_executor.api_url

    def close(self) -> None:
        """Release the transport held by this client."""
        self._http_executor.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    """ Market API endpoints, can be called without credentials """

    def get_orderbook(
        self, symbol: str, limit_bids: int = -1, limit_asks: int = -1
    ) -> OrderBook:
        """Get the current order book of a symbol.

        Args:
            symbol: The trading symbol (e.g., "btcusd"), case-insensitive
            limit_bids: Maximum number of bid levels, negative for the server default
            limit_asks: Maximum number of ask levels, negative for the server default

        Returns:
            OrderBook: Bid and ask levels with price and amount

        Raises:
            ExchangeError: If the exchange answers with an error message
            DeserializationError: If the API response cannot be parsed
            HttpConnectionError: If the API request fails

        Endpoint:
            GET /v1/book/:symbol

        """
        params: dict[str, str | int] = {}
        if limit_bids >= 0:
            params["limit_bids"] = limit_bids
        if limit_asks >= 0:
            params["limit_asks"] = limit_asks

        path = build_path(f"/v1/book/{symbol.lower()}", params)
        response = self.__send_simple_request(path)

        def decode(body: Json) -> OrderBook:
            bids = as_list(body["bids"])  # type: ignore
            asks = as_list(body["asks"])  # type: ignore
            return OrderBook(
                bids=[create_with(OrderBookEntry, level) for level in bids],  # type: ignore
                asks=[create_with(OrderBookEntry, level) for level in asks],  # type: ignore
            )

        return decode_response(
            response.body, decode, path, status_code=response.status
        )

    def get_trades(
        self,
        symbol: str,
        since: int = -1,
        limit: int = -1,
        include_breaks: bool = False,
    ) -> list[Trade]:
        """Get the most recent trades of a symbol.

        Args:
            symbol: The trading symbol (e.g., "btcusd"), case-insensitive
            since: Only return trades at or after this timestamp, negative for no bound
            limit: Maximum number of trades, negative for the server default
            include_breaks: Also return broken trades, flagged with ``broken``

        Returns:
            list[Trade]: Trades, most recent first

        Raises:
            ExchangeError: If the exchange answers with an error message
            DeserializationError: If the API response cannot be parsed
            HttpConnectionError: If the API request fails

        Endpoint:
            GET /v1/trades/:symbol

        """
        params: dict[str, str | int] = {}
        if since >= 0:
            params["timestamp"] = since
        if limit >= 0:
            params["limit_trades"] = limit
        if include_breaks:
            params["include_breaks"] = "true"

        path = build_path(f"/v1/trades/{symbol.lower()}", params)
        response = self.__send_simple_request(path)
        return decode_response(
            response.body,
            lambda body: [create_with(Trade, t) for t in as_list(body)],  # type: ignore
            path,
            status_code=response.status,
        )

    def get_ticker(self, symbol: str) -> Ticker:
        """Get the latest prices and 24 hour volume of a symbol.

        Args:
            symbol: The trading symbol (e.g., "btcusd"), case-insensitive

        Returns:
            Ticker: Best bid, best ask, last price and volume

        Endpoint:
            GET /v1/pubticker/:symbol

        """
        path = f"/v1/pubticker/{symbol.lower()}"
        response = self.__send_simple_request(path)
        return decode_response(
            response.body,
            lambda body: create_with(Ticker, body),  # type: ignore
            path,
            status_code=response.status,
        )

    ### ===================================================== Account API =====================================================

    def get_wallet_balances(self) -> WalletBalances:
        """Get the balances of every currency in the account.

        Returns:
            WalletBalances: Balances keyed by currency code

        Raises:
            MissingCredentialsError: If the client has no API key or secret
            ExchangeError: If the exchange answers with an error message
            DeserializationError: If the API response cannot be parsed

        Example:
            .. code-block:: python

                balances = client.get_wallet_balances()
                print(balances["BTC"].available)

        Endpoint:
            POST /v1/balances

        """
        request = BalancesRequest()
        response = self.__send_authorized_request(request)

        def decode(body: Json) -> WalletBalances:
            balances = [create_with(WalletBalance, b) for b in as_list(body)]  # type: ignore
            return {balance.currency: balance for balance in balances}

        return decode_response(
            response.body, decode, request.request, status_code=response.status
        )

    def get_active_orders(self) -> list[Order]:
        """Get all live orders of the account.

        Returns:
            list[Order]: Live orders

        Endpoint:
            POST /v1/orders

        """
        request = ActiveOrdersRequest()
        response = self.__send_authorized_request(request)
        return decode_response(
            response.body,
            lambda body: [create_with(Order, o) for o in as_list(body)],  # type: ignore
            request.request,
            status_code=response.status,
        )

    def get_order_status(self, order_id: OrderId) -> Order:
        """Get the state of an order.

        Args:
            order_id: The order ID to query

        Returns:
            Order: The order as currently known to the exchange

        Raises:
            ExchangeError: If the exchange answers with an error message
            OrderMismatchError: If the response describes a different order
            DeserializationError: If the API response cannot be parsed

        Endpoint:
            POST /v1/order/status

        """
        request = OrderStatusRequest(order_id=order_id)
        response = self.__send_authorized_request(request)
        return decode_response(
            response.body,
            lambda body: create_with(Order, body),  # type: ignore
            request.request,
            check=expect_order_id(order_id),
            status_code=response.status,
        )

    def cancel_order(self, order_id: OrderId) -> None:
        """Cancel an order.

        Args:
            order_id: The order ID to cancel

        Raises:
            ExchangeError: If the exchange refuses the cancellation
            OrderMismatchError: If the acknowledgement is for a different order
            DeserializationError: If the API response cannot be parsed

        Example:
            .. code-block:: python

                client.cancel_order(123)

        Endpoint:
            POST /v1/order/cancel

        """
        request = CancelOrderRequest(order_id=order_id)
        response = self.__send_authorized_request(request)
        decode_response(
            response.body,
            lambda body: create_with(CancelOrderResponse, body),  # type: ignore
            request.request,
            check=expect_order_id(order_id),
            status_code=response.status,
        )

    def place_order(
        self,
        symbol: str,
        amount: GeminiNumericInput,
        price: GeminiNumericInput,
        is_buy: bool,
    ) -> Order:
        """Place an exchange limit order.

        Amount and price are sent as full precision decimal strings.

        Args:
            symbol: The trading symbol (e.g., "btcusd")
            amount: Quantity to buy or sell
            price: Limit price
            is_buy: True to buy, False to sell

        Returns:
            Order: The order as accepted by the exchange

        Raises:
            ValidationError: If amount or price is not a positive number
            ExchangeError: If the exchange rejects the order
            OrderMismatchError: If the exchange did not assign an order id
            DeserializationError: If the API response cannot be parsed

        Example:
            .. code-block:: python

                order = client.place_order("btcusd", "0.01", "20000.25", is_buy=True)
                print(order.order_id)

        Endpoint:
            POST /v1/order/new

        """
        amount_decimal = numeric_to_decimal(amount)
        price_decimal = numeric_to_decimal(price)
        if amount_decimal <= 0:
            raise ValidationError(f"Order amount must be positive, got {amount}")
        if price_decimal <= 0:
            raise ValidationError(f"Order price must be positive, got {price}")

        request = NewOrderRequest(
            symbol=symbol,
            amount=amount_decimal,
            price=price_decimal,
            side=Side.BUY if is_buy else Side.SELL,
        )
        response = self.__send_authorized_request(request)
        return decode_response(
            response.body,
            lambda body: create_with(Order, body),  # type: ignore
            request.request,
            check=require_order_id,
            status_code=response.status,
        )

    """ Deferred helpers """

    def __send_simple_request(self, path: str) -> HttpResponse:
        """Send an unauthenticated request to the API.

        Args:
            path: The API endpoint path, including the query string

        Returns:
            HttpResponse: The status and parsed JSON response body

        """
        log.debug("GET %s", path)
        return self._http_executor.send_simple_request(path)

    def __send_authorized_request(self, request: PrivateRequest) -> HttpResponse:
        """Sign a request and send it to the API.

        The parameters, the endpoint path and a fresh nonce are encoded as the
        payload header and signed with the API secret.

        Args:
            request: The parameters of the call

        Returns:
            HttpResponse: The status and parsed JSON response body

        Raises:
            MissingCredentialsError: If the API key or secret is not set

        """
        if not self._api_key:
            raise MissingCredentialsError("API key")
        if not self._api_secret:
            raise MissingCredentialsError("API secret")

        params = request.to_params()
        nonce = self._nonce_source.next_nonce()
        params["nonce"] = str(nonce)
        payload = encode_payload(params)

        headers = {
            HEADER_API_KEY: self._api_key,
            HEADER_PAYLOAD: payload,
            HEADER_SIGNATURE: sign_payload(self._api_secret, payload),
        }
        log.debug("POST %s (nonce=%d)", request.request, nonce)
        return self._http_executor.send_authorized_request(request.request, headers)
