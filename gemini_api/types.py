"""Type definitions for the Gemini Python SDK.

This module contains type definitions, enums, and dataclasses used throughout
the SDK, organized into logical sections for clarity.
"""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import ClassVar, Dict, List, TypeAlias, overload

from gemini_api.errors import ValidationError

# ============================================================================
# TYPE ALIASES
# ============================================================================

# Core ID types
Nonce: TypeAlias = int
OrderId: TypeAlias = int

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
# Gemini answers with either an object or an array at the root
Json: TypeAlias = JsonObject | JsonArray

# Gemini input types
GeminiNumericInput: TypeAlias = Decimal | str | float | int


# ============================================================================
# NUMERIC CONVERSION UTILITIES
# ============================================================================


def _parse_decimal(n: str | int | float | Decimal) -> Decimal | None:
    """Parse a numeric value, or None if it is not a finite number."""
    try:
        value = n if isinstance(n, Decimal) else Decimal(str(n))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def full_precision_string(n: GeminiNumericInput) -> str:
    """Convert a numeric input to a full precision string representation."""
    if isinstance(n, bool) or not isinstance(n, (Decimal, str, int, float)):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    value = _parse_decimal(n)
    if value is None:
        raise ValidationError(f"Invalid numeric input {n}")
    return format(value, "f")


@overload
def numeric_to_decimal(n: GeminiNumericInput) -> Decimal: ...


@overload
def numeric_to_decimal(n: None) -> None: ...


def numeric_to_decimal(n: GeminiNumericInput | None) -> Decimal | None:
    """Convert various numeric input types to Decimal, or None if input is None."""
    if n is None:
        return n
    return Decimal(full_precision_string(n))


def decimal_from_wire(value: object) -> Decimal:
    """Parse a decimal string received from the exchange.

    Raises:
        ValueError: If the value is not a finite decimal string or number.

    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"Expected a decimal, got {value!r}")
    parsed = _parse_decimal(value)
    if parsed is None:
        raise ValueError(f"Expected a decimal string, got {value!r}")
    return parsed


def bool_from_wire(value: object) -> bool:
    """Parse a boolean received from the exchange."""
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    raise ValueError(f"Expected a boolean, got {value!r}")


# ============================================================================
# CORE ENUMS
# ============================================================================


class Side(Enum):
    """Order side."""

    BUY = "buy"
    SELL = "sell"


class OrderType(Enum):
    """Order type accepted by the new order endpoint."""

    EXCHANGE_LIMIT = "exchange limit"


# ============================================================================
# SIGNED REQUEST PARAMETERS
# ============================================================================


@dataclass
class PrivateRequest:
    """Parameters of one signed request.

    Subclasses name the endpoint in ``request`` and declare their parameters
    as dataclass fields. Fields left as None are not sent.
    """

    request: ClassVar[str]

    def to_params(self) -> JsonObject:
        """Build the parameter mapping that gets signed, without the nonce."""
        params: JsonObject = {"request": self.request}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Decimal):
                value = full_precision_string(value)
            params[f.name] = value
        return params


@dataclass
class BalancesRequest(PrivateRequest):
    """Request for the available balances of every currency."""

    request: ClassVar[str] = "/v1/balances"


@dataclass
class ActiveOrdersRequest(PrivateRequest):
    """Request for all live orders."""

    request: ClassVar[str] = "/v1/orders"


@dataclass
class OrderStatusRequest(PrivateRequest):
    """Request for the state of one order."""

    request: ClassVar[str] = "/v1/order/status"

    order_id: OrderId


@dataclass
class CancelOrderRequest(PrivateRequest):
    """Request to cancel one order."""

    request: ClassVar[str] = "/v1/order/cancel"

    order_id: OrderId


@dataclass
class NewOrderRequest(PrivateRequest):
    """Request to place a limit order.

    ``amount`` and ``price`` are serialized as full precision decimal strings.
    """

    request: ClassVar[str] = "/v1/order/new"

    symbol: str
    amount: Decimal
    price: Decimal
    side: Side
    type: OrderType = OrderType.EXCHANGE_LIMIT
    client_order_id: str | None = None


# ============================================================================
# MARKET DATA TYPES
# ============================================================================


@dataclass
class OrderBookEntry:
    """One price level of the order book."""

    price: Decimal
    amount: Decimal
    timestamp: int | None

    def __init__(
        self,
        price: str,
        amount: str,
        timestamp: str | int | None = None,
    ):
        """Initialize an OrderBookEntry from its wire representation.

        Args:
            price: Price of the level as a decimal string.
            amount: Total amount resting at this price as a decimal string.
            timestamp: Deprecated server field, kept when present.

        """
        self.price = decimal_from_wire(price)
        self.amount = decimal_from_wire(amount)
        self.timestamp = int(timestamp) if timestamp is not None else None


@dataclass
class OrderBook:
    """Order book snapshot with bid and ask levels, best price first."""

    bids: List[OrderBookEntry]
    asks: List[OrderBookEntry]


@dataclass
class Trade:
    """One executed trade from the public trade history."""

    tid: int
    timestamp: int
    price: Decimal
    amount: Decimal
    exchange: str
    type: str
    timestampms: int | None
    broken: bool | None

    def __init__(
        self,
        tid: int,
        timestamp: int,
        price: str,
        amount: str,
        exchange: str,
        type: str,
        timestampms: int | None = None,
        broken: bool | None = None,
    ):
        """Initialize a Trade from its wire representation.

        Args:
            tid: Trade id, unique per exchange and increasing over time.
            timestamp: Time of the trade in seconds.
            price: Execution price as a decimal string.
            amount: Traded amount as a decimal string.
            exchange: Always "gemini".
            type: Taker side ("buy" or "sell"), or "auction", "block".
            timestampms: Time of the trade in milliseconds.
            broken: Whether the trade was broken; only sent with include_breaks.

        """
        self.tid = int(tid)
        self.timestamp = int(timestamp)
        self.price = decimal_from_wire(price)
        self.amount = decimal_from_wire(amount)
        self.exchange = str(exchange)
        self.type = str(type)
        self.timestampms = int(timestampms) if timestampms is not None else None
        self.broken = bool_from_wire(broken) if broken is not None else None


@dataclass
class Ticker:
    """Latest prices and 24 hour volume of a symbol."""

    bid: Decimal
    ask: Decimal
    last: Decimal
    volume: Dict[str, Decimal]
    timestamp: int | None

    def __init__(
        self,
        bid: str,
        ask: str,
        last: str,
        volume: dict[str, str | int],
    ):
        """Initialize a Ticker from its wire representation.

        Args:
            bid: Highest bid currently available.
            ask: Lowest ask currently available.
            last: Price of the last executed trade.
            volume: 24 hour volume keyed by currency code, plus the
                millisecond ``timestamp`` at which it was computed.

        """
        self.bid = decimal_from_wire(bid)
        self.ask = decimal_from_wire(ask)
        self.last = decimal_from_wire(last)
        volume = dict(volume)
        timestamp = volume.pop("timestamp", None)
        self.timestamp = int(timestamp) if timestamp is not None else None
        self.volume = {
            currency: decimal_from_wire(amount) for currency, amount in volume.items()
        }


# ============================================================================
# ACCOUNT TYPES
# ============================================================================


@dataclass
class WalletBalance:
    """Balance of one currency."""

    currency: str
    amount: Decimal
    available: Decimal
    availableForWithdrawal: Decimal | None
    type: str | None

    def __init__(
        self,
        currency: str,
        amount: str,
        available: str,
        availableForWithdrawal: str | None = None,
        type: str | None = None,
    ):
        """Initialize a WalletBalance from its wire representation.

        Args:
            currency: Currency code, e.g. "BTC".
            amount: Total balance of this currency.
            available: Amount available to trade.
            availableForWithdrawal: Amount available for withdrawal.
            type: Account type, always "exchange".

        """
        if not isinstance(currency, str):
            raise TypeError(f"Expected a currency code, got {currency!r}")
        self.currency = currency
        self.amount = decimal_from_wire(amount)
        self.available = decimal_from_wire(available)
        self.availableForWithdrawal = (
            decimal_from_wire(availableForWithdrawal)
            if availableForWithdrawal is not None
            else None
        )
        self.type = type


WalletBalances: TypeAlias = Dict[str, WalletBalance]


@dataclass
class Order:
    """Snapshot of an order as reported by the exchange."""

    order_id: OrderId
    symbol: str
    exchange: str
    price: Decimal | None
    avg_execution_price: Decimal
    side: Side
    type: str
    timestamp: int | None
    timestampms: int | None
    is_live: bool
    is_cancelled: bool
    is_hidden: bool
    was_forced: bool
    executed_amount: Decimal
    remaining_amount: Decimal
    original_amount: Decimal
    client_order_id: str | None
    options: List[str]

    def __init__(
        self,
        order_id: str | int,
        symbol: str,
        exchange: str,
        side: str,
        type: str,
        is_live: bool,
        is_cancelled: bool,
        executed_amount: str,
        remaining_amount: str,
        original_amount: str,
        price: str | None = None,
        avg_execution_price: str = "0",
        timestamp: str | int | None = None,
        timestampms: int | None = None,
        is_hidden: bool = False,
        was_forced: bool = False,
        client_order_id: str | None = None,
        options: list[str] | None = None,
    ):
        """Initialize an Order from its wire representation.

        Args:
            order_id: The order id, sent by the exchange as a string.
            symbol: The symbol the order belongs to.
            exchange: Always "gemini".
            side: Either "buy" or "sell".
            type: Order type, e.g. "exchange limit".
            is_live: True while the order rests on the book.
            is_cancelled: True if the order has been cancelled.
            executed_amount: Amount filled so far.
            remaining_amount: Amount not yet filled.
            original_amount: Amount originally submitted.
            price: Limit price the order was placed at.
            avg_execution_price: Average fill price, 0 if never executed.
            timestamp: Submission time in seconds.
            timestampms: Submission time in milliseconds.
            is_hidden: Whether the order is hidden from the book.
            was_forced: Always false.
            client_order_id: Client supplied id, when one was given.
            options: Order execution options.

        """
        self.order_id = int(order_id)
        self.symbol = str(symbol)
        self.exchange = str(exchange)
        self.price = decimal_from_wire(price) if price is not None else None
        self.avg_execution_price = decimal_from_wire(avg_execution_price)
        self.side = Side(side)
        self.type = str(type)
        self.timestamp = int(timestamp) if timestamp is not None else None
        self.timestampms = int(timestampms) if timestampms is not None else None
        self.is_live = bool_from_wire(is_live)
        self.is_cancelled = bool_from_wire(is_cancelled)
        self.is_hidden = bool_from_wire(is_hidden)
        self.was_forced = bool_from_wire(was_forced)
        self.executed_amount = decimal_from_wire(executed_amount)
        self.remaining_amount = decimal_from_wire(remaining_amount)
        self.original_amount = decimal_from_wire(original_amount)
        self.client_order_id = client_order_id
        self.options = list(options) if options is not None else []


@dataclass
class CancelOrderResponse:
    """The part of a cancel acknowledgement the client checks."""

    order_id: OrderId
    is_cancelled: bool

    def __init__(self, order_id: str | int, is_cancelled: bool):
        """Initialize a CancelOrderResponse.

        Args:
            order_id: Id of the cancelled order.
            is_cancelled: True once the cancellation took effect.

        """
        self.order_id = int(order_id)
        self.is_cancelled = bool_from_wire(is_cancelled)


# ============================================================================
# ERROR TYPES
# ============================================================================


@dataclass
class ErrorMessage:
    """Documented error shape returned by the exchange."""

    message: str
    result: str | None = None
    reason: str | None = None
