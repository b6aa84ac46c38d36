from importlib.metadata import PackageNotFoundError, version

from gemini_api.api import GeminiApiClient
from gemini_api.errors import (
    BaseError,
    DeserializationError,
    ExchangeError,
    HttpConnectionError,
    MissingCredentialsError,
    OrderMismatchError,
    SerializationError,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from gemini_api.helpers import DEFAULT_API_URL, SANDBOX_API_URL, print_data
from gemini_api.types import (
    Order,
    OrderBook,
    OrderBookEntry,
    Side,
    Ticker,
    Trade,
    WalletBalance,
    WalletBalances,
)


def get_version() -> str:
    """Return the installed version of the SDK, or "unknown" outside an install."""
    try:
        return version("gemini-api")
    except PackageNotFoundError:
        return "unknown"


__version__ = get_version()

__all__ = [
    "GeminiApiClient",
    "DEFAULT_API_URL",
    "SANDBOX_API_URL",
    "BaseError",
    "DeserializationError",
    "ExchangeError",
    "HttpConnectionError",
    "MissingCredentialsError",
    "OrderMismatchError",
    "SerializationError",
    "TransportError",
    "TransportTimeoutError",
    "ValidationError",
    "Order",
    "OrderBook",
    "OrderBookEntry",
    "Side",
    "Ticker",
    "Trade",
    "WalletBalance",
    "WalletBalances",
    "get_version",
    "print_data",
]
