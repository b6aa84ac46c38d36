"""Helper utilities for the Gemini Python SDK.

This module contains utility functions for serialization, deserialization,
request signing, API response handling, and display formatting.
"""

import base64
import hmac
import inspect
import logging
import threading
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from functools import lru_cache
from hashlib import sha384
from time import time_ns
from typing import Any, Callable, Dict, TypeVar
from urllib.parse import urlencode

import orjson
from prettyprinter import cpprint

from gemini_api.errors import (
    DeserializationError,
    ExchangeError,
    OrderMismatchError,
    SerializationError,
)
from gemini_api.types import ErrorMessage, Json, JsonObject, Nonce

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_API_URL: str = "https://api.gemini.com"
SANDBOX_API_URL: str = "https://api.sandbox.gemini.com"

HEADER_API_KEY: str = "X-GEMINI-APIKEY"
HEADER_PAYLOAD: str = "X-GEMINI-PAYLOAD"
HEADER_SIGNATURE: str = "X-GEMINI-SIGNATURE"


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_gemini_client() -> str:
    """Get the client identification string sent as User-Agent."""
    import gemini_api

    return f"GeminiPythonSDK/{gemini_api.__version__}"


# ============================================================================
# OBJECT CONSTRUCTION
# ============================================================================

T = TypeVar("T")


def create_with(func: Callable[..., T], data: Dict[str, Any]) -> T:
    """Create an object from a dictionary, filtering to only valid parameters.

    This allows constructing objects from API responses that may contain
    additional fields beyond what the constructor expects, making the SDK
    more resilient to API changes.

    Args:
        func: Constructor or factory function to call
        data: Dictionary of data to pass as kwargs

    Returns:
        Instance created by calling func with filtered data

    Raises:
        TypeError: If data is not a JSON object or lacks required fields

    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    sig = inspect.signature(func)
    valid_keys = sig.parameters.keys()
    filtered_data = {k: v for k, v in data.items() if k in valid_keys}
    return func(**filtered_data)


# ============================================================================
# SERIALIZATION / DESERIALIZATION
# ============================================================================


def decimal_as_str(obj: object) -> str:
    """Serialize Decimal objects to JSON strings.

    Converts Decimal to string to preserve precision in JSON serialization.
    """
    if isinstance(obj, Decimal):
        return format(obj, "f")

    raise TypeError


def serialize_request(request: JsonObject) -> bytes:
    """Serialize request parameters to canonical JSON bytes.

    Uses orjson with sorted keys so equal parameters always produce equal bytes.

    Args:
        request: Request data to serialize

    Returns:
        JSON bytes

    Raises:
        SerializationError: If serialization fails

    """
    try:
        return orjson.dumps(
            request, default=decimal_as_str, option=orjson.OPT_SORT_KEYS
        )
    except Exception as e:
        raise SerializationError(f"Failed to serialize {request=}") from e


def deserialize_response(response_body: bytes, url: str) -> Json:
    """Deserialize a JSON response body.

    Args:
        response_body: Response bytes to deserialize
        url: URL that was requested (for error messages)

    Returns:
        Deserialized JSON object or array

    Raises:
        DeserializationError: If deserialization fails

    """
    try:
        return orjson.loads(response_body)  # type: ignore
    except Exception as e:
        raise DeserializationError(
            f"Failed to parse JSON response from {url}: {e}"
        ) from e


def build_path(path: str, params: Dict[str, str | int]) -> str:
    """Append a query string to a path.

    The separator is always present, so an empty query renders as a bare ``?``.
    """
    return f"{path}?{urlencode(params)}"


# ============================================================================
# REQUEST SIGNING
# ============================================================================


class NonceSource:
    """Thread-safe source of strictly increasing nonces.

    Nonces are wall-clock nanoseconds, so they keep increasing across process
    restarts. If the clock stalls or steps back, the previous value plus one is
    issued instead.

    Ordering holds per instance only. Each GeminiApiClient owns one source,
    so all requests signed with one API key should go through one client.
    """

    def __init__(self, clock: Callable[[], int] = time_ns):
        """Initialize a NonceSource.

        Args:
            clock: Function returning the current time as an integer.

        """
        self._clock = clock
        self._last: Nonce = 0
        self._lock = threading.Lock()

    def next_nonce(self) -> Nonce:
        """Return a nonce greater than every nonce returned before."""
        with self._lock:
            nonce = max(self._clock(), self._last + 1)
            self._last = nonce
            return nonce


def encode_payload(params: JsonObject) -> str:
    """Encode signed request parameters as the base64 payload header value."""
    return base64.b64encode(serialize_request(params)).decode("ascii")


def decode_payload(payload: str) -> JsonObject:
    """Decode a base64 payload header value back into its parameters."""
    return orjson.loads(base64.b64decode(payload))  # type: ignore


def sign_payload(api_secret: str, payload: str) -> str:
    """Compute the hex HMAC-SHA384 of a base64 payload, keyed by the API secret."""
    return hmac.new(api_secret.encode(), payload.encode(), sha384).hexdigest()


# ============================================================================
# RESPONSE DECODING
# ============================================================================


def error_from_body(body: Json, status_code: int | None = None) -> ExchangeError | None:
    """Interpret a response body as the documented error shape.

    Args:
        body: Deserialized response body
        status_code: HTTP status of the response, if known

    Returns:
        An ExchangeError carrying the server's message, or None if the body
        does not have the ``{"message": str}`` shape

    """
    if not isinstance(body, dict):
        return None
    try:
        error = create_with(ErrorMessage, body)
    except TypeError:
        return None
    if not isinstance(error.message, str):
        return None
    return ExchangeError(error.message, reason=error.reason, status_code=status_code)


def decode_response(
    body: Json,
    decoder: Callable[[Json], T],
    url: str,
    check: Callable[[T], None] | None = None,
    status_code: int | None = None,
) -> T:
    """Decode a response body into its expected type.

    Decoding is attempted first. If it fails structurally the body is read as
    the documented error shape, and if that fails too the original decoding
    failure is surfaced. A successful decode is then passed to ``check``,
    which raises OrderMismatchError when the content is not what was asked
    for; the error shape takes precedence in that case as well.

    Args:
        body: Deserialized response body
        decoder: Builds the expected type from the body
        url: URL that was requested (for error messages)
        check: Optional sanity check on the decoded value
        status_code: HTTP status of the response, if known

    Returns:
        The decoded value

    Raises:
        ExchangeError: If the body carries an error message
        OrderMismatchError: If the decoded value fails the sanity check
        DeserializationError: If the body matches neither shape

    """
    try:
        result = decoder(body)
    except (TypeError, KeyError, IndexError, ValueError, ArithmeticError) as e:
        error = error_from_body(body, status_code)
        if error is not None:
            raise error from e
        raise DeserializationError(
            f"Received invalid response from {url}: {body!r} ({e})"
        ) from e

    if check is not None:
        try:
            check(result)
        except OrderMismatchError as e:
            error = error_from_body(body, status_code)
            if error is not None:
                raise error from e
            raise

    return result


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def print_data(response: Any) -> None:
    """Pretty-print response data, handling dataclasses specially.

    Dataclass instances are converted to dictionaries before printing
    for better formatting.

    Args:
        response: Data to print

    """
    if is_dataclass(response) and not isinstance(response, type):
        cpprint(asdict(response))
    elif isinstance(response, dict):
        cpprint(
            {
                k: asdict(v) if is_dataclass(v) and not isinstance(v, type) else v
                for k, v in response.items()
            }
        )
    else:
        cpprint(response)
