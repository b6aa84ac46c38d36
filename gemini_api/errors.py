"""Exception hierarchy for the Gemini SDK.

This module defines the public exception hierarchy for the entire SDK. All exceptions
raised by this library inherit from BaseError.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - API server returned an error response
│   └── OrderMismatchError - Well-formed response describing a different order
├── TransportError - Network/protocol-level errors during transmission
└── ValidationError - Client-side input validation failures
"""


class BaseError(Exception):
    """Base exception for all Gemini SDK errors.

    All exceptions raised by this library inherit from this class, allowing users
    to catch all SDK-related errors with a single except clause.

    This exception should not be raised directly. Use one of the specific subclasses
    instead (ExchangeError, TransportError, ValidationError).
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """Exception raised when the API server reports an error.

    Gemini reports failures with a body of the form
    ``{"result": "error", "reason": "...", "message": "..."}``. The ``message``
    is surfaced verbatim, so ``str(error)`` is exactly the server's text.

    ExchangeError indicates that:
    - The network connection succeeded
    - The request was properly formatted and transmitted
    - A server processed the request and rejected it
    """

    message: str
    reason: str | None
    status_code: int | None

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize an ExchangeError.

        Args:
            message: The error message returned by the exchange.
            reason: The short machine-readable reason, if the body carried one.
            status_code: The HTTP status code of the response, if known.

        """
        self.message = message
        self.reason = reason
        self.status_code = status_code
        super().__init__(message)


class OrderMismatchError(ExchangeError):
    """Raised when a structurally valid order response fails its sanity check.

    The exchange answered with an order record, but it is not the order that
    was asked for (a different id), or it carries no id at all.
    """

    def __init__(
        self,
        message: str,
        expected_order_id: int | None = None,
        received_order_id: int | None = None,
    ):
        """Initialize an OrderMismatchError.

        Args:
            message: Description of the mismatch.
            expected_order_id: The order id the request referred to, if any.
            received_order_id: The order id found in the response.

        """
        self.expected_order_id = expected_order_id
        self.received_order_id = received_order_id
        super().__init__(message)


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """Exception raised for errors in the process of transporting data to/from the API server.

    This exception is raised when there's a problem in the process of transporting
    data to or from the API server, either in the local networking stack before data
    is sent, during transmission over the network, or when receiving and processing
    data.

    TransportError indicates that:
    - The error occurred in the process of transporting data
    - Valid application-level data was not successfully exchanged
    - The error could be transient and may succeed on retry

    Common causes include:
    - TLS/SSL certificate errors
    - DNS resolution failures
    - Connection timeouts, refused or dropped connections
    - Malformed or non-JSON response bodies
    """

    pass


class HttpConnectionError(TransportError):
    """Raised when a connection cannot be established or is lost."""

    def __init__(self, message: str, url: str | None = None):
        """Initialize an HttpConnectionError.

        Args:
            message: Description of the connection error.
            url: The URL that failed to connect, if available.

        """
        self.message = message
        self.url = url
        if url:
            super().__init__(f"{message} (url: {url})")
        else:
            super().__init__(message)


class TransportTimeoutError(TransportError):
    """Raised when a request or connection times out."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        """Initialize a TransportTimeoutError.

        Args:
            message: Description of the timeout error.
            timeout_seconds: The timeout duration in seconds, if available.

        """
        self.message = message
        self.timeout_seconds = timeout_seconds
        if timeout_seconds:
            super().__init__(f"{message} (timeout: {timeout_seconds}s)")
        else:
            super().__init__(message)


class DeserializationError(TransportError):
    """Raised when response data cannot be deserialized/decoded.

    Covers bodies that are not JSON at all as well as JSON bodies that match
    neither the expected record shape nor the documented error shape.
    """

    def __init__(self, message: str):
        """Initialize a DeserializationError.

        Args:
            message: Description of the deserialization error.

        """
        self.message = message
        super().__init__(message)


class SerializationError(TransportError):
    """Raised when request data cannot be serialized/encoded."""

    def __init__(self, message: str):
        """Initialize a SerializationError.

        Args:
            message: Description of the serialization error.

        """
        self.message = message
        super().__init__(message)


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Exception raised for client-side input validation failures.

    This exception is raised when input parameters fail validation checks before
    any request is sent to the API server.

    ValidationError indicates that:
    - No network request was attempted
    - The error is due to invalid input from the caller
    - The error can be fixed by correcting the input parameters
    """

    pass


class MissingCredentialsError(ValidationError):
    """Raised when required authentication credentials are missing."""

    def __init__(self, credential_type: str = "API key"):
        """Initialize a MissingCredentialsError.

        Args:
            credential_type: The type of credential that is missing (default: "API key").

        """
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is not set")
