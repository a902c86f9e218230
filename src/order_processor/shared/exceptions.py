"""Consolidated exceptions for the order processor.

All custom exceptions are defined here to provide a single source of truth
for error handling across the application.
"""


class OrderProcessorError(Exception):
    """Base exception for order processor errors"""

    pass


class ConfigurationError(OrderProcessorError):
    """Raised when configuration is invalid or missing"""

    pass


class MalformedRecordError(OrderProcessorError):
    """Raised when an input line cannot be decoded into an order"""

    pass


class DeliveryError(OrderProcessorError):
    """Base exception for retryable delivery failures"""

    pass


class TransportFailure(DeliveryError):
    """Raised on network, TLS or timeout errors"""

    pass


class NonSuccessStatus(DeliveryError):
    """Raised when the endpoint answers outside the 2XX range"""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"received non-2XX response: {status_code} ({url})")
        self.status_code = status_code
        self.url = url


class DeliveryExhausted(OrderProcessorError):
    """Raised when an order used up its retry budget in both passes"""

    def __init__(self, order_id: str, reason: str | None = None):
        message = f"Exceeded maximum retries for order {order_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.order_id = order_id
        self.reason = reason


class ResourceError(OrderProcessorError):
    """Base exception for fatal input/output failures"""

    pass


class InputOpenError(ResourceError):
    """Raised when the input file cannot be opened"""

    pass


class InputReadError(ResourceError):
    """Raised when reading the input stream fails"""

    pass


class OutputOpenError(ResourceError):
    """Raised when the output file cannot be created"""

    pass


class OutputWriteError(ResourceError):
    """Raised when writing a response body to the output fails"""

    pass
