"""DeliveryClient - one GET per order against the configured endpoint"""

import httpx
from loguru import logger

from order_processor.domain.models import Order
from order_processor.shared.exceptions import NonSuccessStatus, TransportFailure
from order_processor.shared.logging_bridge import install_logging_bridge


class DeliveryClient:
    """Low-level HTTP client for order lookups

    Responsibilities:
    - Target URL construction
    - Request execution with timeout and TLS settings
    - Outcome classification (success, transport failure, non-2XX)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        insecure: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize delivery client

        Args:
            base_url: Endpoint the order id is appended to
            timeout: Per-request timeout in seconds, 0 disables it
            insecure: Skip TLS certificate verification
            transport: Optional transport override (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.insecure = insecure
        self._http_client = self._build_http_client(transport)

    def _build_http_client(
        self, transport: httpx.BaseTransport | None
    ) -> httpx.Client:
        """Create a Client with httpx request/response logging hooks."""
        install_logging_bridge()
        return httpx.Client(
            timeout=self.timeout or None,
            verify=not self.insecure,
            transport=transport,
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    def _log_httpx_request(self, request: httpx.Request) -> None:
        logger.debug(f"HTTPX request: {request.method} {request.url}")

    def _log_httpx_response(self, response: httpx.Response) -> None:
        logger.debug(
            f"HTTPX response: status={response.status_code} url={response.url}"
        )

    def url_for(self, order: Order) -> str:
        return f"{self.base_url}/{order.order_id}"

    def fetch(self, order: Order) -> bytes:
        """GET the order resource and return the raw body

        Args:
            order: Order whose id names the resource

        Returns:
            Response body bytes, exactly as received

        Raises:
            TransportFailure: On connection, DNS, TLS or timeout errors, or
                when the order id does not form a valid URL
            NonSuccessStatus: If the status is outside 200-299
        """
        url = self.url_for(order)
        try:
            response = self._http_client.get(url)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportFailure(f"request to {url} failed: {e}") from e

        if not 200 <= response.status_code <= 299:
            raise NonSuccessStatus(response.status_code, url)

        return response.content

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> "DeliveryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
