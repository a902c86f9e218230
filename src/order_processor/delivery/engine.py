"""DeliveryEngine - inline retry with linear backoff and queue replay"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import IO

from loguru import logger

from order_processor.delivery.client import DeliveryClient
from order_processor.domain.models import Order
from order_processor.shared.constants import BACKOFF_UNIT_SECONDS
from order_processor.shared.exceptions import (
    DeliveryError,
    DeliveryExhausted,
    OutputWriteError,
)


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one deliver() call"""

    order: Order
    delivered: bool
    requests: int
    reason: str | None = None


class DeliveryEngine:
    """Delivers orders and writes successful response bodies to a sink

    Retry Strategy:
    - First pass: on a retryable failure at attempt index i, sleep
      (i + 1) backoff units and try again while i < retry_budget
    - Replay: each queued order gets up to retry_budget further calls,
      each made at the fixed index retry_budget so it is a single request
    """

    def __init__(
        self,
        client: DeliveryClient,
        sink: IO[bytes],
        retry_budget: int,
        backoff_unit: float = BACKOFF_UNIT_SECONDS,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize delivery engine

        Args:
            client: Client used to fetch each order
            sink: Binary stream response bodies are appended to
            retry_budget: Additional attempts allowed per pass
            backoff_unit: Seconds slept per backoff step
            sleep: Sleep function override (defaults to time.sleep)
        """
        self._client = client
        self._sink = sink
        self.retry_budget = retry_budget
        self.backoff_unit = backoff_unit
        self._sleep = sleep

    def backoff_delay(self, attempt_index: int) -> float:
        return (attempt_index + 1) * self.backoff_unit

    def deliver(self, order: Order, attempt_index: int = 0) -> DeliveryResult:
        """Deliver one order, retrying inline while budget remains

        Args:
            order: Order to deliver
            attempt_index: Index of the first attempt; retries continue
                while the index is below the retry budget

        Returns:
            DeliveryResult describing success or the last failure

        Raises:
            OutputWriteError: If the response body cannot be written
        """
        attempt = attempt_index
        requests = 0

        while True:
            requests += 1
            try:
                body = self._client.fetch(order)
            except DeliveryError as e:
                if attempt < self.retry_budget:
                    logger.debug(
                        f"Current retry count: {attempt}, "
                        f"Max retries: {self.retry_budget}"
                    )
                    logger.warning(
                        f"Request failed for order {order.order_id} "
                        f"(retry {attempt + 1}/{self.retry_budget}): {e}"
                    )
                    (self._sleep or time.sleep)(self.backoff_delay(attempt))
                    attempt += 1
                    continue
                return DeliveryResult(order, False, requests, str(e))

            self._write(body)
            logger.info(f"Successfully processed order {order.order_id}")
            return DeliveryResult(order, True, requests)

    def replay(self, queue: Iterable[Order]) -> list[DeliveryExhausted]:
        """Give every queued order its second-pass retry budget

        Args:
            queue: Orders that failed the first pass, in arrival order

        Returns:
            One DeliveryExhausted per order that failed every replay attempt
        """
        exhausted: list[DeliveryExhausted] = []

        for order in queue:
            reason = None
            delivered = False

            for retry_attempt in range(self.retry_budget):
                logger.info(
                    f"Retry attempt {retry_attempt + 1}/{self.retry_budget} "
                    f"for order {order.order_id}"
                )
                result = self.deliver(order, self.retry_budget)
                if result.delivered:
                    delivered = True
                    break
                reason = result.reason
                logger.warning(
                    f"Retry failed for order {order.order_id}: {reason}"
                )

            if not delivered:
                error = DeliveryExhausted(order.order_id, reason)
                logger.error(str(error))
                exhausted.append(error)

        return exhausted

    def _write(self, body: bytes) -> None:
        try:
            self._sink.write(body + b"\n")
            self._sink.flush()
        except OSError as e:
            raise OutputWriteError(
                f"failed to write to output file: {e}"
            ) from e
