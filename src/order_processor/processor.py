"""OrderProcessor - run loop tying the reader to the delivery engine"""

from collections.abc import Callable
from contextlib import ExitStack
from dataclasses import dataclass, field

from loguru import logger

from order_processor.core.config import Config
from order_processor.delivery import DeliveryClient, DeliveryEngine
from order_processor.domain.models import Order
from order_processor.ingest import OrderReader
from order_processor.shared.exceptions import InputOpenError, OutputOpenError


@dataclass
class RunSummary:
    """Counters for one processing run"""

    lines_read: int = 0
    malformed: int = 0
    matched: int = 0
    delivered: int = 0
    requeued: int = 0
    recovered: int = 0
    exhausted: list[str] = field(default_factory=list)


class OrderProcessor:
    """Processes a transaction log end to end

    Opens the input and output files, delivers every matching order inline,
    collects first-pass failures into a retry queue and replays that queue
    once the input is exhausted. All handles are released on every exit
    path.
    """

    def __init__(
        self,
        config: Config,
        client: DeliveryClient | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize processor

        Args:
            config: Run configuration
            client: Delivery client to use; when omitted one is built from
                the config and closed at the end of the run
            sleep: Sleep function override for backoff delays
        """
        self.config = config
        self._client = client
        self._sleep = sleep

    def run(self) -> RunSummary:
        """Process the input file

        Returns:
            RunSummary for the completed run

        Raises:
            ResourceError: If the input or output cannot be opened, read
                or written
        """
        config = self.config

        with ExitStack() as stack:
            try:
                input_stream = stack.enter_context(open(config.input_file, "rb"))
            except OSError as e:
                raise InputOpenError(f"failed to open input file: {e}") from e

            try:
                output = stack.enter_context(open(config.output_file, "wb"))
            except OSError as e:
                raise OutputOpenError(f"failed to create output file: {e}") from e

            client = self._client
            if client is None:
                client = stack.enter_context(
                    DeliveryClient(
                        config.base_url,
                        timeout=config.timeout,
                        insecure=config.insecure,
                    )
                )

            reader = OrderReader(config.symbol, config.side)
            engine = DeliveryEngine(
                client,
                output,
                retry_budget=config.retries,
                backoff_unit=config.backoff_unit,
                sleep=self._sleep,
            )

            summary = RunSummary()
            retry_queue: list[Order] = []

            for order in reader.read(input_stream):
                logger.info(f"Processing order {order.describe()}")
                result = engine.deliver(order)
                if result.delivered:
                    summary.delivered += 1
                else:
                    logger.warning(
                        f"Failed to process order {order.order_id}, "
                        f"adding to retry queue: {result.reason}"
                    )
                    retry_queue.append(order)

            if retry_queue:
                logger.info(
                    f"Processing retry queue with {len(retry_queue)} orders"
                )
            exhausted = engine.replay(retry_queue)

            summary.lines_read = reader.lines_read
            summary.malformed = reader.malformed
            summary.matched = reader.matched
            summary.requeued = len(retry_queue)
            summary.recovered = len(retry_queue) - len(exhausted)
            summary.delivered += summary.recovered
            summary.exhausted = [error.order_id for error in exhausted]

        logger.info(
            f"Run complete: {summary.matched} matched, "
            f"{summary.delivered} delivered, {summary.requeued} requeued, "
            f"{len(summary.exhausted)} exhausted, "
            f"{summary.malformed} malformed lines"
        )
        return summary
