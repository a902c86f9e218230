"""Transaction log reader with symbol/side filtering"""

from collections.abc import Iterator
from typing import IO, AnyStr

from loguru import logger
from pydantic import ValidationError

from order_processor.domain.models import Order
from order_processor.shared.exceptions import (
    InputReadError,
    MalformedRecordError,
)
from order_processor.validation.orders import OrderRecord


def decode_order(line: str | bytes) -> Order:
    """Decode one transaction log line into an Order

    Args:
        line: Raw line, with or without the trailing newline

    Returns:
        Decoded order

    Raises:
        MalformedRecordError: If the line is not a valid order object
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecordError(f"invalid UTF-8: {e}") from e

    try:
        record = OrderRecord.model_validate_json(line)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'line'}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedRecordError(errors) from e

    return record.to_domain()


class OrderReader:
    """Yields orders matching a symbol and side from a line-oriented stream

    Malformed lines are logged and skipped, blank lines are skipped
    silently. Failures of the stream itself abort iteration with
    InputReadError.
    """

    def __init__(self, symbol: str, side: str) -> None:
        self.symbol = symbol
        self.side = side
        self.lines_read = 0
        self.malformed = 0
        self.matched = 0

    def read(self, stream: IO[AnyStr]) -> Iterator[Order]:
        """Lazily decode and filter orders from the stream

        Args:
            stream: Open binary or text stream, one JSON object per line

        Yields:
            Orders whose symbol and side equal the filter values

        Raises:
            InputReadError: If reading from the stream fails
        """
        for line_number, line in self._lines(stream):
            if not line.strip():
                continue

            try:
                order = decode_order(line)
            except MalformedRecordError as e:
                self.malformed += 1
                logger.warning(f"Line {line_number} is not valid JSON: {e}")
                continue

            if not order.matches(self.symbol, self.side):
                logger.debug(
                    f"Line {line_number}: skipping order {order.order_id} "
                    f"({order.symbol} {order.side})"
                )
                continue

            self.matched += 1
            yield order

    def _lines(self, stream: IO[AnyStr]) -> Iterator[tuple[int, AnyStr]]:
        while True:
            try:
                line = stream.readline()
            except OSError as e:
                raise InputReadError(f"error reading input file: {e}") from e
            if not line:
                return
            self.lines_read += 1
            yield self.lines_read, line
