"""Tests for OrderReader and decode_order"""

import io
import json
from decimal import Decimal

import pytest

from order_processor.ingest import OrderReader, decode_order
from order_processor.shared.exceptions import (
    InputReadError,
    MalformedRecordError,
)
from tests.factories import OrderFactory


def _stream(*lines) -> io.BytesIO:
    rendered = [
        line if isinstance(line, (str, bytes)) else json.dumps(line)
        for line in lines
    ]
    data = b"\n".join(
        line if isinstance(line, bytes) else line.encode() for line in rendered
    )
    return io.BytesIO(data + b"\n")


class _FailingStream(io.BytesIO):
    """Returns one good line and then fails like a broken disk"""

    def __init__(self, first_line: bytes):
        super().__init__()
        self._first_line = first_line
        self._calls = 0

    def readline(self, *args):
        self._calls += 1
        if self._calls == 1:
            return self._first_line
        raise OSError("Input/output error")


@pytest.mark.unit
class TestDecodeOrder:
    """Tests for decode_order"""

    def test_decodes_bytes_line_with_newline(self):
        line = json.dumps(OrderFactory.record(order_id="abc")).encode() + b"\n"

        order = decode_order(line)

        assert order.order_id == "abc"
        assert order.symbol == "TSLA"

    def test_decodes_text_line(self):
        order = decode_order(json.dumps(OrderFactory.record(order_id="t1")))

        assert order.order_id == "t1"

    @pytest.mark.parametrize(
        "line",
        [
            "not json",
            "{\"order_id\": \"1\",",
            "[1, 2, 3]",
            "\"just a string\"",
            "{}",
        ],
    )
    def test_malformed_lines_raise(self, line):
        with pytest.raises(MalformedRecordError):
            decode_order(line)

    def test_invalid_utf8_raises(self):
        with pytest.raises(MalformedRecordError, match="UTF-8"):
            decode_order(b"\xff\xfe{}")


@pytest.mark.unit
class TestOrderReader:
    """Tests for OrderReader.read"""

    def test_yields_only_matching_orders(self):
        stream = _stream(
            OrderFactory.record(order_id="1"),
            OrderFactory.record(order_id="2", symbol="AAPL"),
            OrderFactory.record(order_id="3", side="buy"),
            OrderFactory.record(order_id="4"),
        )
        reader = OrderReader("TSLA", "sell")

        orders = list(reader.read(stream))

        assert [o.order_id for o in orders] == ["1", "4"]
        assert reader.matched == 2
        assert reader.lines_read == 4

    def test_malformed_line_skipped_with_warning(self, log_messages):
        stream = _stream(
            "this is not json",
            OrderFactory.record(order_id="ok"),
        )
        reader = OrderReader("TSLA", "sell")

        orders = list(reader.read(stream))

        assert [o.order_id for o in orders] == ["ok"]
        assert reader.malformed == 1
        warnings = [m for m in log_messages if m.startswith("WARNING|")]
        assert len(warnings) == 1
        assert "Line 1 is not valid JSON" in warnings[0]

    def test_blank_lines_skipped_silently(self, log_messages):
        stream = _stream(
            "",
            "   \t",
            OrderFactory.record(order_id="1"),
        )
        reader = OrderReader("TSLA", "sell")

        orders = list(reader.read(stream))

        assert len(orders) == 1
        assert reader.malformed == 0
        assert not [m for m in log_messages if m.startswith("WARNING|")]

    def test_line_numbers_count_blank_lines(self, log_messages):
        stream = _stream("", "{broken")
        reader = OrderReader("TSLA", "sell")

        list(reader.read(stream))

        assert any("Line 2 is not valid JSON" in m for m in log_messages)

    def test_reads_lazily(self):
        stream = _stream(
            OrderFactory.record(order_id="1"),
            OrderFactory.record(order_id="2"),
        )
        reader = OrderReader("TSLA", "sell")

        orders = reader.read(stream)
        first = next(orders)

        assert first.order_id == "1"
        assert reader.lines_read == 1

    def test_not_restartable(self):
        stream = _stream(OrderFactory.record(order_id="1"))
        reader = OrderReader("TSLA", "sell")

        assert len(list(reader.read(stream))) == 1
        assert list(reader.read(stream)) == []

    def test_text_stream_supported(self):
        stream = io.StringIO(json.dumps(OrderFactory.record()) + "\n")

        orders = list(OrderReader("TSLA", "sell").read(stream))

        assert len(orders) == 1

    def test_last_line_without_newline(self):
        stream = io.BytesIO(json.dumps(OrderFactory.record()).encode())

        orders = list(OrderReader("TSLA", "sell").read(stream))

        assert len(orders) == 1

    def test_stream_failure_is_fatal(self):
        line = json.dumps(OrderFactory.record(order_id="1")).encode() + b"\n"
        reader = OrderReader("TSLA", "sell")
        orders = reader.read(_FailingStream(line))

        assert next(orders).order_id == "1"
        with pytest.raises(InputReadError, match="Input/output error"):
            next(orders)


@pytest.mark.unit
class TestNullInformationalFields:
    """JSON null in informational fields decodes to the zero value"""

    def test_null_quantity(self):
        line = (
            '{"order_id":"1","symbol":"TSLA","side":"sell","quantity":null}'
        )

        order = decode_order(line)

        assert order.quantity == 0

    def test_null_price(self):
        line = '{"order_id":"1","symbol":"TSLA","side":"sell","price":null}'

        order = decode_order(line)

        assert order.price == Decimal("0")

    def test_null_fields_still_delivered_by_reader(self):
        record = OrderFactory.record(order_id="n1")
        record.update(quantity=None, price=None, timestamp=None)

        orders = list(OrderReader("TSLA", "sell").read(_stream(record)))

        assert [o.order_id for o in orders] == ["n1"]
        assert orders[0].timestamp is None
