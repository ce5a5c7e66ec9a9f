"""Unit tests for cell classification and coercion."""

import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from pgbouncer_exporter.core.cells import Cell, CellKind
from pgbouncer_exporter.core.coercion import COERCERS, cell_to_label, coerce


class TestCellOf:
    @pytest.mark.parametrize(
        "value, kind",
        [
            (None, CellKind.NULL),
            (5, CellKind.INTEGER),
            (1.5, CellKind.FLOAT),
            (Decimal("2.5"), CellKind.FLOAT),
            (datetime(2024, 1, 1), CellKind.TIMESTAMP),
            (b"12", CellKind.BYTES),
            (bytearray(b"12"), CellKind.BYTES),
            (memoryview(b"12"), CellKind.BYTES),
            ("12", CellKind.TEXT),
            (True, CellKind.UNSUPPORTED),
            ([1, 2], CellKind.UNSUPPORTED),
        ],
    )
    def test_classifies_driver_values(self, value, kind):
        assert Cell.of(value).kind is kind

    def test_cell_passes_through(self):
        cell = Cell(CellKind.TEXT, "1")
        assert Cell.of(cell) is cell

    def test_bytes_are_normalised(self):
        assert Cell.of(memoryview(b"7")).raw == b"7"


class TestCoerce:
    def test_every_kind_has_a_coercer(self):
        assert set(COERCERS) == set(CellKind)

    def test_integer(self):
        assert coerce(42) == (42.0, True)

    def test_large_integer_is_exact(self):
        assert coerce(2**53) == (float(2**53), True)

    def test_float_passthrough(self):
        assert coerce(0.25) == (0.25, True)

    def test_decimal(self):
        assert coerce(Decimal("3.5")) == (3.5, True)

    def test_aware_timestamp(self):
        ts = datetime(2023, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert coerce(ts) == (ts.timestamp(), True)

    def test_naive_timestamp_is_utc(self):
        ts = datetime(2023, 6, 1, 12, 0, 0)
        expected = ts.replace(tzinfo=timezone.utc).timestamp()
        assert coerce(ts) == (expected, True)

    def test_timestamp_other_zone(self):
        tz = timezone(timedelta(hours=2))
        ts = datetime(2023, 6, 1, 14, 0, 0, tzinfo=tz)
        assert coerce(ts) == (datetime(2023, 6, 1, 12, tzinfo=timezone.utc).timestamp(), True)

    def test_timestamp_drops_sub_second_part(self):
        ts = datetime(2023, 6, 1, 12, 0, 0, 900000, tzinfo=timezone.utc)
        value, ok = coerce(ts)
        assert ok
        assert value == math.floor(ts.timestamp())

    @pytest.mark.parametrize(
        "text, expected",
        [("100", 100.0), ("-3.5", -3.5), ("1e3", 1000.0), ("0", 0.0), (".5", 0.5)],
    )
    def test_numeric_text(self, text, expected):
        assert coerce(text) == (expected, True)
        assert coerce(text.encode()) == (expected, True)

    @pytest.mark.parametrize("text", ["", "abc", "12abc", " 12", "12 ", "1_000", "1e400", "0x10"])
    def test_non_numeric_text(self, text):
        value, ok = coerce(text)
        assert not ok
        assert math.isnan(value)

    def test_special_literals(self):
        value, ok = coerce("NaN")
        assert ok and math.isnan(value)
        assert coerce("+Inf") == (math.inf, True)

    def test_undecodable_bytes(self):
        value, ok = coerce(b"\xff\xfe")
        assert not ok
        assert math.isnan(value)

    def test_null_is_nan_but_ok(self):
        value, ok = coerce(None)
        assert ok
        assert math.isnan(value)

    @pytest.mark.parametrize("value", [True, object(), [1], {"a": 1}])
    def test_unsupported(self, value):
        result, ok = coerce(value)
        assert not ok
        assert math.isnan(result)

    def test_never_raises_on_signalling_nan(self):
        value, ok = coerce(Decimal("sNaN"))
        assert not ok
        assert math.isnan(value)

    def test_integer_beyond_float_range(self):
        value, ok = coerce(10**400)
        assert not ok
        assert math.isnan(value)

    @pytest.mark.parametrize(
        "ts",
        [
            datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1))),
            datetime(9999, 12, 31, 23, 59, tzinfo=timezone(timedelta(hours=-1))),
        ],
    )
    def test_timestamp_at_range_edge(self, ts):
        value, ok = coerce(ts)
        assert not ok
        assert math.isnan(value)
        assert cell_to_label(ts) == ("", False)

    def test_supported_kinds_are_finite(self):
        for value in (1, 2.5, datetime(2024, 1, 1), "7", b"8"):
            result, ok = coerce(value)
            assert ok
            assert math.isfinite(result)


class TestCellToLabel:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("db1", ("db1", True)),
            (b"db1", ("db1", True)),
            (None, ("", True)),
            (7, ("7", True)),
            (datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc), ("60", True)),
            (True, ("", False)),
            (b"\xff", ("", False)),
        ],
    )
    def test_render(self, value, expected):
        assert cell_to_label(value) == expected
