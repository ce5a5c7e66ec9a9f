"""Cell value coercion.

``coerce`` turns any cell into a float for Prometheus consumption and reports
through a boolean whether the conversion was meaningful.  NULL is a valid
absence of data (NaN, ok); unparsable text is not (NaN, not ok).  Neither
function here ever raises.
"""

import calendar
import math
from datetime import datetime
from typing import Any, Callable

from pgbouncer_exporter.core.cells import Cell, CellKind

NAN = float("nan")

_SPECIAL_LITERALS = {"nan", "+nan", "-nan", "inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"}


def _parse_decimal(text: str) -> tuple[float, bool]:
    """Parse a strict decimal floating-point literal.

    ``float()`` tolerates surrounding whitespace and ``_`` digit separators;
    the admin console never produces either, so both count as parse failures.
    Finite literals that overflow to infinity are rejected as well.
    """
    if not text or text != text.strip() or "_" in text:
        return NAN, False
    try:
        result = float(text)
    except ValueError:
        return NAN, False
    if math.isinf(result) and text.lower() not in _SPECIAL_LITERALS:
        return NAN, False
    return result, True


def _epoch_seconds(value: datetime) -> int:
    # Naive timestamps are taken to be UTC.
    return calendar.timegm(value.utctimetuple())


def _coerce_integer(cell: Cell) -> tuple[float, bool]:
    try:
        return float(cell.raw), True
    except OverflowError:
        return NAN, False


def _coerce_float(cell: Cell) -> tuple[float, bool]:
    try:
        return float(cell.raw), True
    except (TypeError, ValueError, OverflowError):
        return NAN, False


def _coerce_timestamp(cell: Cell) -> tuple[float, bool]:
    # utctimetuple() overflows for aware values at the edges of the datetime range.
    try:
        return float(_epoch_seconds(cell.raw)), True
    except (OverflowError, ValueError):
        return NAN, False


def _coerce_bytes(cell: Cell) -> tuple[float, bool]:
    try:
        text = cell.raw.decode("utf-8")
    except UnicodeDecodeError:
        return NAN, False
    return _parse_decimal(text)


def _coerce_text(cell: Cell) -> tuple[float, bool]:
    return _parse_decimal(cell.raw)


def _coerce_null(cell: Cell) -> tuple[float, bool]:
    return NAN, True


def _coerce_unsupported(cell: Cell) -> tuple[float, bool]:
    return NAN, False


# Every CellKind must have an entry; tests assert the table is total.
COERCERS: dict[CellKind, Callable[[Cell], tuple[float, bool]]] = {
    CellKind.INTEGER: _coerce_integer,
    CellKind.FLOAT: _coerce_float,
    CellKind.TIMESTAMP: _coerce_timestamp,
    CellKind.BYTES: _coerce_bytes,
    CellKind.TEXT: _coerce_text,
    CellKind.NULL: _coerce_null,
    CellKind.UNSUPPORTED: _coerce_unsupported,
}


def coerce(value: Any) -> tuple[float, bool]:
    """Convert a cell (or raw driver value) to ``(float, ok)``.

    Returns:
        ``(value, True)`` for integers, floats, timestamps and numeric text;
        ``(nan, True)`` for NULL; ``(nan, False)`` for anything unparsable.
    """
    cell = Cell.of(value)
    return COERCERS[cell.kind](cell)


def cell_to_label(value: Any) -> tuple[str, bool]:
    """Render a cell as a Prometheus label value.

    NULL maps to the empty string.  Timestamps render as epoch seconds.
    """
    cell = Cell.of(value)
    if cell.kind is CellKind.NULL:
        return "", True
    if cell.kind is CellKind.TEXT:
        return cell.raw, True
    if cell.kind is CellKind.BYTES:
        try:
            return cell.raw.decode("utf-8"), True
        except UnicodeDecodeError:
            return "", False
    if cell.kind is CellKind.TIMESTAMP:
        try:
            return str(_epoch_seconds(cell.raw)), True
        except (OverflowError, ValueError):
            return "", False
    if cell.kind in (CellKind.INTEGER, CellKind.FLOAT):
        return str(cell.raw), True
    return "", False
