"""Typed cell values returned by the query executor.

Driver values arrive as arbitrary Python objects.  The executor classifies
each one into a ``Cell`` so the rest of the pipeline works with a closed set
of kinds instead of open-ended ``isinstance`` checks.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class CellKind(str, Enum):
    """Closed set of cell kinds produced by the executor."""

    INTEGER = "integer"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    BYTES = "bytes"
    TEXT = "text"
    NULL = "null"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Cell:
    """A single result cell: its kind plus the raw driver value."""

    kind: CellKind
    raw: Any = None

    @classmethod
    def of(cls, value: Any) -> "Cell":
        """Classify a raw driver value.

        ``bool`` is checked before ``int`` because it is an ``int`` subclass
        and the admin console never reports booleans as numbers.
        """
        if isinstance(value, Cell):
            return value
        if value is None:
            return cls(CellKind.NULL)
        if isinstance(value, bool):
            return cls(CellKind.UNSUPPORTED, value)
        if isinstance(value, int):
            return cls(CellKind.INTEGER, value)
        if isinstance(value, (float, Decimal)):
            return cls(CellKind.FLOAT, value)
        if isinstance(value, datetime):
            return cls(CellKind.TIMESTAMP, value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(CellKind.BYTES, bytes(value))
        if isinstance(value, str):
            return cls(CellKind.TEXT, value)
        return cls(CellKind.UNSUPPORTED, value)
