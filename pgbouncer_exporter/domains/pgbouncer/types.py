"""Types for the PgBouncer metric pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from pgbouncer_exporter.core.exceptions import SubsystemScrapeError

ENTITY_LABEL = "database"


class Subsystem(str, Enum):
    """Administrative query domains, in scrape order."""

    STATS = "stats"
    POOLS = "pools"
    CONFIG = "config"

    @property
    def query(self) -> str:
        return f"SHOW {self.value.upper()};"

    @property
    def is_key_value(self) -> bool:
        """``SHOW CONFIG`` returns one ``key``/``value`` row per setting."""
        return self is Subsystem.CONFIG

    @property
    def labels(self) -> tuple[str, ...]:
        # Config values are process-global: one value per key, not per database.
        return () if self is Subsystem.CONFIG else (ENTITY_LABEL,)


class ColumnUsage(str, Enum):
    """How a column is exported."""

    COUNTER = "counter"
    GAUGE = "gauge"
    DISCARD = "discard"


@dataclass(frozen=True)
class ColumnMapping:
    """Static registry entry for one (subsystem, column) pair."""

    column: str
    usage: ColumnUsage
    description: str


@dataclass(frozen=True)
class MetricDescriptor:
    """Compiled, immutable metric identity."""

    name: str
    kind: ColumnUsage
    labels: tuple[str, ...]
    documentation: str


@dataclass(frozen=True)
class CompiledColumn:
    """A registry column after compilation.

    ``descriptor`` is ``None`` for DISCARD columns, which are known to the
    translator but never emitted.
    """

    column: str
    descriptor: MetricDescriptor | None

    @property
    def discard(self) -> bool:
        return self.descriptor is None


DescriptorMap = Mapping[Subsystem, Mapping[str, CompiledColumn]]


@dataclass(frozen=True)
class Observation:
    """One typed sample bound to a compiled descriptor."""

    descriptor: MetricDescriptor
    value: float
    labels: Mapping[str, str] = field(default_factory=dict)

    @property
    def label_values(self) -> tuple[str, ...]:
        return tuple(self.labels[name] for name in self.descriptor.labels)


@dataclass(frozen=True)
class CellError:
    """Non-fatal problem with a single cell; logged, never exported."""

    subsystem: Subsystem
    column: str
    raw: Any
    reason: str

    def __str__(self) -> str:
        return f"{self.reason}: {self.subsystem.value}.{self.column}={self.raw!r}"


@dataclass
class TranslationResult:
    """Outcome of translating one subsystem query."""

    subsystem: Subsystem
    observations: list[Observation] = field(default_factory=list)
    errors: list[CellError] = field(default_factory=list)
    fatal: SubsystemScrapeError | None = None

    @property
    def ok(self) -> bool:
        return self.fatal is None


@dataclass
class ScrapeResult:
    """Outcome of one full collection cycle."""

    observations: list[Observation] = field(default_factory=list)
    fatal_errors: dict[Subsystem, SubsystemScrapeError] = field(default_factory=dict)
    errors: list[CellError] = field(default_factory=list)
    duration_seconds: float = 0.0
    subsystems_ok: int = 0

    @property
    def degraded(self) -> bool:
        return bool(self.fatal_errors)
