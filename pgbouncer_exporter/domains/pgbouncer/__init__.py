"""PgBouncer admin console metrics domain."""

from pgbouncer_exporter.domains.pgbouncer.compiler import compile_descriptors, iter_descriptors
from pgbouncer_exporter.domains.pgbouncer.orchestrator import ScrapeOrchestrator, ScrapeSession
from pgbouncer_exporter.domains.pgbouncer.registry_data import COLUMN_REGISTRY
from pgbouncer_exporter.domains.pgbouncer.translator import translate
from pgbouncer_exporter.domains.pgbouncer.types import (
    CellError,
    ColumnMapping,
    ColumnUsage,
    MetricDescriptor,
    Observation,
    ScrapeResult,
    Subsystem,
    TranslationResult,
)

__all__ = [
    "COLUMN_REGISTRY",
    "CellError",
    "ColumnMapping",
    "ColumnUsage",
    "MetricDescriptor",
    "Observation",
    "ScrapeOrchestrator",
    "ScrapeResult",
    "ScrapeSession",
    "Subsystem",
    "TranslationResult",
    "compile_descriptors",
    "iter_descriptors",
    "translate",
]
