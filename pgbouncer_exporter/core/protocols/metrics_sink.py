"""MetricsSink protocol for translated PgBouncer observations.

Separates *what* was observed (the translator's typed observations) from
*how* it is exported.  Production groups observations into Prometheus
metric families; tests inject a fake that records them in memory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pgbouncer_exporter.domains.pgbouncer.types import Observation


@runtime_checkable
class MetricsSink(Protocol):
    """Protocol for accepting observations during one scrape cycle."""

    def emit(self, observation: Observation) -> None:
        """Accept one observation.

        The observation's label names always equal its descriptor's label
        names, so sinks can rely on positional label values.
        """
        ...
