"""ScrapeMetrics protocol for the exporter's own health gauges.

Abstracts the ``up`` / ``last_scrape_*`` / ``scrapes_total`` metrics so the
orchestrator depends on a protocol rather than prometheus-client.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ScrapeMetrics(Protocol):
    """Protocol for self-observability metrics of the scrape loop."""

    def record_scrape(self, *, duration: float, failed: bool, up: bool) -> None:
        """Record the outcome of one collection cycle.

        Args:
            duration: Wall-clock duration of the cycle in seconds.
            failed: True if at least one subsystem failed fatally.
            up: True if the admin console answered at least one query.
        """
        ...
