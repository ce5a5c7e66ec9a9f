"""Prometheus implementation of the ScrapeMetrics protocol.

The gauges and counter are not registered anywhere.  The PgBouncer
collector yields them right after each scrape, so an exposition always
reports the cycle it just ran.
"""

from typing import Iterator

from prometheus_client import Counter, Gauge
from prometheus_client.core import Metric

from pgbouncer_exporter.core.protocols.scrape_metrics import ScrapeMetrics


class PrometheusScrapeMetrics(ScrapeMetrics):
    """Prometheus-backed self metrics for the scrape loop."""

    def __init__(self, namespace: str) -> None:
        self._up = Gauge(
            "up",
            "Was the PgBouncer instance query successful?",
            namespace=namespace,
            registry=None,
        )

        self._duration = Gauge(
            "last_scrape_duration_seconds",
            "Duration of the last scrape of metrics from PgBouncer.",
            namespace=namespace,
            registry=None,
        )

        self._scrapes_total = Counter(
            "scrapes_total",
            "Total number of times PgBouncer has been scraped for metrics.",
            namespace=namespace,
            registry=None,
        )

        self._error = Gauge(
            "last_scrape_error",
            "Whether the last scrape of metrics from PgBouncer resulted in an error "
            "(1 for error, 0 for success).",
            namespace=namespace,
            registry=None,
        )

    # -- ScrapeMetrics protocol method --

    def record_scrape(self, *, duration: float, failed: bool, up: bool) -> None:
        self._scrapes_total.inc()
        self._duration.set(duration)
        self._error.set(1 if failed else 0)
        self._up.set(1 if up else 0)

    def collect(self) -> Iterator[Metric]:
        """Yield the current self-metric families."""
        for metric in (self._duration, self._up, self._scrapes_total, self._error):
            yield from metric.collect()
