"""Custom prometheus-client collector for PgBouncer.

Registering ``PgBouncerCollector`` on a ``CollectorRegistry`` makes every
exposition of that registry run exactly one scrape cycle.
"""

from typing import Iterator

from prometheus_client.core import Metric
from prometheus_client.registry import Collector

from pgbouncer_exporter.adapters.metrics_sink.prometheus import PrometheusMetricsSink, new_family
from pgbouncer_exporter.adapters.scrape_metrics.prometheus import PrometheusScrapeMetrics
from pgbouncer_exporter.domains.pgbouncer.compiler import iter_descriptors
from pgbouncer_exporter.domains.pgbouncer.orchestrator import ScrapeOrchestrator


class PgBouncerCollector(Collector):
    """Bridges ``ScrapeOrchestrator`` to prometheus-client.

    Args:
        orchestrator: Runs the scrape; must have been built with
            ``scrape_metrics`` as its metrics backend.
        scrape_metrics: Self metrics yielded after each scrape.
    """

    def __init__(
        self,
        orchestrator: ScrapeOrchestrator,
        scrape_metrics: PrometheusScrapeMetrics,
    ) -> None:
        self._orchestrator = orchestrator
        self._scrape_metrics = scrape_metrics

    def describe(self) -> Iterator[Metric]:
        """Describe the static descriptor set without touching PgBouncer."""
        for descriptor in iter_descriptors(self._orchestrator.descriptors):
            yield new_family(descriptor)
        yield from self._scrape_metrics.collect()

    def collect(self) -> Iterator[Metric]:
        sink = PrometheusMetricsSink()
        self._orchestrator.scrape(sink)
        yield from sink.families()
        yield from self._scrape_metrics.collect()
