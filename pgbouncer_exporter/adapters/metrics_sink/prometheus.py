"""Prometheus implementation of the MetricsSink protocol.

One sink is created per scrape cycle.  Observations are grouped into
``GaugeMetricFamily`` / ``CounterMetricFamily`` objects keyed by descriptor
name, in first-seen order, ready to be yielded from a custom collector.
"""

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from pgbouncer_exporter.core.logging import logger
from pgbouncer_exporter.core.protocols.metrics_sink import MetricsSink
from pgbouncer_exporter.domains.pgbouncer.types import ColumnUsage, MetricDescriptor, Observation


def new_family(descriptor: MetricDescriptor) -> Metric:
    """Create an empty metric family for ``descriptor``."""
    if descriptor.kind is ColumnUsage.COUNTER:
        return CounterMetricFamily(
            descriptor.name, descriptor.documentation, labels=list(descriptor.labels)
        )
    return GaugeMetricFamily(
        descriptor.name, descriptor.documentation, labels=list(descriptor.labels)
    )


class PrometheusMetricsSink(MetricsSink):
    """Collect observations of one cycle into Prometheus metric families."""

    def __init__(self) -> None:
        self._families: dict[str, Metric] = {}
        self._seen: set[tuple[str, tuple[str, ...]]] = set()

    # -- MetricsSink protocol method --

    def emit(self, observation: Observation) -> None:
        descriptor = observation.descriptor
        label_values = observation.label_values

        # SHOW POOLS has one row per (database, user); only the first sample
        # of a series is kept so the exposition never repeats a series.
        key = (descriptor.name, label_values)
        if key in self._seen:
            logger.debug(f"Dropping duplicate sample for {descriptor.name}{label_values}")
            return
        self._seen.add(key)

        family = self._families.get(descriptor.name)
        if family is None:
            family = self._families[descriptor.name] = new_family(descriptor)
        family.add_metric(list(label_values), observation.value)

    def families(self) -> list[Metric]:
        """Metric families built so far, in first-seen order."""
        return list(self._families.values())
