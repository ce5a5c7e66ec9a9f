"""Core protocols for dependency injection."""

from pgbouncer_exporter.core.protocols.metrics_renderer import MetricsRenderer
from pgbouncer_exporter.core.protocols.metrics_sink import MetricsSink
from pgbouncer_exporter.core.protocols.query_executor import QueryExecutor, QueryResult
from pgbouncer_exporter.core.protocols.scrape_metrics import ScrapeMetrics

__all__ = [
    "MetricsRenderer",
    "MetricsSink",
    "QueryExecutor",
    "QueryResult",
    "ScrapeMetrics",
]
