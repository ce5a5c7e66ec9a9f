"""Metrics sink adapters."""

from pgbouncer_exporter.adapters.metrics_sink.fake import FakeMetricsSink
from pgbouncer_exporter.adapters.metrics_sink.prometheus import PrometheusMetricsSink

__all__ = ["PrometheusMetricsSink", "FakeMetricsSink"]
