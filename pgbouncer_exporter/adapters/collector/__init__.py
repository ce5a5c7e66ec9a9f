"""prometheus-client collector adapter."""

from pgbouncer_exporter.adapters.collector.prometheus import PgBouncerCollector

__all__ = ["PgBouncerCollector"]
