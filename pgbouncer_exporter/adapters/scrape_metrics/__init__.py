"""Scrape self-metrics adapters."""

from pgbouncer_exporter.adapters.scrape_metrics.fake import FakeScrapeMetrics
from pgbouncer_exporter.adapters.scrape_metrics.prometheus import PrometheusScrapeMetrics

__all__ = ["PrometheusScrapeMetrics", "FakeScrapeMetrics"]
