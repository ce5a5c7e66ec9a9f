"""Prometheus exporter for the PgBouncer admin console."""

__version__ = "0.1.0"
