"""Fake MetricsRenderer for testing.

Records generate() calls so tests can assert on metrics-server behaviour
without depending on prometheus-client or a PgBouncer instance.
"""

from pgbouncer_exporter.core.protocols.metrics_renderer import MetricsRenderer


class FakeMetricsRenderer(MetricsRenderer):
    """In-memory spy implementing the MetricsRenderer protocol."""

    def __init__(self, payload: bytes = b"# fake metrics\n", error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.generate_calls: int = 0

    @property
    def content_type(self) -> str:
        return "text/plain"

    def generate(self) -> bytes:
        self.generate_calls += 1
        if self.error is not None:
            raise self.error
        return self.payload
