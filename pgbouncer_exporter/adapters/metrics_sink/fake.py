"""Fake MetricsSink for testing.

Records every observation so tests can assert on translated values
without reaching into prometheus-client internals.
"""

from pgbouncer_exporter.core.protocols.metrics_sink import MetricsSink
from pgbouncer_exporter.domains.pgbouncer.types import Observation


class FakeMetricsSink(MetricsSink):
    """In-memory spy implementing the MetricsSink protocol."""

    def __init__(self) -> None:
        self.observations: list[Observation] = []

    def emit(self, observation: Observation) -> None:
        self.observations.append(observation)

    # -- test helpers --

    def by_name(self, name: str) -> list[Observation]:
        return [o for o in self.observations if o.descriptor.name == name]

    def clear(self) -> None:
        self.observations.clear()
