"""Fake ScrapeMetrics for testing."""

from dataclasses import dataclass

from pgbouncer_exporter.core.protocols.scrape_metrics import ScrapeMetrics


@dataclass
class ScrapeRecord:
    """Single recorded cycle."""

    duration: float
    failed: bool
    up: bool


class FakeScrapeMetrics(ScrapeMetrics):
    """In-memory spy implementing the ScrapeMetrics protocol.

    Usage:
        fake = FakeScrapeMetrics()
        orchestrator = ScrapeOrchestrator(executor, descriptors, fake)
        orchestrator.scrape(sink)
        assert fake.scrapes_total == 1
    """

    def __init__(self) -> None:
        self.records: list[ScrapeRecord] = []

    def record_scrape(self, *, duration: float, failed: bool, up: bool) -> None:
        self.records.append(ScrapeRecord(duration, failed, up))

    # -- test helpers --

    @property
    def scrapes_total(self) -> int:
        return len(self.records)

    @property
    def last(self) -> ScrapeRecord | None:
        return self.records[-1] if self.records else None

    def clear(self) -> None:
        self.records.clear()
