"""Scrape orchestration: one collection cycle across all subsystems.

``ScrapeOrchestrator`` owns the connection lock and the self metrics.  Each
call to ``scrape()`` builds a fresh ``ScrapeSession`` that borrows the shared
executor for the duration of the cycle, so concurrent polls are serialized
and at most one query is ever in flight on the single connection.
"""

import threading
import time

from pgbouncer_exporter.core.logging import logger
from pgbouncer_exporter.core.protocols.metrics_sink import MetricsSink
from pgbouncer_exporter.core.protocols.query_executor import QueryExecutor
from pgbouncer_exporter.core.protocols.scrape_metrics import ScrapeMetrics
from pgbouncer_exporter.domains.pgbouncer.translator import translate
from pgbouncer_exporter.domains.pgbouncer.types import DescriptorMap, ScrapeResult, Subsystem


class ScrapeSession:
    """A single collection cycle.  Borrows the executor; never closes it."""

    def __init__(
        self,
        executor: QueryExecutor,
        descriptors: DescriptorMap,
        sink: MetricsSink,
        subsystems: tuple[Subsystem, ...] = tuple(Subsystem),
    ) -> None:
        self._executor = executor
        self._descriptors = descriptors
        self._sink = sink
        self._subsystems = subsystems

    def run(self) -> ScrapeResult:
        """Translate every subsystem; a fatal error skips only that subsystem."""
        result = ScrapeResult()
        for subsystem in self._subsystems:
            log = logger.with_context(subsystem=subsystem.value)
            log.debug("Querying subsystem")
            translation = translate(self._executor, subsystem, self._descriptors)

            if translation.fatal is not None:
                result.fatal_errors[subsystem] = translation.fatal
                log.warning(str(translation.fatal))
            else:
                result.subsystems_ok += 1

            # Likely version drift or parsing problems; never exported.
            for error in translation.errors:
                log.info(str(error))
            result.errors.extend(translation.errors)

            for observation in translation.observations:
                self._sink.emit(observation)
            result.observations.extend(translation.observations)
        return result


class ScrapeOrchestrator:
    """Runs collection cycles against one PgBouncer admin console.

    Args:
        executor: Shared admin-console executor.
        descriptors: Output of ``compile_descriptors``, shared read-only.
        metrics: Self-observability metrics backend.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        descriptors: DescriptorMap,
        metrics: ScrapeMetrics,
    ) -> None:
        self._executor = executor
        self._descriptors = descriptors
        self._metrics = metrics
        self._connection_lock = threading.Lock()

    @property
    def descriptors(self) -> DescriptorMap:
        return self._descriptors

    def scrape(self, sink: MetricsSink) -> ScrapeResult:
        """Run one cycle, push observations into ``sink`` and update self metrics.

        Never raises for subsystem failures; a degraded cycle still returns
        every observation that succeeded.
        """
        started = time.perf_counter()
        logger.info("Starting scrape")

        with self._connection_lock:
            session = ScrapeSession(self._executor, self._descriptors, sink)
            result = session.run()

        result.duration_seconds = time.perf_counter() - started
        self._metrics.record_scrape(
            duration=result.duration_seconds,
            failed=result.degraded,
            up=result.subsystems_ok > 0,
        )

        if result.degraded:
            failed = ", ".join(s.value for s in result.fatal_errors)
            logger.warning(
                f"Scrape degraded in {result.duration_seconds:.3f}s; failed subsystems: {failed}"
            )
        else:
            logger.info(
                f"Scrape finished in {result.duration_seconds:.3f}s with "
                f"{len(result.observations)} observations"
            )
        return result
