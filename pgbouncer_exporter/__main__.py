"""Runner for the PgBouncer exporter."""

import argparse
import asyncio
import sys
from typing import Sequence

from prometheus_client import CollectorRegistry

from pgbouncer_exporter.adapters.collector import PgBouncerCollector
from pgbouncer_exporter.adapters.metrics_renderer import PrometheusMetricsRenderer
from pgbouncer_exporter.adapters.query_executor import PsycopgQueryExecutor
from pgbouncer_exporter.adapters.scrape_metrics import PrometheusScrapeMetrics
from pgbouncer_exporter.api.metrics import MetricsServer
from pgbouncer_exporter.core.config import Settings, settings
from pgbouncer_exporter.core.exceptions import ExporterError
from pgbouncer_exporter.core.logging import configure_logging, logger, mask_dsn
from pgbouncer_exporter.core.protocols.query_executor import QueryExecutor
from pgbouncer_exporter.domains.pgbouncer import (
    COLUMN_REGISTRY,
    ScrapeOrchestrator,
    compile_descriptors,
)
from pgbouncer_exporter.domains.pgbouncer.types import DescriptorMap


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pgbouncer-exporter",
        description="Prometheus exporter for the PgBouncer admin console.",
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        help="Address to listen on, as host:port (default from environment).",
    )
    parser.add_argument(
        "--web.telemetry-path", dest="telemetry_path", help="Path serving the metrics."
    )
    parser.add_argument(
        "--pgbouncer.connection-string",
        dest="connection_string",
        help="libpq connection string for the admin console.",
    )
    parser.add_argument("--namespace", dest="namespace", help="Metric name prefix.")
    parser.add_argument("--log.level", dest="log_level", help="Logging level.")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace, base: Settings = settings) -> Settings:
    """Overlay command-line flags on the environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.listen_address:
        host, _, port = args.listen_address.rpartition(":")
        if host:
            overrides["LISTEN_HOST"] = host
        overrides["LISTEN_PORT"] = port
    if args.telemetry_path:
        overrides["TELEMETRY_PATH"] = args.telemetry_path
    if args.connection_string:
        overrides["CONNECTION_STRING"] = args.connection_string
    if args.namespace:
        overrides["NAMESPACE"] = args.namespace
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    if not overrides:
        return base
    return Settings.model_validate({**base.model_dump(), **overrides})


def build_registry(
    executor: QueryExecutor, descriptors: DescriptorMap, namespace: str
) -> CollectorRegistry:
    """Wire the scrape pipeline into a fresh registry."""
    scrape_metrics = PrometheusScrapeMetrics(namespace)
    orchestrator = ScrapeOrchestrator(executor, descriptors, scrape_metrics)
    registry = CollectorRegistry()
    registry.register(PgBouncerCollector(orchestrator, scrape_metrics))
    return registry


async def main(config: Settings) -> None:
    """Open the admin connection, then serve metrics until cancelled.

    Raises:
        ExporterError: If descriptors cannot be compiled or PgBouncer is
            unreachable at startup.
    """
    log = logger.with_context(operation="runner")
    log.info(f"Starting PgBouncer exporter for {mask_dsn(config.CONNECTION_STRING)}")

    descriptors = compile_descriptors(COLUMN_REGISTRY, config.NAMESPACE)
    log.info(f"Compiled descriptors for {len(descriptors)} subsystems")

    executor = PsycopgQueryExecutor.open(
        config.CONNECTION_STRING,
        connect_timeout=config.CONNECT_TIMEOUT_SECONDS,
        query_timeout=config.QUERY_TIMEOUT_SECONDS,
    )
    try:
        registry = build_registry(executor, descriptors, config.NAMESPACE)
        server = MetricsServer(
            PrometheusMetricsRenderer(registry),
            port=config.LISTEN_PORT,
            host=config.LISTEN_HOST,
            telemetry_path=config.TELEMETRY_PATH,
        )
        await server.start()
        try:
            await asyncio.Event().wait()
        finally:
            await server.stop()
    finally:
        executor.close()


def run(argv: Sequence[str] | None = None) -> int:
    """Console-script entry point."""
    config = build_settings(parse_args(argv))
    configure_logging("DEBUG" if config.DEBUG else config.LOG_LEVEL)
    try:
        asyncio.run(main(config))
    except ExporterError as e:
        logger.error(f"Startup failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Shutdown requested... exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
