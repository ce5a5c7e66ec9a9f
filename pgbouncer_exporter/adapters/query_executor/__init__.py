"""Admin console query executor adapters."""

from pgbouncer_exporter.adapters.query_executor.fake import FakeQueryExecutor, FakeQueryResult
from pgbouncer_exporter.adapters.query_executor.psycopg import PsycopgQueryExecutor

__all__ = ["PsycopgQueryExecutor", "FakeQueryExecutor", "FakeQueryResult"]
