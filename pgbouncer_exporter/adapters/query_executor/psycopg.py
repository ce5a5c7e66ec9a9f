"""psycopg2 implementation of the QueryExecutor protocol.

Holds exactly one connection to the PgBouncer admin console.  The console
only understands the simple query protocol and rejects transactions, so the
connection runs in autocommit mode and every ``SHOW`` is sent verbatim.

A dropped connection is reopened lazily on the next query.  Queries running
longer than ``query_timeout`` are cancelled from a timer thread, which makes
the driver raise ``QueryCanceledError`` in the scraping thread.
"""

import threading
from typing import Any, Callable, Iterator, Sequence

import psycopg2
import psycopg2.extensions

from pgbouncer_exporter.core.cells import Cell
from pgbouncer_exporter.core.exceptions import ConnectionSetupError
from pgbouncer_exporter.core.logging import logger, mask_dsn

PING_QUERY = "SHOW VERSION;"


class PsycopgQueryResult:
    """Wraps an executed psycopg2 cursor."""

    def __init__(self, cursor: psycopg2.extensions.cursor) -> None:
        self._cursor = cursor

    def columns(self) -> list[str]:
        if self._cursor.description is None:
            raise psycopg2.ProgrammingError("query did not return a result set")
        return [column[0] for column in self._cursor.description]

    def rows(self) -> Iterator[Sequence[Cell]]:
        for row in self._cursor:
            yield [Cell.of(value) for value in row]

    def close(self) -> None:
        if not self._cursor.closed and not self._cursor.connection.closed:
            self._cursor.close()


class PsycopgQueryExecutor:
    """Single-connection admin console executor.

    Args:
        dsn: libpq connection string (URL or keyword form).
        connect_timeout: Seconds to wait when opening the connection.
        query_timeout: Seconds before a running query is cancelled; ``0``
            disables the timer.
        connect: Connection factory, ``psycopg2.connect`` by default.
    """

    def __init__(
        self,
        dsn: str,
        *,
        connect_timeout: int = 5,
        query_timeout: float = 10.0,
        connect: Callable[..., Any] = psycopg2.connect,
    ) -> None:
        self._dsn = dsn
        self._connect_timeout = connect_timeout
        self._query_timeout = query_timeout
        self._connect_fn = connect
        self._conn: Any = None
        self.logger = logger.with_context(target=mask_dsn(dsn))

    @classmethod
    def open(cls, dsn: str, **kwargs: Any) -> "PsycopgQueryExecutor":
        """Connect and ping, raising ``ConnectionSetupError`` on failure."""
        executor = cls(dsn, **kwargs)
        try:
            executor.ping()
        except psycopg2.Error as exc:
            executor.close()
            raise ConnectionSetupError(
                f"Cannot reach PgBouncer at {mask_dsn(dsn)}: {exc}"
            ) from exc
        return executor

    @property
    def connected(self) -> bool:
        return self._conn is not None and not self._conn.closed

    def _ensure_connection(self) -> Any:
        if not self.connected:
            if self._conn is not None:
                self.logger.info("Connection lost, reconnecting")
            self._conn = self._connect_fn(self._dsn, connect_timeout=self._connect_timeout)
            self._conn.autocommit = True
            self.logger.info("Connected to PgBouncer admin console")
        return self._conn

    def _cancel(self, conn: Any) -> None:
        self.logger.warning(f"Query exceeded {self._query_timeout}s, cancelling")
        try:
            conn.cancel()
        except psycopg2.Error as exc:
            self.logger.warning(f"Cancel request failed: {exc}")

    def execute(self, query: str) -> PsycopgQueryResult:
        conn = self._ensure_connection()
        cursor = conn.cursor()

        timer: threading.Timer | None = None
        if self._query_timeout > 0:
            timer = threading.Timer(self._query_timeout, self._cancel, args=(conn,))
            timer.daemon = True
            timer.start()
        try:
            cursor.execute(query)
        except psycopg2.Error:
            if not conn.closed:
                cursor.close()
            raise
        finally:
            if timer is not None:
                timer.cancel()
        return PsycopgQueryResult(cursor)

    def ping(self) -> None:
        result = self.execute(PING_QUERY)
        try:
            list(result.rows())
        finally:
            result.close()

    def close(self) -> None:
        if self.connected:
            self._conn.close()
            self.logger.info("Connection closed")
        self._conn = None
