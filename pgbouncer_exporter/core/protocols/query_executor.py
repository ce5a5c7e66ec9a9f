"""QueryExecutor protocol for the PgBouncer admin console.

Abstracts the database driver so the translator depends on a protocol
rather than psycopg2.  Production uses a single persistent psycopg2
connection; tests inject a fake with canned result sets.
"""

from typing import Iterator, Protocol, Sequence, runtime_checkable

from pgbouncer_exporter.core.cells import Cell


@runtime_checkable
class QueryResult(Protocol):
    """Lazily-read result of one administrative query."""

    def columns(self) -> list[str]:
        """Ordered column names of the result shape.

        Raises:
            Any exception if the column list cannot be retrieved.
        """
        ...

    def rows(self) -> Iterator[Sequence[Cell]]:
        """Yield rows as sequences of cells, aligned with ``columns()``.

        Raises:
            Any exception if rows cannot be read.
        """
        ...

    def close(self) -> None:
        """Release the underlying cursor."""
        ...


@runtime_checkable
class QueryExecutor(Protocol):
    """Protocol for running fixed-text admin queries on one connection.

    Implementations **raise** on failure; the translator decides which
    failures are fatal to a subsystem.
    """

    def execute(self, query: str) -> QueryResult:
        """Run ``query`` and return its result."""
        ...

    def ping(self) -> None:
        """Verify the connection is usable. Raises on failure."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...
