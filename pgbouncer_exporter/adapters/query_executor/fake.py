"""Fake QueryExecutor for testing.

Serves canned result sets per query text so translator and orchestrator
tests run without a PgBouncer instance.
"""

from typing import Any, Iterator, Sequence

from pgbouncer_exporter.core.cells import Cell


class FakeQueryResult:
    """Canned result set; can be told to fail at the columns or rows stage."""

    def __init__(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        columns_error: Exception | None = None,
        rows_error: Exception | None = None,
    ) -> None:
        self._columns = list(columns)
        self._rows = [list(row) for row in rows]
        self._columns_error = columns_error
        self._rows_error = rows_error
        self.closed = False

    def columns(self) -> list[str]:
        if self._columns_error is not None:
            raise self._columns_error
        return list(self._columns)

    def rows(self) -> Iterator[Sequence[Cell]]:
        for row in self._rows:
            yield [Cell.of(value) for value in row]
        if self._rows_error is not None:
            raise self._rows_error

    def close(self) -> None:
        self.closed = True


class FakeQueryExecutor:
    """In-memory stand-in implementing the QueryExecutor protocol.

    Usage:
        fake = FakeQueryExecutor()
        fake.set_result("SHOW POOLS;", ["database", "cl_active"], [["db1", "5"]])
        fake.set_error("SHOW STATS;", RuntimeError("syntax error"))
        assert fake.queries == ["SHOW POOLS;"]
    """

    def __init__(self) -> None:
        self._results: dict[str, FakeQueryResult] = {}
        self._errors: dict[str, Exception] = {}
        self.queries: list[str] = []
        self.results_returned: list[FakeQueryResult] = []
        self.ping_calls: int = 0
        self.ping_error: Exception | None = None
        self.closed = False

    def set_result(
        self,
        query: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        **kwargs: Any,
    ) -> None:
        self._errors.pop(query, None)
        self._results[query] = FakeQueryResult(columns, rows, **kwargs)

    def set_error(self, query: str, error: Exception) -> None:
        self._errors[query] = error

    # -- QueryExecutor protocol methods --

    def execute(self, query: str) -> FakeQueryResult:
        self.queries.append(query)
        if query in self._errors:
            raise self._errors[query]
        if query not in self._results:
            raise RuntimeError(f"invalid command '{query}'")
        result = self._results[query]
        self.results_returned.append(result)
        return result

    def ping(self) -> None:
        self.ping_calls += 1
        if self.ping_error is not None:
            raise self.ping_error

    def close(self) -> None:
        self.closed = True

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self._results.clear()
        self._errors.clear()
        self.queries.clear()
        self.results_returned.clear()
        self.ping_calls = 0
        self.ping_error = None
        self.closed = False
