"""Row-to-metric translation for one PgBouncer subsystem.

Runs the subsystem's ``SHOW`` query, resolves every row's columns by name
and emits observations bound to the descriptors compiled at startup.

Failures fall into three groups:

* query, column-list and row-fetch failures are fatal for the subsystem and
  nothing is emitted for it this cycle;
* a cell that cannot be coerced is recorded as a ``CellError`` and skipped,
  the rest of the row still goes through;
* a row whose translation raises is recorded as a ``CellError`` and the
  remaining rows are still translated.
"""

from typing import Mapping, Sequence

from pgbouncer_exporter.core.cells import Cell
from pgbouncer_exporter.core.coercion import cell_to_label, coerce
from pgbouncer_exporter.core.exceptions import (
    ColumnListError,
    QueryExecutionError,
    RowFetchError,
)
from pgbouncer_exporter.core.logging import logger
from pgbouncer_exporter.core.protocols.query_executor import QueryExecutor
from pgbouncer_exporter.domains.pgbouncer.types import (
    ENTITY_LABEL,
    CellError,
    CompiledColumn,
    DescriptorMap,
    Observation,
    Subsystem,
    TranslationResult,
)

KEY_COLUMN = "key"
# SHOW CONFIG is key, value, [default,] changeable; the value is always second.
CONFIG_VALUE_INDEX = 1
# Column name recorded for errors that concern a whole row.
ROW_MARKER = "*"


def _resolve_entity(
    subsystem: Subsystem,
    row: Sequence[Cell],
    column_index: Mapping[str, int],
    errors: list[CellError],
) -> str | None:
    """Return the row's ``database`` label value, or None if absent."""
    idx = column_index.get(ENTITY_LABEL)
    if idx is None or idx >= len(row):
        return None
    value, ok = cell_to_label(row[idx])
    if not ok:
        errors.append(CellError(subsystem, ENTITY_LABEL, row[idx].raw, "Unusable label value"))
        return None
    return value or None


def _translate_row(
    subsystem: Subsystem,
    row: Sequence[Cell],
    columns: Sequence[str],
    column_index: Mapping[str, int],
    mapping: Mapping[str, CompiledColumn],
    result: TranslationResult,
) -> None:
    # The label is resolved before any emission so column order never matters.
    entity = _resolve_entity(subsystem, row, column_index, result.errors)

    for idx, column_name in enumerate(columns):
        if idx >= len(row):
            break
        cell = row[idx]

        if subsystem.is_key_value:
            if column_name != KEY_COLUMN:
                continue
            key, ok = cell_to_label(cell)
            if not ok or not key:
                continue
            column_name = key
            if CONFIG_VALUE_INDEX >= len(row):
                continue
            cell = row[CONFIG_VALUE_INDEX]

        compiled = mapping.get(column_name)
        if compiled is None or compiled.discard:
            continue
        descriptor = compiled.descriptor

        value, ok = coerce(cell)
        if not ok:
            result.errors.append(
                CellError(subsystem, column_name, cell.raw, "Unexpected error parsing column")
            )
            continue

        labels: dict[str, str] = {}
        if descriptor.labels:
            if entity is None:
                result.errors.append(
                    CellError(subsystem, column_name, cell.raw, "Missing database label")
                )
                continue
            labels[ENTITY_LABEL] = entity

        result.observations.append(Observation(descriptor, value, labels))


def translate(
    executor: QueryExecutor,
    subsystem: Subsystem,
    descriptors: DescriptorMap,
) -> TranslationResult:
    """Scrape one subsystem and translate its rows into observations.

    Args:
        executor: Open admin-console executor (borrowed, not closed here).
        subsystem: Which ``SHOW`` query to run.
        descriptors: Output of ``compile_descriptors``.

    Returns:
        A ``TranslationResult``.  ``fatal`` is set, and ``observations`` is
        empty, when the query, column list or row fetch failed.
    """
    log = logger.with_context(subsystem=subsystem.value)
    mapping = descriptors.get(subsystem, {})
    result = TranslationResult(subsystem=subsystem)

    try:
        query_result = executor.execute(subsystem.query)
    except Exception as exc:
        result.fatal = QueryExecutionError(
            subsystem.value, f"Error running query on database: {exc}"
        )
        return result

    try:
        try:
            columns = list(query_result.columns())
        except Exception as exc:
            result.fatal = ColumnListError(
                subsystem.value, f"Error retrieving column list: {exc}"
            )
            return result
        if not columns:
            result.fatal = ColumnListError(subsystem.value, "Query returned no columns")
            return result

        column_index: dict[str, int] = {}
        for idx, name in enumerate(columns):
            column_index.setdefault(name, idx)

        try:
            fetched = [[Cell.of(value) for value in row] for row in query_result.rows()]
        except Exception as exc:
            result.fatal = RowFetchError(subsystem.value, f"Error retrieving rows: {exc}")
            return result
    finally:
        query_result.close()

    for row in fetched:
        log.debug(f"Translating row with {len(row)} cells")
        try:
            _translate_row(subsystem, row, columns, column_index, mapping, result)
        except Exception as exc:
            result.errors.append(
                CellError(
                    subsystem,
                    ROW_MARKER,
                    [cell.raw for cell in row],
                    f"Unexpected error translating row: {exc}",
                )
            )

    return result
