"""Compile the column registry into metric descriptors.

Runs once at startup.  The result is immutable and shared by every scrape
cycle, so the translator can never fabricate a descriptor at scrape time.
"""

import re
from types import MappingProxyType
from typing import Any, Mapping

from pgbouncer_exporter.core.exceptions import DescriptorCompileError
from pgbouncer_exporter.domains.pgbouncer.types import (
    ColumnMapping,
    ColumnUsage,
    CompiledColumn,
    DescriptorMap,
    MetricDescriptor,
    Subsystem,
)

_METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")


def metric_name(namespace: str, subsystem: Subsystem, column: str) -> str:
    """Fully-qualified metric name: ``{namespace}_{subsystem}_{column}``."""
    return f"{namespace}_{subsystem.value}_{column}"


def _compile_column(
    namespace: str, subsystem: Subsystem, column: str, mapping: Any
) -> CompiledColumn:
    if not isinstance(mapping, ColumnMapping):
        raise DescriptorCompileError(
            f"Registry entry {subsystem.value}.{column} is not a ColumnMapping: {mapping!r}"
        )
    if mapping.column != column:
        raise DescriptorCompileError(
            f"Registry key {subsystem.value}.{column} does not match entry "
            f"column {mapping.column!r}"
        )
    if not isinstance(mapping.usage, ColumnUsage):
        raise DescriptorCompileError(
            f"Unknown usage {mapping.usage!r} for {subsystem.value}.{column}"
        )

    if mapping.usage is ColumnUsage.DISCARD:
        return CompiledColumn(column=column, descriptor=None)

    if not mapping.description:
        raise DescriptorCompileError(f"Missing description for {subsystem.value}.{column}")

    name = metric_name(namespace, subsystem, column)
    if not _METRIC_NAME_RE.match(name):
        raise DescriptorCompileError(f"Invalid metric name {name!r}")

    return CompiledColumn(
        column=column,
        descriptor=MetricDescriptor(
            name=name,
            kind=mapping.usage,
            labels=subsystem.labels,
            documentation=mapping.description,
        ),
    )


def compile_descriptors(
    registry: Mapping[Any, Mapping[str, ColumnMapping]], namespace: str
) -> DescriptorMap:
    """Expand ``registry`` into ``{subsystem: {column: CompiledColumn}}``.

    Args:
        registry: Per-subsystem column mappings (see ``registry_data``).
        namespace: Metric name prefix, e.g. ``pgbouncer``.

    Raises:
        DescriptorCompileError: If the namespace, a subsystem key or any
            entry is malformed.
    """
    if not namespace or not _METRIC_NAME_RE.match(namespace):
        raise DescriptorCompileError(f"Invalid metric namespace {namespace!r}")

    compiled: dict[Subsystem, Mapping[str, CompiledColumn]] = {}
    for key, columns in registry.items():
        try:
            subsystem = Subsystem(key)
        except ValueError as exc:
            raise DescriptorCompileError(f"Unknown subsystem {key!r}") from exc

        compiled[subsystem] = MappingProxyType(
            {
                column: _compile_column(namespace, subsystem, column, mapping)
                for column, mapping in columns.items()
            }
        )

    return MappingProxyType(compiled)


def iter_descriptors(descriptors: DescriptorMap) -> list[MetricDescriptor]:
    """All emitting descriptors, in registry order."""
    return [
        compiled.descriptor
        for columns in descriptors.values()
        for compiled in columns.values()
        if compiled.descriptor is not None
    ]
