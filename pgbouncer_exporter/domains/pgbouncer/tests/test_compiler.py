"""Unit tests for the descriptor compiler and the column registry."""

from types import MappingProxyType

import pytest

from pgbouncer_exporter.core.exceptions import DescriptorCompileError
from pgbouncer_exporter.domains.pgbouncer.compiler import compile_descriptors, iter_descriptors
from pgbouncer_exporter.domains.pgbouncer.registry_data import COLUMN_REGISTRY
from pgbouncer_exporter.domains.pgbouncer.types import ColumnMapping, ColumnUsage, Subsystem


class TestColumnRegistry:
    def test_covers_every_subsystem(self):
        assert set(COLUMN_REGISTRY) == set(Subsystem)

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            COLUMN_REGISTRY[Subsystem.STATS] = {}  # type: ignore[index]
        with pytest.raises(TypeError):
            COLUMN_REGISTRY[Subsystem.POOLS]["cl_active"] = None  # type: ignore[index]

    def test_keys_match_entries(self):
        for columns in COLUMN_REGISTRY.values():
            for column, mapping in columns.items():
                assert mapping.column == column
                assert mapping.description


class TestCompileDescriptors:
    def test_naming_rule(self):
        descriptors = compile_descriptors(COLUMN_REGISTRY, "pgbouncer")

        descriptor = descriptors[Subsystem.POOLS]["cl_active"].descriptor
        assert descriptor.name == "pgbouncer_pools_cl_active"
        assert descriptor.kind is ColumnUsage.GAUGE
        assert descriptor.documentation.startswith("Client connections linked")

    def test_label_schema(self):
        descriptors = compile_descriptors(COLUMN_REGISTRY, "pgbouncer")

        for subsystem, columns in descriptors.items():
            expected = () if subsystem is Subsystem.CONFIG else ("database",)
            for compiled in columns.values():
                if compiled.descriptor is not None:
                    assert compiled.descriptor.labels == expected

    def test_discard_columns_are_known_but_silent(self):
        descriptors = compile_descriptors(COLUMN_REGISTRY, "pgbouncer")

        compiled = descriptors[Subsystem.POOLS]["database"]
        assert compiled.discard
        assert compiled.descriptor is None
        assert all(d.name != "pgbouncer_pools_database" for d in iter_descriptors(descriptors))

    def test_compiling_twice_is_deterministic(self):
        first = compile_descriptors(COLUMN_REGISTRY, "pgbouncer")
        second = compile_descriptors(COLUMN_REGISTRY, "pgbouncer")

        assert [(d.name, d.labels) for d in iter_descriptors(first)] == [
            (d.name, d.labels) for d in iter_descriptors(second)
        ]
        assert first == second

    def test_namespace_is_applied(self):
        descriptors = compile_descriptors(COLUMN_REGISTRY, "edge_proxy")

        names = {d.name for d in iter_descriptors(descriptors)}
        assert "edge_proxy_config_max_client_conn" in names
        assert all(name.startswith("edge_proxy_") for name in names)

    def test_counter_usage(self):
        registry = {
            "stats": {"total_xact_count": ColumnMapping("total_xact_count", ColumnUsage.COUNTER, "xacts")}
        }

        descriptors = compile_descriptors(registry, "pgbouncer")

        descriptor = descriptors[Subsystem.STATS]["total_xact_count"].descriptor
        assert descriptor.kind is ColumnUsage.COUNTER
        assert descriptor.labels == ("database",)

    def test_result_is_immutable(self):
        descriptors = compile_descriptors(COLUMN_REGISTRY, "pgbouncer")

        assert isinstance(descriptors, MappingProxyType)
        with pytest.raises(TypeError):
            descriptors[Subsystem.STATS] = {}  # type: ignore[index]


class TestCompileErrors:
    @pytest.mark.parametrize("namespace", ["", "1abc", "pg-bouncer", "pg bouncer"])
    def test_invalid_namespace(self, namespace):
        with pytest.raises(DescriptorCompileError):
            compile_descriptors(COLUMN_REGISTRY, namespace)

    def test_unknown_subsystem(self):
        registry = {"clients": {"x": ColumnMapping("x", ColumnUsage.GAUGE, "x")}}

        with pytest.raises(DescriptorCompileError, match="Unknown subsystem"):
            compile_descriptors(registry, "pgbouncer")

    def test_mismatched_key(self):
        registry = {"pools": {"cl_active": ColumnMapping("sv_active", ColumnUsage.GAUGE, "x")}}

        with pytest.raises(DescriptorCompileError, match="does not match"):
            compile_descriptors(registry, "pgbouncer")

    def test_missing_description(self):
        registry = {"pools": {"cl_active": ColumnMapping("cl_active", ColumnUsage.GAUGE, "")}}

        with pytest.raises(DescriptorCompileError, match="Missing description"):
            compile_descriptors(registry, "pgbouncer")

    def test_entry_of_wrong_type(self):
        registry = {"pools": {"cl_active": ("gauge", "x")}}

        with pytest.raises(DescriptorCompileError):
            compile_descriptors(registry, "pgbouncer")

    def test_invalid_column_name(self):
        registry = {"pools": {"cl-active": ColumnMapping("cl-active", ColumnUsage.GAUGE, "x")}}

        with pytest.raises(DescriptorCompileError, match="Invalid metric name"):
            compile_descriptors(registry, "pgbouncer")
