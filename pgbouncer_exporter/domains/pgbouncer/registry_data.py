"""Column registry for the PgBouncer admin console.

This is the single source of truth for which ``SHOW`` columns are exported.
Add new admin fields here; the descriptor compiler reads this at startup.
Columns not listed for a subsystem are ignored by the translator, so newer
PgBouncer releases that add columns keep working unchanged.
"""

from types import MappingProxyType
from typing import Mapping

from pgbouncer_exporter.domains.pgbouncer.types import ColumnMapping, ColumnUsage, Subsystem

GAUGE = ColumnUsage.GAUGE
DISCARD = ColumnUsage.DISCARD

STATS_COLUMNS: tuple[ColumnMapping, ...] = (
    ColumnMapping("database", DISCARD, "Name of the pooled database"),
    ColumnMapping("avg_query_count", GAUGE, "Average queries per second in last stat period"),
    ColumnMapping("avg_query", GAUGE, "The average query duration, shown as microsecond"),
    ColumnMapping("avg_query_time", GAUGE, "Average query duration in microseconds"),
    ColumnMapping("avg_recv", GAUGE, "Average received (from clients) bytes per second"),
    ColumnMapping(
        "avg_req",
        GAUGE,
        "The average number of requests per second in last stat period, shown as request/second",
    ),
    ColumnMapping("avg_sent", GAUGE, "Average sent (to clients) bytes per second"),
    ColumnMapping(
        "avg_wait_time",
        GAUGE,
        "Time spent by clients waiting for a server in microseconds (average per second)",
    ),
    ColumnMapping("avg_xact_count", GAUGE, "Average transactions per second in last stat period"),
    ColumnMapping("avg_xact_time", GAUGE, "Average transaction duration in microseconds"),
    ColumnMapping(
        "bytes_received_per_second",
        GAUGE,
        "The total network traffic received, shown as byte/second",
    ),
    ColumnMapping(
        "bytes_sent_per_second", GAUGE, "The total network traffic sent, shown as byte/second"
    ),
    ColumnMapping("total_query_count", GAUGE, "Total number of SQL queries pooled"),
    ColumnMapping(
        "total_query_time",
        GAUGE,
        "Total number of microseconds spent by pgbouncer when actively connected to "
        "PostgreSQL, executing queries",
    ),
    ColumnMapping(
        "total_received",
        GAUGE,
        "Total volume in bytes of network traffic received by pgbouncer, shown as bytes",
    ),
    ColumnMapping(
        "total_requests",
        GAUGE,
        "Total number of SQL requests pooled by pgbouncer, shown as requests",
    ),
    ColumnMapping(
        "total_sent",
        GAUGE,
        "Total volume in bytes of network traffic sent by pgbouncer, shown as bytes",
    ),
    ColumnMapping(
        "total_wait_time", GAUGE, "Time spent by clients waiting for a server in microseconds"
    ),
    ColumnMapping("total_xact_count", GAUGE, "Total number of SQL transactions pooled"),
    ColumnMapping(
        "total_xact_time",
        GAUGE,
        "Total number of microseconds spent by pgbouncer when connected to PostgreSQL in a "
        "transaction, either idle in transaction or executing queries",
    ),
)

POOLS_COLUMNS: tuple[ColumnMapping, ...] = (
    ColumnMapping("database", DISCARD, "Name of the pooled database"),
    ColumnMapping("user", DISCARD, "User the pool connects as"),
    ColumnMapping("pool_mode", DISCARD, "Pooling mode in use"),
    ColumnMapping(
        "cl_active",
        GAUGE,
        "Client connections linked to server connection and able to process queries, "
        "shown as connection",
    ),
    ColumnMapping(
        "cl_waiting",
        GAUGE,
        "Client connections waiting on a server connection, shown as connection",
    ),
    ColumnMapping(
        "sv_active", GAUGE, "Server connections linked to a client connection, shown as connection"
    ),
    ColumnMapping(
        "sv_idle",
        GAUGE,
        "Server connections idle and ready for a client query, shown as connection",
    ),
    ColumnMapping(
        "sv_used",
        GAUGE,
        "Server connections idle more than server_check_delay, needing server_check_query, "
        "shown as connection",
    ),
    ColumnMapping(
        "sv_tested",
        GAUGE,
        "Server connections currently running either server_reset_query or "
        "server_check_query, shown as connection",
    ),
    ColumnMapping(
        "sv_login",
        GAUGE,
        "Server connections currently in the process of logging in, shown as connection",
    ),
    ColumnMapping("maxwait", GAUGE, "Age of oldest unserved client connection, shown as second"),
    ColumnMapping(
        "maxwait_us",
        GAUGE,
        "Microsecond part of the age of oldest unserved client connection",
    ),
)

CONFIG_COLUMNS: tuple[ColumnMapping, ...] = (
    ColumnMapping("max_client_conn", GAUGE, "Maximum number of client connections allowed"),
    ColumnMapping("default_pool_size", GAUGE, "Default pool size for each database"),
    ColumnMapping(
        "min_pool_size", GAUGE, "Minimum number of server connections kept in each pool"
    ),
    ColumnMapping(
        "reserve_pool_size",
        GAUGE,
        "Additional connections allowed to a pool when clients wait too long",
    ),
    ColumnMapping(
        "max_db_connections", GAUGE, "Maximum number of server connections per database"
    ),
    ColumnMapping("max_user_connections", GAUGE, "Maximum number of server connections per user"),
)

COLUMN_REGISTRY: Mapping[Subsystem, Mapping[str, ColumnMapping]] = MappingProxyType(
    {
        subsystem: MappingProxyType({mapping.column: mapping for mapping in columns})
        for subsystem, columns in (
            (Subsystem.STATS, STATS_COLUMNS),
            (Subsystem.POOLS, POOLS_COLUMNS),
            (Subsystem.CONFIG, CONFIG_COLUMNS),
        )
    }
)
