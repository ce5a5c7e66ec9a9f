"""Exporter settings.

Values come from ``PGBOUNCER_EXPORTER_*`` environment variables (or a local
``.env`` file).  Command-line flags in ``__main__`` override them.
"""

import logging
import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_NAMESPACE_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class Settings(BaseSettings):
    """Runtime configuration for the exporter process."""

    model_config = SettingsConfigDict(
        env_prefix="PGBOUNCER_EXPORTER_",
        env_file=".env",
        extra="ignore",
    )

    CONNECTION_STRING: str = Field(
        "postgres://postgres:@localhost:6543/pgbouncer?sslmode=disable",
        description="libpq connection string for the PgBouncer admin console.",
    )
    NAMESPACE: str = Field("pgbouncer", description="Prefix for every exported metric.")
    LISTEN_HOST: str = Field("0.0.0.0", description="Interface the HTTP server binds to.")
    LISTEN_PORT: int = Field(9127, ge=1, le=65535)
    TELEMETRY_PATH: str = Field("/metrics", description="Path serving the metrics.")
    CONNECT_TIMEOUT_SECONDS: int = Field(5, ge=1)
    QUERY_TIMEOUT_SECONDS: float = Field(
        10.0, ge=0, description="Cancel an admin query after this long; 0 disables."
    )
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    @field_validator("NAMESPACE")
    @classmethod
    def validate_namespace(cls, value: str) -> str:
        if not _NAMESPACE_RE.match(value):
            raise ValueError(f"Invalid metric namespace: {value!r}")
        return value

    @field_validator("TELEMETRY_PATH")
    @classmethod
    def normalise_telemetry_path(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


settings = Settings()
