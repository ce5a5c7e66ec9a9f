"""Unit tests for settings validation and logging helpers."""

import logging

import pytest
from pydantic import ValidationError

from pgbouncer_exporter.core.config import Settings
from pgbouncer_exporter.core.logging import ContextualLogger, configure_logging, mask_dsn


class TestSettings:
    def test_defaults(self, monkeypatch):
        for key in ("NAMESPACE", "LISTEN_PORT", "TELEMETRY_PATH", "CONNECTION_STRING"):
            monkeypatch.delenv(f"PGBOUNCER_EXPORTER_{key}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.NAMESPACE == "pgbouncer"
        assert settings.LISTEN_PORT == 9127
        assert settings.TELEMETRY_PATH == "/metrics"
        assert settings.CONNECTION_STRING.startswith("postgres://")

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("PGBOUNCER_EXPORTER_NAMESPACE", "edge")
        monkeypatch.setenv("PGBOUNCER_EXPORTER_LISTEN_PORT", "9999")

        settings = Settings(_env_file=None)

        assert settings.NAMESPACE == "edge"
        assert settings.LISTEN_PORT == 9999

    def test_telemetry_path_gets_leading_slash(self):
        assert Settings(_env_file=None, TELEMETRY_PATH="stats").TELEMETRY_PATH == "/stats"

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"NAMESPACE": "pg-bouncer"},
            {"LOG_LEVEL": "chatty"},
            {"LISTEN_PORT": 0},
            {"QUERY_TIMEOUT_SECONDS": -1},
        ],
    )
    def test_rejects_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **overrides)


class TestMaskDsn:
    def test_url_password_is_masked(self):
        masked = mask_dsn("postgres://stats:s3cret@db:6432/pgbouncer?sslmode=disable")
        assert masked == "postgres://stats:***@db:6432/pgbouncer?sslmode=disable"

    def test_url_without_password_is_unchanged(self):
        dsn = "postgres://postgres:@localhost:6543/pgbouncer?sslmode=disable"
        assert mask_dsn(dsn) == dsn

    def test_keyword_password_is_masked(self):
        masked = mask_dsn("host=db port=6432 user=stats password=s3cret dbname=pgbouncer")
        assert masked == "host=db port=6432 user=stats password=*** dbname=pgbouncer"


class TestContextualLogger:
    def test_with_context_prefixes_message(self, caplog):
        base = logging.getLogger("contextual_logger_test")
        log = ContextualLogger(base).with_context(subsystem="pools")

        with caplog.at_level(logging.INFO, logger="contextual_logger_test"):
            log.info("hello")

        assert "[subsystem=pools] hello" in caplog.text

    def test_with_context_merges(self):
        log = ContextualLogger(logging.getLogger("x"), {"a": 1}).with_context(b=2)
        assert log.extra == {"a": 1, "b": 2}

    def test_configure_logging_is_idempotent(self):
        configure_logging("DEBUG")
        configure_logging("INFO")

        base = logging.getLogger("pgbouncer_exporter")
        owned = [h for h in base.handlers if getattr(h, "_pgbouncer_exporter", False)]
        assert len(owned) == 1
        assert base.level == logging.INFO
