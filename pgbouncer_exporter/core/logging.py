"""Logging setup.

``logger`` is a ``ContextualLogger`` wrapping the package logger.  Call
``with_context(**dims)`` to get a child that prefixes every record with the
given dimensions, e.g. ``logger.with_context(subsystem="pools")``.
"""

import logging
import sys
from typing import Any, MutableMapping
from urllib.parse import urlsplit, urlunsplit

_LOGGER_NAME = "pgbouncer_exporter"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter carrying a dict of context dimensions."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None) -> None:
        super().__init__(logger, dict(extra or {}))

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        if self.extra:
            dims = " ".join(f"{key}={value}" for key, value in self.extra.items())
            msg = f"[{dims}] {msg}"
        return msg, kwargs

    def with_context(self, **kwargs: Any) -> "ContextualLogger":
        """Return a new logger with ``kwargs`` merged into the context."""
        return ContextualLogger(self.logger, {**self.extra, **kwargs})


def configure_logging(level: str = "INFO") -> None:
    """Attach a stderr handler to the package logger (idempotent)."""
    base = logging.getLogger(_LOGGER_NAME)
    base.setLevel(level)
    if not any(getattr(h, "_pgbouncer_exporter", False) for h in base.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._pgbouncer_exporter = True  # type: ignore[attr-defined]
        base.addHandler(handler)


def mask_dsn(dsn: str) -> str:
    """Hide the password of a URL- or keyword-style connection string."""
    if "://" in dsn:
        parts = urlsplit(dsn)
        if not parts.password:
            return dsn
        netloc = parts.netloc.replace(f":{parts.password}@", ":***@", 1)
        return urlunsplit(parts._replace(netloc=netloc))
    return " ".join(
        "password=***" if token.startswith("password=") else token for token in dsn.split()
    )


logger = ContextualLogger(logging.getLogger(_LOGGER_NAME))
