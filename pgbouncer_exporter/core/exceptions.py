"""Exception hierarchy for the exporter.

Two families matter at runtime:

* process-fatal errors (``ConnectionSetupError``, ``DescriptorCompileError``)
  abort startup before the HTTP server is bound;
* subsystem-fatal errors (``SubsystemScrapeError`` and subclasses) skip one
  administrative query for one scrape cycle and are otherwise only logged.

Per-cell coercion problems are not exceptions at all; they are collected as
``CellError`` records by the translator.
"""


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ConnectionSetupError(ExporterError):
    """Raised when the admin console cannot be opened or pinged at startup."""


class DescriptorCompileError(ExporterError):
    """Raised when the column registry cannot be compiled into descriptors."""


class SubsystemScrapeError(ExporterError):
    """A single subsystem could not be scraped this cycle.

    Args:
        subsystem: Subsystem name (``stats``, ``pools``, ``config``).
        message: Human-readable detail.
    """

    def __init__(self, subsystem: str, message: str) -> None:
        self.subsystem = subsystem
        self.message = message
        super().__init__(f"{subsystem}: {message}")


class QueryExecutionError(SubsystemScrapeError):
    """The administrative query was rejected or the connection dropped."""


class ColumnListError(SubsystemScrapeError):
    """The result shape (column list) could not be retrieved."""


class RowFetchError(SubsystemScrapeError):
    """Rows could not be read from an otherwise successful query."""
