"""MetricsRenderer protocol for serving the exposition endpoint.

The HTTP server only needs bytes and a MIME type; whether they come from a
Prometheus registry or a canned fake is not its concern.  Rendering may
trigger a blocking scrape of the admin console.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsRenderer(Protocol):
    """Protocol for rendering collected metrics into a scrapeable format."""

    @property
    def content_type(self) -> str:
        """MIME type for the serialized metrics output."""
        ...

    def generate(self) -> bytes:
        """Collect and serialize all metrics into the wire format."""
        ...
