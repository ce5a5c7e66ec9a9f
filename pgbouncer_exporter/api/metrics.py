"""HTTP server exposing the PgBouncer metrics."""

import asyncio
import traceback
from typing import Optional

from aiohttp import web

from pgbouncer_exporter.core.logging import logger
from pgbouncer_exporter.core.protocols.metrics_renderer import MetricsRenderer

LANDING_PAGE = """<html>
<head><title>PgBouncer Exporter</title></head>
<body>
<h1>PgBouncer Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


class MetricsServer:
    """aiohttp server serving the metrics exposition, a landing page and a health check.

    Rendering runs a blocking scrape of the admin console, so it is moved
    off the event loop into a worker thread.
    """

    def __init__(
        self,
        renderer: MetricsRenderer,
        port: int = 9127,
        host: str = "0.0.0.0",
        telemetry_path: str = "/metrics",
    ):
        """Initialize the metrics server.

        Args:
            renderer: Produces the exposition payload.
            port: The port to listen on.
            host: The host to listen on.
            telemetry_path: Path serving the metrics.
        """
        self.renderer = renderer
        self.host = host
        self.port = port
        self.telemetry_path = telemetry_path
        self.app = web.Application()
        self.app.add_routes(
            [
                web.get("/", self.landing_handler),
                web.get("/health", self.health_handler),
                web.get(telemetry_path, self.metrics_handler),
            ]
        )
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None
        self.logger = logger.with_context(operation="metrics_server")

    async def metrics_handler(self, request: web.Request) -> web.Response:
        """Run one scrape and return the exposition.

        Returns:
            200 with the metrics, or 500 if rendering itself failed.
        """
        try:
            payload = await asyncio.to_thread(self.renderer.generate)
        except Exception as e:
            self.logger.error(f"Error rendering metrics: {e}\n{traceback.format_exc()}")
            return web.Response(text="Error\n", status=500)
        return web.Response(
            body=payload,
            headers={"Content-Type": self.renderer.content_type},
        )

    async def landing_handler(self, request: web.Request) -> web.Response:
        return web.Response(
            text=LANDING_PAGE.format(path=self.telemetry_path), content_type="text/html"
        )

    async def health_handler(self, request: web.Request) -> web.Response:
        return web.Response(text="OK\n")

    async def start(self) -> None:
        """Start the aiohttp server."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        self.site = web.TCPSite(self.runner, host=self.host, port=self.port)
        await self.site.start()
        self.logger.info(
            f"Metrics server listening on http://{self.host}:{self.port}{self.telemetry_path}"
        )

    async def stop(self) -> None:
        """Stops the server gracefully."""
        if self.site:
            await self.site.stop()
        if self.runner:
            await self.runner.cleanup()
