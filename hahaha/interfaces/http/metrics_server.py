"""
Metrics Endpoint

FastAPI application exposing the shutdown counters in the Prometheus text
format on any GET path, served by uvicorn alongside the reconciliation loop.
"""

import asyncio
import contextlib
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import Response

from hahaha.infrastructure.logging import get_logger
from hahaha.infrastructure.monitoring import ShutdownMetrics


logger = get_logger(__name__)


def create_app(metrics: ShutdownMetrics) -> FastAPI:
    """
    Create the metrics application.

    Args:
        metrics: Counters to expose

    Returns:
        FastAPI application answering every GET with the text exposition
    """
    app = FastAPI(
        title="hahaha metrics",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/{path:path}")
    async def expose_metrics(path: str) -> Response:
        return Response(content=metrics.render(), media_type=metrics.content_type)

    return app


class _EmbeddedServer(uvicorn.Server):
    """uvicorn server that leaves process signal handling to the caller."""

    @contextlib.contextmanager
    def capture_signals(self):
        yield


class MetricsServer:
    """
    Runs the metrics application until a shutdown event is set.

    Examples:
        shutdown = asyncio.Event()
        task = asyncio.create_task(MetricsServer(metrics, port=8999).serve(shutdown))
        ...
        shutdown.set()
        await task
    """

    def __init__(
        self,
        metrics: ShutdownMetrics,
        host: str = "0.0.0.0",
        port: int = 8999,
        log_level: str = "warning",
    ):
        self.host = host
        self.port = port
        self._config = uvicorn.Config(
            create_app(metrics),
            host=host,
            port=port,
            log_level=log_level.lower(),
            access_log=False,
            lifespan="off",
        )
        self._server: Optional[uvicorn.Server] = None

    @property
    def started(self) -> bool:
        return self._server is not None and self._server.started

    async def serve(self, shutdown: asyncio.Event) -> None:
        """
        Serve until ``shutdown`` is set, then stop accepting connections and return.

        Args:
            shutdown: One-shot notification to stop the server
        """
        self._server = _EmbeddedServer(self._config)
        watcher = asyncio.create_task(self._wait_for_shutdown(shutdown))
        logger.info("Serving metrics", address=f"http://{self.host}:{self.port}")
        try:
            await self._server.serve()
        finally:
            watcher.cancel()
        logger.info("Stopped metrics server")

    async def _wait_for_shutdown(self, shutdown: asyncio.Event) -> None:
        await shutdown.wait()
        self._server.should_exit = True
