"""
FastAPI/ASGI app for the streamable-HTTP transport.

- MCP session manager mounted under /mcp
- Healthcheck under /health
- Prometheus metrics under /metrics
- Tool discovery under /mcp/discovery
"""
from __future__ import annotations

import hashlib
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI, Response
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from . import __version__
from .client import MelodiesClient
from .config import Settings, load_settings
from .observability import InMemoryMetrics, render_prometheus
from .server import build_client, build_dispatcher, create_server, setup_logger
from .tools import tool_names

logger = logging.getLogger("melodies_mcp.http_app")


def _compute_tools_hash(names: list[str]) -> str:
    """SHA256 over the sorted tool names, newline separated."""
    content = "\n".join(sorted(names))
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[MelodiesClient] = None,
) -> FastAPI:
    settings = settings or load_settings()
    app_logger = setup_logger(settings)
    metrics = InMemoryMetrics()
    owns_client = client is None
    client = client or build_client(settings)
    dispatcher = build_dispatcher(client, app_logger, metrics)
    session_manager = StreamableHTTPSessionManager(app=create_server(dispatcher, settings.name))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            app_logger.info(f"Melodies MCP Server running on http://{settings.host}:{settings.port}/mcp")
            try:
                yield
            finally:
                if owns_client:
                    await client.aclose()

    app = FastAPI(
        title="Melodies MCP Server",
        description="MCP tools for the Melodies music catalog API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher
    app.state.metrics = metrics

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "ok": True,
            "status": "healthy",
            "api_key_configured": client.is_configured,
        }

    @app.get("/metrics")
    async def metrics_endpoint() -> Response:
        return Response(
            content=render_prometheus(metrics),
            media_type="text/plain; version=0.0.4",
        )

    @app.get("/mcp/discovery")
    async def discovery() -> dict[str, Any]:
        names = tool_names()
        return {
            "version": "1.0",
            "server": settings.name,
            "transport": "streamable-http",
            "endpoint": "/mcp/",
            "tools": [{"name": name} for name in names],
            "tool_count": len(names),
            "tools_hash": _compute_tools_hash(names),
        }

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    app.mount("/mcp", handle_mcp)
    return app
