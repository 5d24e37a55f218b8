from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .client import MelodiesClient
from .config import Settings
from .dispatcher import ToolDispatcher
from .observability import InMemoryMetrics


class StructuredFormatter(logging.Formatter):
    """Custom formatter that handles missing structured fields gracefully."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "tool"):
            record.tool = ""
        if not hasattr(record, "duration_ms"):
            record.duration_ms = ""
        return super().format(record)


def setup_logger(settings: Settings) -> logging.Logger:
    logger = logging.getLogger("melodies_mcp")
    if logger.handlers:
        return logger
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logger.setLevel(level)
    # StreamHandler writes to stderr; stdout carries the stdio protocol
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(
        '{"ts":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","tool":"%(tool)s",'
        '"duration_ms":"%(duration_ms)s","msg":"%(message)s"}'
    ))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def build_client(settings: Settings) -> MelodiesClient:
    return MelodiesClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )


def build_dispatcher(
    client: MelodiesClient,
    logger: logging.Logger,
    metrics: Optional[InMemoryMetrics] = None,
) -> ToolDispatcher:
    if not client.is_configured:
        logger.warning(
            "MELODIES_API_KEY not set. Tool calls will fail until configure_server is called."
        )
    return ToolDispatcher(client, metrics=metrics, logger=logger)


def create_server(dispatcher: ToolDispatcher, name: str = "melodies-mcp-server") -> Server:
    server: Server = Server(name, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return dispatcher.list_tools()

    # arguments are checked by the dispatcher handlers, not against inputSchema
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        return await dispatcher.invoke(name, arguments)

    return server


async def serve_stdio(settings: Settings) -> None:
    logger = setup_logger(settings)
    async with build_client(settings) as client:
        dispatcher = build_dispatcher(client, logger)
        server = create_server(dispatcher, settings.name)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Melodies MCP Server running on stdio")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
