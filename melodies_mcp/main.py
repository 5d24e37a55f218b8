"""
Main entry point for the Melodies MCP server.

Runs on stdio by default; ``--transport streamable-http`` serves the FastAPI
app from http_app via uvicorn.
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

import uvicorn

from . import __version__
from .config import TRANSPORTS, load_settings
from .server import serve_stdio


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="melodies-mcp-server",
        description="Melodies MCP Server",
        epilog="Environment variables:\n  MELODIES_API_KEY   Your Melodies API key (required)\n"
        "  MELODIES_BASE_URL  Override the Melodies API base URL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument("--api-key", dest="api_key", help="Melodies API key")
    parser.add_argument("--base-url", dest="base_url", help="Melodies API base URL")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--transport", choices=TRANSPORTS, help="MCP transport (default: stdio)")
    parser.add_argument("--host", help="Bind host for streamable-http")
    parser.add_argument("--port", type=int, help="Bind port for streamable-http")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(
            config_path=args.config,
            overrides={
                "api_key": args.api_key,
                "base_url": args.base_url,
                "transport": args.transport,
                "host": args.host,
                "port": args.port,
            },
        )
        if settings.transport == "stdio":
            asyncio.run(serve_stdio(settings))
        else:
            from .http_app import create_app

            uvicorn.run(
                create_app(settings),
                host=settings.host,
                port=settings.port,
                log_level=settings.log_level.lower(),
                server_header=False,
            )
    except KeyboardInterrupt:
        print("\nServer shutdown requested...", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
