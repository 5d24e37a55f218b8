from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "server.yaml"

TRANSPORTS = ("stdio", "streamable-http")


def load_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"MCP server config not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


@dataclass
class Settings:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    name: str = "melodies-mcp-server"
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    transport: str = "stdio"

    def __repr__(self) -> str:
        # never print the API key
        masked = "***" if self.api_key else None
        return (
            f"Settings(api_key={masked!r}, base_url={self.base_url!r}, timeout={self.timeout!r}, "
            f"name={self.name!r}, host={self.host!r}, port={self.port!r}, "
            f"log_level={self.log_level!r}, transport={self.transport!r})"
        )


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def load_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    load_env_file: bool = True,
) -> Settings:
    """
    Resolve settings from CLI overrides, then environment, then the YAML file.

    A missing config file is only an error when a path was asked for explicitly
    (argument or MELODIES_MCP_CONFIG).
    """
    if load_env_file:
        load_dotenv()

    explicit = config_path or os.getenv("MELODIES_MCP_CONFIG")
    path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}
    if explicit or path.exists():
        data = load_config(path)

    melodies_cfg = data.get("melodies", {}) or {}
    server_cfg = data.get("server", {}) or {}
    cli = overrides or {}

    settings = Settings(
        api_key=_first(cli.get("api_key"), os.getenv("MELODIES_API_KEY"), melodies_cfg.get("api_key")),
        base_url=str(
            _first(
                cli.get("base_url"),
                os.getenv("MELODIES_BASE_URL"),
                melodies_cfg.get("base_url"),
                DEFAULT_BASE_URL,
            )
        ),
        timeout=float(
            _first(os.getenv("MELODIES_TIMEOUT"), melodies_cfg.get("timeout"), DEFAULT_TIMEOUT)
        ),
        name=str(_first(server_cfg.get("name"), "melodies-mcp-server")),
        host=str(
            _first(cli.get("host"), os.getenv("MCP_SERVER_HOST"), server_cfg.get("host"), "127.0.0.1")
        ),
        port=int(_first(cli.get("port"), os.getenv("MCP_SERVER_PORT"), server_cfg.get("port"), 9000)),
        log_level=str(
            _first(os.getenv("MCP_LOG_LEVEL"), server_cfg.get("log_level"), "INFO")
        ).upper(),
        transport=str(
            _first(cli.get("transport"), os.getenv("MCP_TRANSPORT"), server_cfg.get("transport"), "stdio")
        ),
    )
    if settings.transport not in TRANSPORTS:
        raise ValueError(
            f"Unsupported transport '{settings.transport}'. Expected one of: {', '.join(TRANSPORTS)}"
        )
    return settings
