from __future__ import annotations

from typing import Optional


class MelodiesError(Exception):
    """Base exception for all Melodies MCP server errors."""
    pass


class MelodiesClientError(MelodiesError):
    """Caller-side errors - missing credentials or bad tool input."""
    pass


class MelodiesServerError(MelodiesError):
    """Errors talking to the remote Melodies API."""
    pass


class ApiKeyRequiredError(MelodiesClientError):
    """No API key is held by the client."""

    def __init__(self, message: str = "API Key is required for this MCP server") -> None:
        super().__init__(message)


class UnknownToolError(MelodiesClientError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class MissingArgumentError(MelodiesClientError):
    def __init__(self, argument: str, message: Optional[str] = None) -> None:
        self.argument = argument
        super().__init__(message or f"Missing required argument: {argument}")


class TransportError(MelodiesServerError):
    """Network failure or timeout before a response arrived."""
    pass


class UpstreamError(MelodiesServerError):
    """The Melodies API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        message = f"Request failed with status code {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class ToolExecutionError(MelodiesError):
    """Uniform wrapper raised at the dispatch boundary."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Tool execution failed: {message}")
