"""
Tool dispatch for the Melodies MCP server.

Maps a tool name onto its handler, runs it against a MelodiesClient and
packages the outcome. Every failure is re-raised as a ToolExecutionError so the
caller sees one uniform "Tool execution failed: ..." message.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp.types import TextContent, Tool

from .client import DEFAULT_DOWNLOAD_VERSION, MelodiesClient
from .errors import MissingArgumentError, ToolExecutionError, UnknownToolError
from .observability import InMemoryMetrics
from .params import SearchCriteria
from .tools import TOOLS, ToolName

Arguments = Dict[str, Any]
Handler = Callable[[Arguments], Awaitable[List[TextContent]]]

CONFIGURED_MESSAGE = "Server configured successfully"
API_KEY_MISSING_MESSAGE = "API_KEY is required, please set it in the configuration"


def _text_result(data: Any) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))]


def _require(arguments: Arguments, key: str) -> Any:
    value = arguments.get(key)
    if value is None or value == "":
        raise MissingArgumentError(key)
    return value


class ToolDispatcher:
    def __init__(
        self,
        client: MelodiesClient,
        metrics: Optional[InMemoryMetrics] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client = client
        self.metrics = metrics or InMemoryMetrics()
        self.logger = logger or logging.getLogger("melodies_mcp")
        self._handlers: Dict[ToolName, Handler] = {
            ToolName.CONFIGURE_SERVER: self._configure_server,
            ToolName.SEARCH_TRACKS: self._search_tracks,
            ToolName.SIMPLIFIED_SEARCH_TRACKS: self._simplified_search_tracks,
            ToolName.GET_COLLECTIONS: self._get_collections,
            ToolName.GET_COLLECTION_TRACKS: self._get_collection_tracks,
            ToolName.GET_TRENDING_TRACKS: self._get_trending_tracks,
            ToolName.GET_SIMPLIFIED_TRENDING_TRACKS: self._get_simplified_trending_tracks,
            ToolName.GET_TRACK_INFO: self._get_track_info,
            ToolName.GET_TRACK_ALBUM_ART: self._get_track_album_art,
            ToolName.GET_TRACK_COMPOSER_AVATAR: self._get_track_composer_avatar,
            ToolName.GET_TRACK_DOWNLOAD_URL: self._get_track_download_url,
            ToolName.GET_GENRES: self._get_genres,
            ToolName.GET_GENRE_GROUPS: self._get_genre_groups,
            ToolName.GET_MOODS: self._get_moods,
            ToolName.GET_INSTRUMENTS: self._get_instruments,
            ToolName.GET_PURPOSES: self._get_purposes,
            ToolName.GET_CUE_SHEET_INFO: self._get_cue_sheet_info,
        }
        missing = set(ToolName) - set(self._handlers)
        if missing:
            names = ", ".join(sorted(name.value for name in missing))
            raise RuntimeError(f"No handler registered for tools: {names}")

    def list_tools(self) -> List[Tool]:
        return list(TOOLS)

    async def invoke(self, name: str, arguments: Optional[Arguments] = None) -> List[TextContent]:
        start = time.perf_counter()
        try:
            try:
                tool = ToolName(name)
            except ValueError:
                raise UnknownToolError(name) from None
            result = await self._handlers[tool](arguments or {})
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000.0
            self.metrics.record(name, duration_ms, error=True)
            self.logger.warning(
                f"Tool call failed: {exc}",
                extra={
                    "tool": name,
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise ToolExecutionError(str(exc)) from exc

        duration_ms = (time.perf_counter() - start) * 1000.0
        self.metrics.record(name, duration_ms, error=False)
        self.logger.info(
            "Tool call succeeded",
            extra={"tool": name, "duration_ms": duration_ms},
        )
        return result

    async def _configure_server(self, arguments: Arguments) -> List[TextContent]:
        api_key = arguments.get("apiKey")
        if not api_key:
            raise MissingArgumentError("apiKey", API_KEY_MISSING_MESSAGE)
        self.client.set_api_key(api_key)
        return [TextContent(type="text", text=CONFIGURED_MESSAGE)]

    async def _search_tracks(self, arguments: Arguments) -> List[TextContent]:
        criteria = SearchCriteria.from_arguments(arguments)
        return _text_result(await self.client.search_tracks(criteria))

    async def _simplified_search_tracks(self, arguments: Arguments) -> List[TextContent]:
        criteria = SearchCriteria.from_arguments(arguments)
        return _text_result(await self.client.simplified_search_tracks(criteria))

    async def _get_collections(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_collections())

    async def _get_collection_tracks(self, arguments: Arguments) -> List[TextContent]:
        safename = _require(arguments, "collectionSafename")
        return _text_result(await self.client.get_collection_tracks(safename))

    async def _get_trending_tracks(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_trending_tracks())

    async def _get_simplified_trending_tracks(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_simplified_trending_tracks())

    async def _get_track_info(self, arguments: Arguments) -> List[TextContent]:
        track_id = _require(arguments, "trackId")
        return _text_result(await self.client.get_track_info(track_id))

    async def _get_track_album_art(self, arguments: Arguments) -> List[TextContent]:
        track_id = _require(arguments, "trackId")
        return _text_result(await self.client.get_track_album_art(track_id))

    async def _get_track_composer_avatar(self, arguments: Arguments) -> List[TextContent]:
        track_id = _require(arguments, "trackId")
        return _text_result(await self.client.get_track_composer_avatar(track_id))

    async def _get_track_download_url(self, arguments: Arguments) -> List[TextContent]:
        version_id = _require(arguments, "trackVersionId")
        version = arguments.get("version") or DEFAULT_DOWNLOAD_VERSION
        return _text_result(await self.client.get_track_download_url(version_id, version))

    async def _get_genres(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_genres())

    async def _get_genre_groups(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_genre_groups())

    async def _get_moods(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_moods())

    async def _get_instruments(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_instruments())

    async def _get_purposes(self, arguments: Arguments) -> List[TextContent]:
        return _text_result(await self.client.get_purposes())

    async def _get_cue_sheet_info(self, arguments: Arguments) -> List[TextContent]:
        filename = _require(arguments, "filename")
        return _text_result(
            await self.client.get_cue_sheet_info(
                filename,
                page=arguments.get("page"),
                per_page=arguments.get("perPage"),
            )
        )
