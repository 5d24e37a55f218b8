from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from mcp.types import Tool

from ..params import SORT_MODES


class ToolName(str, Enum):
    CONFIGURE_SERVER = "configure_server"
    SEARCH_TRACKS = "search_tracks"
    SIMPLIFIED_SEARCH_TRACKS = "simplified_search_tracks"
    GET_COLLECTIONS = "get_collections"
    GET_COLLECTION_TRACKS = "get_collection_tracks"
    GET_TRENDING_TRACKS = "get_trending_tracks"
    GET_SIMPLIFIED_TRENDING_TRACKS = "get_simplified_trending_tracks"
    GET_TRACK_INFO = "get_track_info"
    GET_TRACK_ALBUM_ART = "get_track_album_art"
    GET_TRACK_COMPOSER_AVATAR = "get_track_composer_avatar"
    GET_TRACK_DOWNLOAD_URL = "get_track_download_url"
    GET_GENRES = "get_genres"
    GET_GENRE_GROUPS = "get_genre_groups"
    GET_MOODS = "get_moods"
    GET_INSTRUMENTS = "get_instruments"
    GET_PURPOSES = "get_purposes"
    GET_CUE_SHEET_INFO = "get_cue_sheet_info"


DOWNLOAD_VERSIONS = ("wav", "mp3")


def _empty_schema() -> Dict[str, Any]:
    return {"type": "object", "properties": {}}


def _string_array(description: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _track_id_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "trackId": {"type": "number", "description": "ID of the track"},
        },
        "required": ["trackId"],
    }


def _search_schema() -> Dict[str, Any]:
    # minTempo/maxTempo and minDuration/maxDuration only take effect as pairs
    return {
        "type": "object",
        "properties": {
            "q": {"type": "string", "description": "General search query for all track data"},
            "page": {"type": "number", "description": "Page of results to retrieve"},
            "sort": {
                "type": "string",
                "enum": list(SORT_MODES),
                "description": "Sorting of results",
            },
            "genre": _string_array("Array of genres to search for"),
            "mood": _string_array("Array of moods to search for"),
            "instrument": _string_array("Array of instruments to search for"),
            "purpose": _string_array("Array of purposes to search for"),
            "minTempo": {
                "type": "number",
                "description": "Minimal tempo in BPM (must be used with maxTempo)",
            },
            "maxTempo": {
                "type": "number",
                "description": "Maximal tempo in BPM (must be used with minTempo)",
            },
            "minDuration": {
                "type": "number",
                "description": "Minimal duration in seconds (must be used with maxDuration)",
            },
            "maxDuration": {
                "type": "number",
                "description": "Maximal duration in seconds (must be used with minDuration)",
            },
            "perPage": {
                "type": "number",
                "description": "Amount of results per page (default 15, max 200)",
            },
        },
    }


TOOLS: List[Tool] = [
    Tool(
        name=ToolName.CONFIGURE_SERVER.value,
        description="Configure the MCP server with API credentials",
        inputSchema={
            "type": "object",
            "properties": {
                "apiKey": {"type": "string", "description": "Your Melodies API key"},
            },
            "required": ["apiKey"],
        },
    ),
    Tool(
        name=ToolName.SEARCH_TRACKS.value,
        description="Search for tracks in the Melodies API",
        inputSchema=_search_schema(),
    ),
    Tool(
        name=ToolName.SIMPLIFIED_SEARCH_TRACKS.value,
        description="Perform simplified track search (main track info only)",
        inputSchema=_search_schema(),
    ),
    Tool(
        name=ToolName.GET_COLLECTIONS.value,
        description="Get list of all available collections",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_COLLECTION_TRACKS.value,
        description="Get tracks from a specific collection",
        inputSchema={
            "type": "object",
            "properties": {
                "collectionSafename": {
                    "type": "string",
                    "description": "Safe name of the collection",
                },
            },
            "required": ["collectionSafename"],
        },
    ),
    Tool(
        name=ToolName.GET_TRENDING_TRACKS.value,
        description="Get 25 most popular tracks currently",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_SIMPLIFIED_TRENDING_TRACKS.value,
        description="Get 25 most popular tracks currently (simplified version)",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_TRACK_INFO.value,
        description="Get detailed information about a specific track",
        inputSchema=_track_id_schema(),
    ),
    Tool(
        name=ToolName.GET_TRACK_ALBUM_ART.value,
        description="Get album art for a track in different image qualities",
        inputSchema=_track_id_schema(),
    ),
    Tool(
        name=ToolName.GET_TRACK_COMPOSER_AVATAR.value,
        description="Get composer avatar for a track in different image qualities",
        inputSchema=_track_id_schema(),
    ),
    Tool(
        name=ToolName.GET_TRACK_DOWNLOAD_URL.value,
        description="Get temporary download URL for a track version",
        inputSchema={
            "type": "object",
            "properties": {
                "trackVersionId": {"type": "number", "description": "ID of the track version"},
                "version": {
                    "type": "string",
                    "enum": list(DOWNLOAD_VERSIONS),
                    "description": "Format of the track",
                    "default": "mp3",
                },
            },
            "required": ["trackVersionId"],
        },
    ),
    Tool(
        name=ToolName.GET_GENRES.value,
        description="Get list of all current genres",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_GENRE_GROUPS.value,
        description="Get list of all current genre groups",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_MOODS.value,
        description="Get list of all current moods",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_INSTRUMENTS.value,
        description="Get list of all current instruments",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_PURPOSES.value,
        description="Get list of all current purposes",
        inputSchema=_empty_schema(),
    ),
    Tool(
        name=ToolName.GET_CUE_SHEET_INFO.value,
        description="Get cue sheet info for a track version by filename",
        inputSchema={
            "type": "object",
            "properties": {
                "filename": {
                    "type": "string",
                    "description": "The filename to search for (can be partial)",
                },
                "page": {"type": "number", "description": "Page number to retrieve (default 1)"},
                "perPage": {
                    "type": "number",
                    "description": "Number of items per page (max 100, default 10)",
                },
            },
            "required": ["filename"],
        },
    ),
]


def tool_names() -> List[str]:
    return [tool.name for tool in TOOLS]
