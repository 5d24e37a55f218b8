from __future__ import annotations

from melodies_mcp.tools import DOWNLOAD_VERSIONS, TOOLS, ToolName, tool_names

EXPECTED_NAMES = [
    "configure_server",
    "search_tracks",
    "simplified_search_tracks",
    "get_collections",
    "get_collection_tracks",
    "get_trending_tracks",
    "get_simplified_trending_tracks",
    "get_track_info",
    "get_track_album_art",
    "get_track_composer_avatar",
    "get_track_download_url",
    "get_genres",
    "get_genre_groups",
    "get_moods",
    "get_instruments",
    "get_purposes",
    "get_cue_sheet_info",
]


def _tool(name):
    return next(t for t in TOOLS if t.name == name)


def test_catalog_names_and_order():
    assert tool_names() == EXPECTED_NAMES


def test_catalog_matches_tool_enum():
    assert {t.value for t in ToolName} == set(EXPECTED_NAMES)


def test_names_are_unique():
    assert len(set(tool_names())) == len(TOOLS)


def test_required_fields():
    required = {t.name: t.inputSchema.get("required", []) for t in TOOLS}
    assert required["configure_server"] == ["apiKey"]
    assert required["get_collection_tracks"] == ["collectionSafename"]
    assert required["get_track_info"] == ["trackId"]
    assert required["get_track_album_art"] == ["trackId"]
    assert required["get_track_composer_avatar"] == ["trackId"]
    assert required["get_track_download_url"] == ["trackVersionId"]
    assert required["get_cue_sheet_info"] == ["filename"]
    assert required["search_tracks"] == []
    assert required["get_genres"] == []


def test_search_schemas_share_properties():
    search = _tool("search_tracks").inputSchema
    simplified = _tool("simplified_search_tracks").inputSchema
    assert search == simplified
    assert list(search["properties"]) == [
        "q",
        "page",
        "sort",
        "genre",
        "mood",
        "instrument",
        "purpose",
        "minTempo",
        "maxTempo",
        "minDuration",
        "maxDuration",
        "perPage",
    ]
    assert search["properties"]["sort"]["enum"] == ["latest", "shuffle", "featured"]
    assert search["properties"]["genre"]["items"] == {"type": "string"}


def test_download_version_enum_and_default():
    version = _tool("get_track_download_url").inputSchema["properties"]["version"]
    assert version["enum"] == list(DOWNLOAD_VERSIONS) == ["wav", "mp3"]
    assert version["default"] == "mp3"


def test_every_schema_is_an_object():
    for tool in TOOLS:
        assert tool.inputSchema["type"] == "object"
        assert isinstance(tool.inputSchema["properties"], dict)
        assert tool.description
