from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .errors import ApiKeyRequiredError, TransportError, UpstreamError
from .params import SearchCriteria, SerializedQuery, serialize_search_params

DEFAULT_BASE_URL = "https://api.melod.ie"
DEFAULT_TIMEOUT = 30.0
DEFAULT_DOWNLOAD_VERSION = "mp3"

API_PREFIX = "/api/v1"

logger = logging.getLogger("melodies_mcp.client")


class MelodiesClient:
    """
    Authenticated GET client for the Melodies API.

    The API key is sent as the raw ``Authorization`` header value. Each request
    reads the key once when it is issued, so a concurrent ``set_api_key`` only
    affects requests issued after it.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = str(base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = float(timeout)
        self._api_key: Optional[str] = None
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=False,
        )
        if api_key:
            self.set_api_key(api_key)

    async def __aenter__(self) -> "MelodiesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    async def get(self, path: str, params: Optional[SerializedQuery] = None) -> Any:
        api_key = self._api_key
        if not api_key:
            raise ApiKeyRequiredError()

        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"Authorization": api_key}
        try:
            response = await self.http_client.get(
                url,
                params=params or None,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request to {path} timed out after {self.timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            logger.debug("Upstream %s returned %s", path, response.status_code)
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError:
            return response.text

    async def search_tracks(self, criteria: SearchCriteria) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/search", serialize_search_params(criteria))

    async def simplified_search_tracks(self, criteria: SearchCriteria) -> Any:
        return await self.get(
            f"{API_PREFIX}/tracks/simplified_search", serialize_search_params(criteria)
        )

    async def get_collections(self) -> Any:
        return await self.get(f"{API_PREFIX}/collections")

    async def get_collection_tracks(self, collection_safename: str) -> Any:
        return await self.get(f"{API_PREFIX}/collections/{collection_safename}")

    async def get_trending_tracks(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/trending")

    async def get_simplified_trending_tracks(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/simplified_trending")

    async def get_track_info(self, track_id: Any) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/{track_id}/info")

    async def get_track_album_art(self, track_id: Any) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/{track_id}/album_art")

    async def get_track_composer_avatar(self, track_id: Any) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/{track_id}/composer_avatar")

    async def get_track_download_url(
        self,
        track_version_id: Any,
        version: Optional[str] = DEFAULT_DOWNLOAD_VERSION,
    ) -> Any:
        return await self.get(
            f"{API_PREFIX}/tracks/{track_version_id}/download_version_url",
            [("version", version or DEFAULT_DOWNLOAD_VERSION)],
        )

    async def get_genres(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/genres")

    async def get_genre_groups(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/genre_groups")

    async def get_moods(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/moods")

    async def get_instruments(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/instruments")

    async def get_purposes(self) -> Any:
        return await self.get(f"{API_PREFIX}/tracks/purposes")

    async def get_cue_sheet_info(
        self,
        filename: str,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Any:
        params: SerializedQuery = [("filename", filename)]
        if page:
            params.append(("page", page))
        if per_page:
            params.append(("per_page", per_page))
        return await self.get(f"{API_PREFIX}/tracks/cue_sheet_info", params)
