from __future__ import annotations

from typing import Any, Callable, List, Optional

import httpx
import pytest

from melodies_mcp.client import MelodiesClient


class RecordingTransport:
    """httpx.MockTransport handler that records every request it sees."""

    def __init__(
        self,
        payload: Any = None,
        status_code: int = 200,
        on_request: Optional[Callable[[httpx.Request], None]] = None,
    ) -> None:
        self.payload = {"data": []} if payload is None else payload
        self.status_code = status_code
        self.on_request = on_request
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(recorder: RecordingTransport, api_key: Optional[str] = "test-api-key") -> MelodiesClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return MelodiesClient(api_key=api_key, http_client=http_client)


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(recorder: RecordingTransport) -> MelodiesClient:
    return make_client(recorder)


@pytest.fixture
def unconfigured_client(recorder: RecordingTransport) -> MelodiesClient:
    return make_client(recorder, api_key=None)


@pytest.fixture
def client_factory() -> Callable[..., MelodiesClient]:
    return make_client
