from __future__ import annotations

import json
from typing import Any

import pytest

from core.domain.models import HostConfig, RequestPurpose
from core.interfaces.transport import TransportResponse

HOSTNAME = "https://api.example.com"


class FakeTransport:
    """Transporte en memoria: URL -> payload JSON, bytes o `TransportResponse`."""

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, RequestPurpose]] = []

    def add(self, url: str, payload: Any, *, status: int = 200) -> None:
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
        self.routes[url] = TransportResponse(status, body)

    def request(self, url: str, purpose: RequestPurpose) -> TransportResponse:
        self.calls.append((url, purpose))
        route = self.routes.get(url)
        if route is None:
            return TransportResponse(status_code=404, body=b'{"message": "not found"}')
        if isinstance(route, TransportResponse):
            return route
        if isinstance(route, bytes):
            return TransportResponse(status_code=200, body=route)
        return TransportResponse(status_code=200, body=json.dumps(route).encode("utf-8"))

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def series_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": 42,
        "title": "Solo Leveling",
        "series_slug": "solo-leveling",
        "author": "Chugong & Dubu",
        "description": "<p>The <b>weakest</b> hunter &amp; his rise.</p>",
        "alternative_names": "Na Honjaman Level Up",
        "tags": [{"name": "Action"}, None, {"name": "Fantasy"}],
        "status": "Ongoing",
        "thumbnail": "https://cdn.example.com/covers/solo.webp",
        "release_year": "2018",
        "seasons": [],
    }
    record.update(overrides)
    return record


@pytest.fixture
def host() -> HostConfig:
    return HostConfig(hostname=HOSTNAME)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
