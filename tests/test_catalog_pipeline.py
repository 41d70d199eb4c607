from __future__ import annotations

import pytest

from conftest import HOSTNAME, FakeTransport, series_record
from core.config import AppSettings
from core.services.catalog_pipeline import (
    CatalogRequest,
    PipelineHooks,
    lookup,
)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_hostname=HOSTNAME)


def test_lookup_by_slug_with_chapters(settings: AppSettings, transport: FakeTransport) -> None:
    transport.add(
        f"{HOSTNAME}/series/solo-leveling",
        series_record(seasons=[{"index": 1, "chapters": [{"chapter_slug": "c1", "index": "1", "price": 0}]}]),
    )
    progressed: list[str] = []

    result = lookup(
        settings=settings,
        transport=transport,
        request=CatalogRequest(target="solo-leveling", with_chapters=True),
        hooks=PipelineHooks(chapters_progress=lambda work: progressed.append(work.identifier)),
    )

    assert [w.identifier for w in result.works] == ["solo-leveling"]
    assert [c.locator for c in result.chapters["solo-leveling"]] == ["c1"]
    assert progressed == ["solo-leveling"]
    assert result.warnings == []


def test_lookup_by_url(settings: AppSettings, transport: FakeTransport) -> None:
    transport.add(f"{HOSTNAME}/series/solo-leveling", series_record())

    result = lookup(
        settings=settings,
        transport=transport,
        request=CatalogRequest(target="https://example.com/series/solo-leveling"),
    )

    assert [w.identifier for w in result.works] == ["solo-leveling"]


def test_lookup_reports_warnings(settings: AppSettings, transport: FakeTransport) -> None:
    warnings: list[str] = []

    result = lookup(
        settings=settings,
        transport=transport,
        request=CatalogRequest(target="Solo", search=True),
        hooks=PipelineHooks(warning=warnings.append),
    )

    assert result.works == []
    assert warnings == ['No results for "Solo".']
    assert result.warnings == warnings

