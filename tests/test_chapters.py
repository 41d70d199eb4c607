from __future__ import annotations

import pytest

from adapters.heancms.chapters import ChapterEnumerator, chapter_from_detail, chapters_from_seasons
from adapters.heancms.payloads import RawChapterIndexEntry
from adapters.heancms.series import map_series
from conftest import HOSTNAME, FakeTransport, series_record
from core.domain.errors import ChapterPayloadError
from core.domain.models import Chapter, HostConfig, RequestPurpose, Work
from core.interfaces.transport import TransportResponse

SERIES_URL = f"{HOSTNAME}/series/solo-leveling"
INDEX_URL = f"{HOSTNAME}/chapter/query?series_id=42&perPage=9999&page=1"


@pytest.fixture
def work(host: HostConfig) -> Work:
    return map_series(series_record(), host)


def _season(index: int, *chapters: dict) -> dict:
    return {"index": index, "chapters": list(chapters)}


def _entry(slug: str, index: str, *, price: int = 0, title: str | None = None, name: str | None = None) -> dict:
    return {"chapter_slug": slug, "index": index, "price": price, "chapter_title": title, "chapter_name": name or f"Chapter {index}"}


def test_single_free_chapter_in_season_two() -> None:
    record = series_record(seasons=[_season(2, _entry("ch5", "5"))])

    chapters = chapters_from_seasons(record, "solo-leveling")

    assert chapters == [Chapter(work_id="solo-leveling", title="Chapter 5", volume="2", number="5", locator="ch5")]


def test_generation_one_skips_paid_and_null_entries() -> None:
    record = series_record(
        seasons=[
            None,
            {"index": 1, "chapters": None},
            _season(1, _entry("ch1", "1"), None, _entry("ch2", "2", price=50)),
        ]
    )

    chapters = chapters_from_seasons(record, "solo-leveling")

    assert [c.locator for c in chapters] == ["ch1"]


def test_generation_one_prefers_chapter_title() -> None:
    record = series_record(seasons=[_season(1, _entry("ch1", "1", title="Prologue", name="Chapter 1"))])

    assert chapters_from_seasons(record, "w")[0].title == "Prologue"


def test_generation_one_without_seasons_is_empty() -> None:
    record = series_record()
    del record["seasons"]

    assert chapters_from_seasons(record, "w") == []


def test_generation_one_rejects_entry_without_slug() -> None:
    record = series_record(seasons=[_season(1, {"index": "1", "price": 0})])

    with pytest.raises(ChapterPayloadError):
        chapters_from_seasons(record, "w")


def test_chapter_from_detail_falls_back_to_index_name() -> None:
    entry = RawChapterIndexEntry(id=7, chapter_name="Chapter 7", price=0)
    detail = {"chapter_slug": "ch7", "chapter_title": None, "index": 7, "season": {"index": 1}}

    chapter = chapter_from_detail(detail, entry, "w")

    assert chapter == Chapter(work_id="w", title="Chapter 7", volume="1", number="7", locator="ch7")


def test_list_chapters_generation_one_sorted_numerically(work: Work, transport: FakeTransport) -> None:
    transport.add(
        SERIES_URL,
        series_record(
            seasons=[
                _season(2, _entry("s2c1", "1")),
                _season(1, _entry("ch10", "10"), _entry("ch9", "9"), _entry("paid", "11", price=3)),
            ]
        ),
    )

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert [(c.volume, c.number, c.locator) for c in chapters] == [
        ("1", "9", "ch9"),
        ("1", "10", "ch10"),
        ("2", "1", "s2c1"),
    ]
    assert transport.urls == [SERIES_URL]


def test_list_chapters_dedupes_by_locator(work: Work, transport: FakeTransport) -> None:
    transport.add(SERIES_URL, series_record(seasons=[_season(1, _entry("ch1", "1"), _entry("ch1", "1"))]))

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert [c.locator for c in chapters] == ["ch1"]


def _generation_two_routes(transport: FakeTransport) -> None:
    transport.add(SERIES_URL, series_record(seasons=[]))
    transport.add(
        INDEX_URL,
        {
            "data": [
                {"id": 110, "chapter_name": "Chapter 10", "price": 0},
                {"id": 109, "chapter_name": "Chapter 9", "price": 0},
                {"id": 111, "chapter_name": "Chapter 11", "price": 25},
                None,
            ]
        },
    )
    transport.add(
        f"{HOSTNAME}/chapter/110",
        {"chapter_slug": "chapter-10", "chapter_title": None, "index": "10", "season": {"index": 1}},
    )
    transport.add(
        f"{HOSTNAME}/chapter/109",
        {"chapter_slug": "chapter-9", "chapter_title": "Nine", "index": "9", "season": {"index": 1}},
    )


def test_falls_back_to_generation_two(work: Work, transport: FakeTransport) -> None:
    _generation_two_routes(transport)

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert [(c.number, c.title, c.locator) for c in chapters] == [
        ("9", "Nine", "chapter-9"),
        ("10", "Chapter 10", "chapter-10"),
    ]
    assert f"{HOSTNAME}/chapter/111" not in transport.urls
    assert INDEX_URL in transport.urls
    assert (f"{HOSTNAME}/chapter/110", RequestPurpose.CHAPTER_INFO) in transport.calls


def test_falls_back_when_generation_one_request_fails(work: Work, transport: FakeTransport) -> None:
    calls = {"n": 0}
    original = transport.request

    def flaky(url: str, purpose: RequestPurpose):
        if url == SERIES_URL:
            calls["n"] += 1
            if calls["n"] == 1:
                return original("https://nowhere.invalid/500", purpose)
        return original(url, purpose)

    _generation_two_routes(transport)
    transport.request = flaky  # type: ignore[method-assign]

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert [c.locator for c in chapters] == ["chapter-9", "chapter-10"]


def test_falls_back_when_generation_one_body_is_undecodable(work: Work, transport: FakeTransport) -> None:
    calls = {"n": 0}
    original = transport.request

    def garbled_once(url: str, purpose: RequestPurpose):
        if url == SERIES_URL:
            calls["n"] += 1
            if calls["n"] == 1:
                return TransportResponse(200, b"<html>maintenance</html>")
        return original(url, purpose)

    _generation_two_routes(transport)
    transport.request = garbled_once  # type: ignore[method-assign]

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert [c.locator for c in chapters] == ["chapter-9", "chapter-10"]
    assert INDEX_URL in transport.urls


def test_generation_two_failure_returns_empty(work: Work, transport: FakeTransport) -> None:
    _generation_two_routes(transport)
    transport.add(f"{HOSTNAME}/chapter/109", {"message": "boom"}, status=500)

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert chapters == []


def test_generation_two_without_numeric_id_returns_empty(work: Work, transport: FakeTransport) -> None:
    record = series_record(seasons=[])
    del record["id"]
    transport.add(SERIES_URL, record)

    assert ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work) == []
    assert transport.urls == [SERIES_URL, SERIES_URL]


def test_generation_two_not_attempted_when_generation_one_has_chapters(work: Work, transport: FakeTransport) -> None:
    _generation_two_routes(transport)
    transport.add(SERIES_URL, series_record(seasons=[_season(1, _entry("ch1", "1"))]))

    chapters = ChapterEnumerator(transport, HostConfig(hostname=HOSTNAME)).list_chapters(work)

    assert [c.locator for c in chapters] == ["ch1"]
    assert INDEX_URL not in transport.urls
