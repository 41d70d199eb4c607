"""Listado de capítulos con las dos generaciones del protocolo.

Generación 1: los capítulos vienen embebidos en `seasons[].chapters[]` del
registro de serie.
Generación 2: `seasons` viene vacío; hay un índice por id numérico de serie y
un detalle por capítulo (N+1 peticiones, secuenciales).

Las funciones `chapters_from_seasons` y `chapter_from_detail` son puras para
poder probarlas sin red.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from adapters.heancms.payloads import (
    RawChapterDetail,
    RawChapterIndex,
    RawChapterIndexEntry,
    RawSeasonListing,
    decode_json_object,
)
from adapters.heancms.urls import HeanCmsUrls
from core.domain.errors import ChapterPayloadError
from core.domain.models import Chapter, HostConfig, RequestPurpose, Work, order_chapters
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


def chapters_from_seasons(series_record: dict[str, Any], work_id: str) -> list[Chapter]:
    """Capítulos gratuitos de generación 1 (sin ordenar).

    Sin `seasons` (o vacío) devuelve `[]`: es la señal de que el host usa la
    generación 2.
    """

    try:
        listing = RawSeasonListing.model_validate(series_record)
    except ValidationError as exc:
        raise ChapterPayloadError(f"Invalid season listing for {work_id}: {exc}") from exc

    chapters: list[Chapter] = []
    for season in listing.seasons or []:
        if season is None or not season.chapters:
            continue
        for entry in season.chapters:
            if entry is None or entry.is_paid:
                continue
            chapters.append(
                Chapter(
                    work_id=work_id,
                    title=_first_title(entry.chapter_title, entry.chapter_name),
                    volume=season.index,
                    number=entry.index,
                    locator=entry.chapter_slug,
                )
            )
    return chapters


def chapter_from_detail(
    detail_record: dict[str, Any],
    entry: RawChapterIndexEntry,
    work_id: str,
) -> Chapter:
    """Construye un capítulo de generación 2 a partir de su detalle por id."""

    try:
        detail = RawChapterDetail.model_validate(detail_record)
    except ValidationError as exc:
        raise ChapterPayloadError(f"Invalid chapter detail {entry.id}: {exc}") from exc

    return Chapter(
        work_id=work_id,
        title=_first_title(detail.chapter_title, entry.chapter_name),
        volume=detail.season.index,
        number=detail.index,
        locator=detail.chapter_slug,
    )


def _first_title(*candidates: str | None) -> str:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return ""


class ChapterEnumerator:
    def __init__(self, transport: Transport, host: HostConfig) -> None:
        self._transport = transport
        self._urls = HeanCmsUrls(host)

    def list_chapters(self, work: Work) -> list[Chapter]:
        """Capítulos gratuitos ordenados por (volumen, número), sin duplicados."""

        chapters = self.list_chapters_v1(work)
        if not chapters:
            logger.info("No generation 1 chapters for %s, trying generation 2", work.identifier)
            chapters = self.list_chapters_v2(work)
        return chapters

    def list_chapters_v1(self, work: Work) -> list[Chapter]:
        logger.debug("Fetching chapters v1 %s", work.identifier)

        record = self._fetch(self._urls.series(work.identifier), f"series {work.identifier}")
        if record is None:
            return []
        try:
            chapters = chapters_from_seasons(record, work.identifier)
        except ChapterPayloadError as exc:
            logger.warning("Failed to get chapters v1. %s", exc)
            return []

        logger.info("Got %d chapters (v1). %s", len(chapters), work.identifier)
        return order_chapters(chapters)

    def list_chapters_v2(self, work: Work) -> list[Chapter]:
        logger.debug("Fetching chapters v2 %s", work.identifier)
        try:
            chapters = self._collect_v2(work)
        except ChapterPayloadError as exc:
            logger.error("Failed to get chapters v2. %s", exc)
            return []

        logger.info("Got %d chapters (v2). %s", len(chapters), work.identifier)
        return order_chapters(chapters)

    def _collect_v2(self, work: Work) -> list[Chapter]:
        record = self._require(self._urls.series(work.identifier), f"series {work.identifier}")
        try:
            series_id = int(record["id"])
        except (KeyError, TypeError, ValueError):
            raise ChapterPayloadError(f"Series {work.identifier} has no numeric id") from None

        index_record = self._require(
            self._urls.chapter_index(series_id),
            f"chapter index series_id={series_id}",
        )
        try:
            index = RawChapterIndex.model_validate(index_record)
        except ValidationError as exc:
            raise ChapterPayloadError(f"Invalid chapter index for {work.identifier}: {exc}") from exc

        chapters: list[Chapter] = []
        # TODO: batch the per-chapter detail fetch once the API exposes a batch endpoint.
        for entry in index.data:
            if entry is None or entry.is_paid:
                continue
            detail = self._require(
                self._urls.chapter_by_id(entry.id),
                f"chapter id={entry.id}",
                purpose=RequestPurpose.CHAPTER_INFO,
            )
            chapters.append(chapter_from_detail(detail, entry, work.identifier))
        return chapters

    def _fetch(
        self,
        url: str,
        context: str,
        *,
        purpose: RequestPurpose = RequestPurpose.SERIES_INFO,
    ) -> dict[str, Any] | None:
        return decode_json_object(self._transport.request(url, purpose), context=context)

    def _require(
        self,
        url: str,
        context: str,
        *,
        purpose: RequestPurpose = RequestPurpose.SERIES_INFO,
    ) -> dict[str, Any]:
        record = self._fetch(url, context, purpose=purpose)
        if record is None:
            raise ChapterPayloadError(f"No usable response for {context}")
        return record
