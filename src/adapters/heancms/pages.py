"""Imágenes de un capítulo (detalle por slug).

Las dos generaciones ponen la lista en sitios distintos:
- `data: [...]` en el nivel superior;
- `chapter.chapter_data.images: [...]`.
"""

from __future__ import annotations

import logging
from typing import Any

from adapters.comic_info import write_comic_info_tempfile
from adapters.heancms.payloads import decode_json_object
from adapters.heancms.urls import HeanCmsUrls
from core.domain.models import Chapter, ChapterImages, FetchOutcome, HostConfig, RequestPurpose, Work
from core.domain.progress import ProgressToken
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


def extract_image_list(detail: dict[str, Any]) -> list[str] | None:
    """Lista cruda de imágenes (sin absolutizar), o `None` si no hay ninguna forma conocida."""

    data = detail.get("data")
    if not isinstance(data, list):
        chapter = detail.get("chapter")
        chapter_data = chapter.get("chapter_data") if isinstance(chapter, dict) else None
        data = chapter_data.get("images") if isinstance(chapter_data, dict) else None
    if not isinstance(data, list):
        return None

    images = [item for item in data if isinstance(item, str) and item.strip()]
    thumbnail = detail.get("chapter_thumbnail")
    if isinstance(thumbnail, str) and thumbnail.strip():
        images.insert(0, thumbnail)
    return images


def is_paywalled(detail: dict[str, Any]) -> bool:
    return detail.get("paywall") is True


class ChapterDetailFetcher:
    def __init__(self, transport: Transport, host: HostConfig, *, write_descriptor: bool = True) -> None:
        self._transport = transport
        self._urls = HeanCmsUrls(host)
        self._write_descriptor = write_descriptor

    def fetch_images(
        self,
        chapter: Chapter,
        progress_token: ProgressToken | None = None,
        *,
        work: Work | None = None,
    ) -> ChapterImages:
        if progress_token is not None and progress_token.cancellation_requested:
            logger.info("Chapter fetch cancelled. %s %s", chapter.work_id, chapter.locator)
            progress_token.cancel()
            return ChapterImages(outcome=FetchOutcome.CANCELLED)

        url = self._urls.chapter_by_slug(chapter.work_id, chapter.locator)
        detail = decode_json_object(
            self._transport.request(url, RequestPurpose.CHAPTER_INFO),
            context=f"chapter {chapter.work_id}/{chapter.locator}",
        )
        if detail is None:
            return _abort(FetchOutcome.NO_CONTENT, progress_token)

        if is_paywalled(detail):
            logger.info("Chapter is behind a paywall. %s %s", chapter.work_id, chapter.locator)
            return _abort(FetchOutcome.PAYMENT_REQUIRED, progress_token)

        images = extract_image_list(detail)
        if images is None:
            logger.warning("Chapter without image list. %s %s", chapter.work_id, chapter.locator)
            return _abort(FetchOutcome.NO_CONTENT, progress_token)

        image_urls = [self._urls.absolute(image) for image in images]

        descriptor = None
        if self._write_descriptor:
            descriptor = write_comic_info_tempfile(chapter, work, page_count=len(image_urls))

        return ChapterImages(outcome=FetchOutcome.OK, image_urls=image_urls, descriptor_path=descriptor)


def _abort(outcome: FetchOutcome, progress_token: ProgressToken | None) -> ChapterImages:
    if progress_token is not None:
        progress_token.cancel()
    return ChapterImages(outcome=outcome)
