"""Conector HeanCMS: una instancia por host.

Es la frontera pública: cualquier excepción inesperada se registra y se
degrada a "sin resultados" / "no encontrado" / `NO_CONTENT`.
"""

from __future__ import annotations

import logging

from adapters.heancms.chapters import ChapterEnumerator
from adapters.heancms.pages import ChapterDetailFetcher
from adapters.heancms.series import SeriesResolver
from core.domain.models import Chapter, ChapterImages, FetchOutcome, HostConfig, Work
from core.domain.progress import ProgressToken
from core.interfaces.cache import CoverCache, WorkCache
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class HeanCmsConnector:
    def __init__(
        self,
        transport: Transport,
        host: HostConfig,
        *,
        cover_cache: CoverCache | None = None,
        work_cache: WorkCache | None = None,
        write_descriptor: bool = True,
    ) -> None:
        self.host = host
        self.series = SeriesResolver(transport, host, cover_cache=cover_cache, work_cache=work_cache)
        self.chapters = ChapterEnumerator(transport, host)
        self.pages = ChapterDetailFetcher(transport, host, write_descriptor=write_descriptor)

    def get_works(self, title: str = "") -> list[Work]:
        logger.info("GetWorks: %s", title)
        try:
            return self.series.find_by_title(title)
        except Exception:
            logger.exception('Failed to get works. Term="%s"', title)
            return []

    def get_work_from_id(self, identifier: str) -> Work | None:
        logger.info("GetWorkFromId: %s", identifier)
        try:
            return self.series.resolve_by_slug(identifier)
        except Exception:
            logger.exception("Failed to get work from id. %s", identifier)
            return None

    def get_work_from_url(self, url: str) -> Work | None:
        logger.info("GetWorkFromUrl: %s", url)
        try:
            return self.series.resolve_by_url(url)
        except Exception:
            logger.exception("Failed to get work from url. %s", url)
            return None

    def get_chapters(self, work: Work) -> list[Chapter]:
        logger.info("GetChapters: %s", work.identifier)
        try:
            return self.chapters.list_chapters(work)
        except Exception:
            logger.exception("Failed to get chapters. %s", work.identifier)
            return []

    def fetch_chapter_images(
        self,
        chapter: Chapter,
        progress_token: ProgressToken | None = None,
        *,
        work: Work | None = None,
    ) -> ChapterImages:
        logger.info("FetchChapterImages: %s: %s", chapter.work_id, chapter.locator)
        try:
            return self.pages.fetch_images(chapter, progress_token, work=work)
        except Exception:
            logger.exception("Failed to fetch chapter images. %s: %s", chapter.work_id, chapter.locator)
            return ChapterImages(outcome=FetchOutcome.NO_CONTENT)
