"""Resolución y mapeo de series HeanCMS.

- `SeriesResolver` habla con la API (búsqueda, slug, URL pública).
- `map_series` convierte el registro crudo en un `Work` canónico.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup
from pydantic import ValidationError

from adapters.heancms.payloads import RawSeries, decode_json_object
from adapters.heancms.urls import HeanCmsUrls
from core.domain.errors import SeriesMappingError
from core.domain.models import CoverImage, HostConfig, RequestPurpose, Work
from core.domain.status import map_release_status
from core.interfaces.cache import CoverCache, WorkCache
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

AUTHOR_SEPARATOR = " & "


def html_to_text(markup: str) -> str:
    """Texto visible del HTML, en orden de lectura y con entidades decodificadas."""

    if not markup:
        return ""
    return BeautifulSoup(markup, "html.parser").get_text()


def _parse_year(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def map_series(
    raw: dict[str, Any],
    host: HostConfig,
    *,
    cover_cache: CoverCache | None = None,
    work_cache: WorkCache | None = None,
) -> Work:
    """Mapea un registro de serie a `Work`.

    Lanza `SeriesMappingError` si falta un campo obligatorio: nunca devuelve
    un Work a medias.
    """

    try:
        series = RawSeries.model_validate(raw)
    except ValidationError as exc:
        slug = raw.get("series_slug") if isinstance(raw, dict) else None
        raise SeriesMappingError(f"Invalid series record: {exc}", slug=slug) from exc

    urls = HeanCmsUrls(host)
    identifier = series.series_slug

    cover = None
    if isinstance(series.thumbnail, str) and series.thumbnail.strip():
        cover_url = urls.absolute(series.thumbnail)
        cover = CoverImage(url=cover_url, cache_name=_cache_cover(cover_cache, cover_url, identifier))

    work = Work(
        identifier=identifier,
        title=series.title,
        authors=series.author.split(AUTHOR_SEPARATOR),
        description=html_to_text(series.description),
        # El esquema remoto no trae índices individuales: todo va bajo "0".
        alt_titles={"0": series.alternative_names},
        tags={tag.name for tag in series.tags if tag is not None},
        cover=cover,
        year=_parse_year(series.release_year),
        status=map_release_status(series.status),
        website_url=urls.website(identifier),
    )
    logger.debug("Converted series to work. %s", work.identifier)

    if work_cache is not None:
        work_cache.add_work(work)
    return work


def _cache_cover(cover_cache: CoverCache | None, url: str, identifier: str) -> str | None:
    if cover_cache is None:
        return None
    try:
        return cover_cache.cache_cover_image(url, identifier, RequestPurpose.COVER_IMAGE)
    except Exception:
        logger.warning("Cover cache failed for %s (%s)", identifier, url, exc_info=True)
        return None


class SeriesResolver:
    """Busca y resuelve series en un host HeanCMS."""

    def __init__(
        self,
        transport: Transport,
        host: HostConfig,
        *,
        cover_cache: CoverCache | None = None,
        work_cache: WorkCache | None = None,
    ) -> None:
        self._transport = transport
        self._host = host
        self._urls = HeanCmsUrls(host)
        self._cover_cache = cover_cache
        self._work_cache = work_cache

    def fetch_series_record(self, slug: str) -> dict[str, Any] | None:
        """Registro crudo de `series/{slug}`; `None` ante error HTTP o JSON inválido."""

        response = self._transport.request(self._urls.series(slug), RequestPurpose.SERIES_INFO)
        return decode_json_object(response, context=f'series slug="{slug}"')

    def find_by_title(self, query: str) -> list[Work]:
        logger.info('Searching publications. Term="%s"', query)

        response = self._transport.request(self._urls.search(query), RequestPurpose.SERIES_INFO)
        result = decode_json_object(response, context=f'search term="{query}"')
        if result is None:
            return []

        hits = result.get("data")
        if not isinstance(hits, list):
            logger.warning('Search response without data array. Term="%s"', query)
            return []

        works: list[Work] = []
        for hit in hits:
            if not isinstance(hit, dict):
                continue
            slug = hit.get("series_slug")
            if not isinstance(slug, str) or not slug:
                logger.debug("Search hit without slug skipped. %s", hit)
                continue
            # La búsqueda devuelve una proyección parcial: se re-resuelve por slug.
            try:
                work = self.resolve_by_slug(slug)
            except SeriesMappingError as exc:
                logger.warning("Dropping search hit %s: %s", slug, exc)
                continue
            except Exception:
                logger.warning("Dropping search hit %s: resolution failed", slug, exc_info=True)
                continue
            if work is None:
                logger.warning("Dropping search hit %s: series not resolved", slug)
                continue
            works.append(work)

        logger.info('Found %d publications. Term="%s"', len(works), query)
        return works

    def resolve_by_slug(self, slug: str) -> Work | None:
        record = self.fetch_series_record(slug)
        if record is None:
            return None
        return map_series(
            record,
            self._host,
            cover_cache=self._cover_cache,
            work_cache=self._work_cache,
        )

    def resolve_by_url(self, url: str) -> Work | None:
        slug = self._urls.slug_from_url(url)
        if slug is None:
            logger.warning("URL does not contain %r: %s", self._host.url_prefix, url)
            return None
        logger.debug("Got slug %s from %s", slug, url)
        return self.resolve_by_slug(slug)
