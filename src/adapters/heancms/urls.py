"""Construcción de URLs de la API HeanCMS.

Las formas de las URLs son contrato con el servidor: se reproducen tal cual.
"""

from __future__ import annotations

from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from core.domain.models import HostConfig

# perPage alto en vez de paginar: el protocolo no ofrece paginación fiable.
CHAPTER_INDEX_PAGE_SIZE = 9999


class HeanCmsUrls:
    def __init__(self, host: HostConfig) -> None:
        self.host = host

    @property
    def hostname(self) -> str:
        return self.host.hostname

    def search(self, term: str) -> str:
        return f"{self.hostname}/query?query_string={quote(term, safe='')}"

    def series(self, slug: str) -> str:
        return f"{self.hostname}/series/{slug}"

    def chapter_index(self, series_id: int | str) -> str:
        return (
            f"{self.hostname}/chapter/query?series_id={series_id}"
            f"&perPage={CHAPTER_INDEX_PAGE_SIZE}&page=1"
        )

    def chapter_by_slug(self, series_slug: str, chapter_slug: str) -> str:
        return f"{self.hostname}/chapter/{series_slug}/{chapter_slug}"

    def chapter_by_id(self, chapter_id: int | str) -> str:
        return f"{self.hostname}/chapter/{chapter_id}"

    def website(self, identifier: str) -> str:
        return f"{website_base(self.hostname)}{self.host.url_prefix}{identifier}"

    def absolute(self, url: str) -> str:
        return to_absolute_url(self.hostname, url)

    def slug_from_url(self, url: str) -> str | None:
        """Extrae el slug tras `url_prefix`; `None` si el prefijo no aparece."""

        prefix = self.host.url_prefix
        start = url.find(prefix)
        if start < 0:
            return None
        remainder = url[start + len(prefix):]
        for separator in ("?", "#"):
            remainder = remainder.split(separator, 1)[0]
        slug = remainder.strip("/")
        return slug or None


def website_base(hostname: str) -> str:
    """Quita el subdominio `api.` del hostname de la API."""

    parts = urlsplit(hostname)
    netloc = parts.netloc
    if netloc.startswith("api."):
        netloc = netloc[len("api."):]
    return urlunsplit((parts.scheme, netloc, parts.path, "", "")).rstrip("/")


def to_absolute_url(hostname: str, url: str) -> str:
    """URLs absolutas se devuelven intactas; las relativas se resuelven contra el hostname."""

    url = url.strip()
    if urlsplit(url).scheme in ("http", "https"):
        return url
    return urljoin(hostname if hostname.endswith("/") else f"{hostname}/", url)
