"""Adaptador de la familia de APIs HeanCMS (series/capítulos).

Cada módulo cubre una parte del protocolo:
- `series`: búsqueda, resolución y mapeo a `Work`.
- `chapters`: listado dual (generación 1 / generación 2).
- `pages`: imágenes de un capítulo.
- `connector`: fachada por host.
"""

from adapters.heancms.chapters import ChapterEnumerator
from adapters.heancms.connector import HeanCmsConnector
from adapters.heancms.pages import ChapterDetailFetcher
from adapters.heancms.series import SeriesResolver, map_series
from adapters.heancms.urls import HeanCmsUrls

__all__ = [
	"ChapterDetailFetcher",
	"ChapterEnumerator",
	"HeanCmsConnector",
	"HeanCmsUrls",
	"SeriesResolver",
	"map_series",
]
