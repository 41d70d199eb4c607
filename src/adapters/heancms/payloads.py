"""Modelos del JSON crudo de HeanCMS.

Son transitorios: se validan, se mapean al dominio y se descartan.
`extra="ignore"` porque el backend añade campos sin aviso.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field
from pydantic.config import ConfigDict

from core.interfaces.transport import TransportResponse

logger = logging.getLogger(__name__)


def decode_json_object(response: TransportResponse, *, context: str) -> dict[str, Any] | None:
    """Devuelve el cuerpo como dict, o `None` si no es 2xx o no decodifica."""

    if not response.is_success:
        logger.warning("Request failed. %s Status: %s", context, response.status_code)
        return None
    try:
        data = json.loads(response.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Undecodable response. %s: %s", context, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Unexpected JSON (not an object). %s", context)
        return None
    return data


def _as_label(value: Any) -> Any:
    # Índices remotos llegan como int, float o string; el dominio usa strings.
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


Label = Annotated[str, BeforeValidator(_as_label)]


class RawTag(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class RawSeries(BaseModel):
    """Registro de serie (endpoint `series/{slug}`)."""

    model_config = ConfigDict(extra="ignore")

    title: str
    series_slug: str = Field(..., min_length=1)
    author: str
    description: str
    alternative_names: str
    tags: list[RawTag | None]
    status: str

    # Opcionales: un valor raro se descarta en el mapeo, no invalida la serie.
    thumbnail: Any = None
    release_year: Any = None


class RawSeasonChapter(BaseModel):
    model_config = ConfigDict(extra="ignore")

    chapter_slug: str = Field(..., min_length=1)
    chapter_title: str | None = None
    chapter_name: str | None = None
    index: Label
    price: float | None = None

    @property
    def is_paid(self) -> bool:
        return self.price is not None and self.price > 0


class RawSeason(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: Label
    chapters: list[RawSeasonChapter | None] | None = None


class RawSeasonListing(BaseModel):
    """Vista de generación 1 sobre el registro de serie."""

    model_config = ConfigDict(extra="ignore")

    seasons: list[RawSeason | None] | None = None


class RawChapterIndexEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    chapter_name: str | None = None
    price: float | None = None

    @property
    def is_paid(self) -> bool:
        return self.price is not None and self.price > 0


class RawChapterIndex(BaseModel):
    """Índice de generación 2 (`chapter/query?series_id=...`)."""

    model_config = ConfigDict(extra="ignore")

    data: list[RawChapterIndexEntry | None]


class RawSeasonRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: Label


class RawChapterDetail(BaseModel):
    """Detalle de capítulo por id (generación 2)."""

    model_config = ConfigDict(extra="ignore")

    chapter_slug: str = Field(..., min_length=1)
    chapter_title: str | None = None
    index: Label
    season: RawSeasonRef
