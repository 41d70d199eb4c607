"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* es un Work o un Chapter, independientemente de la
generación del protocolo remoto que los produjo.

Nota:
- No conocen HTTP ni el JSON crudo del backend; el mapeo vive en `adapters/heancms`.
"""

from __future__ import annotations

import re
from enum import Enum
from http import HTTPStatus
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ReleaseStatus(str, Enum):
    """Estado de publicación canónico."""

    UNRELEASED = "unreleased"
    CONTINUING = "continuing"
    COMPLETED = "completed"
    ON_HIATUS = "on_hiatus"
    CANCELLED = "cancelled"


class RequestPurpose(str, Enum):
    """Pista para la política del transporte; no altera el parseo."""

    SERIES_INFO = "series_info"
    CHAPTER_INFO = "chapter_info"
    COVER_IMAGE = "cover_image"
    PAGE_IMAGE = "page_image"


class HostConfig(BaseModel):
    """Configuración de un host concreto de la familia HeanCMS."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(
        ...,
        min_length=8,
        description="Base URL de la API (p.ej. 'https://api.templescan.net').",
    )
    url_prefix: str = Field(
        default="/series/",
        min_length=1,
        description="Prefijo de ruta de las URLs públicas de series.",
    )

    @field_validator("hostname")
    @classmethod
    def _check_hostname(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError("hostname must start with http:// or https://")
        return value


class CoverImage(BaseModel):
    url: str = Field(..., description="URL absoluta de la portada remota.")
    cache_name: str | None = Field(
        default=None,
        description="Nombre local devuelto por el cache de portadas (si lo hubo).",
    )


class Work(BaseModel):
    """Registro canónico de una serie.

    `identifier` es el slug remoto: el mismo string vuelve a resolver el Work.
    """

    identifier: str = Field(..., min_length=1, description="Slug estable por host.")
    title: str = Field(..., description="Título principal.")
    authors: list[str] = Field(default_factory=list)
    description: str = Field(default="", description="Descripción en texto plano.")
    alt_titles: dict[str, str] = Field(default_factory=dict)
    tags: set[str] = Field(default_factory=set)
    cover: CoverImage | None = None
    year: int | None = None
    status: ReleaseStatus = ReleaseStatus.UNRELEASED
    website_url: str = Field(..., description="URL pública canónica de la serie.")
    links: dict[str, str] = Field(default_factory=dict)
    original_language: str | None = None


_NUMBER_RE = re.compile(r"^\s*-?\d+(?:\.\d+)?\s*$")


def _label_key(label: str) -> tuple[int, float, str]:
    # Numéricos primero (en orden numérico), luego el resto lexicográficamente.
    if _NUMBER_RE.match(label):
        return (0, float(label), label)
    return (1, 0.0, label)


class Chapter(BaseModel):
    """Capítulo canónico.

    - `work_id` es una referencia no propietaria al Work (su identifier).
    - `locator` es opaco: slug o id según la generación que lo produjo.
    """

    model_config = ConfigDict(frozen=True)

    work_id: str = Field(..., min_length=1)
    title: str = ""
    volume: str = Field(default="", description="Etiqueta de volumen (season index).")
    number: str = Field(default="", description="Número de capítulo (no siempre entero).")
    locator: str = Field(..., min_length=1)

    def sort_key(self) -> tuple[tuple[int, float, str], tuple[int, float, str]]:
        return (_label_key(self.volume), _label_key(self.number))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Chapter):
            return NotImplemented
        return self.sort_key() < other.sort_key()


def order_chapters(chapters: list[Chapter]) -> list[Chapter]:
    """Ordena por (volumen, número) y elimina duplicados por locator.

    Ante duplicados se conserva la primera aparición.
    """

    seen: set[str] = set()
    unique: list[Chapter] = []
    for chapter in chapters:
        if chapter.locator in seen:
            continue
        seen.add(chapter.locator)
        unique.append(chapter)
    return sorted(unique, key=Chapter.sort_key)


class FetchOutcome(str, Enum):
    """Resultado de pedir las imágenes de un capítulo."""

    OK = "ok"
    NO_CONTENT = "no_content"
    PAYMENT_REQUIRED = "payment_required"
    CANCELLED = "cancelled"

    @property
    def http_status(self) -> int:
        """Código HTTP equivalente, para orquestadores que ramifican por status."""

        return {
            FetchOutcome.OK: HTTPStatus.OK,
            FetchOutcome.NO_CONTENT: HTTPStatus.NO_CONTENT,
            FetchOutcome.PAYMENT_REQUIRED: HTTPStatus.PAYMENT_REQUIRED,
            FetchOutcome.CANCELLED: HTTPStatus.REQUEST_TIMEOUT,
        }[self]


class ChapterImages(BaseModel):
    outcome: FetchOutcome
    image_urls: list[str] = Field(default_factory=list)
    descriptor_path: Path | None = Field(
        default=None,
        description="ComicInfo.xml temporal para el empaquetado posterior.",
    )

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.OK
