"""Errores del dominio."""

from __future__ import annotations


class SerieslinkError(Exception):
    """Base de los errores propios del proyecto."""


class SeriesMappingError(SerieslinkError, ValueError):
    """Al registro de serie le falta un campo obligatorio (o tiene tipo inválido)."""

    def __init__(self, message: str, *, slug: str | None = None) -> None:
        super().__init__(message)
        self.slug = slug


class ChapterPayloadError(SerieslinkError, ValueError):
    """Respuesta de capítulos que no respeta ninguna de las formas conocidas."""
