"""Contratos de los colaboradores de cache.

Ambos son "fire-and-forget" desde el punto de vista del core.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RequestPurpose, Work


@runtime_checkable
class CoverCache(Protocol):
    def cache_cover_image(
        self,
        remote_url: str,
        work_identifier: str,
        purpose: RequestPurpose,
    ) -> str | None:
        """Guarda la portada y devuelve el nombre local (o `None` si falla)."""

        ...


@runtime_checkable
class WorkCache(Protocol):
    def add_work(self, work: Work) -> None:
        ...
