"""Implementaciones por defecto de los colaboradores de cache.

- `FileCoverCache`: descarga portadas vía el transporte y las guarda en disco.
- `MemoryWorkCache`: Works resueltos en memoria, por identifier.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from core.domain.models import RequestPurpose, Work
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

_IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".avif"}


def cover_file_name(remote_url: str, work_identifier: str) -> str:
    """Nombre estable: `<identifier>_<sha1[:12]><ext>`."""

    suffix = PurePosixPath(urlsplit(remote_url).path).suffix.lower()
    if suffix not in _IMAGE_SUFFIXES:
        suffix = ".jpg"
    digest = hashlib.sha1(remote_url.encode("utf-8")).hexdigest()[:12]  # nosec
    safe_id = "".join(c if c.isalnum() or c in "-_" else "_" for c in work_identifier)
    return f"{safe_id}_{digest}{suffix}"


class FileCoverCache:
    def __init__(self, transport: Transport, cache_dir: Path) -> None:
        self._transport = transport
        self.cache_dir = cache_dir

    def cache_cover_image(
        self,
        remote_url: str,
        work_identifier: str,
        purpose: RequestPurpose = RequestPurpose.COVER_IMAGE,
    ) -> str | None:
        name = cover_file_name(remote_url, work_identifier)
        target = self.cache_dir / name
        if target.exists():
            return name

        response = self._transport.request(remote_url, purpose)
        if not response.is_success or not response.body:
            logger.warning(
                "Failed to cache cover for %s. Status: %s", work_identifier, response.status_code
            )
            return None

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(response.body)
        except OSError as exc:
            logger.warning("Could not write cover %s: %s", target, exc)
            return None
        return name


class MemoryWorkCache:
    def __init__(self) -> None:
        self._works: dict[str, Work] = {}

    def add_work(self, work: Work) -> None:
        self._works[work.identifier] = work

    def get(self, identifier: str) -> Work | None:
        return self._works.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._works

    def __len__(self) -> int:
        return len(self._works)
