"""Exportación JSON de Works y capítulos.

- Interoperabilidad con descargadores y pipelines externos.
- Formato estable: claves ordenadas, tags ordenados.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import Chapter, Work


def work_payload(work: Work, chapters: list[Chapter] | None = None) -> dict[str, Any]:
    payload = work.model_dump(mode="json")
    payload["tags"] = sorted(work.tags)
    if chapters is not None:
        payload["chapters"] = [chapter.model_dump(mode="json") for chapter in chapters]
    return payload


def export_works_json(
    *,
    works: list[Work],
    output_path: Path,
    chapters: dict[str, list[Chapter]] | None = None,
) -> Path:
    """Exporta los Works (y sus capítulos, si se dan) a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    chapters = chapters or {}
    payload = [work_payload(work, chapters.get(work.identifier)) for work in works]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
