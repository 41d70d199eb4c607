"""Descriptor ComicInfo.xml de un capítulo.

Artefacto de traspaso para el empaquetado (CBZ) posterior; el core no lo
conserva.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from xml.sax.saxutils import escape

from core.domain.models import Chapter, Work


def build_comic_info_xml(chapter: Chapter, work: Work | None = None, *, page_count: int | None = None) -> str:
    fields: list[tuple[str, str]] = [
        ("Title", chapter.title),
        ("Series", work.title if work else chapter.work_id),
        ("Volume", chapter.volume),
        ("Number", chapter.number),
    ]
    if work is not None:
        fields.extend(
            [
                ("Summary", work.description),
                ("Writer", ", ".join(work.authors)),
                ("Genre", ", ".join(sorted(work.tags))),
                ("Web", work.website_url),
            ]
        )
        if work.year is not None:
            fields.append(("Year", str(work.year)))
    if page_count is not None:
        fields.append(("PageCount", str(page_count)))

    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<ComicInfo xmlns:xsd="http://www.w3.org/2001/XMLSchema" '
        'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">',
    ]
    for tag, value in fields:
        if value:
            lines.append(f"    <{tag}>{escape(value)}</{tag}>")
    lines.append("</ComicInfo>")
    return "\n".join(lines) + "\n"


def write_comic_info_tempfile(chapter: Chapter, work: Work | None = None, *, page_count: int | None = None) -> Path:
    """Escribe el descriptor en un fichero temporal y devuelve su ruta."""

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        prefix="comicinfo_",
        suffix=".xml",
        delete=False,
    ) as handle:
        handle.write(build_comic_info_xml(chapter, work, page_count=page_count))
    return Path(handle.name)
