"""Catalog lookup orchestration utilities.

The CLI delegates all resolution concerns to these helpers: build a
connector for the configured host, resolve a target (public URL, slug or
search term) to works, and optionally enumerate their chapters. Printing
and progress bars stay in the CLI layer via `PipelineHooks`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from adapters.cache_store import FileCoverCache, MemoryWorkCache
from adapters.heancms.connector import HeanCmsConnector
from core.config import AppSettings
from core.domain.models import Chapter, Work
from core.interfaces.transport import Transport


@dataclass
class CatalogRequest:
    """Parameters that control a catalog lookup."""

    target: str
    with_chapters: bool = False
    search: bool = False
    cache_covers: bool = False


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    chapters_start: Callable[[int], None] | None = None
    chapters_progress: Callable[[Work], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    works: list[Work]
    chapters: dict[str, list[Chapter]] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def build_connector(
    *,
    settings: AppSettings,
    transport: Transport,
    cache_covers: bool = False,
    work_cache: MemoryWorkCache | None = None,
) -> HeanCmsConnector:
    cover_cache = None
    if cache_covers:
        cover_cache = FileCoverCache(transport, settings.resolved_cache_dir())
    return HeanCmsConnector(
        transport,
        settings.host_config(),
        cover_cache=cover_cache,
        work_cache=work_cache,
    )


def looks_like_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def lookup(
    *,
    settings: AppSettings,
    transport: Transport,
    request: CatalogRequest,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    connector = build_connector(
        settings=settings,
        transport=transport,
        cache_covers=request.cache_covers,
        work_cache=MemoryWorkCache(),
    )

    target = request.target.strip()
    works: list[Work] = []
    if request.search:
        works = connector.get_works(target)
        if not works:
            warn(f'No results for "{target}".')
    else:
        work = (
            connector.get_work_from_url(target)
            if looks_like_url(target)
            else connector.get_work_from_id(target)
        )
        if work is None:
            warn(f"Series not found: {target}")
        else:
            works = [work]

    chapters: dict[str, list[Chapter]] = {}
    if request.with_chapters and works:
        if hooks.chapters_start:
            hooks.chapters_start(len(works))
        for work in works:
            found = connector.get_chapters(work)
            if not found:
                warn(f"No free chapters found for {work.identifier}.")
            chapters[work.identifier] = found
            if hooks.chapters_progress:
                hooks.chapters_progress(work)

    return PipelineResult(works=works, chapters=chapters, warnings=warnings)
