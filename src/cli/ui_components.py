"""Componentes de UI para CLI (Rich).

- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Chapter, ChapterImages, HostConfig, Work


def print_banner(console: Console, host: HostConfig) -> None:
    """Imprime el banner de bienvenida (se omite en modo JSON)."""

    title = Text("serieslink", style="bold cyan")
    subtitle = Text(f"Series • Capítulos • {host.hostname}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_works_table(works: list[Work]) -> Table:
    table = Table(title="Series")
    table.add_column("Slug", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Authors", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("URL", style="magenta")
    for work in works:
        table.add_row(
            work.identifier,
            work.title,
            ", ".join(work.authors),
            work.status.value,
            work.website_url,
        )
    return table


def build_work_panel(work: Work) -> Panel:
    body = Text()
    body.append(work.title + "\n", style="bold")
    if work.authors:
        body.append("Autores: " + ", ".join(work.authors) + "\n")
    body.append(f"Estado: {work.status.value}\n")
    if work.year is not None:
        body.append(f"Año: {work.year}\n")
    if work.tags:
        body.append("Tags: " + ", ".join(sorted(work.tags)) + "\n")
    if work.cover:
        body.append(f"Portada: {work.cover.url}\n", style="dim")
    body.append(f"\n{work.description.strip()}\n")
    body.append(f"\n{work.website_url}", style="magenta")
    return Panel(body, title=Text(work.identifier, style="bold cyan"), border_style="cyan")


def build_chapters_table(work: Work, chapters: list[Chapter]) -> Table:
    table = Table(title=f"{work.title} ({len(chapters)} capítulos)")
    table.add_column("Vol.", style="cyan", justify="right")
    table.add_column("Ch.", style="cyan", justify="right")
    table.add_column("Title", style="white")
    table.add_column("Locator", style="dim")
    for chapter in chapters:
        table.add_row(chapter.volume, chapter.number, chapter.title, chapter.locator)
    return table


def build_images_panel(chapter: Chapter, result: ChapterImages) -> Panel:
    body = Text()
    if result.ok:
        for index, url in enumerate(result.image_urls):
            body.append(f"{index:03d} {url}\n")
        if result.descriptor_path:
            body.append(f"\nComicInfo: {result.descriptor_path}", style="dim")
        style = "green"
    else:
        body.append(f"{result.outcome.value} (HTTP {result.outcome.http_status})")
        style = "red"
    return Panel(body, title=f"{chapter.work_id} / {chapter.locator}", border_style=style)
