"""CLI principal (Typer + Rich).

Comandos:
- `search`: busca series por título.
- `series`: resuelve una serie por slug o URL pública.
- `chapters`: lista los capítulos gratuitos de una serie.
- `pages`: resuelve las URLs de las páginas de un capítulo.
- `hosts`: presets de hosts conocidos.
- `doctor`: diagnósticos.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from adapters.http_client import HttpxTransport
from adapters.json_exporter import export_works_json
from cli import doctor
from cli.ui_components import (
    build_chapters_table,
    build_images_panel,
    build_work_panel,
    build_works_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import Chapter
from core.hosts import HOST_PRESETS
from core.services.catalog_pipeline import CatalogRequest, PipelineHooks, build_connector, lookup

app = typer.Typer(no_args_is_help=True, help="Normalize HeanCMS-style series APIs into works and chapters.")
app.add_typer(doctor.app, name="doctor")

console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _settings() -> AppSettings:
    settings = AppSettings()
    configure_logging(settings.log_level)
    return settings


def _hooks() -> PipelineHooks:
    return PipelineHooks(warning=lambda message: _err_console.print(f"[yellow]{message}[/yellow]"))


JsonOption = typer.Option(None, "--json", help="Write the result as JSON to this path.")


@app.command()
def search(
    term: str = typer.Argument(..., help="Search term."),
    json_path: Path | None = JsonOption,
    covers: bool = typer.Option(False, "--covers", help="Download covers into the cache dir."),
) -> None:
    """Search series by title."""

    settings = _settings()
    with HttpxTransport(settings) as transport:
        result = lookup(
            settings=settings,
            transport=transport,
            request=CatalogRequest(target=term, search=True, cache_covers=covers),
            hooks=_hooks(),
        )
    if json_path:
        export_works_json(works=result.works, output_path=json_path)
    if not result.works:
        raise typer.Exit(code=1)
    if not json_path:
        print_banner(console, settings.host_config())
        console.print(build_works_table(result.works))


@app.command()
def series(
    target: str = typer.Argument(..., help="Series slug or public series URL."),
    json_path: Path | None = JsonOption,
    covers: bool = typer.Option(False, "--covers", help="Download the cover into the cache dir."),
) -> None:
    """Resolve a single series."""

    settings = _settings()
    with HttpxTransport(settings) as transport:
        result = lookup(
            settings=settings,
            transport=transport,
            request=CatalogRequest(target=target, cache_covers=covers),
            hooks=_hooks(),
        )
    if not result.works:
        raise typer.Exit(code=1)
    if json_path:
        export_works_json(works=result.works, output_path=json_path)
    else:
        console.print(build_work_panel(result.works[0]))


@app.command()
def chapters(
    target: str = typer.Argument(..., help="Series slug or public series URL."),
    json_path: Path | None = JsonOption,
) -> None:
    """List the free chapters of a series, ordered by volume and number."""

    settings = _settings()
    with HttpxTransport(settings) as transport:
        result = lookup(
            settings=settings,
            transport=transport,
            request=CatalogRequest(target=target, with_chapters=True),
            hooks=_hooks(),
        )
    if not result.works:
        raise typer.Exit(code=1)
    if json_path:
        export_works_json(works=result.works, output_path=json_path, chapters=result.chapters)
        return
    for work in result.works:
        console.print(build_chapters_table(work, result.chapters.get(work.identifier, [])))


@app.command()
def pages(
    series_slug: str = typer.Argument(..., help="Series slug."),
    chapter_locator: str = typer.Argument(..., help="Chapter locator (slug)."),
) -> None:
    """Resolve the absolute page-image URLs of one chapter."""

    settings = _settings()
    with HttpxTransport(settings) as transport:
        connector = build_connector(settings=settings, transport=transport)
        work = connector.get_work_from_id(series_slug)
        chapter = Chapter(work_id=series_slug, locator=chapter_locator)
        result = connector.fetch_chapter_images(chapter, work=work)
    console.print(build_images_panel(chapter, result))
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def hosts() -> None:
    """List the known host presets."""

    table = Table(title="Host presets")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("API hostname", style="white")
    table.add_column("URL prefix", style="dim")
    for name, host in sorted(HOST_PRESETS.items()):
        table.add_row(name, host.hostname, host.url_prefix)
    console.print(table)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
