"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxTransport
from adapters.heancms.urls import HeanCmsUrls
from core.config import AppSettings, write_user_env_vars
from core.domain.models import RequestPurpose
from core.hosts import HOST_PRESETS, get_host_preset

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    host = settings.host_config()
    with HttpxTransport(settings) as transport:
        response = transport.request(HeanCmsUrls(host).search(""), RequestPurpose.SERIES_INFO)
    if response.status_code == 0:
        return False, "no response"
    return response.is_success, f"HTTP {response.status_code}"


def _check_cache_dir(settings: AppSettings) -> tuple[bool, str]:
    cache_dir = settings.resolved_cache_dir()
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        probe = cache_dir / ".doctor"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
        return True, str(cache_dir)
    except OSError as exc:
        return False, f"{cache_dir}: {exc}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="serieslink Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        host = settings.host_config()
    except ValueError as exc:
        table.add_row("Host", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1)

    table.add_row("Host", "OK", f"{host.hostname} (prefix {host.url_prefix})")

    ok_api, detail_api = _check_api(settings)
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    ok_cache, detail_cache = _check_cache_dir(settings)
    table.add_row("Cover cache", "OK" if ok_cache else "FAIL", detail_cache)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Check SERIESLINK_API_HOSTNAME or pick a preset with `doctor set-host`."
        )


@app.command(name="set-host")
def set_host() -> None:
    """Interactive host setup (stores config in the user config .env)."""

    _console.print("Known presets: " + ", ".join(sorted(HOST_PRESETS)))
    preset = typer.prompt("Host preset (or 'custom')", default="templescan", show_default=True).strip().lower()

    values: dict[str, str] = {}
    if preset == "custom":
        hostname = typer.prompt("API hostname (https://api.example.com)").strip()
        prefix = typer.prompt("Series URL prefix", default="/series/", show_default=True).strip()
        if not hostname:
            raise typer.BadParameter("hostname is required")
        values["SERIESLINK_API_HOSTNAME"] = hostname
        values["SERIESLINK_URL_PREFIX"] = prefix
    else:
        try:
            get_host_preset(preset)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        values["SERIESLINK_HOST"] = preset
        values["SERIESLINK_API_HOSTNAME"] = ""
        values["SERIESLINK_URL_PREFIX"] = ""

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved host config to:[/green] {env_path}")
