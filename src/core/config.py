"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Un host concreto se describe con solo dos valores: hostname de la API y
  prefijo de las URLs públicas; el resto es lógica compartida.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import HostConfig
from core.hosts import get_host_preset


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "serieslink"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "serieslink"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "serieslink"
    return Path.home() / ".config" / "serieslink"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# serieslink user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="SERIESLINK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="templescan",
        min_length=1,
        description="Nombre del preset de host (ver `core.hosts`).",
    )
    api_hostname: str | None = Field(
        default=None,
        description="Base URL de la API; si se define, reemplaza al preset.",
    )
    url_prefix: str | None = Field(
        default=None,
        description="Prefijo de URLs públicas de series (por defecto '/series/').",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="serieslink/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    cache_dir: Path | None = Field(
        default=None,
        description="Directorio del cache de portadas (por defecto <config>/cache).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )

    def host_config(self) -> HostConfig:
        """Resuelve el `HostConfig` efectivo (override explícito o preset)."""

        if self.api_hostname:
            base = HostConfig(hostname=self.api_hostname)
        else:
            base = get_host_preset(self.host)
        if self.url_prefix:
            return HostConfig(hostname=base.hostname, url_prefix=self.url_prefix)
        return base

    def resolved_cache_dir(self) -> Path:
        return self.cache_dir or (get_user_config_dir() / "cache")
