"""Presets de hosts conocidos de la familia HeanCMS.

Cada host aporta solo su hostname de API (y opcionalmente el prefijo de URL
pública); toda la lógica es compartida.
"""

from __future__ import annotations

from core.domain.models import HostConfig

HOST_PRESETS: dict[str, HostConfig] = {
    "templescan": HostConfig(hostname="https://api.templescan.net"),
}


def get_host_preset(name: str) -> HostConfig:
    key = name.strip().lower()
    try:
        return HOST_PRESETS[key]
    except KeyError:
        known = ", ".join(sorted(HOST_PRESETS))
        raise ValueError(f"Unknown host preset {name!r} (known: {known})") from None
