"""Mapeo de estados remotos a `ReleaseStatus`."""

from __future__ import annotations

from core.domain.models import ReleaseStatus

_STATUS_BY_NAME: dict[str, ReleaseStatus] = {
    "ongoing": ReleaseStatus.CONTINUING,
    "completed": ReleaseStatus.COMPLETED,
    "hiatus": ReleaseStatus.ON_HIATUS,
    "cancelled": ReleaseStatus.CANCELLED,
}


def map_release_status(value: str | None) -> ReleaseStatus:
    """Convierte el status remoto (case-insensitive); nunca falla.

    Valores desconocidos o ausentes -> `ReleaseStatus.UNRELEASED`.
    """

    if not isinstance(value, str):
        return ReleaseStatus.UNRELEASED
    return _STATUS_BY_NAME.get(value.strip().lower(), ReleaseStatus.UNRELEASED)
