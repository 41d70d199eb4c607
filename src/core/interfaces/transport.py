"""Contrato del transporte HTTP.

- Define un contrato estructural (Protocol) sin herencia rígida.
- El core solo necesita "GET -> (status, body)"; timeouts, reintentos y
  rate limits son política del transporte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from core.domain.models import RequestPurpose


@dataclass(frozen=True)
class TransportResponse:
    """Respuesta cruda. `status_code == 0` significa que no hubo respuesta."""

    status_code: int
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo del transporte.

    Reglas de diseño:
    - `request` es síncrono y no lanza por errores HTTP: devuelve el status.
    - `purpose` es solo una pista para la política del transporte.
    """

    def request(self, url: str, purpose: RequestPurpose) -> TransportResponse:
        ...
