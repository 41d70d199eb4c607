"""Wrapper de httpx.

- Estandariza timeouts, headers y logging de todas las peticiones a la API.
- Implementa `core.interfaces.transport.Transport`; en tests se sustituye por
  un transporte falso.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.models import RequestPurpose
from core.interfaces.transport import TransportResponse

logger = logging.getLogger(__name__)

_ACCEPT_BY_PURPOSE: dict[RequestPurpose, str] = {
    RequestPurpose.SERIES_INFO: "application/json",
    RequestPurpose.CHAPTER_INFO: "application/json",
    RequestPurpose.COVER_IMAGE: "image/avif,image/webp,image/*,*/*;q=0.8",
    RequestPurpose.PAGE_IMAGE: "image/avif,image/webp,image/*,*/*;q=0.8",
}


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros (timeout, UA, redirects)."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


class HttpxTransport:
    """Transporte síncrono sobre httpx.

    Nunca lanza por errores de red: devuelve `TransportResponse(status_code=0)`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    def request(self, url: str, purpose: RequestPurpose) -> TransportResponse:
        headers = {"Accept": _ACCEPT_BY_PURPOSE[purpose]}
        try:
            response = self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Request failed (%s) %s: %s", purpose.value, url, exc)
            return TransportResponse(status_code=0)

        logger.debug("GET %s -> %s (%s)", url, response.status_code, purpose.value)
        return TransportResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
