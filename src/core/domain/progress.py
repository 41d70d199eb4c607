"""Token de progreso/cancelación propiedad del llamador.

El core solo lo lee (`cancellation_requested`) y lo señala (`cancel`);
nunca gestiona su ciclo de vida.
"""

from __future__ import annotations

import threading


class ProgressToken:
    def __init__(self) -> None:
        self._requested = threading.Event()
        self._cancelled = threading.Event()

    def request_cancellation(self) -> None:
        """Pide cancelar (típicamente desde otro hilo o desde la UI)."""

        self._requested.set()

    @property
    def cancellation_requested(self) -> bool:
        return self._requested.is_set()

    def cancel(self) -> None:
        """Marca la operación como cancelada."""

        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()
