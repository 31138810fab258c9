"""Contrato del GET acotado por tiempo.

Por qué Protocol:
- Las fuentes de citas no saben nada de httpx; reciben algo que "sabe hacer GET".
- Los tests sustituyen la red por fakes deterministas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import FetchResponse


@runtime_checkable
class BoundedFetcher(Protocol):
    """GET con límite de tiempo duro.

    Reglas de diseño:
    - Devuelve la respuesta cruda para *cualquier* status (la fuente decide).
    - Lanza `FetchTimeoutError` si se agota `timeout` y `NetworkError` ante
      fallos de transporte. No traga errores.
    """

    async def fetch(self, url: str, *, timeout: float | None = None) -> FetchResponse:
        ...
