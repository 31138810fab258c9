"""Contrato de una etapa de red de la cadena de fallback."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Quote


@runtime_checkable
class QuoteSource(Protocol):
    """Una etapa intercambiable (proveedor principal, alternativo, ...).

    Reglas de diseño:
    - `fetch_quote` es asíncrono porque hace I/O (HTTP).
    - Devuelve una `Quote` ya normalizada o lanza `QuoteSourceError`.
    """

    @property
    def name(self) -> str: ...

    async def fetch_quote(self) -> Quote:
        ...
