"""Helpers compartidos por las fuentes de red.

Estos helpers están en adapters porque mezclan I/O (HTTP) y decodificación.
"""

from __future__ import annotations

from typing import Any

from core.domain.errors import MalformedResponseError, UpstreamStatusError
from core.interfaces.fetcher import BoundedFetcher


async def fetch_json_payload(
    fetcher: BoundedFetcher,
    url: str,
    *,
    source: str,
    timeout: float | None = None,
) -> Any:
    """GET acotado + validación de status + decodificación JSON.

    Un 2xx con cuerpo vacío o ilegible cuenta igual que un fallo de red.
    """

    response = await fetcher.fetch(url, timeout=timeout)
    if not response.ok:
        raise UpstreamStatusError(response.status_code, source=source)
    if not response.body.strip():
        raise MalformedResponseError("empty body", source=source)
    try:
        return response.decode_json()
    except ValueError as exc:
        raise MalformedResponseError(f"invalid JSON: {exc}", source=source) from exc


def first_text(record: dict[str, Any], *keys: str) -> str | None:
    """Primer valor de texto no vacío entre `keys` (en orden)."""

    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
