"""Cliente del endpoint `/api/quotes` (lado consumidor).

Por qué separado de las fuentes:
- Aquí los errores *sí* llegan al usuario, y cada tipo necesita un mensaje
  distinto: red caída, status HTTP de error o respuesta malformada.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import QuoteError
from core.domain.models import Quote


class QuoteApiError(QuoteError):
    """Base de los errores visibles para el consumidor."""

    title = "Error"


class QuoteApiNetworkError(QuoteApiError):
    title = "Network error"


class QuoteApiHttpError(QuoteApiError):
    title = "Server error"

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        message = f"The quote service answered HTTP {status_code}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.status_code = status_code


class QuoteApiMalformedError(QuoteApiError):
    title = "Invalid response"


async def fetch_remote_quote(
    url: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Quote:
    """GET `url` y valida el contrato `{content, author}`."""

    settings = settings or AppSettings()
    try:
        async with build_async_client(settings, transport=transport) as client:
            resp = await client.get(url)
    except httpx.HTTPError as exc:
        raise QuoteApiNetworkError(
            f"Could not reach the quote service ({type(exc).__name__}). Check your connection."
        ) from exc

    if resp.status_code != 200:
        detail = None
        try:
            body = resp.json()
            if isinstance(body, dict) and isinstance(body.get("error"), str):
                detail = body["error"]
        except ValueError:
            detail = None
        raise QuoteApiHttpError(resp.status_code, detail)

    try:
        return Quote.model_validate(resp.json())
    except (ValueError, ValidationError) as exc:
        raise QuoteApiMalformedError(
            "The quote service returned data in an unexpected format."
        ) from exc
