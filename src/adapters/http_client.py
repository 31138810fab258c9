"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y la cancelación de peticiones lentas.
- Facilita testeo: se puede sustituir el transporte por `httpx.MockTransport`.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from core.config import AppSettings
from core.domain.errors import FetchTimeoutError, NetworkError
from core.domain.models import FetchResponse

logger = logging.getLogger(__name__)

JSON_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    # Siempre una cita nueva: sin caches intermedias.
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    timeout: float | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los proveedores se comporten igual.
    - `transport` permite inyectar un transporte falso en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        **JSON_HEADERS,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout or settings.fetch_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxBoundedFetcher:
    """`BoundedFetcher` sobre httpx.

    Cada llamada abre su propio cliente y su propio ámbito de cancelación
    (`asyncio.wait_for`): al vencer el plazo la tarea del GET se cancela y la
    conexión se libera al cerrar el cliente. Un timeout en una etapa no afecta
    a la siguiente.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch(self, url: str, *, timeout: float | None = None) -> FetchResponse:
        budget = timeout if timeout is not None else self._settings.fetch_timeout_seconds
        try:
            async with build_async_client(
                self._settings,
                timeout=budget,
                transport=self._transport,
            ) as client:
                response = await asyncio.wait_for(client.get(url), timeout=budget)
        except asyncio.TimeoutError as exc:
            raise FetchTimeoutError(f"GET {url} aborted after {budget:.2f}s") from exc
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(f"GET {url} timed out: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"GET {url} failed: {type(exc).__name__}: {exc}") from exc

        logger.debug("GET %s -> HTTP %s", url, response.status_code)
        return FetchResponse(
            status_code=response.status_code,
            url=str(response.url),
            body=response.content,
        )
