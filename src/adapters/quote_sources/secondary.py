"""Fuente alternativa: ZenQuotes.

Forma de respuesta: array JSON de registros; solo se consulta el primero.

    [{"q": "...", "a": "...", "h": "<blockquote>...</blockquote>"}]

Se toleran dos nombres para el texto (`q` o `text`) y dos para el autor
(`a` o `author`).
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from adapters.quote_sources.base import fetch_json_payload, first_text
from core.config import AppSettings
from core.domain.errors import MalformedResponseError
from core.domain.models import UNKNOWN_AUTHOR, Quote
from core.interfaces.fetcher import BoundedFetcher

TEXT_KEYS = ("q", "text")
AUTHOR_KEYS = ("a", "author")


def decode_zenquotes_payload(
    data: Any,
    *,
    unknown_author: str = UNKNOWN_AUTHOR,
    source: str = "secondary",
) -> Quote:
    if not isinstance(data, list):
        raise MalformedResponseError(
            f"expected a JSON array, got {type(data).__name__}",
            source=source,
        )
    if not data:
        raise MalformedResponseError("empty array", source=source)

    record = data[0]
    if not isinstance(record, dict):
        raise MalformedResponseError("first element is not an object", source=source)

    content = first_text(record, *TEXT_KEYS)
    if content is None:
        raise MalformedResponseError("missing 'q'/'text'", source=source)

    author = first_text(record, *AUTHOR_KEYS) or unknown_author
    try:
        return Quote(content=content, author=author)
    except ValidationError as exc:
        raise MalformedResponseError(f"unusable quote: {exc.error_count()} errors", source=source) from exc


class ZenQuotesSource:
    """Etapa 2: proveedor con respuesta tipo array."""

    def __init__(
        self,
        fetcher: BoundedFetcher,
        settings: AppSettings | None = None,
        *,
        name: str = "secondary",
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or AppSettings()
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def url(self) -> str:
        return self._settings.secondary_url

    async def fetch_quote(self) -> Quote:
        data = await fetch_json_payload(
            self._fetcher,
            self.url,
            source=self._name,
            timeout=self._settings.fetch_timeout_seconds,
        )
        return decode_zenquotes_payload(
            data,
            unknown_author=self._settings.unknown_author,
            source=self._name,
        )
