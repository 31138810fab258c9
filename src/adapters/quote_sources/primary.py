"""Fuente principal: Quotable.

Forma de respuesta: un único objeto JSON.

    {"_id": "...", "content": "...", "author": "...", "tags": [...]}

`content` es obligatorio; `author` es opcional y se normaliza al centinela.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from adapters.quote_sources.base import fetch_json_payload, first_text
from core.config import AppSettings
from core.domain.errors import MalformedResponseError
from core.domain.models import UNKNOWN_AUTHOR, Quote
from core.interfaces.fetcher import BoundedFetcher


def decode_quotable_payload(
    data: Any,
    *,
    unknown_author: str = UNKNOWN_AUTHOR,
    source: str = "primary",
) -> Quote:
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"expected a JSON object, got {type(data).__name__}",
            source=source,
        )

    content = first_text(data, "content")
    if content is None:
        raise MalformedResponseError("missing 'content'", source=source)

    author = first_text(data, "author") or unknown_author
    try:
        return Quote(content=content, author=author)
    except ValidationError as exc:
        raise MalformedResponseError(f"unusable quote: {exc.error_count()} errors", source=source) from exc


class QuotableSource:
    """Etapa 1: proveedor con respuesta tipo objeto."""

    def __init__(
        self,
        fetcher: BoundedFetcher,
        settings: AppSettings | None = None,
        *,
        name: str = "primary",
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or AppSettings()
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def url(self) -> str:
        return self._settings.primary_url

    async def fetch_quote(self) -> Quote:
        data = await fetch_json_payload(
            self._fetcher,
            self.url,
            source=self._name,
            timeout=self._settings.fetch_timeout_seconds,
        )
        return decode_quotable_payload(
            data,
            unknown_author=self._settings.unknown_author,
            source=self._name,
        )
