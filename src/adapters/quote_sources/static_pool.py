"""Pool estático de citas (última etapa, infalible)."""

from __future__ import annotations

import random
from typing import Iterable, Iterator

from core.domain.models import Quote

FALLBACK_QUOTES: tuple[Quote, ...] = (
    Quote(content="Persistence is the path to success.", author="Charlie Chaplin"),
    Quote(
        content="The only way to do great work is to love what you do.",
        author="Steve Jobs",
    ),
    Quote(
        content="Success is the sum of small efforts, repeated day in and day out.",
        author="Robert Collier",
    ),
    Quote(
        content=(
            "Don't wait for extraordinary opportunities. "
            "Seize common occasions and make them great."
        ),
        author="Orison Swett Marden",
    ),
    Quote(
        content="The future belongs to those who believe in the beauty of their dreams.",
        author="Eleanor Roosevelt",
    ),
)


class StaticQuotePool:
    """Selección uniforme sobre un conjunto fijo de citas.

    El pool se congela al construir y nunca se muta; un pool vacío se rechaza
    aquí para que `pick()` no pueda fallar.
    """

    name = "static"

    def __init__(
        self,
        quotes: Iterable[Quote] = FALLBACK_QUOTES,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._quotes = tuple(quotes)
        if not self._quotes:
            raise ValueError("static quote pool must not be empty")
        self._rng = rng or random.Random()

    def pick(self) -> Quote:
        return self._rng.choice(self._quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(self._quotes)

    def __contains__(self, quote: object) -> bool:
        return quote in self._quotes
