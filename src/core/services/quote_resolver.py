"""Quote resolution with ordered fallback.

The resolver walks an ordered list of network sources (primary, then
secondary) and returns the first usable quote. Every failure at a network
stage (timeout, transport error, bad status, garbled body, missing field or
anything unexpected) is recorded and turned into "try the next stage". When
no network stage succeeds, a quote is drawn from the static pool, which
cannot fail. `resolve()` therefore always returns a `Quote`.

Side-effects (printing, progress) stay out of here: callers observe stage
transitions through `ResolverHooks` and the module logger.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import httpx

from adapters.http_client import HttpxBoundedFetcher
from adapters.quote_sources import QuotableSource, StaticQuotePool, ZenQuotesSource
from core.config import AppSettings
from core.domain.errors import MalformedResponseError, QuoteSourceError
from core.domain.models import Quote, Resolution, StageOutcome
from core.interfaces.fetcher import BoundedFetcher
from core.interfaces.quote_source import QuoteSource

logger = logging.getLogger(__name__)

_MAX_ERROR_LEN = 500


@dataclass
class ResolverHooks:
    """Optional callbacks for UI layers (spinners, traces, metrics)."""

    stage_start: Callable[[str], None] | None = None
    stage_failed: Callable[[StageOutcome], None] | None = None
    stage_succeeded: Callable[[StageOutcome], None] | None = None
    fallback_used: Callable[[Quote], None] | None = None


def _emit(hook: Callable[..., None] | None, *args: Any) -> None:
    if hook is None:
        return
    try:
        hook(*args)
    except Exception:
        logger.exception("Resolver hook %r raised; ignoring", hook)


class QuoteResolver:
    """Produce exactly one quote, never failing.

    Stages run strictly in order and each one is attempted once. Instances hold
    no per-call state, so concurrent `resolve()` calls are safe.
    """

    def __init__(
        self,
        sources: Sequence[QuoteSource],
        pool: StaticQuotePool | None = None,
        *,
        hooks: ResolverHooks | None = None,
    ) -> None:
        self._sources = tuple(sources)
        self._pool = pool or StaticQuotePool()
        self._hooks = hooks or ResolverHooks()

    @property
    def sources(self) -> tuple[QuoteSource, ...]:
        return self._sources

    @property
    def pool(self) -> StaticQuotePool:
        return self._pool

    async def resolve(self) -> Quote:
        resolution = await self.resolve_with_trace()
        return resolution.quote

    async def resolve_with_trace(self) -> Resolution:
        """Like `resolve()` but also returns every stage outcome, in order."""

        outcomes: list[StageOutcome] = []
        for source in self._sources:
            outcome = await self._attempt(source)
            outcomes.append(outcome)
            if outcome.quote is not None:
                return Resolution(quote=outcome.quote, source=outcome.stage, outcomes=outcomes)

        quote = self._pool.pick()
        logger.info("All network sources failed; using static pool (%d quotes)", len(self._pool))
        outcomes.append(StageOutcome(stage=self._pool.name, quote=quote))
        _emit(self._hooks.fallback_used, quote)
        return Resolution(quote=quote, source=self._pool.name, outcomes=outcomes)

    async def _attempt(self, source: QuoteSource) -> StageOutcome:
        name = _source_name(source)
        _emit(self._hooks.stage_start, name)
        logger.debug("Trying quote source %s", name)

        started = time.perf_counter()
        try:
            quote = await source.fetch_quote()
            if not isinstance(quote, Quote):
                raise MalformedResponseError(
                    f"source returned {type(quote).__name__}, not a Quote",
                    source=name,
                )
        except QuoteSourceError as exc:
            outcome = StageOutcome(
                stage=name,
                error_kind=exc.kind,
                error=str(exc)[:_MAX_ERROR_LEN],
                elapsed_ms=_elapsed_ms(started),
            )
        except Exception as exc:
            outcome = StageOutcome(
                stage=name,
                error_kind="unexpected",
                error=f"{type(exc).__name__}: {exc}"[:_MAX_ERROR_LEN],
                elapsed_ms=_elapsed_ms(started),
            )
        else:
            outcome = StageOutcome(stage=name, quote=quote, elapsed_ms=_elapsed_ms(started))
            logger.debug("Quote source %s succeeded in %.0f ms", name, outcome.elapsed_ms)
            _emit(self._hooks.stage_succeeded, outcome)
            return outcome

        logger.warning(
            "Quote source %s failed (%s): %s",
            name,
            outcome.error_kind,
            outcome.error,
        )
        _emit(self._hooks.stage_failed, outcome)
        return outcome


def _source_name(source: object) -> str:
    name = getattr(source, "name", None)
    if isinstance(name, str) and name:
        return name
    return source.__class__.__name__.removesuffix("Source").lower() or "source"


def _elapsed_ms(started: float) -> float:
    return max(0.0, (time.perf_counter() - started) * 1000.0)


def build_default_resolver(
    settings: AppSettings | None = None,
    *,
    fetcher: BoundedFetcher | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    rng: random.Random | None = None,
    hooks: ResolverHooks | None = None,
) -> QuoteResolver:
    """Wire primary -> secondary -> static pool from settings."""

    settings = settings or AppSettings()
    fetcher = fetcher or HttpxBoundedFetcher(settings, transport=transport)
    sources: list[QuoteSource] = [
        QuotableSource(fetcher, settings),
        ZenQuotesSource(fetcher, settings),
    ]
    return QuoteResolver(sources, StaticQuotePool(rng=rng), hooks=hooks)
