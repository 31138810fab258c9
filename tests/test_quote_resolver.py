"""Fallback chain: short-circuit, shape tolerance, totality, timeouts."""

from __future__ import annotations

import asyncio
import random
import time

import httpx
import pytest

from adapters.http_client import HttpxBoundedFetcher
from adapters.quote_sources import FALLBACK_QUOTES, QuotableSource, StaticQuotePool, ZenQuotesSource
from core.domain.errors import FetchTimeoutError, NetworkError
from core.domain.models import UNKNOWN_AUTHOR, Quote, StageOutcome
from core.services.quote_resolver import QuoteResolver, ResolverHooks, build_default_resolver
from tests.fakes import (
    PRIMARY_URL,
    SECONDARY_URL,
    FakeSource,
    ScriptedFetcher,
    failing_source,
    hanging_handler,
    json_response,
    raw_response,
    routing_transport,
)


def _resolver(fetcher, settings, rng=None, hooks=None) -> QuoteResolver:
    return QuoteResolver(
        [QuotableSource(fetcher, settings), ZenQuotesSource(fetcher, settings)],
        StaticQuotePool(rng=rng or random.Random(0)),
        hooks=hooks,
    )


def test_primary_success_short_circuits(settings):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: json_response({"content": "X", "author": "Y"}),
            SECONDARY_URL: json_response([{"q": "never", "a": "used"}]),
        }
    )

    quote = asyncio.run(_resolver(fetcher, settings).resolve())

    assert quote == Quote(content="X", author="Y")
    assert fetcher.call_count(SECONDARY_URL) == 0


def test_primary_success_without_author_gets_sentinel(settings):
    fetcher = ScriptedFetcher({PRIMARY_URL: json_response({"content": "X"})})

    quote = asyncio.run(_resolver(fetcher, settings).resolve())

    assert quote == Quote(content="X", author=UNKNOWN_AUTHOR)


@pytest.mark.parametrize(
    "payload",
    [[{"q": "A", "a": "B"}], [{"text": "A", "author": "B"}]],
)
def test_secondary_shape_tolerance(settings, payload):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: json_response({}, status=500),
            SECONDARY_URL: json_response(payload),
        }
    )

    quote = asyncio.run(_resolver(fetcher, settings).resolve())

    assert quote == Quote(content="A", author="B")


def test_both_providers_fail_returns_static_member(settings):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: "hang",
            SECONDARY_URL: json_response({"error": "down"}, status=500),
        }
    )

    resolution = asyncio.run(_resolver(fetcher, settings).resolve_with_trace())

    assert resolution.quote in FALLBACK_QUOTES
    assert resolution.source == "static"
    assert resolution.used_fallback
    assert [o.stage for o in resolution.outcomes] == ["primary", "secondary", "static"]
    assert [o.error_kind for o in resolution.outcomes] == ["timeout", "http_status", None]


def test_primary_timeout_then_secondary_scenario(settings):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: "hang",
            SECONDARY_URL: json_response([{"q": "Live fast"}]),
        }
    )

    quote = asyncio.run(_resolver(fetcher, settings).resolve())

    assert quote == Quote(content="Live fast", author=UNKNOWN_AUTHOR)
    assert fetcher.call_count(SECONDARY_URL) == 1


def test_timeout_isolation_with_real_fetcher(settings):
    """A hanging primary costs at most its own bound; secondary still runs."""

    transport = routing_transport(
        {
            PRIMARY_URL: hanging_handler,
            SECONDARY_URL: lambda request: httpx.Response(200, json=[{"q": "Live fast"}]),
        }
    )
    resolver = build_default_resolver(settings, transport=transport, rng=random.Random(0))

    started = time.perf_counter()
    resolution = asyncio.run(resolver.resolve_with_trace())
    elapsed = time.perf_counter() - started

    assert resolution.quote == Quote(content="Live fast", author=UNKNOWN_AUTHOR)
    assert resolution.outcomes[0].error_kind == "timeout"
    assert elapsed < 2 * settings.fetch_timeout_seconds + 1.5


def test_both_hanging_is_bounded_by_two_timeouts(settings):
    transport = routing_transport({PRIMARY_URL: hanging_handler, SECONDARY_URL: hanging_handler})
    resolver = QuoteResolver(
        [
            QuotableSource(HttpxBoundedFetcher(settings, transport=transport), settings),
            ZenQuotesSource(HttpxBoundedFetcher(settings, transport=transport), settings),
        ]
    )

    started = time.perf_counter()
    quote = asyncio.run(resolver.resolve())
    elapsed = time.perf_counter() - started

    assert quote in FALLBACK_QUOTES
    assert elapsed < 2 * settings.fetch_timeout_seconds + 1.5


BAD_ACTIONS = [
    NetworkError("connection refused"),
    FetchTimeoutError("aborted"),
    RuntimeError("unexpected bug"),
    raw_response(b"{garbled"),
    raw_response(b""),
    json_response([]),
    json_response({}),
    json_response([{}]),
    json_response(None),
    json_response({"content": "x"}, status=404),
]


@pytest.mark.parametrize("primary", BAD_ACTIONS)
@pytest.mark.parametrize("secondary", BAD_ACTIONS)
def test_no_exception_escapes(settings, primary, secondary):
    fetcher = ScriptedFetcher({PRIMARY_URL: primary, SECONDARY_URL: secondary})

    quote = asyncio.run(_resolver(fetcher, settings).resolve())

    assert quote in FALLBACK_QUOTES
    assert quote.content and quote.author
    assert fetcher.calls == [PRIMARY_URL, SECONDARY_URL]


def test_empty_array_from_secondary_falls_through(settings):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: json_response({"content": ""}),
            SECONDARY_URL: json_response([]),
        }
    )

    resolution = asyncio.run(_resolver(fetcher, settings).resolve_with_trace())

    assert resolution.source == "static"
    assert [o.error_kind for o in resolution.outcomes[:2]] == ["malformed", "malformed"]


def test_source_returning_non_quote_is_a_failure():
    resolver = QuoteResolver([FakeSource("weird", {"content": "dict, not Quote"})])

    resolution = asyncio.run(resolver.resolve_with_trace())

    assert resolution.source == "static"
    assert resolution.outcomes[0].error_kind == "malformed"


def test_generic_sources_run_in_order_and_stop_at_first_success():
    first = failing_source("first")
    second = FakeSource("second", Quote(content="from second", author="B"))
    third = FakeSource("third", Quote(content="from third", author="C"))

    resolution = asyncio.run(QuoteResolver([first, second, third]).resolve_with_trace())

    assert resolution.quote.content == "from second"
    assert resolution.source == "second"
    assert (first.call_count, second.call_count, third.call_count) == (1, 1, 0)


def test_hooks_observe_stage_transitions():
    events: list[tuple[str, str]] = []
    hooks = ResolverHooks(
        stage_start=lambda stage: events.append(("start", stage)),
        stage_failed=lambda outcome: events.append(("failed", outcome.stage)),
        stage_succeeded=lambda outcome: events.append(("ok", outcome.stage)),
        fallback_used=lambda quote: events.append(("fallback", quote.author)),
    )
    resolver = QuoteResolver(
        [failing_source("primary"), failing_source("secondary")],
        StaticQuotePool([Quote(content="static", author="Pool")]),
        hooks=hooks,
    )

    asyncio.run(resolver.resolve())

    assert events == [
        ("start", "primary"),
        ("failed", "primary"),
        ("start", "secondary"),
        ("failed", "secondary"),
        ("fallback", "Pool"),
    ]


def test_raising_hook_does_not_break_resolution():
    def explode(_: StageOutcome) -> None:
        raise RuntimeError("hook bug")

    resolver = QuoteResolver(
        [FakeSource("primary", Quote(content="fine", author="A"))],
        hooks=ResolverHooks(stage_succeeded=explode),
    )

    assert asyncio.run(resolver.resolve()) == Quote(content="fine", author="A")


def test_failures_are_logged_as_warnings(caplog):
    resolver = QuoteResolver([failing_source("primary", "upstream exploded")])

    with caplog.at_level("INFO", logger="core.services.quote_resolver"):
        asyncio.run(resolver.resolve())

    messages = [(r.levelname, r.getMessage()) for r in caplog.records]
    assert any(level == "WARNING" and "upstream exploded" in msg for level, msg in messages)
    assert any(level == "INFO" and "static pool" in msg for level, msg in messages)


def test_concurrent_resolutions_are_independent(settings):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: json_response({"content": "shared", "author": "A"}),
            SECONDARY_URL: json_response([{"q": "unused"}]),
        }
    )
    resolver = _resolver(fetcher, settings)

    async def many():
        return await asyncio.gather(*(resolver.resolve() for _ in range(20)))

    quotes = asyncio.run(many())

    assert all(q == Quote(content="shared", author="A") for q in quotes)
    assert fetcher.call_count(SECONDARY_URL) == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"content": "X", "author": "A" * 300},
        {"content": "C" * 10_001, "author": "Long Winded"},
    ],
)
def test_long_primary_fields_still_short_circuit(settings, payload):
    fetcher = ScriptedFetcher(
        {
            PRIMARY_URL: json_response(payload),
            SECONDARY_URL: json_response([{"q": "never", "a": "used"}]),
        }
    )

    resolution = asyncio.run(_resolver(fetcher, settings).resolve_with_trace())

    assert resolution.source == "primary"
    assert resolution.quote == Quote(content=payload["content"], author=payload["author"])
    assert fetcher.call_count(SECONDARY_URL) == 0
