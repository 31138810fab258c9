"""Error taxonomy for quote retrieval.

Source errors (`QuoteSourceError` and subclasses) never leave the resolver:
they are converted into "advance to the next stage". They exist so that the
trace and the logs can tell a timeout from a garbled body.
"""

from __future__ import annotations


class QuoteError(Exception):
    """Base class for every error raised by this project."""


class QuoteSourceError(QuoteError):
    """A network stage could not produce a usable quote."""

    kind = "error"

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class FetchTimeoutError(QuoteSourceError, TimeoutError):
    """The request was aborted because it exceeded its time budget."""

    kind = "timeout"


class NetworkError(QuoteSourceError):
    """Transport-level failure (DNS, connection refused, reset...)."""

    kind = "network"


class UpstreamStatusError(QuoteSourceError):
    """The provider answered with a non-2xx status."""

    kind = "http_status"

    def __init__(self, status_code: int, *, source: str | None = None) -> None:
        super().__init__(f"HTTP {status_code}", source=source)
        self.status_code = status_code


class MalformedResponseError(QuoteSourceError):
    """Success status but the body is unusable or misses required fields."""

    kind = "malformed"
