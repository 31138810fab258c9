"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo citas y etapas.
"""

from core.domain.errors import (
    FetchTimeoutError,
    MalformedResponseError,
    NetworkError,
    QuoteError,
    QuoteSourceError,
    UpstreamStatusError,
)
from core.domain.models import UNKNOWN_AUTHOR, FetchResponse, Quote, Resolution, StageOutcome

__all__ = [
    "UNKNOWN_AUTHOR",
    "FetchResponse",
    "FetchTimeoutError",
    "MalformedResponseError",
    "NetworkError",
    "Quote",
    "QuoteError",
    "QuoteSourceError",
    "Resolution",
    "StageOutcome",
    "UpstreamStatusError",
]
