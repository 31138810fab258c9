"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el resolver depende de abstracciones.
"""

from core.interfaces.fetcher import BoundedFetcher
from core.interfaces.quote_source import QuoteSource

__all__ = ["BoundedFetcher", "QuoteSource"]
