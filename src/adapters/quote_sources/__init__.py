"""Fuentes de citas (etapas concretas de la cadena de fallback).

Por qué un paquete:
- Agrupa un módulo por proveedor, cada uno con su forma de respuesta.
- Cada fuente de red implementa `core.interfaces.quote_source.QuoteSource`.
"""

from adapters.quote_sources.primary import QuotableSource, decode_quotable_payload
from adapters.quote_sources.secondary import ZenQuotesSource, decode_zenquotes_payload
from adapters.quote_sources.static_pool import FALLBACK_QUOTES, StaticQuotePool

__all__ = [
	"FALLBACK_QUOTES",
	"QuotableSource",
	"StaticQuotePool",
	"ZenQuotesSource",
	"decode_quotable_payload",
	"decode_zenquotes_payload",
]
