"""`GET /api/quotes`: una cita aleatoria, siempre con status 200.

El fallback al pool estático garantiza la respuesta aunque los proveedores
fallen; solo un error interno inesperado produce un 500.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from adapters.json_exporter import quote_payload
from core.services.quote_resolver import QuoteResolver

router = APIRouter()

NO_STORE = {"Cache-Control": "no-store"}


def get_resolver(request: Request) -> QuoteResolver:
    return request.app.state.resolver


@router.get("/api/quotes")
async def get_quote(resolver: QuoteResolver = Depends(get_resolver)) -> JSONResponse:
    quote = await resolver.resolve()
    return JSONResponse(content=quote_payload(quote), headers=NO_STORE)


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}
