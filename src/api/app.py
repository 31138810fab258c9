"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.routes import quotes_router
from core.config import AppSettings
from core.services.quote_resolver import QuoteResolver, build_default_resolver

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings | None = None,
    resolver: QuoteResolver | None = None,
) -> FastAPI:
    settings = settings or AppSettings()

    app = FastAPI(title="daily-quote", version="0.1.0")
    app.state.settings = settings
    app.state.resolver = resolver or build_default_resolver(settings)
    app.include_router(quotes_router)

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal error while preparing the quote."},
        )

    return app


app = create_app()
