"""
api/main.py — FastAPI entry point.

Lifespan:
  - Builds the stateless adapters once (EquationParser)
  - Nothing to release on shutdown; every request owns its bindings

Errors: every CalcError becomes HTTP 400 with its message and error code.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.equation_parser.precedence_parser import PrecedenceEquationParser
from api.routers import evaluate, parse
from api.schemas import ErrorResponse, HealthResponse
from config import Settings
from errors import CalcError

logger = logging.getLogger("termcalc.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    app.state.equation_parser = PrecedenceEquationParser(max_digits=settings.decimal_precision)
    logger.info("TermCalc API ready.")
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(parse.router)
    app.include_router(evaluate.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    # Global error handler
    @app.exception_handler(CalcError)
    async def calc_error_handler(request: Request, exc: CalcError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        body = ErrorResponse(detail=exc.message, code=exc.code)
        return JSONResponse(status_code=400, content=body.model_dump())

    return app


app = create_app()
