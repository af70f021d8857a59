"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.dl_common.database import async_session_factory, engine
from src.dl_common.errors import AppError
from src.dl_common.response import error_response
from src.dl_dividend.api.router import router as dividend_router
from src.dl_engine.application.runtime import get_runtime
from src.dl_gateway.middleware.request_log import RequestLogMiddleware
from src.dl_ledger.api.router import router as ledger_router
from src.dl_reserve.api.router import router as reserve_router
from src.dl_staking.api.router import router as staking_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build the ledger runtime, replay the audit DB into it. Shutdown: dispose."""
    runtime = get_runtime()
    if settings.PERSIST_EVENTS:
        async with async_session_factory() as db:
            replayed = await runtime.rebuild(db)
        logger.info("Rebuilt ledger from %d audit events", replayed)
    logger.info(
        "Ledger %s (%s) ready, owner=%s", runtime.engine.name, runtime.engine.symbol,
        runtime.engine.owner,
    )
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(reserve_router, prefix="/api/v1")
app.include_router(dividend_router, prefix="/api/v1")
app.include_router(staking_router, prefix="/api/v1")
app.include_router(ledger_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
