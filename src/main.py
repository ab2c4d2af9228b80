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
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.am_agent.api.router import router as agent_router
from src.am_common.database import engine
from src.am_common.errors import AppError
from src.am_common.redis_client import close_redis, get_redis
from src.am_common.response import error_response
from src.am_gateway.middleware.request_log import RequestLogMiddleware
from src.am_listing.api.router import router as listing_router
from src.am_order.api.router import router as order_router
from src.am_settlement.api.payments_router import router as payments_router
from src.am_settlement.api.transactions_router import router as transactions_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    logger.info("%s started (fee=%s%%)", settings.APP_NAME, settings.PLATFORM_FEE_PERCENT)
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _envelope(
    request: Request, status_code: int, message: str, code: int | None, data=None
) -> JSONResponse:
    resp = error_response(message, code)
    resp.data = data
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=status_code, content=resp.model_dump(by_alias=True))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("Unhandled application error %d: %s", exc.code, exc.message)
    return _envelope(request, exc.http_status, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return _envelope(request, 400, "Validation failed", 400, data=details)


app.include_router(agent_router, prefix="/api")
app.include_router(listing_router, prefix="/api")
app.include_router(order_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
