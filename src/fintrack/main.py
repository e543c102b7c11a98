"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fintrack.config.settings import get_settings
from fintrack.config.logging_config import setup_logging
from fintrack.repositories.sqlalchemy.database import init_db
from fintrack.api.deps import close_market_provider
from fintrack.api.routers import (
    portfolios_router,
    watchlists_router,
    stocks_router,
    news_router,
    admin_router,
)
from fintrack.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    settings = get_settings()
    if settings.storage_backend == "sqlalchemy":
        init_db()
    logger.info(
        "%s started (storage=%s, market data=%s)",
        settings.app_name,
        settings.storage_backend,
        settings.market_data_provider,
    )
    yield
    # Shutdown
    await close_market_provider()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Stock portfolio tracking, valuation and market data",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolios_router)
app.include_router(watchlists_router)
app.include_router(stocks_router)
app.include_router(news_router)
app.include_router(admin_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
