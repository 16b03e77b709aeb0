"""PriceHub Backend -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricehub import __version__
from pricehub.api.v1.router import api_router
from pricehub.config import settings
from pricehub.core.exceptions import (
    AdapterNotFoundError,
    CriticalOrchestrationError,
    InvalidRequestError,
    PersistenceError,
    PriceHubException,
)
from pricehub.db.session import engine
from pricehub.models import Base
from pricehub.schemas import ErrorDetail, ErrorResponse
from pricehub.scrapers.register_adapters import register_all_adapters
from pricehub.scrapers.utils.browser_manager import get_browser_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting PriceHub API server...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables verified/created")
    except Exception as e:
        # Searches still degrade to uncached scrapes; the write then fails with 500
        logger.error(f"Database init failed: {e}", exc_info=True)

    logger.info("Registering site adapters...")
    register_all_adapters()

    yield

    logger.info("Shutting down PriceHub API server...")

    try:
        await get_browser_manager().stop()
        logger.info("Browser manager stopped")
    except Exception as e:
        logger.warning(f"Error stopping browser manager: {e}")

    await engine.dispose()


app = FastAPI(
    title="PriceHub API",
    description="Multi-marketplace product price comparison API",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


_STATUS_BY_ERROR = {
    InvalidRequestError: 400,
    PersistenceError: 500,
    AdapterNotFoundError: 500,
    CriticalOrchestrationError: 500,
}


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(PriceHubException)
async def pricehub_exception_handler(request: Request, exc: PriceHubException):
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(status_code, exc.code, exc.message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return _error_response(500, CriticalOrchestrationError.code, "An unexpected error occurred")


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "PriceHub API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else None,
        "health": f"{settings.API_PREFIX}/health",
    }
