"""
CryptoSignal Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cryptosignal.core.config import settings
from cryptosignal.api.v1 import router as api_v1_router
from cryptosignal.schemas.signals import ApiResponse

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"History window: {settings.history_days} days ({settings.quote_currency})")

    yield

    # Shutdown
    logger.info("Shutting down...")
    from cryptosignal.services.data_ingestion import get_data_ingestion_service
    await get_data_ingestion_service().close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    CryptoSignal Technical Analysis API

    ## Architecture
    - **Data Ingestion**: Fetches daily price/volume history from CoinGecko
    - **Indicator Engine**: RSI, SMA, MACD, volume trend (pure Python/NumPy)
    - **Signal Engine**: Aggregates indicators into one signal with confidence

    ## Core Principles
    - Deterministic: the same history always gives the same report
    - Confidence measures indicator agreement, not probability
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse[None](
        success=False,
        error=message,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Wrap HTTP errors in the standard response envelope."""
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Wrap request body validation errors in the standard response envelope."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first.get('msg', 'Invalid request')}" if location else "Invalid request"
    return _error_response(422, message)


# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "endpoints": [
            {
                "path": "/api/v1/signals/{symbol}",
                "method": "GET",
                "description": "Trading signals for a symbol",
            },
            {
                "path": "/api/v1/signals/analyze",
                "method": "POST",
                "description": "Trading signals for a supplied price series",
            },
        ],
    }
