"""
CrossPay - cross-chain payment links backend

Main FastAPI application entry point. Persists payment links, payment
attempts and a send/swap transaction ledger for the CrossPay web client.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from crosspay.api import router as api_router
from crosspay.core.config import settings
from crosspay.core.database import close_db, init_db
from crosspay.core.errors import (
    CrossPayError,
    crosspay_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from crosspay.core.security import configure_logging
from crosspay.middleware.request_logging import request_logging_middleware

# Configure logging
configure_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

API_RUNNING_MESSAGE = "Payment Backend API is running"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Supported chains: {settings.supported_chain_ids}")

    logger.info("Initializing database...")
    try:
        await init_db()
        logger.info("✓ Database initialized successfully")
    except Exception as e:
        logger.warning(f"⚠ Database initialization failed: {e}")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("All connections closed")


app = FastAPI(
    title=settings.app_name,
    description="""
## Cross-chain payment links

CrossPay lets a wallet request a test-token payment from a specific
recipient across two testnets, settled by the OnlySwaps router.

### Key Features

- **Payment links**: shareable, expiring requests bound to one recipient
- **Attempt tracking**: every on-chain try is recorded; a success marks the link paid
- **Derived status**: pending, completed, expired or failed, computed at read time
- **Transaction ledger**: direct sends and same-owner swaps per wallet

All responses use the envelope `{"success": true, "data": ...}` or
`{"success": false, "error": ..., "details": ...}`.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(request_logging_middleware)


# Global exception handlers
app.add_exception_handler(CrossPayError, crosspay_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get(
    "/",
    tags=["Root"],
    summary="API root",
    include_in_schema=False,
)
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {"success": True, "message": API_RUNNING_MESSAGE}


@app.get(
    "/health",
    tags=["Health"],
    summary="Health check",
    response_description="Application health status",
)
@app.get(
    "/api/health",
    tags=["Health"],
    summary="Health check",
    response_description="Application health status",
)
async def health_check() -> dict[str, Any]:
    """
    Check application health status.

    Returns basic health information including version and environment.
    """
    return {
        "success": True,
        "message": API_RUNNING_MESSAGE,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
    }


app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "crosspay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
