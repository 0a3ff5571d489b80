"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.exceptions import TradedeskError, ExternalServiceError

from .config import get_settings
from .routes import health, users
from modules.access.routes import router as access_router
from modules.chat.routes import router as chat_router

logger = logging.getLogger(__name__)

# TradedeskError itself falls through to 500
_STATUS_BY_ERROR: list[tuple[type[TradedeskError], int]] = [
    (ExternalServiceError, 503),
]


def status_for_error(exc: TradedeskError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def tradedesk_error_handler(request: Request, exc: TradedeskError) -> JSONResponse:
    """Render module exceptions as ErrorResponse JSON."""
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting Tradedesk API on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info("Shutting down Tradedesk API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Tradedesk API",
        description="Tier access and freemium gating for the trading dashboard",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(TradedeskError, tradedesk_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(access_router, prefix="/api/access", tags=["access"])
    app.include_router(chat_router, prefix="/api/chat", tags=["chat"])

    return app


# Application instance for uvicorn
app = create_app()
