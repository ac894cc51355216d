"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from brokerage.app_context import AppContext
from brokerage.config.settings import get_settings
from brokerage.config.logging_config import setup_logging
from brokerage.api.routers import (
    trading_router,
    wallet_router,
    portfolio_router,
    transactions_router,
)
from brokerage.core.exceptions import AppError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    content = {"success": False, "error": code, "message": message}
    content.update(details or {})
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the application around an AppContext.

    The context is opened on startup and closed on shutdown.
    """
    context = context or AppContext()
    settings = context.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        setup_logging(settings)
        context.open()
        yield
        context.close()

    app = FastAPI(
        title=settings.app_name,
        description="Simulated brokerage account: wallet, positions and transaction ledger",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.context = context

    app.include_router(trading_router)
    app.include_router(wallet_router)
    app.include_router(portfolio_router)
    app.include_router(transactions_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Render malformed requests in the same shape as service rejections."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else "Invalid request"
        return _error_response(422, "VALIDATION_ERROR", message, {"errors": errors})

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

    return app


app = create_app(AppContext(get_settings()))
