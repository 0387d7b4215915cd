"""
FastAPI entrypoint for the Todo backend application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import Settings, settings as default_settings
from app.core.errors import StoreUnavailable, TodoError
from app.core.logging_setup import setup_logging
from app.core.utils import format_error, utcnow
from app.api.router import api_router
from app.stores import build_store_provider

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI, debug: bool) -> None:
    """Map domain errors to status codes; never leak internals unless DEBUG."""

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError):
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        if isinstance(exc, StoreUnavailable):
            logger.error("Store unavailable on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error(exc.message),
            headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error("Invalid request", details)
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error("Internal server error", str(exc) if debug else None)
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        app.state.store_provider.close()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with the store backend named in settings."""
    app_settings = app_settings or default_settings
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Backend API for a multi-user to-do list",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = app_settings
    app.state.store_provider = build_store_provider(app_settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_exception_handlers(app, app_settings.DEBUG)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "Todo API is running", "timestamp": utcnow().isoformat()}

    @app.get("/api")
    async def api_status():
        """API status endpoint."""
        return {"status": "OK", "message": "Todo API is working", "version": app.version}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "store": app.state.store_provider.name}

    return app


app = create_app()
