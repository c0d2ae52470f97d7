"""
FastAPI entrypoint for the Expense Tracker backend application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from expense_tracker.core.config import Settings, settings as default_settings
from expense_tracker.core.exceptions import AppError, ValidationError
from expense_tracker.core.utils import format_error
from expense_tracker.db.init_db import init_db
from expense_tracker.db.session import Database
from expense_tracker.api.router import api_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL to the package loggers; root gets a handler if it has none."""
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger("expense_tracker").setLevel(settings.LOG_LEVEL)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    if field:
        return f"Invalid value for {field}: {first.get('msg')}"
    return first.get("msg") or ValidationError.default_message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=ValidationError.status_code,
            content=format_error(_validation_message(exc))
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error(str(exc.detail)),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=format_error("Internal server error"))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. The database is opened on startup and closed on shutdown."""
    settings = settings or default_settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database.from_settings(settings)
        init_db(database)
        app.state.db = database
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Backend API for personal expense tracking",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "message": f"{settings.APP_NAME} API is running"}

    return app


app = create_app()
