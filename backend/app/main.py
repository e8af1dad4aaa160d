"""
Vidly Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  /api/genres  /api/customers  /api/movies           │
    │  /api/users   /api/rentals    /api/auth   /health   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 400 validation │ 401/403 auth │ 404 │ 500 DB │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    AuthenticationError,
    BusinessRuleError,
    DatabaseError,
    InvalidTokenError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    VidlyError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, customers, genres, health, movies, rentals, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Structured Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before any other initialization.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # These log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, validate critical settings.
    Shutdown: dispose the database engine (close all pooled connections).
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Vidly Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: reads still work, and the log tells the operator
        # why token-protected routes are insecure
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Vidly Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _format_validation_errors(exc: RequestValidationError) -> list:
    """
    Turns pydantic's error list into readable, ordered messages.

    ("body", "title") + "String should have at least 5 characters"
        → '"title" String should have at least 5 characters'
    """
    messages = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        messages.append(f'"{field}" {error["msg"]}' if field else error["msg"])
    return messages


def _error_response(status_code: int, error: str, message: str, details: dict = None) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


# Application exceptions that map straight to a status and error code.
# Most specific first: BusinessRuleError subclasses ValidationError.
_STATUS_BY_EXCEPTION = (
    (InvalidTokenError, 400, "invalid_token"),
    (AuthenticationError, 401, "unauthorized"),
    (PermissionDeniedError, 403, "forbidden"),
    (NotFoundError, 404, "not_found"),
)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 validation_error (body failed its schema)
        BusinessRuleError       → 400 business_rule_violation
        ValidationError         → 400 validation_error
        InvalidTokenError       → 400 invalid_token
        AuthenticationError     → 401 unauthorized
        PermissionDeniedError   → 403 forbidden
        NotFoundError           → 404 not_found
        DatabaseError           → 500 server_error (generic message)
        VidlyError (base)       → 500 server_error
        Exception (fallback)    → 500 internal_server_error

    Security: handlers NEVER expose stack traces or SQL in the response.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body failed its schema: 400 with the first violation up front."""
        messages = _format_validation_errors(exc)
        logger.warning(
            "[%s] Request validation failed: %s",
            request_id_var.get(""),
            messages[0] if messages else "",
        )
        return _error_response(
            400,
            "validation_error",
            messages[0] if messages else "Validation failed",
            {"errors": messages},
        )

    @app.exception_handler(BusinessRuleError)
    async def handle_business_rule(request: Request, exc: BusinessRuleError):
        return _error_response(
            400,
            "business_rule_violation",
            exc.message,
            {"field": exc.field} if exc.field else None,
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input: say which field and why."""
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        details = {"errors": exc.errors}
        if exc.field:
            details["field"] = exc.field
        return _error_response(400, "validation_error", exc.message, details)

    for exc_class, status_code, error in _STATUS_BY_EXCEPTION:
        app.add_exception_handler(exc_class, _make_handler(status_code, error))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; details are logged server-side."""
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(
            500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(VidlyError)
    async def handle_app_error(request: Request, exc: VidlyError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Security: stack trace is logged server-side ONLY (never in response).
        """
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


def _make_handler(status_code: int, error: str):
    async def handler(request: Request, exc: VidlyError) -> JSONResponse:
        logger.info("[%s] %s: %s %s", request_id_var.get(""), error, exc.message, exc.context)
        return _error_response(status_code, error, exc.message)

    return handler


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Why factory (not module-level app):
        Tests build a fresh instance per test, with dependency overrides,
        without touching the module-level `app` uvicorn serves.
    """
    app = FastAPI(
        title="Vidly API",
        description="Genres, movies, customers, users and rentals for a video rental store.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            settings.auth_header,
        ],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)

    # Added last so it runs first and the logger sees the request id
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(genres.router)
    app.include_router(customers.router)
    app.include_router(movies.router)
    app.include_router(users.router)
    app.include_router(rentals.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
