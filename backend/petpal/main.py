"""
PetPal Backend — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn petpal.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌─────────┐ ┌────────┐ ┌─────────┐ ┌──────┐ ┌────────┐  │
    │  │ Session │→│ Req ID │→│ Logging │→│ GZip │→│  CORS  │  │
    │  └─────────┘ └────────┘ └─────────┘ └──────┘ └────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌───────────┐ ┌────────────┐ ┌─────────┐ ┌───────────┐  │
    │  │ /api/pets │ │ /auth/...  │ │ /pets   │ │ /health   │  │
    │  └───────────┘ └────────────┘ └─────────┘ └───────────┘  │
    │                                                          │
    │  Exception Handlers (JSON failure envelope):             │
    │  ValidationError→400 │ NotFound→404 │ Duplicate→409      │
    │  DatabaseError→500   │ Exception→500 / error page        │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → configuration check → log ready
    Shutdown: dispose database engine → log shutdown
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from petpal import __version__
from petpal.config import settings
from petpal.database import dispose_engine
from petpal.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    PetPalError,
    ValidationError,
)
from petpal.middleware.logging import RequestLoggingMiddleware
from petpal.middleware.request_id import RequestIDMiddleware, request_id_var
from petpal.routes import api, auth, health, pages, pets
from petpal.templating import STATIC_DIR, templates

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("PetPal Backend %s starting up...", __version__)

    # Not fatal: the server still serves pages and health checks
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("PetPal Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_envelope(
    status_code: int,
    error: str,
    message: str,
    details: dict = None,
    headers: dict = None,
) -> JSONResponse:
    content = {
        "success": False,
        "message": message,
        "error": error,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the failure envelope.

    Handler hierarchy:
        ValidationError         → 400
        RequestValidationError  → 400 (malformed body / query parameters)
        NotFoundError           → 404
        DuplicateError          → 409
        DatabaseError           → 500 (generic message, details logged)
        PetPalError (base)      → 500
        Exception (fallback)    → 500 JSON for /api, error page for web paths

    Responses never carry stack traces or driver messages.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_envelope(400, "validation_error", exc.message, details=exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        problems = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        message = "Invalid request: " + "; ".join(problems) if problems else "Invalid request"
        logger.warning("[%s] %s", request_id_var.get(""), message)
        return _error_envelope(400, "validation_error", message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_envelope(404, "not_found", exc.message)

    @app.exception_handler(DuplicateError)
    async def handle_duplicate(request: Request, exc: DuplicateError):
        return _error_envelope(409, "duplicate", exc.message, details=exc.context)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_envelope(500, "server_error", exc.message)

    @app.exception_handler(PetPalError)
    async def handle_app_error(request: Request, exc: PetPalError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_envelope(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        if _is_api_request(request):
            return _error_envelope(
                500,
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            )
        return templates.TemplateResponse(
            request,
            "error.html",
            {"title": "Error", "message": "Something went wrong. Please try again."},
            status_code=500,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition, so the order below
    yields: Session → RequestID → Logging → GZip → CORS → routes.
    """
    app = FastAPI(
        title="PetPal API",
        description=(
            "Virtual pet manager. JSON API for pet CRUD and filtering, plus "
            "session-based web pages for adopting and caring for your pets."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age,
        same_site="lax",
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(api.router)
    app.include_router(auth.router)
    app.include_router(pets.router)
    app.include_router(pages.router)
    app.include_router(health.router)

    return app


# uvicorn expects `petpal.main:app` to be importable
app = create_app()
