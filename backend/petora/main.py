"""
Petora Backend - FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds settings, the MongoDB wrapper and
       the service bundle, keeps them on `app.state`, then registers
       middleware, exception handlers, routes and the uploads mount.
Who:   uvicorn (`uvicorn petora.main:app`) or the `petora` console script.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:  Request Context → GZip → CORS              │
    │                                                          │
    │  Routes:                                                 │
    │    /api/auth  /api/shelters  /api/pets  /api/applications│
    │    /health    /uploads/* (static files)                  │
    │                                                          │
    │  app.state:   settings │ database │ services             │
    │                                                          │
    │  Exception Handlers:                                     │
    │    Validation/Duplicate→400 │ Auth→401 │ Role→403 │      │
    │    NotFound→404 │ Storage/Database/unexpected→500        │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Check security-sensitive settings (warn, do not exit)
    3. Connect to MongoDB and ensure indexes
    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from petora import __version__
from petora.config import Settings, get_settings
from petora.database import MongoDatabase
from petora.exceptions import PetoraError
from petora.middleware import RequestContextMiddleware, request_id_var
from petora.routes import applications, auth, health, pets, shelters
from petora.services import Services

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: 2024-06-10T12:00:00 [INFO] petora.access: GET /api/pets 200 3.1ms [a1b2c3d4] from 127.0.0.1
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request lines come from petora.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: MongoDatabase = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("Petora Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The service still starts; development setups rely on the fallbacks
        logger.warning("%s", str(e))

    await database.connect()
    await database.ensure_indexes()
    logger.info("Upload directory: %s", Path(settings.upload_root).resolve())
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Petora Backend shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every error as {"error", "message", "details", "request_id"}.

    Handler hierarchy:
        PetoraError subclasses  → their own status_code (400/401/403/404/500)
        RequestValidationError  → 400 (malformed body or parameters)
        Exception (fallback)    → 500

    Server-side failures (status 500) keep their context out of the response;
    it is logged instead.
    """

    @app.exception_handler(PetoraError)
    async def handle_petora_error(request: Request, exc: PetoraError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid, type(exc).__name__, exc.message, exc.context,
            )
            details = None
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            details = exc.context or None
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": details,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        violations = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", ""),
            }
            for error in exc.errors()
        ]
        logger.info("[%s] Request validation failed: %s", rid, violations)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": {"violations": violations},
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "details": None,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[MongoDatabase] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; the environment-derived default when omitted.
        database: MongoDB wrapper; built from settings.mongo_uri when omitted.
                  Tests pass one around an in-memory client.
    """
    settings = settings or get_settings()
    database = database or MongoDatabase(
        uri=settings.mongo_uri,
        default_database=settings.mongo_default_database,
        server_selection_timeout_ms=settings.mongo_server_selection_timeout_ms,
    )

    app = FastAPI(
        title="Petora API",
        description="Pet adoption backend: shelters, pets, adoption applications and admin accounts.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.services = Services.build(settings, database)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestContext → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        RequestContextMiddleware,
        quiet_prefixes=("/health", settings.upload_url_prefix),
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(shelters.router)
    app.include_router(pets.router)
    app.include_router(applications.router)
    app.include_router(health.router)

    # MediaService has already created the directory; StaticFiles checks it exists
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_root),
        name="uploads",
    )

    return app


def run() -> None:
    """Console-script entry point: serve the default app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "petora.main:app",
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `petora.main:app` to be importable
app = create_app()
