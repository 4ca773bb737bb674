"""
Revision Relay — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       lifespan() validates configuration and builds the relay container.
Who:   uvicorn (`revision_relay.main:app`) and `python -m revision_relay`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌─────────────┐  │
    │  │ Req ID   │→│ Logging │→│ GZip │→│ CORS (all)  │  │
    │  └──────────┘ └─────────┘ └──────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────┐ ┌──────────────┐ ┌────────┐  │
    │  │ POST generate-sum │ │ POST upload  │ │ /health│  │
    │  └───────────────────┘ └──────────────┘ └────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration; a missing GEMINI_API_KEY aborts startup
    3. Load storage credentials and build providers and relays
       (skipped when a container was already assigned, e.g. in tests)

    Shutdown:
    1. Log shutdown; providers hold no resources that need closing
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

from revision_relay import __version__
from revision_relay.config import settings
from revision_relay.dependencies import build_container
from revision_relay.exceptions import ConfigurationError
from revision_relay.middleware.logging import RequestLoggingMiddleware
from revision_relay.middleware.request_id import RequestIDMiddleware, request_id_var
from revision_relay.routes import health, summary, upload

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Une erreur inattendue est survenue."
INVALID_REQUEST_MESSAGE = "Requête invalide."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
    Called once at startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: validate settings and build the relay container.
    Shutdown: log only.

    Raises:
        ConfigurationError: Missing API key or storage credentials. Starlette
            reports the startup failure and uvicorn exits without serving.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Revision Relay %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise ConfigurationError(message=str(e)) from e

    if getattr(app.state, "container", None) is None:
        try:
            app.state.container = await build_container(settings)
        except ConfigurationError as e:
            logger.critical("Configuration error: %s | Context: %s", e.message, e.context)
            raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Revision Relay shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Relay failures are mapped in the routes (routes/errors.py). The global
    handlers cover what never reaches a relay, with the same `{"error": ...}`
    shape:

        RequestValidationError  → 400 Bad Request (malformed or mistyped body)
        Exception (fallback)    → 500 Internal Server Error

    Validation details are logged server-side only; they echo caller input.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] Invalid request on %s: %s",
            rid,
            request.url.path,
            "; ".join(
                f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
                for err in exc.errors()
            ),
        )
        return JSONResponse(
            status_code=400,
            content={"error": INVALID_REQUEST_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error on %s: %s",
            rid,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"error": UNEXPECTED_ERROR_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    The relay container is attached during the lifespan. Callers that do not
    run the lifespan (ASGI test transports) assign `app.state.container`
    themselves.
    """
    app = FastAPI(
        title="Revision Relay API",
        description=(
            "Generates HTML revision sheets from student course notes with "
            "Google Gemini, and publishes uploaded files to object storage."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.container = None

    # ── Register Middleware ───────────────────────────────────────────────
    # Executed in reverse order of addition: RequestID → Logging → GZip → CORS

    # Cross-origin requests are accepted from anywhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(summary.router)
    app.include_router(upload.router)
    app.include_router(health.router)

    return app


app = create_app()
