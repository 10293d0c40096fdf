"""
DevConnector Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` builds the settings, MongoDB handle, HTTP client and
       services, stores them on `app.state`, registers middleware, exception
       handlers and routers, and returns the app.
Who:   Called by uvicorn (`uvicorn devconnector.main:app`) and by tests,
       which pass their own settings and an in-memory database.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware:  Request ID → Access log → GZip → CORS     │
    │                                                         │
    │  Routes:      /api/auth  /api/users  /api/profile       │
    │               /api/posts  /health                       │
    │                                                         │
    │  Exception handlers:                                    │
    │    DevConnectorError → its status / error code          │
    │    request validation → 400   PyMongoError → 500        │
    │    anything else → 500                                  │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, MongoDB indexes
    Shutdown: close the GitHub HTTP client and the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from devconnector import __version__
from devconnector.config import Settings, get_settings
from devconnector.database import Database
from devconnector.exceptions import (
    DevConnectorError,
    ProfileRequiredError,
    ValidationError,
)
from devconnector.middleware.logging import RequestLoggingMiddleware
from devconnector.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from devconnector.routes import auth, health, posts, profile, users
from devconnector.security import TokenService
from devconnector.services.auth_service import AuthService
from devconnector.services.github_service import GitHubService
from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configures root logging for the process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Driver and HTTP client loggers are lowered to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for noisy in ("uvicorn.access", "pymongo", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("DevConnector backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; the problems are logged for the operator
        logger.error("Configuration error: %s", str(e))

    await database.ensure_indexes()
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("DevConnector backend shutting down...")
    await app.state.http_client.aclose()
    database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    """
    The id of the current request.

    The catch-all handler runs outside RequestIDMiddleware, after the
    ContextVar has been reset, so the id is read back from request state.
    """
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_body(
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": request_id if request_id is not None else request_id_var.get(""),
    }
    if details is not None:
        body["details"] = details
    return body


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """Flattens pydantic errors into [{field, msg}] with our own messages."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        msg = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.append({"field": ".".join(loc) or "body", "msg": msg})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Maps exceptions to the JSON error envelope.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400 with field errors
        ProfileRequiredError                     → 500, generic message
        DevConnectorError (base)                 → exc.status_code
        PyMongoError                             → 500
        Exception (fallback)                     → 500

    Internal details (driver errors, stack traces) are only logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message, {"errors": exc.errors}),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        message = errors[0]["msg"] if errors else "Validation failed"
        logger.info("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return JSONResponse(
            status_code=400,
            content=_error_body(ValidationError.error_code, message, {"errors": errors}),
        )

    @app.exception_handler(ProfileRequiredError)
    async def handle_server_error(request: Request, exc: DevConnectorError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(exc.error_code, "Server error"),
        )

    @app.exception_handler(DevConnectorError)
    async def handle_app_error(request: Request, exc: DevConnectorError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message),
        )

    @app.exception_handler(PyMongoError)
    async def handle_mongo_error(request: Request, exc: PyMongoError):
        logger.error("[%s] MongoDB error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "Server error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
                request_id=rid,
            ),
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:    Defaults to `get_settings()` (environment / .env)
        database:    Defaults to a motor-backed `Database` for settings.mongo_uri
        http_client: Client for the GitHub proxy; defaults to a new AsyncClient
    """
    settings = settings or get_settings()
    database = database or Database(settings)
    http_client = http_client or httpx.AsyncClient()

    app = FastAPI(
        title="DevConnector API",
        description="Developer profiles, posts and comments.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Shared state ──────────────────────────────────────────────────────
    tokens = TokenService(settings)
    app.state.settings = settings
    app.state.database = database
    app.state.http_client = http_client
    app.state.token_service = tokens
    app.state.auth_service = AuthService(database, tokens)
    app.state.user_service = UserService(settings, database, tokens)
    app.state.profile_service = ProfileService(database)
    app.state.github_service = GitHubService(settings, http_client)
    app.state.post_service = PostService(database)

    # ── Middleware (last added runs first) ────────────────────────────────
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

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(profile.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


app = create_app()
