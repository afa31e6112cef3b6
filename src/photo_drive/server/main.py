"""HTTP application factory and wiring."""

import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google.oauth2.credentials import Credentials
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..auth.google_auth import GoogleIdentityProvider, IdentityProvider
from ..auth.session_store import SessionStore
from ..client import DriveGateway, create_drive_gateway
from ..core.config import AppConfig, get_config
from . import auth_routes, file_routes, upload_routes

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


async def _render_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render request-level errors as ``{"message": ...}``."""
    return JSONResponse(
        {"message": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _render_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render parameter validation failures as 400 ``{"message": ...}``."""
    fields = ", ".join(
        ".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()
    )
    logger.info(f"Rejected invalid {request.method} {request.url.path}: {fields}")
    return JSONResponse({"message": f"Invalid request: {fields}"}, status_code=400)


def create_app(
    config: Optional[AppConfig] = None,
    identity_provider: Optional[IdentityProvider] = None,
    session_store: Optional[SessionStore] = None,
    gateway_factory: Optional[Callable[[Credentials], DriveGateway]] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings; defaults to the process-wide configuration.
        identity_provider: OAuth provider; defaults to Google.
        session_store: Session storage; defaults to a fresh in-memory store.
        gateway_factory: Builds a Drive Gateway from a Credential Set.

    Returns:
        The configured application.
    """
    config = config or get_config()

    app = FastAPI(title="Photo Drive")
    app.state.config = config
    app.state.identity_provider = identity_provider or GoogleIdentityProvider(config)
    app.state.session_store = session_store or SessionStore()
    app.state.gateway_factory = gateway_factory or create_drive_gateway

    allow_all = config.cors_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _render_http_exception)
    app.add_exception_handler(RequestValidationError, _render_validation_error)

    app.include_router(auth_routes.router, prefix=API_PREFIX)
    app.include_router(upload_routes.router, prefix=API_PREFIX)
    app.include_router(file_routes.router, prefix=API_PREFIX)

    logger.debug(f"Application created: {config.get_environment_summary()}")
    return app
