"""Request-scoped dependencies shared by the route modules."""

import logging
from typing import Optional

from fastapi import HTTPException, Request

from ..auth.session_store import SessionContext, SessionStore
from ..client import DriveGateway
from ..core.config import AppConfig
from ..utils.constants import SESSION_COOKIE_NAME, SESSION_HEADER_NAME

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized: Please log in first."


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def extract_session_token(request: Request) -> Optional[str]:
    """
    Read the session token from the request.

    Checked in order: ``Authorization: Bearer``, the session header, the cookie.
    """
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()

    header_token = request.headers.get(SESSION_HEADER_NAME)
    if header_token:
        return header_token.strip()

    return request.cookies.get(SESSION_COOKIE_NAME)


def require_session(request: Request) -> SessionContext:
    """
    Resolve the caller's session or reject the request with 401.

    Raises:
        HTTPException: 401 when no live session matches the request.
    """
    session = get_session_store(request).get_session(extract_session_token(request))
    if session is None:
        logger.info(f"Rejected unauthenticated {request.method} {request.url.path}")
        raise HTTPException(status_code=401, detail=UNAUTHORIZED_MESSAGE)
    return session


def drive_gateway_for(request: Request, session: SessionContext) -> DriveGateway:
    """Build a Drive Gateway bound to the session's credentials."""
    return request.app.state.gateway_factory(session.credentials)
