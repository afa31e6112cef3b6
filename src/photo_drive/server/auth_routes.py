"""Authentication routes: login redirect and OAuth callback."""

import asyncio
import json
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from ..utils.constants import OAUTH_STATE_TTL_SECONDS, SESSION_COOKIE_NAME
from ..utils.errors import PhotoDriveError, format_error
from .dependencies import get_app_config, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth/google", tags=["auth"])


@router.get("")
def begin_auth(request: Request) -> Response:
    """Redirect the browser to Google's consent screen."""
    try:
        auth_url, state, code_verifier = request.app.state.identity_provider.authorization_url()
    except PhotoDriveError as e:
        logger.error(format_error("Start authentication", e))
        return PlainTextResponse("Authentication is not configured", status_code=500)

    get_session_store(request).store_oauth_state(
        state,
        code_verifier=code_verifier,
        expires_in_seconds=OAUTH_STATE_TTL_SECONDS,
    )
    return RedirectResponse(auth_url, status_code=302)


@router.get("/callback")
async def complete_auth(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
) -> Response:
    """Exchange the authorization code, open a session and return to the front end."""
    identity = request.app.state.identity_provider
    store = get_session_store(request)
    config = get_app_config(request)

    try:
        if error:
            raise ValueError(f"Google returned an error: {error}")
        if not code:
            raise ValueError("No authorization code received from Google")

        state_info = store.validate_and_consume_oauth_state(state)
        credentials = await asyncio.to_thread(
            identity.exchange_code, code, state, state_info.get("code_verifier")
        )
        profile = await asyncio.to_thread(identity.get_profile, credentials)
        session = store.create_session(credentials, profile)
    except Exception as e:
        logger.error(f"Authentication Error: {e}", exc_info=True)
        return PlainTextResponse("Authentication failed", status_code=500)

    logger.info(f"OAuth callback: Successfully authenticated {session.user_key}")

    query = urlencode({
        "user": json.dumps(profile, separators=(",", ":")),
        "session": session.session_id,
    })
    response = RedirectResponse(f"{config.frontend_url}?{query}", status_code=302)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session.session_id,
        httponly=True,
        samesite="lax",
        secure=config.redirect_uri.startswith("https://"),
    )
    return response
