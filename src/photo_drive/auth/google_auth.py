"""
Core Google OAuth Logic for Photo Drive.

This module wraps the web-server OAuth flow (with PKCE) behind the
IdentityProvider interface so the HTTP layer never talks to the Google
libraries directly.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from ..core.config import AppConfig
from ..utils.errors import ConfigurationError
from .scopes import get_scopes

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """Capability interface for the OAuth identity provider."""

    @abstractmethod
    def authorization_url(self) -> Tuple[str, str, Optional[str]]:
        """Return ``(auth_url, state, code_verifier)`` for a fresh login."""
        pass

    @abstractmethod
    def exchange_code(
        self, code: str, state: str, code_verifier: Optional[str] = None
    ) -> Credentials:
        """Exchange an authorization code for a Credential Set."""
        pass

    @abstractmethod
    def get_profile(self, credentials: Credentials) -> Dict[str, Any]:
        """Fetch the authenticated user's profile."""
        pass


def load_client_config(config: AppConfig) -> Dict[str, Any]:
    """
    Build the OAuth client configuration from settings.

    Raises:
        ConfigurationError: If the client id or secret is missing.
    """
    if not config.is_oauth_configured():
        raise ConfigurationError(
            "OAuth client credentials not found. "
            "Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
        )

    return {
        "web": {
            "client_id": config.client_id,
            "client_secret": config.client_secret,
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
            "redirect_uris": [config.redirect_uri],
        }
    }


def create_oauth_flow(config: AppConfig, state: Optional[str] = None) -> Flow:
    """
    Create an OAuth flow with PKCE enabled.

    Args:
        config: Application configuration.
        state: Optional state parameter.

    Returns:
        Configured OAuth Flow object
    """
    # Google may grant extra scopes (openid, previously granted ones); accept them.
    os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")

    flow = Flow.from_client_config(
        load_client_config(config),
        scopes=get_scopes(),
        redirect_uri=config.redirect_uri,
        state=state,
        autogenerate_code_verifier=True,  # PKCE enabled
    )
    logger.debug("Created OAuth flow with PKCE")
    return flow


class GoogleIdentityProvider(IdentityProvider):
    """IdentityProvider backed by google-auth-oauthlib and the oauth2 v2 API."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def authorization_url(self) -> Tuple[str, str, Optional[str]]:
        oauth_state = os.urandom(16).hex()
        flow = create_oauth_flow(self.config, state=oauth_state)
        auth_url, state = flow.authorization_url(
            access_type="offline",
            include_granted_scopes="true",
        )
        code_verifier = getattr(flow, "code_verifier", None)
        logger.info(f"Auth flow started. State: {state[:8]}...")
        return auth_url, state, code_verifier

    def exchange_code(
        self, code: str, state: str, code_verifier: Optional[str] = None
    ) -> Credentials:
        flow = create_oauth_flow(self.config, state=state)
        flow.code_verifier = code_verifier
        flow.fetch_token(code=code)
        logger.info("Successfully exchanged authorization code for tokens")
        return flow.credentials

    def get_profile(self, credentials: Credentials) -> Dict[str, Any]:
        service = build("oauth2", "v2", credentials=credentials, cache_discovery=False)
        user_info = service.userinfo().get().execute()
        logger.info(f"Fetched user info: {user_info.get('email')}")
        return user_info
