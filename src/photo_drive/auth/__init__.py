"""
OAuth Authentication Package for Photo Drive.

This package provides:
- The Google web-server OAuth flow with PKCE behind an IdentityProvider interface
- An in-memory session store keyed by session token
"""

from .scopes import SCOPES, get_scopes
from .session_store import SessionContext, SessionStore
from .google_auth import (
    GoogleIdentityProvider,
    IdentityProvider,
    create_oauth_flow,
    load_client_config,
)

__all__ = [
    # Scopes
    "SCOPES",
    "get_scopes",
    # Session Store
    "SessionContext",
    "SessionStore",
    # Identity Provider
    "IdentityProvider",
    "GoogleIdentityProvider",
    "create_oauth_flow",
    "load_client_config",
]
