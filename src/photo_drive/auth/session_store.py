"""
Session Store for Photo Drive.

Holds authenticated sessions in memory, keyed by an opaque session token, and
the pending OAuth states issued by the login redirect. Nothing here survives a
process restart.
"""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Any, Dict, Optional

from google.oauth2.credentials import Credentials

from ..utils.constants import (
    MAX_PENDING_OAUTH_STATES,
    MAX_SESSIONS_PER_USER,
    OAUTH_STATE_TTL_SECONDS,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """Container for the identity a request acts as."""

    session_id: str
    user_key: str
    credentials: Credentials
    profile: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def user_email(self) -> Optional[str]:
        return self.profile.get("email")


class SessionStore:
    """
    In-memory store for authenticated sessions.

    Maintains a mapping of user keys (profile email, else profile id) to their
    credentials and profile, plus a session token -> user key mapping. Signing in
    again as the same user replaces that user's credentials wholesale, so every
    session of that user picks up the new set.
    """

    def __init__(
        self,
        max_pending_states: int = MAX_PENDING_OAUTH_STATES,
        max_sessions_per_user: int = MAX_SESSIONS_PER_USER,
    ) -> None:
        self.max_pending_states = max(1, max_pending_states)
        self.max_sessions_per_user = max(1, max_sessions_per_user)
        self._users: Dict[str, Dict[str, Any]] = {}
        self._session_mapping: Dict[str, str] = {}  # session_id -> user_key
        self._session_created: Dict[str, datetime] = {}
        self._oauth_states: Dict[str, Dict[str, Any]] = {}
        self._lock = RLock()

    def _cleanup_expired_oauth_states_locked(self) -> None:
        """Remove expired OAuth state entries. Caller must hold lock."""
        now = datetime.now(timezone.utc)
        expired_states = [
            state
            for state, data in self._oauth_states.items()
            if data["expires_at"] <= now
        ]
        for state in expired_states:
            del self._oauth_states[state]
            logger.debug("Removed expired OAuth state: %s...", state[:8])

    def _evict_oldest_oauth_states_locked(self) -> None:
        """Drop the oldest pending states so one more fits. Caller must hold lock."""
        excess = len(self._oauth_states) - self.max_pending_states + 1
        if excess <= 0:
            return
        oldest = sorted(self._oauth_states, key=lambda s: self._oauth_states[s]["created_at"])
        for state in oldest[:excess]:
            del self._oauth_states[state]
        logger.warning("Evicted %d pending OAuth states over the cap", excess)

    def _trim_user_sessions_locked(self, user_key: str) -> None:
        """Keep only the newest sessions of a user. Caller must hold lock."""
        sessions = sorted(
            (sid for sid, key in self._session_mapping.items() if key == user_key),
            key=lambda sid: self._session_created[sid],
        )
        for session_id in sessions[: max(0, len(sessions) - self.max_sessions_per_user)]:
            del self._session_mapping[session_id]
            del self._session_created[session_id]
            logger.debug("Dropped old session %s... for %s", session_id[:8], user_key)

    def store_oauth_state(
        self,
        state: str,
        code_verifier: Optional[str] = None,
        expires_in_seconds: int = OAUTH_STATE_TTL_SECONDS,
    ) -> None:
        """Remember an OAuth state value (and its PKCE verifier) for the callback."""
        if not state:
            raise ValueError("OAuth state must be provided")
        if expires_in_seconds < 0:
            raise ValueError("expires_in_seconds must be non-negative")

        with self._lock:
            self._cleanup_expired_oauth_states_locked()
            self._evict_oldest_oauth_states_locked()
            now = datetime.now(timezone.utc)
            expiry = now + timedelta(seconds=expires_in_seconds)
            self._oauth_states[state] = {
                "code_verifier": code_verifier,
                "expires_at": expiry,
                "created_at": now,
            }
            logger.debug(
                "Stored OAuth state %s... (expires at %s)",
                state[:8],
                expiry.isoformat(),
            )

    def validate_and_consume_oauth_state(self, state: Optional[str]) -> Dict[str, Any]:
        """
        Validate that a state value exists and consume it.

        Args:
            state: The OAuth state returned by Google.

        Returns:
            Metadata associated with the state (including ``code_verifier``).

        Raises:
            ValueError: If the state is missing or expired.
        """
        if not state:
            raise ValueError("Missing OAuth state parameter")

        with self._lock:
            self._cleanup_expired_oauth_states_locked()
            state_info = self._oauth_states.pop(state, None)

            if not state_info:
                logger.error("OAuth callback received unknown or expired state")
                raise ValueError("Invalid or expired OAuth state parameter")

            logger.debug("Validated OAuth state %s...", state[:8])
            return state_info

    def create_session(
        self, credentials: Credentials, profile: Dict[str, Any]
    ) -> SessionContext:
        """
        Store credentials for the profile's user and open a new session for it.

        Raises:
            ValueError: If the profile carries neither an email nor an id.
        """
        user_key = profile.get("email") or profile.get("id")
        if not user_key:
            raise ValueError("Failed to get user identity from Google profile")

        session_id = secrets.token_urlsafe(32)
        now = datetime.now(timezone.utc)

        with self._lock:
            self._users[user_key] = {
                "credentials": credentials,
                "profile": dict(profile),
            }
            self._session_mapping[session_id] = user_key
            self._session_created[session_id] = now
            self._trim_user_sessions_locked(user_key)

        logger.info(f"Stored OAuth session for {user_key}")
        return SessionContext(
            session_id=session_id,
            user_key=user_key,
            credentials=credentials,
            profile=dict(profile),
            created_at=now,
        )

    def get_session(self, session_id: Optional[str]) -> Optional[SessionContext]:
        """
        Resolve a session token to its live context.

        Returns:
            The SessionContext, or None when the token is unknown.
        """
        if not session_id:
            return None

        with self._lock:
            user_key = self._session_mapping.get(session_id)
            if not user_key:
                logger.debug("No user mapping found for session %s...", session_id[:8])
                return None

            user_info = self._users[user_key]
            return SessionContext(
                session_id=session_id,
                user_key=user_key,
                credentials=user_info["credentials"],
                profile=dict(user_info["profile"]),
                created_at=self._session_created[session_id],
            )

    def has_session(self, session_id: str) -> bool:
        """Check if a session token is live."""
        with self._lock:
            return session_id in self._session_mapping

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        with self._lock:
            return {
                "total_users": len(self._users),
                "users": sorted(self._users.keys()),
                "sessions": len(self._session_mapping),
                "pending_oauth_states": len(self._oauth_states),
            }
