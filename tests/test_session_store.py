"""Unit tests for SessionStore."""

import pytest
from google.oauth2.credentials import Credentials

from photo_drive.auth.session_store import SessionStore


class TestOAuthStates:
    """Tests for OAuth state bookkeeping."""

    def test_state_is_consumed_once(self):
        store = SessionStore()
        store.store_oauth_state("abc123", code_verifier="v1")

        info = store.validate_and_consume_oauth_state("abc123")

        assert info["code_verifier"] == "v1"
        with pytest.raises(ValueError):
            store.validate_and_consume_oauth_state("abc123")

    def test_missing_state_is_rejected(self):
        store = SessionStore()

        with pytest.raises(ValueError):
            store.validate_and_consume_oauth_state(None)

    def test_expired_state_is_rejected(self):
        store = SessionStore()
        store.store_oauth_state("stale", expires_in_seconds=0)

        with pytest.raises(ValueError):
            store.validate_and_consume_oauth_state("stale")
        assert store.get_stats()["pending_oauth_states"] == 0

    def test_empty_state_cannot_be_stored(self):
        store = SessionStore()

        with pytest.raises(ValueError):
            store.store_oauth_state("")


class TestSessions:
    """Tests for session creation and lookup."""

    def test_create_and_resolve_session(self):
        store = SessionStore()
        creds = Credentials(token="t1")

        session = store.create_session(creds, {"email": "alex@example.com", "name": "Alex"})
        resolved = store.get_session(session.session_id)

        assert resolved is not None
        assert resolved.credentials is creds
        assert resolved.user_email == "alex@example.com"
        assert resolved.profile["name"] == "Alex"

    def test_unknown_or_empty_token_resolves_to_none(self):
        store = SessionStore()

        assert store.get_session("nope") is None
        assert store.get_session(None) is None
        assert store.get_session("") is None

    def test_distinct_users_get_distinct_credentials(self):
        store = SessionStore()
        first = store.create_session(Credentials(token="a"), {"email": "a@example.com"})
        second = store.create_session(Credentials(token="b"), {"email": "b@example.com"})

        assert store.get_session(first.session_id).credentials.token == "a"
        assert store.get_session(second.session_id).credentials.token == "b"
        assert store.get_stats()["users"] == ["a@example.com", "b@example.com"]

    def test_reauthentication_replaces_credentials_for_user(self):
        store = SessionStore()
        old = store.create_session(Credentials(token="old"), {"email": "alex@example.com"})
        new = store.create_session(Credentials(token="new"), {"email": "alex@example.com"})

        assert old.session_id != new.session_id
        assert store.get_session(old.session_id).credentials.token == "new"
        assert store.get_stats()["total_users"] == 1
        assert store.get_stats()["sessions"] == 2

    def test_profile_without_identity_is_rejected(self):
        store = SessionStore()

        with pytest.raises(ValueError):
            store.create_session(Credentials(token="t"), {"name": "Nobody"})
        assert not store.get_stats()["sessions"]


class TestLimits:
    """Tests for the caps on pending states and per-user sessions."""

    def test_oldest_pending_state_is_evicted_at_cap(self):
        store = SessionStore(max_pending_states=3)
        for i in range(4):
            store.store_oauth_state(f"state-{i}")

        assert store.get_stats()["pending_oauth_states"] == 3
        with pytest.raises(ValueError):
            store.validate_and_consume_oauth_state("state-0")
        assert store.validate_and_consume_oauth_state("state-3")["code_verifier"] is None

    def test_oldest_sessions_of_a_user_are_dropped(self):
        store = SessionStore(max_sessions_per_user=2)
        sessions = [
            store.create_session(Credentials(token=f"t{i}"), {"email": "alex@example.com"})
            for i in range(3)
        ]
        other = store.create_session(Credentials(token="b"), {"email": "b@example.com"})

        assert store.get_session(sessions[0].session_id) is None
        assert store.has_session(sessions[1].session_id)
        assert store.has_session(sessions[2].session_id)
        assert store.has_session(other.session_id)
        assert store.get_stats()["sessions"] == 3
