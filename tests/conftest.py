"""Shared fakes for the HTTP and upload tests."""

import itertools
import os
import threading
import time
from typing import Any, Dict, Optional
from unittest.mock import patch

from google.oauth2.credentials import Credentials

from photo_drive.auth.google_auth import IdentityProvider
from photo_drive.client import DriveGateway
from photo_drive.core.config import AppConfig

ROOT_FOLDER_ID = "root-folder"

TEST_ENV = {
    "GOOGLE_CLIENT_ID": "client-id",
    "GOOGLE_CLIENT_SECRET": "client-secret",
    "GOOGLE_DRIVE_FOLDER_ID": ROOT_FOLDER_ID,
    "FRONTEND_URL": "http://localhost:3000",
    "PORT": "3001",
    "UPLOAD_CONCURRENCY": "5",
}


def make_config(**overrides: str) -> AppConfig:
    """Build an AppConfig from the test environment plus overrides."""
    env = dict(TEST_ENV, **overrides)
    with patch.dict(os.environ, env):
        return AppConfig()


class FakeDriveGateway(DriveGateway):
    """In-memory Drive Gateway recording every call."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.folders: Dict[str, Dict[str, str]] = {}
        self.files: Dict[str, Dict[str, Any]] = {}
        self.calls: list = []
        self.fail_names: set = set()
        self.delay_by_name: Dict[str, float] = {}
        self.active = 0
        self.max_active = 0

    def _next_id(self, prefix: str) -> str:
        with self._lock:
            return f"{prefix}-{next(self._ids)}"

    def add_folder(self, name: str, parent_id: str = ROOT_FOLDER_ID) -> str:
        folder_id = self._next_id("folder")
        self.folders[folder_id] = {"name": name, "parent": parent_id}
        return folder_id

    def find_folder(self, name: str, parent_id: str) -> Optional[str]:
        self.calls.append(("find_folder", name, parent_id))
        for folder_id, folder in self.folders.items():
            if folder["name"] == name and folder["parent"] == parent_id:
                return folder_id
        return None

    def create_folder(self, name: str, parent_id: str) -> str:
        self.calls.append(("create_folder", name, parent_id))
        return self.add_folder(name, parent_id)

    def create_file(self, name, content, mime_type, parent_id):
        with self._lock:
            self.calls.append(("create_file", name, parent_id))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay_by_name.get(name, 0))
            if name in self.fail_names:
                raise RuntimeError(f"quota exceeded for {name}")
            file_id = self._next_id("file")
            self.files[file_id] = {
                "name": name,
                "parent": parent_id,
                "content": content,
                "mimeType": mime_type,
            }
            return {
                "id": file_id,
                "name": name,
                "webViewLink": f"https://drive.example/{file_id}",
                "thumbnailLink": f"https://thumb.example/{file_id}",
            }
        finally:
            with self._lock:
                self.active -= 1

    def update_file(self, file_id, name):
        self.calls.append(("update_file", file_id, name))
        if file_id not in self.files:
            raise RuntimeError("File not found")
        self.files[file_id]["name"] = name
        return {"id": file_id, "name": name}

    def delete_file(self, file_id):
        self.calls.append(("delete_file", file_id))
        if file_id not in self.files:
            raise RuntimeError("File not found")
        del self.files[file_id]


class FakeIdentityProvider(IdentityProvider):
    """Identity provider that accepts one known authorization code."""

    def __init__(self, profile: Optional[Dict[str, Any]] = None) -> None:
        self.profile = profile or {"id": "42", "email": "alex@example.com", "name": "Alex"}
        self.valid_code = "good-code"
        self.exchanged: list = []
        self._states = itertools.count(1)

    def authorization_url(self):
        state = f"state-{next(self._states)}"
        return f"https://accounts.example/auth?state={state}", state, "verifier"

    def exchange_code(self, code, state, code_verifier=None):
        self.exchanged.append((code, state, code_verifier))
        if code != self.valid_code:
            raise ValueError("invalid_grant")
        return Credentials(token="access-token", refresh_token="refresh-token")

    def get_profile(self, credentials):
        return dict(self.profile)
