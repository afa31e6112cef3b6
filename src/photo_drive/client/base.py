"""Drive Gateway interface and the base client with Google API service initialization."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import google_auth_httplib2
import httplib2
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.http import HttpRequest

logger = logging.getLogger(__name__)


class DriveGateway(ABC):
    """Capability interface over the remote storage provider's folders and files."""

    @abstractmethod
    def find_folder(self, name: str, parent_id: str) -> Optional[str]:
        """Return the id of a non-trashed folder named ``name`` under ``parent_id``."""
        pass

    @abstractmethod
    def create_folder(self, name: str, parent_id: str) -> str:
        """Create a folder under ``parent_id`` and return its id."""
        pass

    @abstractmethod
    def create_file(
        self, name: str, content: bytes, mime_type: str, parent_id: str
    ) -> dict[str, Any]:
        """Upload ``content`` as a new file and return its metadata."""
        pass

    @abstractmethod
    def update_file(self, file_id: str, name: str) -> dict[str, Any]:
        """Rename a file in place."""
        pass

    @abstractmethod
    def delete_file(self, file_id: str) -> None:
        """Permanently delete a file."""
        pass

    def resolve_event_folder(self, event_name: str, root_folder_id: str) -> str:
        """Find the event folder under the root, creating it when missing.

        Lookup and create are two separate calls, so two concurrent first
        uploads for the same event can both create a folder.

        Args:
            event_name: Display name of the event folder.
            root_folder_id: Folder that holds all event folders.

        Returns:
            The event folder ID.
        """
        folder_id = self.find_folder(event_name, root_folder_id)
        if folder_id:
            logger.debug(f"Reusing event folder '{event_name}' ({folder_id})")
            return folder_id

        folder_id = self.create_folder(event_name, root_folder_id)
        logger.info(f"Created event folder '{event_name}' ({folder_id})")
        return folder_id


class GoogleDriveBase:
    """Base class with the Google Drive service."""

    def __init__(self, credentials: Credentials) -> None:
        """Initialize the client with an authenticated Drive v3 service.

        httplib2 is not thread-safe, so every request built by the service gets
        its own authorized transport.
        """
        self.creds = credentials
        self.drive_service = build(
            'drive', 'v3',
            http=self._authorized_http(),
            requestBuilder=self._build_request,
            cache_discovery=False,
        )

    def _authorized_http(self) -> google_auth_httplib2.AuthorizedHttp:
        return google_auth_httplib2.AuthorizedHttp(self.creds, http=httplib2.Http())

    def _build_request(self, http: Any, *args: Any, **kwargs: Any) -> HttpRequest:
        return HttpRequest(self._authorized_http(), *args, **kwargs)
