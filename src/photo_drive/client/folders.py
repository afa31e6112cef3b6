"""Folder lookup and creation mixin for GoogleDriveGateway."""
from typing import Optional

from ..utils.constants import FOLDER_LIST_FIELDS, FOLDER_MIME_TYPE
from ..utils.naming import escape_query_value


class FoldersMixin:
    """Mixin providing folder operations."""

    def find_folder(self, name: str, parent_id: str) -> Optional[str]:
        """Find a non-trashed folder by exact name inside a parent folder.

        Args:
            name: Folder name to match exactly.
            parent_id: ID of the parent folder.

        Returns:
            The first matching folder ID, or None.
        """
        query = (
            f"mimeType='{FOLDER_MIME_TYPE}' "
            f"and name='{escape_query_value(name)}' "
            f"and '{escape_query_value(parent_id)}' in parents "
            f"and trashed=false"
        )
        result = self.drive_service.files().list(
            q=query,
            fields=FOLDER_LIST_FIELDS,
            spaces='drive',
        ).execute()

        files = result.get('files', [])
        if files:
            return files[0]['id']
        return None

    def create_folder(self, name: str, parent_id: str) -> str:
        """Create a folder inside a parent folder.

        Args:
            name: Folder name.
            parent_id: ID of the parent folder.

        Returns:
            The new folder ID.
        """
        folder = self.drive_service.files().create(
            body={
                'name': name,
                'mimeType': FOLDER_MIME_TYPE,
                'parents': [parent_id],
            },
            fields='id'
        ).execute()

        return folder['id']
