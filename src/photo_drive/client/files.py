"""File management mixin for GoogleDriveGateway."""
import io
from typing import Any

from googleapiclient.http import MediaIoBaseUpload

from ..utils.constants import UPLOADED_FILE_FIELDS


class FilesMixin:
    """Mixin providing file management operations."""

    def create_file(
        self, name: str, content: bytes, mime_type: str, parent_id: str
    ) -> dict[str, Any]:
        """Upload in-memory content as a new Drive file.

        Args:
            name: Display name for the new file.
            content: File bytes.
            mime_type: MIME type of the content.
            parent_id: Destination folder ID.

        Returns:
            File metadata with id, name, webViewLink and thumbnailLink.
        """
        media = MediaIoBaseUpload(io.BytesIO(content), mimetype=mime_type, resumable=True)

        return self.drive_service.files().create(
            body={'name': name, 'parents': [parent_id]},
            media_body=media,
            fields=UPLOADED_FILE_FIELDS
        ).execute()

    def update_file(self, file_id: str, name: str) -> dict[str, Any]:
        """Rename a file without changing its location.

        Args:
            file_id: The file ID.
            name: New name for the file.

        Returns:
            File metadata with id and name.
        """
        return self.drive_service.files().update(
            fileId=file_id,
            body={'name': name},
            fields='id, name'
        ).execute()

    def delete_file(self, file_id: str) -> None:
        """Permanently delete a file (skips the trash).

        Args:
            file_id: The file ID.
        """
        self.drive_service.files().delete(fileId=file_id).execute()
