"""Custom exceptions for the Photo Drive backend.

This module provides structured error handling with specific exception types
for different failure scenarios. All exceptions inherit from PhotoDriveError.
Upstream failures are classified here for logging only; clients always receive
a generic message.
"""
from typing import Optional, Any


class PhotoDriveError(Exception):
    """Base exception for all photo-drive errors.

    Attributes:
        message: Human-readable error description.
        file_id: Optional file ID related to the error.
    """

    def __init__(self, message: str, file_id: Optional[str] = None) -> None:
        self.message = message
        self.file_id = file_id
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the error message, optionally including file ID."""
        if self.file_id:
            return f"{self.message} (file: {self.file_id})"
        return self.message


class AuthenticationError(PhotoDriveError):
    """Raised when authentication fails or token is expired."""
    pass


class DriveFileNotFoundError(PhotoDriveError):
    """Raised when a requested file doesn't exist or was deleted."""
    pass


class PermissionDeniedError(PhotoDriveError):
    """Raised when access to a file is denied."""
    pass


class QuotaExceededError(PhotoDriveError):
    """Raised when API rate limit or quota is exceeded."""
    pass


class ConfigurationError(PhotoDriveError):
    """Raised when a required setting (client id, root folder) is missing."""
    pass


def handle_http_error(error: Any, file_id: Optional[str] = None) -> PhotoDriveError:
    """Convert googleapiclient HttpError to a specific exception.

    Args:
        error: The HttpError from googleapiclient.
        file_id: Optional file ID for context.

    Returns:
        An appropriate PhotoDriveError subclass.
    """
    try:
        status = error.resp.status
    except AttributeError:
        return PhotoDriveError(f"API error: {str(error)}", file_id)

    if status == 401:
        return AuthenticationError(
            "Authentication failed. The session must sign in again.",
            file_id
        )
    elif status == 403:
        return PermissionDeniedError(
            "Access denied. The app can only reach files it created.",
            file_id
        )
    elif status == 404:
        return DriveFileNotFoundError(
            "File not found. It may have been deleted or moved.",
            file_id
        )
    elif status == 429:
        return QuotaExceededError(
            "API quota exceeded.",
            file_id
        )
    else:
        return PhotoDriveError(f"API error (HTTP {status}): {str(error)}", file_id)


def format_error(action: str, error: Exception) -> str:
    """Format an error message consistently.

    Args:
        action: The action that failed (e.g., "Upload", "Delete file").
        error: The exception that occurred.

    Returns:
        Formatted error string.
    """
    if isinstance(error, PhotoDriveError):
        return f"{action} failed: {error.format_message()}"
    return f"{action} failed: Unexpected error ({type(error).__name__}: {error})"
