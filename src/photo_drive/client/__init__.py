"""Google Drive Gateway - modular implementation.

This module provides a facade that combines the client mixins into a single
GoogleDriveGateway class implementing the DriveGateway interface.
"""
from google.oauth2.credentials import Credentials

from .base import DriveGateway, GoogleDriveBase
from .folders import FoldersMixin
from .files import FilesMixin


class GoogleDriveGateway(
    GoogleDriveBase,
    FoldersMixin,
    FilesMixin,
    DriveGateway,
):
    """Drive Gateway bound to one Credential Set."""
    pass


def create_drive_gateway(credentials: Credentials) -> DriveGateway:
    """Default gateway factory used by the HTTP layer."""
    return GoogleDriveGateway(credentials)


__all__ = ['DriveGateway', 'GoogleDriveGateway', 'create_drive_gateway']
