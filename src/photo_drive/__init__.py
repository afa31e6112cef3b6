"""Photo Drive - event photo uploads to Google Drive.

This package provides a small HTTP backend that signs a user in with Google
OAuth and uploads, renames and deletes photos in per-event Drive folders.
"""
from .client import GoogleDriveGateway
from .server import create_app, main

__version__ = "0.1.0"
__all__ = ["GoogleDriveGateway", "create_app", "main"]
