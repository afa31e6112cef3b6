"""
Shared configuration for Photo Drive.

This module centralizes configuration values sourced from the environment
(optionally via a .env file) so they are not scattered throughout the codebase.
"""

import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from ..utils.constants import DEFAULT_PORT, DEFAULT_UPLOAD_CONCURRENCY

load_dotenv()


class AppConfig:
    """
    Centralized application configuration.

    Provides a single source of truth for OAuth client settings, the Drive root
    folder, the front-end redirect target and server options.
    """

    def __init__(self) -> None:
        # Server configuration
        self.host = os.getenv("HOST", "127.0.0.1")
        self.port = int(os.getenv("PORT", str(DEFAULT_PORT)))
        self.base_uri = os.getenv("PHOTO_DRIVE_BASE_URI", "http://localhost")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # OAuth client configuration
        self.client_id = os.getenv("GOOGLE_CLIENT_ID")
        self.client_secret = os.getenv("GOOGLE_CLIENT_SECRET")
        self.redirect_uri = self._get_redirect_uri()

        # Drive root folder for event folders
        self.root_folder_id = os.getenv("GOOGLE_DRIVE_FOLDER_ID")

        # Front-end and CORS
        self.frontend_url = os.getenv("FRONTEND_URL", "http://localhost:3000")
        self.cors_origins = self._get_cors_origins()

        self.upload_concurrency = max(
            1, int(os.getenv("UPLOAD_CONCURRENCY", str(DEFAULT_UPLOAD_CONCURRENCY)))
        )

    def _get_redirect_uri(self) -> str:
        """Get the OAuth redirect URI."""
        explicit_uri = os.getenv("GOOGLE_REDIRECT_URI")
        if explicit_uri:
            return explicit_uri
        return f"{self.base_uri}:{self.port}/api/auth/google/callback"

    def _get_cors_origins(self) -> List[str]:
        raw = os.getenv("CORS_ORIGINS", "*")
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        return origins or ["*"]

    def is_oauth_configured(self) -> bool:
        """Check if the OAuth client is configured."""
        return bool(self.client_id and self.client_secret)

    def get_environment_summary(self) -> Dict[str, Any]:
        """Get a summary of the current configuration (excluding secrets)."""
        return {
            "host": self.host,
            "port": self.port,
            "redirect_uri": self.redirect_uri,
            "root_folder_configured": bool(self.root_folder_id),
            "frontend_url": self.frontend_url,
            "cors_origins": self.cors_origins,
            "upload_concurrency": self.upload_concurrency,
            "client_configured": self.is_oauth_configured(),
        }


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reload_config() -> AppConfig:
    """Reload the configuration from environment variables."""
    global _config
    _config = AppConfig()
    return _config
