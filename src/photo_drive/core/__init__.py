"""
Core utilities package for Photo Drive.

This package provides shared configuration.
"""

from .config import AppConfig, get_config, reload_config

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
]
