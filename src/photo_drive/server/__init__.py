"""Photo Drive HTTP server - modular implementation."""

import logging

import uvicorn

from .main import create_app
from ..core.config import get_config

__all__ = ["create_app", "main"]


def main():
    """Entry point for the Photo Drive backend."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not config.is_oauth_configured():
        logging.getLogger(__name__).warning(
            "GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET are not set; login will fail"
        )

    app = create_app(config)
    logging.getLogger(__name__).info(
        f"Backend server is running on {config.base_uri}:{config.port}"
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
