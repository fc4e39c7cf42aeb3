"""
Webhook receiver — Flask app factory.

The host platform posts a JSON notification after each schema save;
the app regenerates the affected stubs before answering.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

logger = logging.getLogger(__name__)


def create_app(config_path: Path | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to autostubs.yml (default: auto-detect per request).

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.config["CONFIG_PATH"] = str(config_path) if config_path else None

    from autostubs.ui.web.routes_hooks import hooks_bp

    app.register_blueprint(hooks_bp, url_prefix="/api")

    logger.info("Webhook app created (config=%s)", config_path)
    return app


def run_server(
    app: Flask,
    host: str = "127.0.0.1",
    port: int = 8000,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    logger.info("Starting webhook receiver on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)
