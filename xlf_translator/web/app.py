"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from typing import Any, Dict

from flask import Flask, jsonify

from xlf_translator.core.languages import LanguageRegistry
from xlf_translator.logger import get_logger
from xlf_translator.store import TabularStore

from .routes.export import export_bp
from .routes.sync import sync_bp

logger = get_logger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def build_app(config: Dict[str, Any], store: TabularStore) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.json.ensure_ascii = False
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES

    app.config["XLF_CONFIG"] = config
    app.extensions["xlf_store"] = store
    app.extensions["xlf_registry"] = LanguageRegistry.from_config(config)

    register_blueprints(app)
    register_default_routes(app)

    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(sync_bp, url_prefix="/api")
    app.register_blueprint(export_bp, url_prefix="/api")


def register_default_routes(app: Flask) -> None:
    """Register health, status and config routes plus JSON error handlers."""

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        return jsonify({"status": "ok"})

    @app.get("/api/status")
    def status():
        return jsonify({"success": True, "status": "running"})

    @app.get("/api/config")
    def get_config():
        config = app.config["XLF_CONFIG"]
        return jsonify({
            "success": True,
            "sourceLanguage": config["source_language"],
            "sourceColumn": config["source_column"],
            "syncStrategy": config["sync_strategy"],
            "storeBackend": config["store"]["backend"],
            "languages": config["languages"],
        })

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(413)
    def payload_too_large(e):
        return jsonify({"success": False, "error": "Uploaded file is too large"}), 413

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return jsonify({"success": False, "error": "Internal server error"}), 500
