"""XLF import (sync) API routes."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from xlf_translator.core import sync
from xlf_translator.exceptions import MalformedDocument, StoreUnavailable, UnsupportedSourceLanguage
from xlf_translator.logger import get_logger

sync_bp = Blueprint("sync", __name__)
logger = get_logger(__name__)


@sync_bp.post("/import")
def import_document():
    """Synchronise an uploaded XLF file with the store, with optional dry-run."""
    upload = request.files.get("xlf")
    if upload is None:
        return jsonify({"success": False, "error": "No file uploaded"}), 400

    dry_run_param = request.args.get("dry_run", "false").lower()
    dry_run = dry_run_param in {"1", "true", "yes"}

    config = current_app.config["XLF_CONFIG"]
    store = current_app.extensions["xlf_store"]

    try:
        report = sync.sync_document(upload.read(), store, config, dry_run=dry_run)
    except (MalformedDocument, UnsupportedSourceLanguage) as exc:
        logger.warning("Rejected XLF upload %s: %s", upload.filename, exc)
        return jsonify({"success": False, **exc.to_dict()}), 400
    except StoreUnavailable as exc:
        logger.error("Store unavailable during sync: %s", exc)
        return jsonify({"success": False, **exc.to_dict()}), 503

    logger.info(
        "Sync %s for %s (added=%s, updated=%s, unchanged=%s, deactivated=%s)",
        "previewed" if dry_run else "applied",
        upload.filename,
        report.stats.added,
        report.stats.updated,
        report.stats.unchanged,
        report.stats.deactivated,
    )
    return jsonify(report.to_dict())
