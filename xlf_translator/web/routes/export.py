"""Export and language listing API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request

from xlf_translator.core import export
from xlf_translator.exceptions import StoreUnavailable, UnknownLanguage
from xlf_translator.logger import get_logger

export_bp = Blueprint("export", __name__)
logger = get_logger(__name__)


def _generate(language: str):
    return export.generate_document(
        language,
        current_app.extensions["xlf_store"],
        current_app.extensions["xlf_registry"],
        current_app.config["XLF_CONFIG"],
    )


def _requested_language():
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    language = data.get("language")
    if not isinstance(language, str) or not language.strip():
        return None
    return language.strip()


@export_bp.get("/languages")
def list_languages():
    """Languages that are both configured and present in the store."""
    try:
        languages = export.get_languages(
            current_app.extensions["xlf_store"],
            current_app.extensions["xlf_registry"],
        )
    except StoreUnavailable as exc:
        logger.error("Store unavailable while listing languages: %s", exc)
        return jsonify({"success": False, **exc.to_dict()}), 503
    return jsonify({"success": True, "languages": languages})


@export_bp.post("/export")
def export_document():
    """Export an XLF file with the translations of one language."""
    language = _requested_language()
    if language is None:
        return jsonify({"success": False, "error": "Language not specified"}), 400

    try:
        document = _generate(language)
    except UnknownLanguage as exc:
        logger.warning("Export requested for unknown language %s", language)
        return jsonify({"success": False, **exc.to_dict()}), 400
    except StoreUnavailable as exc:
        logger.error("Store unavailable during export: %s", exc)
        return jsonify({"success": False, **exc.to_dict()}), 503

    response = Response(document.content, mimetype="application/xml")
    response.headers["Content-Disposition"] = f'attachment; filename="{document.filename}"'
    response.headers["X-Length-Violations"] = str(len(document.violations))
    response.headers["X-Invalid-Text"] = str(len(document.invalid))
    return response


@export_bp.post("/export/preview")
def preview_export():
    """Report what an export would contain, including length violations."""
    language = _requested_language()
    if language is None:
        return jsonify({"success": False, "error": "Language not specified"}), 400

    try:
        document = _generate(language)
    except UnknownLanguage as exc:
        return jsonify({"success": False, **exc.to_dict()}), 400
    except StoreUnavailable as exc:
        logger.error("Store unavailable during export preview: %s", exc)
        return jsonify({"success": False, **exc.to_dict()}), 503

    return jsonify(document.summary())
