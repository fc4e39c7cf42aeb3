"""
Hook API routes — schema events in, regenerated stubs out.

POST /api/hooks/<event>   → handle one schema event
                            (field:saved, template:saved,
                             field_context:saved, fieldgroup:saved)
POST /api/sync            → regenerate all templates
GET  /api/types           → field type → PHPDoc type table
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request

from autostubs.core.use_cases.sync import SyncResult

logger = logging.getLogger(__name__)

hooks_bp = Blueprint("hooks", __name__)


def _config_path() -> Path | None:
    p = current_app.config.get("CONFIG_PATH")
    return Path(p) if p else None


def _respond(result: SyncResult):  # type: ignore[no-untyped-def]
    if result.error:
        return jsonify({"error": result.error}), 500
    return jsonify(result.to_dict()), 200 if result.ok else 207


@hooks_bp.route("/hooks/<event_type>", methods=["POST"])
def api_hook(event_type: str):  # type: ignore[no-untyped-def]
    """Handle one schema change event."""
    from autostubs.core.services.schema_events import UnknownEventError
    from autostubs.core.use_cases.events import run_event

    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    try:
        result = run_event(event_type, payload, config_path=_config_path())
    except UnknownEventError as e:
        return jsonify({"error": str(e)}), 404

    return _respond(result)


@hooks_bp.route("/sync", methods=["POST"])
def api_sync():  # type: ignore[no-untyped-def]
    """Regenerate every template's stub."""
    from autostubs.core.use_cases.sync import run_sync

    return _respond(run_sync(config_path=_config_path()))


@hooks_bp.route("/types")
def api_types():  # type: ignore[no-untyped-def]
    """The type table in effect for this configuration."""
    from autostubs.core.config.loader import ConfigError, load_settings
    from autostubs.core.services.type_resolver import TypeResolver

    try:
        settings = load_settings(_config_path())
    except ConfigError as e:
        return jsonify({"error": str(e)}), 500
    return jsonify(TypeResolver(settings).describe())
