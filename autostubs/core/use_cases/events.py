"""
Event use case — handle one schema change notification.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from autostubs.core.config.loader import ConfigError
from autostubs.core.services.schema_events import SchemaEventDispatcher, UnknownEventError
from autostubs.core.use_cases.sync import SyncResult, load_generator


def run_event(
    event_type: str,
    payload: dict[str, Any] | None = None,
    config_path: Path | None = None,
) -> SyncResult:
    """Regenerate the stubs affected by *event_type*.

    Raises:
        UnknownEventError: For an event type with no handler.
    """
    result = SyncResult()
    try:
        settings, schema, generator = load_generator(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    dispatcher = SchemaEventDispatcher(schema, generator)
    if event_type not in dispatcher.event_types:
        raise UnknownEventError(f"Unknown event type: {event_type}")

    result.settings = settings
    result.report = dispatcher.dispatch(event_type, payload or {})
    return result
