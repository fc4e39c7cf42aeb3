"""
Schema events — which templates to regenerate when something is saved.

The host platform reports four kinds of schema change. Event types
follow the ``<domain>:<action>`` convention::

    field:saved           {"field": "photos"}
    template:saved        {"template": "event"}
    field_context:saved   {"field": "photos", "fieldgroup": "event"}
    fieldgroup:saved      {"fieldgroup": "event"}

Each event is turned into a list of affected templates, and every one
of them is run through the generator in order. Handling is synchronous:
``dispatch`` returns once all stubs are written.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from autostubs.core.models.schema import Schema, SchemaTemplate
from autostubs.core.services.naming import normalize_type_id
from autostubs.core.services.stub_generator import StubGenerator, SyncReport

logger = logging.getLogger(__name__)

FIELD_SAVED = "field:saved"
TEMPLATE_SAVED = "template:saved"
FIELD_CONTEXT_SAVED = "field_context:saved"
FIELDGROUP_SAVED = "fieldgroup:saved"


class UnknownEventError(ValueError):
    """Raised for an event type the dispatcher has no handler for."""


class SchemaEventDispatcher:
    """Route schema change events to the stub generator."""

    def __init__(self, schema: Schema, generator: StubGenerator) -> None:
        self.schema = schema
        self.generator = generator
        self._handlers: dict[str, Callable[[dict[str, Any]], list[SchemaTemplate]]] = {
            FIELD_SAVED: self._field_saved,
            TEMPLATE_SAVED: self._template_saved,
            FIELD_CONTEXT_SAVED: self._fieldgroup_saved,
            FIELDGROUP_SAVED: self._fieldgroup_saved,
        }

    @property
    def event_types(self) -> list[str]:
        return list(self._handlers)

    def affected_templates(self, event_type: str, payload: dict[str, Any]) -> list[SchemaTemplate]:
        handler = self._handlers.get(event_type)
        if handler is None:
            raise UnknownEventError(f"Unknown event type: {event_type}")
        return handler(payload)

    def dispatch(self, event_type: str, payload: dict[str, Any] | None = None) -> SyncReport:
        """Regenerate the stubs affected by one schema event."""
        templates = self.affected_templates(event_type, payload or {})
        logger.info("%s → %d template(s)", event_type, len(templates))
        return self.generator.generate_all(templates)

    # ── Handlers ────────────────────────────────────────────────

    def _field_saved(self, payload: dict[str, Any]) -> list[SchemaTemplate]:
        name = payload.get("field", "")
        field = self.schema.get_field(name)
        if field is None:
            logger.warning("field:saved for unknown field '%s'", name)
            return []
        if normalize_type_id(field.type) in self.generator.settings.skip_fieldtypes:
            return []
        return self.schema.templates_with_field(name)

    def _template_saved(self, payload: dict[str, Any]) -> list[SchemaTemplate]:
        name = payload.get("template", "")
        template = self.schema.get_template(name)
        if template is None:
            logger.warning("template:saved for unknown template '%s'", name)
            return []
        return [template]

    def _fieldgroup_saved(self, payload: dict[str, Any]) -> list[SchemaTemplate]:
        name = payload.get("fieldgroup", "")
        if self.schema.get_fieldgroup(name) is None:
            logger.warning("Event for unknown fieldgroup '%s'", name)
            return []
        return self.schema.templates_with_fieldgroup(name)
