"""
Sync use case — regenerate stubs for all templates, or for named ones.

Ties together settings, the schema export and the stub generator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from autostubs.core.config.loader import ConfigError, load_schema, load_settings
from autostubs.core.models.schema import Schema
from autostubs.core.models.settings import Settings
from autostubs.core.services.stub_generator import StubGenerator, SyncReport

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of the sync / generate use cases."""

    report: SyncReport | None = None
    settings: Settings | None = None
    unknown_templates: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.ok

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        if self.settings:
            result["classes_dir"] = str(self.settings.classes_dir)
        if self.unknown_templates:
            result["unknown_templates"] = self.unknown_templates
        if self.report:
            result.update(self.report.to_dict())
        return result


def load_generator(config_path: Path | None = None) -> tuple[Settings, Schema, StubGenerator]:
    """Load settings and schema, and build a generator over them.

    Raises:
        ConfigError: If either file is missing or invalid.
    """
    settings = load_settings(config_path)
    schema = load_schema(settings.schema_path)
    return settings, schema, StubGenerator(settings)


def run_sync(config_path: Path | None = None) -> SyncResult:
    """Regenerate every template's stub (minus the skip list)."""
    result = SyncResult()
    try:
        settings, schema, generator = load_generator(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.settings = settings
    result.report = generator.generate_all(schema.all_templates())
    return result


def run_generate(template_names: list[str], config_path: Path | None = None) -> SyncResult:
    """Regenerate the stubs of the named templates only.

    Names in the skip list are still honored.
    """
    result = SyncResult()
    try:
        settings, schema, generator = load_generator(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.settings = settings
    templates = []
    for name in template_names:
        template = schema.get_template(name)
        if template is None:
            result.unknown_templates.append(name)
            continue
        templates.append(template)

    if result.unknown_templates:
        logger.warning("Unknown templates: %s", ", ".join(result.unknown_templates))

    result.report = generator.generate_all(templates)
    return result
