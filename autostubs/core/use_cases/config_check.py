"""
Config check use case — validate autostubs.yml and the schema export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from autostubs.core.config.loader import ConfigError, find_config_file, load_schema, load_settings
from autostubs.core.models.schema import Schema
from autostubs.core.models.settings import Settings
from autostubs.core.services.naming import normalize_type_id, page_class_name
from autostubs.core.services.type_resolver import TypeResolver


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    settings: Settings | None = None
    schema: Schema | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "schema_path": str(self.settings.schema_path) if self.settings else None,
            "classes_dir": str(self.settings.classes_dir) if self.settings else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "template_count": len(self.schema.templates) if self.schema else 0,
            "field_count": len(self.schema.fields) if self.schema else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate settings and schema and report issues.

    Args:
        config_path: Optional explicit path to autostubs.yml.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.warnings.append("No autostubs.yml found — using defaults.")
    result.config_path = config_path

    try:
        settings = load_settings(config_path)
        result.settings = settings
        schema = load_schema(settings.schema_path)
        result.schema = schema
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Duplicate names
    for kind, names in (
        ("template", [t.name for t in schema.templates]),
        ("field", [f.name for f in schema.fields]),
        ("fieldgroup", [g.name for g in schema.fieldgroups]),
    ):
        dupes = {n for n in names if names.count(n) > 1}
        if dupes:
            result.errors.append(f"Duplicate {kind} names: {', '.join(sorted(dupes))}")

    if not schema.templates:
        result.warnings.append("Schema has no templates. Nothing will be generated.")

    for ref in schema.templates:
        if schema.get_fieldgroup(ref.fieldgroup_name) is None:
            result.warnings.append(
                f"Template '{ref.name}' uses unknown fieldgroup '{ref.fieldgroup_name}'"
            )
        if ref.name not in settings.skip_templates and not page_class_name(ref.name):
            result.warnings.append(f"Template '{ref.name}' yields no class name")

    resolver = TypeResolver(settings)
    for f in schema.fields:
        type_id = normalize_type_id(f.type)
        if type_id not in resolver.mapping and type_id not in settings.skip_fieldtypes:
            result.warnings.append(f"Field '{f.name}' has unmapped type '{f.type}' (→ mixed)")

    if not settings.classes_dir.is_dir():
        result.warnings.append(
            f"Classes directory does not exist yet: {settings.classes_dir}"
        )

    result.valid = len(result.errors) == 0
    return result
