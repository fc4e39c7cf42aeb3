"""
Settings model — the generator's configuration surface.

Loaded from autostubs.yml. Defaults mirror a stock ProcessWire site:
stubs go to site/classes/, fieldset markup fields are skipped, and the
system templates are left alone.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from autostubs.core.services.naming import normalize_type_id


class Settings(BaseModel):
    """Generator configuration — immutable once loaded."""

    # ── Inputs / outputs ────────────────────────────────────────
    schema_path: Path = Field(default=Path("schema.yml"), alias="schema")
    classes_dir: Path = Path("site/classes")
    extension: str = ".php"

    # ── Stub file shape ─────────────────────────────────────────
    namespace: str = "ProcessWire"
    no_namespace_markers: list[str] = Field(default_factory=lambda: ["Rockpagebuilder"])
    strict_types: bool = False

    # ── What to leave alone ─────────────────────────────────────
    skip_fieldtypes: list[str] = Field(
        default_factory=lambda: [
            "fieldset_open",
            "fieldset_tab_open",
            "fieldset_group",
            "fieldset_close",
        ]
    )
    skip_templates: list[str] = Field(
        default_factory=lambda: ["admin", "form-builder", "language", "permission", "role"]
    )

    # ── Type resolution ─────────────────────────────────────────
    custom_page_class_compatible: bool = True
    class_prefix: str = ""
    types: dict[str, str] = Field(default_factory=dict)  # extra fixed mappings

    # Seconds after a write during which a repeater stub may still be
    # switched over to the matrix base class
    freshness_window: float = 3.0

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("skip_fieldtypes")
    @classmethod
    def _normalize_skip_fieldtypes(cls, v: list[str]) -> list[str]:
        return [normalize_type_id(t) for t in v]

    @field_validator("types")
    @classmethod
    def _normalize_type_keys(cls, v: dict[str, str]) -> dict[str, str]:
        return {normalize_type_id(k): t for k, t in v.items()}

    def resolve_paths(self, base_dir: Path) -> Settings:
        """Return a copy with relative paths anchored at *base_dir*."""
        updates: dict[str, Path] = {}
        if not self.schema_path.is_absolute():
            updates["schema_path"] = base_dir / self.schema_path
        if not self.classes_dir.is_absolute():
            updates["classes_dir"] = base_dir / self.classes_dir
        return self.model_copy(update=updates) if updates else self
