"""
Schema model — the content types the stubs are generated from.

Loaded from the host platform's schema export (schema.yml). Fields are
declared once, grouped into fieldgroups, and fieldgroups are attached
to templates. A resolved ``SchemaTemplate`` carries its fields in
fieldgroup order, which is the order the annotations are written in.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from autostubs.core.services.naming import is_repeater_name


class FieldContext(BaseModel):
    """Per-template override of a field's label and configuration."""

    label: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)


class SchemaField(BaseModel):
    """A named, typed unit of data a template can hold."""

    name: str
    type: str
    label: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    contexts: dict[str, FieldContext] = Field(default_factory=dict)

    def in_context(self, template_name: str) -> SchemaField:
        """Return this field as seen from the given template.

        Context config keys are layered over the field's own config,
        and a context label replaces the field label.
        """
        context = self.contexts.get(template_name)
        if context is None:
            return self
        return self.model_copy(
            update={
                "label": context.label if context.label is not None else self.label,
                "config": {**self.config, **context.config},
                "contexts": {},
            }
        )


class SchemaTemplate(BaseModel):
    """A content type — an ordered set of fields plus metadata."""

    name: str
    label: str = ""
    fields: list[SchemaField] = Field(default_factory=list)
    page_class: str = ""
    fieldgroup: str = ""

    @model_validator(mode="after")
    def _unique_field_names(self) -> SchemaTemplate:
        seen: set[str] = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field '{f.name}' in template '{self.name}'")
            seen.add(f.name)
        return self

    @property
    def is_repeater(self) -> bool:
        return is_repeater_name(self.name)

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


class Fieldgroup(BaseModel):
    """An ordered list of field names shared by one or more templates."""

    name: str
    fields: list[str] = Field(default_factory=list)


class TemplateRef(BaseModel):
    """A template as declared in the schema export."""

    name: str
    label: str = ""
    fieldgroup: str = ""
    page_class: str = ""

    @property
    def fieldgroup_name(self) -> str:
        return self.fieldgroup or self.name


class Schema(BaseModel):
    """Snapshot of the host's schema store.

    Read-only: generation never writes back to it.
    """

    fields: list[SchemaField] = Field(default_factory=list)
    fieldgroups: list[Fieldgroup] = Field(default_factory=list)
    templates: list[TemplateRef] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> Schema:
        known = {f.name for f in self.fields}
        for group in self.fieldgroups:
            missing = [name for name in group.fields if name not in known]
            if missing:
                raise ValueError(
                    f"Fieldgroup '{group.name}' references unknown fields: {', '.join(missing)}"
                )
            dupes = {n for n in group.fields if group.fields.count(n) > 1}
            if dupes:
                raise ValueError(
                    f"Fieldgroup '{group.name}' lists fields more than once: "
                    f"{', '.join(sorted(dupes))}"
                )
        return self

    # ── Lookups ─────────────────────────────────────────────────

    def get_field(self, name: str) -> SchemaField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_fieldgroup(self, name: str) -> Fieldgroup | None:
        for group in self.fieldgroups:
            if group.name == name:
                return group
        return None

    def get_template(self, name: str) -> SchemaTemplate | None:
        """Look up a template by name and resolve its field list."""
        for ref in self.templates:
            if ref.name == name:
                return self._resolve(ref)
        return None

    def all_templates(self) -> list[SchemaTemplate]:
        """All templates, resolved, in declared order."""
        return [self._resolve(ref) for ref in self.templates]

    def templates_with_fieldgroup(self, fieldgroup: str) -> list[SchemaTemplate]:
        return [self._resolve(ref) for ref in self.templates if ref.fieldgroup_name == fieldgroup]

    def templates_with_field(self, field_name: str) -> list[SchemaTemplate]:
        groups = {g.name for g in self.fieldgroups if field_name in g.fields}
        return [self._resolve(ref) for ref in self.templates if ref.fieldgroup_name in groups]

    def _resolve(self, ref: TemplateRef) -> SchemaTemplate:
        group = self.get_fieldgroup(ref.fieldgroup_name)
        fields: list[SchemaField] = []
        if group is not None:
            by_name = {f.name: f for f in self.fields}
            fields = [by_name[name] for name in group.fields]
        return SchemaTemplate(
            name=ref.name,
            label=ref.label,
            fields=fields,
            page_class=ref.page_class,
            fieldgroup=ref.fieldgroup_name,
        )
