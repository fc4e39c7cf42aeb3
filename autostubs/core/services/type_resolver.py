"""
Type resolver — field type identifier → PHPDoc type expression.

The mapping is a plain table. A value is either a fixed expression or
a function ``(field, resolver) -> str`` for types whose return value
depends on the field's configuration (output format, dereference mode,
container field names). Extra fixed entries come from the ``types:``
section of autostubs.yml.

Unknown type identifiers resolve to ``mixed``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

from autostubs.core.models.schema import SchemaField
from autostubs.core.services.annotation_patcher import doc_text
from autostubs.core.services.naming import field_class_name, normalize_type_id
from autostubs.core.services.stub_synthesizer import php_preamble

if TYPE_CHECKING:
    from autostubs.core.models.settings import Settings
    from autostubs.core.persistence.stub_store import StubStore

logger = logging.getLogger(__name__)

FALLBACK_TYPE = "mixed"

TypeResolverFn = Callable[[SchemaField, "TypeResolver"], str]
TypeMapping = dict[str, Union[str, TypeResolverFn]]


# ── Configuration enums ─────────────────────────────────────────


def _coerce(enum_cls: Any, value: Any, host: dict[int, Any], default: Any) -> Any:
    """Accept an enum member, its name, or the host platform's numeric constant."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return host.get(value, default)
    try:
        return enum_cls(normalize_type_id(str(value)))
    except ValueError:
        return default


class OutputFormat(str, Enum):
    """File/image field output format."""

    AUTO = "auto"
    ARRAY = "array"
    SINGLE = "single"
    STRING = "string"

    @classmethod
    def coerce(cls, value: Any) -> OutputFormat:
        host = {0: cls.AUTO, 1: cls.ARRAY, 2: cls.SINGLE, 30: cls.STRING}
        return _coerce(cls, value, host, cls.AUTO)


class DerefMode(str, Enum):
    """Page reference field dereference mode."""

    PAGE_ARRAY = "array"
    PAGE_OR_FALSE = "page_or_false"
    PAGE_OR_NULL_PAGE = "page_or_null_page"

    @classmethod
    def coerce(cls, value: Any) -> DerefMode:
        host = {0: cls.PAGE_ARRAY, 1: cls.PAGE_OR_FALSE, 2: cls.PAGE_OR_NULL_PAGE}
        return _coerce(cls, value, host, cls.PAGE_ARRAY)


# ── Config-dependent resolvers ──────────────────────────────────


def _files_type(single: str, collection: str) -> TypeResolverFn:
    def resolve(field: SchemaField, resolver: TypeResolver) -> str:
        fmt = OutputFormat.coerce(field.config.get("outputFormat", OutputFormat.AUTO))
        if fmt is OutputFormat.ARRAY:
            return collection
        if fmt is OutputFormat.SINGLE:
            return f"{single}|null"
        if fmt is OutputFormat.STRING:
            return "string"
        # auto: one file allowed → single value
        if _as_int(field.config.get("maxFiles")) == 1:
            return f"{single}|null"
        return collection

    return resolve


def _page_type(field: SchemaField, resolver: TypeResolver) -> str:
    mode = DerefMode.coerce(field.config.get("derefAsPage", DerefMode.PAGE_ARRAY))
    if mode is DerefMode.PAGE_OR_FALSE:
        return "Page|false"
    if mode is DerefMode.PAGE_OR_NULL_PAGE:
        return "Page|NullPage"
    return "PageArray"


def _fieldset_page_type(field: SchemaField, resolver: TypeResolver) -> str:
    if resolver.settings.custom_page_class_compatible:
        return f"FieldsetPage|Repeater{field_class_name(field.name)}"
    return f"FieldsetPage|{resolver.settings.class_prefix}repeater_{field.name}"


def _repeater_type(array_class: str) -> TypeResolverFn:
    def resolve(field: SchemaField, resolver: TypeResolver) -> str:
        return f"{array_class}|Repeater{field_class_name(field.name)}[]"

    return resolve


def _combo_type(field: SchemaField, resolver: TypeResolver) -> str:
    class_name = f"ComboValue_{field.name}"
    resolver.write_combo_stub(class_name, field)
    return class_name


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ── Default table ───────────────────────────────────────────────

DEFAULT_TYPES: TypeMapping = {
    "cache": "array",
    "checkbox": "int",
    "combo": _combo_type,
    "comments": "CommentArray",
    "datetime": "int|string",
    "decimal": "string",
    "email": "string",
    "fieldset_page": _fieldset_page_type,
    "file": _files_type("Pagefile", "Pagefiles"),
    "float": "float",
    "image": _files_type("Pageimage", "Pageimages"),
    "integer": "int",
    "module": "string",
    "options": "SelectableOptionArray",
    "page": _page_type,
    "page_table": "PageArray",
    "page_title": "string",
    "page_title_language": "string",
    "password": "Password",
    "repeater": _repeater_type("RepeaterPageArray"),
    "repeater_matrix": _repeater_type("RepeaterMatrixPageArray"),
    "selector": "string",
    "table": "TableRows",
    "text": "string",
    "text_language": "string",
    "textarea": "string",
    "textarea_language": "string",
    "url": "string",
}

# Combo subfield types → value types on the generated ComboValue class
COMBO_SUBFIELD_TYPES: dict[str, str] = {
    "checkbox": "int",
    "checkboxes": "array",
    "datetime": "string",
    "email": "string",
    "float": "float",
    "integer": "int",
    "page": "Page|NullPage",
    "radios": "string",
    "select": "string",
    "selects": "array",
    "text": "string",
    "textarea": "string",
    "toggle": "int",
    "url": "string",
}


class TypeResolver:
    """Resolve field types against a mapping table.

    Args:
        settings: Generator settings (container naming, extra types).
        store: Stub store used for the auxiliary combo value stubs.
            Without one, combo fields still resolve but write nothing.
        mapping: Base table. Defaults to ``DEFAULT_TYPES``.
    """

    def __init__(
        self,
        settings: Settings,
        store: StubStore | None = None,
        mapping: TypeMapping | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.mapping: TypeMapping = {**(mapping if mapping is not None else DEFAULT_TYPES)}
        self.mapping.update(settings.types)

    def resolve(self, type_id: str, field: SchemaField) -> str:
        entry = self.mapping.get(normalize_type_id(type_id))
        if entry is None:
            logger.debug("No type mapping for '%s' (field %s)", type_id, field.name)
            return FALLBACK_TYPE
        if callable(entry):
            return entry(field, self)
        return entry

    def describe(self) -> dict[str, str]:
        """Type table for display: fixed expressions, or ``<dynamic>``."""
        return {
            key: (value if isinstance(value, str) else "<dynamic>")
            for key, value in sorted(self.mapping.items())
        }

    def write_combo_stub(self, class_name: str, field: SchemaField) -> None:
        """(Re)write the value class stub for a combo field."""
        if self.store is None:
            return
        lines = ["/**", f" * Combo field: {field.name}", " *"]
        for sub in field.config.get("subfields", []) or []:
            if not isinstance(sub, dict) or not sub.get("name"):
                continue
            sub_type = COMBO_SUBFIELD_TYPES.get(
                normalize_type_id(str(sub.get("type", ""))), FALLBACK_TYPE
            )
            label = doc_text(str(sub.get("label", "")))
            line = f" * @property {sub_type} ${sub['name']} {label}"
            lines.append(line.rstrip())
        lines += [" */", f"class {class_name} extends ComboValue {{}}", ""]
        content = php_preamble(class_name, self.settings) + "\n".join(lines)
        path = self.store.path_for(class_name)
        if self.store.read(path) != content:
            self.store.write(path, content)
