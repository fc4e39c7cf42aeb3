"""
Annotation builder — a template's fields as PHPDoc ``@property`` lines.

The block text is regenerated in full on every run::

     *
     * Template: event (Event)
     * @property string $title Title
     * @property Pageimages $photos Photos
     *

Field order follows the template. Fieldset markup fields carry no data
and are left out.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from autostubs.core.models.schema import SchemaTemplate
from autostubs.core.services.annotation_patcher import doc_text
from autostubs.core.services.naming import normalize_type_id
from autostubs.core.services.type_resolver import TypeResolver

# Only repeater matrix item templates carry this field
MATRIX_SENTINEL_FIELD = "repeater_matrix_type"


@dataclass
class AnnotationBlock:
    """Annotation text for one template, plus what the scan found."""

    text: str
    is_matrix: bool = False
    field_count: int = 0


def build_annotations(
    template: SchemaTemplate,
    resolver: TypeResolver,
    skip_fieldtypes: Iterable[str] = (),
) -> AnnotationBlock:
    skipped = {normalize_type_id(t) for t in skip_fieldtypes}

    header = template.name
    if template.label:
        header += f" ({doc_text(template.label)})"
    lines = [" *", f" * Template: {header}"]

    is_matrix = False
    count = 0
    for field in template.fields:
        if normalize_type_id(field.type) in skipped:
            continue
        effective = field.in_context(template.name)
        type_expr = resolver.resolve(effective.type, effective)
        label = doc_text(effective.label)
        lines.append(f" * @property {type_expr} ${field.name} {label}".rstrip())
        count += 1
        if field.name == MATRIX_SENTINEL_FIELD:
            is_matrix = True
    lines.append(" *")

    return AnnotationBlock(text="\n".join(lines), is_matrix=is_matrix, field_count=count)
