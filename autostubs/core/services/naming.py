"""
Naming rules shared by the builder, synthesizer and generator.

Template ``repeater_contactBlock`` becomes class ``ContactBlockRepeaterPage``,
template ``blogPost`` becomes ``BlogPostPage``. Repeater matrix item
types are only recognized after their fields are scanned, at which
point ``RepeaterPage`` is swapped for ``RepeaterMatrixPage``.
"""

from __future__ import annotations

import re

PAGE_SUFFIX = "Page"
REPEATER_SUFFIX = "RepeaterPage"
MATRIX_SUFFIX = "RepeaterMatrixPage"

_REPEATER_NAME_PREFIX = "repeater_"
_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def camel_case(text: str) -> str:
    """``contact_block`` / ``contact-block`` → ``contactBlock``.

    Existing inner capitals are kept, so ``blogPost`` stays ``blogPost``.
    """
    words = [w for w in _WORD_SPLIT.split(text) if w]
    if not words:
        return ""
    head, *rest = words
    return head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in rest)


def ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def is_repeater_name(template_name: str) -> bool:
    return template_name.split("_")[0] == "repeater"


def page_class_name(template_name: str) -> str:
    """Derive the page class name for a template.

    Returns "" when nothing usable is left of the name.
    """
    suffix = PAGE_SUFFIX
    stem = template_name
    if is_repeater_name(template_name):
        suffix = REPEATER_SUFFIX
        stem = stem.replace(_REPEATER_NAME_PREFIX, "", 1)
    stem = ucfirst(camel_case(stem))
    if not stem:
        return ""
    return stem + suffix


def matrix_class_name(class_name: str) -> str:
    """Switch a repeater class name over to its matrix variant."""
    return class_name.replace(REPEATER_SUFFIX, MATRIX_SUFFIX)


def field_class_name(field_name: str) -> str:
    """Class name fragment for a container field (``blocks`` → ``BlocksPage``)."""
    return ucfirst(camel_case(field_name)) + PAGE_SUFFIX


def normalize_type_id(type_id: str) -> str:
    """Bring a field type identifier into snake_case.

    Host-style names are accepted: ``FieldtypePageTitleLanguage`` →
    ``page_title_language``; ``customWidget`` → ``custom_widget``.
    """
    name = type_id.strip()
    if name.startswith("Fieldtype") and name[9:10].isupper():
        name = name[9:]
    name = _CAMEL_BOUNDARY.sub("_", name)
    return "_".join(w for w in _WORD_SPLIT.split(name) if w).lower()
