"""
Stub synthesizer — the initial content of a new page class file.

Produces::

    <?php namespace ProcessWire;

    class EventPage extends Page {}

The declaration line and its base class are written once; later runs
only touch the annotation block above it.
"""

from __future__ import annotations

import logging

from autostubs.core.models.schema import SchemaTemplate
from autostubs.core.models.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_BASE_CLASS = "Page"
REPEATER_BASE_CLASS = "RepeaterPage"
MATRIX_BASE_CLASS = "RepeaterMatrixPage"


def base_class_for(template: SchemaTemplate, *, matrix: bool = False) -> str:
    """Pick the base class for a template's page class.

    An explicit page class on the template wins; repeater item types
    extend RepeaterPage, or RepeaterMatrixPage when the caller already
    knows the template belongs to a matrix field.
    """
    if template.page_class:
        return template.page_class
    if template.is_repeater:
        return MATRIX_BASE_CLASS if matrix else REPEATER_BASE_CLASS
    return DEFAULT_BASE_CLASS


def php_preamble(class_name: str, settings: Settings) -> str:
    """Opening tag, strict_types declaration and namespace line for a class file.

    The namespace is left out for vendor classes that live in the global
    namespace (class name contains one of ``no_namespace_markers``).
    """
    use_namespace = bool(settings.namespace) and not any(
        marker in class_name for marker in settings.no_namespace_markers
    )

    if settings.strict_types:
        preamble = "<?php declare(strict_types=1);\n\n"
        if use_namespace:
            preamble += f"namespace {settings.namespace};\n\n"
        return preamble
    if use_namespace:
        return f"<?php namespace {settings.namespace};\n\n"
    return "<?php\n\n"


def create_stub(
    class_name: str,
    template: SchemaTemplate,
    settings: Settings,
    *,
    matrix: bool = False,
) -> str | None:
    """Build the content for a brand-new stub file.

    Args:
        class_name: Page class to declare.
        template: Source template.
        settings: Namespace and strict-mode options.
        matrix: Template is known to be a repeater matrix item type.

    Returns:
        File content, or None when there is no class name to declare.
    """
    if not class_name:
        logger.warning("No class name for template '%s' — stub not created", template.name)
        return None

    base = base_class_for(template, matrix=matrix)
    content = php_preamble(class_name, settings)
    content += f"class {class_name} extends {base} {{}}\n"
    return content
