"""
Stub generator — one template in, one annotated page class file out.

Per template:
    1. Derive the class name and scan the fields into an annotation block.
    2. Create the stub if the file is missing or empty.
    3. Otherwise, for a repeater matrix item type whose file was written
       moments ago, switch its base class over to RepeaterMatrixPage.
    4. Patch the annotation block in and write the file if it changed.

``generate_all`` runs this for every template in turn; a failure on
one template is recorded and the rest still run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from autostubs.core.models.schema import SchemaTemplate
from autostubs.core.models.settings import Settings
from autostubs.core.models.stub import (
    CREATED,
    FAILED,
    SKIPPED,
    UNCHANGED,
    UPDATED,
    GeneratedStub,
)
from autostubs.core.persistence.stub_store import StubStore
from autostubs.core.services.annotation_builder import build_annotations
from autostubs.core.services.annotation_patcher import has_annotations, patch_annotations
from autostubs.core.services.naming import matrix_class_name, page_class_name
from autostubs.core.services.stub_synthesizer import (
    MATRIX_BASE_CLASS,
    REPEATER_BASE_CLASS,
    create_stub,
)
from autostubs.core.services.type_resolver import TypeResolver

logger = logging.getLogger(__name__)


def correct_base_class(content: str) -> str:
    """Rewrite ``extends RepeaterPage`` to ``extends RepeaterMatrixPage``."""
    return content.replace(
        f" extends {REPEATER_BASE_CLASS} ",
        f" extends {MATRIX_BASE_CLASS} ",
    )


@dataclass
class SyncReport:
    """Outcome of regenerating a batch of templates."""

    results: list[GeneratedStub] = field(default_factory=list)
    skipped_templates: list[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.action == FAILED)

    @property
    def changed(self) -> int:
        return sum(1 for r in self.results if r.changed)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "total": len(self.results),
            "changed": self.changed,
            "failed": self.failed,
            "skipped_templates": self.skipped_templates,
            "results": [r.model_dump() for r in self.results],
        }


class StubGenerator:
    """Keeps page class stubs in step with the schema."""

    def __init__(
        self,
        settings: Settings,
        store: StubStore | None = None,
        resolver: TypeResolver | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or StubStore(settings.classes_dir, settings.extension)
        self.resolver = resolver or TypeResolver(settings, self.store)

    def generate(self, template: SchemaTemplate) -> GeneratedStub:
        """Create or update the stub file for one template."""
        block = build_annotations(template, self.resolver, self.settings.skip_fieldtypes)

        class_name = page_class_name(template.name)
        if block.is_matrix:
            class_name = matrix_class_name(class_name)

        result = GeneratedStub(
            template=template.name,
            class_name=class_name,
            is_matrix=block.is_matrix,
            fields=block.field_count,
        )
        if not class_name:
            logger.warning("Template '%s' yields no class name — skipped", template.name)
            result.action = SKIPPED
            result.error = "empty class name"
            return result

        path = self.store.path_for(class_name)
        result.path = str(path)

        content = self.store.read(path)
        if content is None and self.store.exists(path):
            result.action = FAILED
            result.error = f"cannot read {path}"
            return result

        created = False
        if not content:
            stub = create_stub(class_name, template, self.settings, matrix=block.is_matrix)
            if stub is None:
                result.action = SKIPPED
                result.error = "stub not created"
                return result
            logger.info("Creating %s for template '%s'", path.name, template.name)
            content = stub
            created = True
        elif block.is_matrix and self.store.changed_within(path, self.settings.freshness_window):
            corrected = correct_base_class(content)
            if corrected != content:
                self.store.write(path, corrected)
                logger.info("Switched %s to %s", path.name, MATRIX_BASE_CLASS)
                content = corrected
                result.base_class_corrected = True

        patched = patch_annotations(content, block.text)
        if patched == content and not created:
            if not has_annotations(content):
                logger.debug("No class declaration in %s — left as is", path)
                result.action = SKIPPED
                result.error = "no class declaration found"
            else:
                result.action = UPDATED if result.base_class_corrected else UNCHANGED
            return result

        self.store.write(path, patched)
        result.action = CREATED if created else UPDATED
        logger.info("Annotated %s (%d fields)", path.name, block.field_count)
        return result

    def generate_all(self, templates: Iterable[SchemaTemplate]) -> SyncReport:
        """Regenerate every template not in ``skip_templates``."""
        report = SyncReport()
        skip = set(self.settings.skip_templates)
        for template in templates:
            if template.name in skip:
                report.skipped_templates.append(template.name)
                continue
            try:
                report.results.append(self.generate(template))
            except Exception as e:
                logger.exception("Generation failed for template '%s'", template.name)
                report.results.append(
                    GeneratedStub(template=template.name, action=FAILED, error=str(e))
                )
        logger.info(
            "Sync finished: %d template(s), %d changed, %d failed",
            len(report.results), report.changed, report.failed,
        )
        return report
