"""
Generated stub model — the outcome of one template's generation.
"""

from __future__ import annotations

from pydantic import BaseModel

# Outcomes of a generation run
CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"
SKIPPED = "skipped"
FAILED = "failed"


class GeneratedStub(BaseModel):
    """What happened to one template's stub file.

    Attributes:
        template:   Source template name.
        class_name: Derived page class name ("" if none could be derived).
        path:       Stub file path ("" if none).
        action:     created, updated, unchanged, skipped or failed.
        is_matrix:  Template was detected as a repeater matrix item type.
        base_class_corrected: RepeaterPage was switched to RepeaterMatrixPage.
        fields:     Number of @property lines written.
        error:      Why the template was skipped or failed.
    """

    template: str
    class_name: str = ""
    path: str = ""
    action: str = UNCHANGED
    is_matrix: bool = False
    base_class_corrected: bool = False
    fields: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.action != FAILED

    @property
    def changed(self) -> bool:
        return self.action in (CREATED, UPDATED)
