"""
Tests for naming rules and the annotation builder.
"""

import pytest

from autostubs.core.models.schema import FieldContext, SchemaField, SchemaTemplate
from autostubs.core.services.annotation_builder import MATRIX_SENTINEL_FIELD, build_annotations
from autostubs.core.services.naming import (
    camel_case,
    field_class_name,
    matrix_class_name,
    page_class_name,
)
from autostubs.core.services.type_resolver import TypeResolver

SKIP = ["fieldset_open", "fieldset_tab_open", "fieldset_close"]


# ═══════════════════════════════════════════════════════════════════
#  Naming
# ═══════════════════════════════════════════════════════════════════


class TestClassNames:
    @pytest.mark.parametrize(
        "template, expected",
        [
            ("repeater_contactBlock", "ContactBlockRepeaterPage"),
            ("blogPost", "BlogPostPage"),
            ("basic-page", "BasicPagePage"),
            ("home", "HomePage"),
            ("repeater_team_members", "TeamMembersRepeaterPage"),
        ],
    )
    def test_page_class_name(self, template: str, expected: str):
        assert page_class_name(template) == expected

    def test_empty_stem(self):
        """Nothing left after stripping → no class name."""
        assert page_class_name("repeater_") == ""
        assert page_class_name("--") == ""

    def test_matrix_class_name(self):
        assert matrix_class_name("BlocksRepeaterPage") == "BlocksRepeaterMatrixPage"
        assert matrix_class_name("HomePage") == "HomePage"

    def test_field_class_name(self):
        assert field_class_name("team_members") == "TeamMembersPage"

    def test_camel_case_keeps_inner_capitals(self):
        assert camel_case("blogPost") == "blogPost"
        assert camel_case("Contact-form_v2") == "contactFormV2"


# ═══════════════════════════════════════════════════════════════════
#  build_annotations
# ═══════════════════════════════════════════════════════════════════


class TestBuildAnnotations:
    def test_event_template(self, resolver: TypeResolver, event_template: SchemaTemplate):
        block = build_annotations(event_template, resolver, SKIP)
        assert block.text == (
            " *\n"
            " * Template: event (Event)\n"
            " * @property string $title\n"
            " * @property Pageimages $photos\n"
            " *"
        )
        assert block.field_count == 2
        assert block.is_matrix is False

    def test_label_appended(self, resolver: TypeResolver):
        template = SchemaTemplate(
            name="home",
            fields=[SchemaField(name="title", type="text", label="Page title")],
        )
        block = build_annotations(template, resolver, SKIP)
        assert " * Template: home\n" in block.text
        assert " * @property string $title Page title\n" in block.text

    def test_field_order_preserved(self, resolver: TypeResolver):
        names = ["zeta", "alpha", "mid", "beta"]
        template = SchemaTemplate(
            name="ordered",
            fields=[SchemaField(name=n, type="text") for n in names],
        )
        lines = build_annotations(template, resolver).text.splitlines()
        props = [line.split("$")[1] for line in lines if "@property" in line]
        assert props == names

    def test_skipped_types_left_out(self, resolver: TypeResolver):
        template = SchemaTemplate(
            name="tabs",
            fields=[
                SchemaField(name="tab", type="FieldtypeFieldsetTabOpen"),
                SchemaField(name="title", type="text"),
                SchemaField(name="tab_END", type="FieldtypeFieldsetClose"),
            ],
        )
        block = build_annotations(template, resolver, SKIP)
        assert "$tab" not in block.text
        assert "$tab_END" not in block.text
        assert block.field_count == 1

    def test_field_context_applied(self, resolver: TypeResolver):
        """Template context overrides label and config."""
        photos = SchemaField(
            name="photos",
            type="image",
            label="Photos",
            config={"outputFormat": "auto", "maxFiles": 10},
            contexts={"event": FieldContext(label="Header image", config={"maxFiles": 1})},
        )
        event = SchemaTemplate(name="event", fields=[photos])
        other = SchemaTemplate(name="other", fields=[photos])

        assert " * @property Pageimage|null $photos Header image" in (
            build_annotations(event, resolver).text
        )
        assert " * @property Pageimages $photos Photos" in build_annotations(other, resolver).text

    def test_matrix_detected(self, resolver: TypeResolver):
        template = SchemaTemplate(
            name="repeater_blocks",
            fields=[
                SchemaField(name=MATRIX_SENTINEL_FIELD, type="integer"),
                SchemaField(name="headline", type="text"),
            ],
        )
        assert build_annotations(template, resolver).is_matrix is True

    def test_labels_kept_inside_docblock(self, resolver: TypeResolver):
        """Multi-line labels are folded and a comment terminator is defused."""
        template = SchemaTemplate(
            name="home",
            label="Home\npage",
            fields=[
                SchemaField(name="title", type="text", label="Page\n  title"),
                SchemaField(name="note", type="text", label="ends here */ or not"),
            ],
        )
        text = build_annotations(template, resolver).text
        assert " * Template: home (Home page)\n" in text
        assert " * @property string $title Page title\n" in text
        assert " * @property string $note ends here *\\/ or not\n" in text
        assert "*/" not in text
        assert all(line.startswith(" *") for line in text.splitlines())

    def test_no_trailing_blank_lines(self, resolver: TypeResolver, event_template: SchemaTemplate):
        text = build_annotations(event_template, resolver).text
        assert text.endswith(" *")
        assert not text.endswith("\n")
        assert all(line.rstrip() == line for line in text.splitlines())
