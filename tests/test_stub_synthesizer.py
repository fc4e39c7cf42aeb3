"""
Tests for the stub synthesizer — initial page class file content.
"""

from pathlib import Path

from autostubs.core.models.schema import SchemaTemplate
from autostubs.core.models.settings import Settings
from autostubs.core.services.stub_synthesizer import base_class_for, create_stub


class TestBaseClass:
    def test_default(self):
        assert base_class_for(SchemaTemplate(name="event")) == "Page"

    def test_repeater(self):
        assert base_class_for(SchemaTemplate(name="repeater_items")) == "RepeaterPage"

    def test_repeater_known_matrix(self):
        template = SchemaTemplate(name="repeater_blocks")
        assert base_class_for(template, matrix=True) == "RepeaterMatrixPage"

    def test_explicit_override_wins(self):
        template = SchemaTemplate(name="repeater_items", page_class="CustomItemPage")
        assert base_class_for(template) == "CustomItemPage"

    def test_repeater_prefix_needs_separator(self):
        """``repeaters`` is an ordinary template name."""
        assert base_class_for(SchemaTemplate(name="repeaters")) == "Page"


class TestCreateStub:
    def test_default_layout(self, settings: Settings):
        content = create_stub("EventPage", SchemaTemplate(name="event"), settings)
        assert content == (
            "<?php namespace ProcessWire;\n"
            "\n"
            "class EventPage extends Page {}\n"
        )

    def test_strict_types(self, tmp_path: Path):
        settings = Settings(classes_dir=tmp_path, strict_types=True)
        content = create_stub("EventPage", SchemaTemplate(name="event"), settings)
        assert content == (
            "<?php declare(strict_types=1);\n"
            "\n"
            "namespace ProcessWire;\n"
            "\n"
            "class EventPage extends Page {}\n"
        )

    def test_vendor_class_without_namespace(self, settings: Settings):
        template = SchemaTemplate(name="rockpagebuilder_hero")
        content = create_stub("RockpagebuilderHeroPage", template, settings)
        assert "namespace" not in content
        assert content.startswith("<?php\n\nclass RockpagebuilderHeroPage extends Page {}")

    def test_repeater_guesses_repeater_page(self, settings: Settings):
        template = SchemaTemplate(name="repeater_blocks")
        content = create_stub("BlocksRepeaterPage", template, settings)
        assert "class BlocksRepeaterPage extends RepeaterPage {}" in content

    def test_empty_class_name_aborts(self, settings: Settings):
        assert create_stub("", SchemaTemplate(name="repeater_"), settings) is None
