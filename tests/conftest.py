"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from autostubs.core.models.schema import SchemaField, SchemaTemplate
from autostubs.core.models.settings import Settings
from autostubs.core.persistence.stub_store import StubStore
from autostubs.core.services.stub_generator import StubGenerator
from autostubs.core.services.type_resolver import TypeResolver

SCHEMA_YML = textwrap.dedent("""\
    fields:
      - name: title
        type: FieldtypePageTitle
        label: Title
      - name: photos
        type: image
        label: Photos
        config:
          outputFormat: array
        contexts:
          event:
            label: Event photos
      - name: body
        type: textarea
        label: Body
      - name: tab
        type: FieldtypeFieldsetTabOpen
        label: Details
      - name: tab_END
        type: FieldtypeFieldsetClose
      - name: blocks
        type: repeater_matrix
        label: Blocks
      - name: repeater_matrix_type
        type: integer
      - name: headline
        type: text
        label: Headline
    fieldgroups:
      - name: event
        fields: [title, tab, photos, tab_END]
      - name: basic-page
        fields: [title, body, blocks]
      - name: repeater_blocks
        fields: [repeater_matrix_type, headline]
      - name: admin
        fields: [title]
    templates:
      - name: event
        label: Event
      - name: basic-page
        label: Basic page
      - name: news
        label: News
        fieldgroup: basic-page
      - name: repeater_blocks
      - name: admin
""")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with the classes directory inside tmp_path."""
    return Settings(classes_dir=tmp_path / "classes")


@pytest.fixture
def store(settings: Settings) -> StubStore:
    return StubStore(settings.classes_dir, settings.extension)


@pytest.fixture
def resolver(settings: Settings, store: StubStore) -> TypeResolver:
    return TypeResolver(settings, store)


@pytest.fixture
def generator(settings: Settings, store: StubStore, resolver: TypeResolver) -> StubGenerator:
    return StubGenerator(settings, store, resolver)


@pytest.fixture
def event_template() -> SchemaTemplate:
    """The ``event`` template: a title and an image array."""
    return SchemaTemplate(
        name="event",
        label="Event",
        fields=[
            SchemaField(name="title", type="text"),
            SchemaField(name="photos", type="image", config={"outputFormat": "array"}),
        ],
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A site directory with autostubs.yml and schema.yml."""
    (tmp_path / "schema.yml").write_text(SCHEMA_YML)
    (tmp_path / "autostubs.yml").write_text(textwrap.dedent("""\
        schema: schema.yml
        classes_dir: site/classes
        freshness_window: 3
    """))
    return tmp_path


@pytest.fixture
def config_path(project_dir: Path) -> Path:
    return project_dir / "autostubs.yml"


@pytest.fixture
def classes_dir(project_dir: Path) -> Path:
    return project_dir / "site" / "classes"
