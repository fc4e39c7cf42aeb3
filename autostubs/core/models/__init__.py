"""
Domain models — Pydantic types for the stub generator.

All models are re-exported here for convenient access:

    from autostubs.core.models import Schema, SchemaTemplate, Settings
"""

from autostubs.core.models.schema import (
    FieldContext,
    Fieldgroup,
    Schema,
    SchemaField,
    SchemaTemplate,
    TemplateRef,
)
from autostubs.core.models.settings import Settings
from autostubs.core.models.stub import GeneratedStub

__all__ = [
    # schema.py
    "FieldContext",
    "Fieldgroup",
    # stub.py
    "GeneratedStub",
    "Schema",
    "SchemaField",
    "SchemaTemplate",
    # settings.py
    "Settings",
    "TemplateRef",
]
