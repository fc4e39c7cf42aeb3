"""
CLI commands that fire schema change events by hand.

Thin wrappers over ``autostubs.core.use_cases.events``; useful to replay
what the host platform would send after a save.
"""

from __future__ import annotations

import click

from autostubs.core.services.schema_events import (
    FIELD_CONTEXT_SAVED,
    FIELD_SAVED,
    FIELDGROUP_SAVED,
    TEMPLATE_SAVED,
)


def _fire(ctx: click.Context, event_type: str, payload: dict, as_json: bool) -> None:
    from autostubs.core.use_cases.events import run_event
    from autostubs.main import echo_sync_result

    result = run_event(event_type, payload, config_path=ctx.obj.get("config_path"))
    echo_sync_result(ctx, result, as_json, event_type)


@click.group()
def hook() -> None:
    """Fire schema events — field, template, context, fieldgroup saved."""


@hook.command("field-saved")
@click.argument("field")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def field_saved(ctx: click.Context, field: str, as_json: bool) -> None:
    """A field was saved: regenerate every template using it."""
    _fire(ctx, FIELD_SAVED, {"field": field}, as_json)


@hook.command("template-saved")
@click.argument("template")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def template_saved(ctx: click.Context, template: str, as_json: bool) -> None:
    """A template was saved: regenerate it."""
    _fire(ctx, TEMPLATE_SAVED, {"template": template}, as_json)


@hook.command("context-saved")
@click.argument("field")
@click.argument("fieldgroup")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def context_saved(ctx: click.Context, field: str, fieldgroup: str, as_json: bool) -> None:
    """A field's per-template context was saved."""
    _fire(ctx, FIELD_CONTEXT_SAVED, {"field": field, "fieldgroup": fieldgroup}, as_json)


@hook.command("fieldgroup-saved")
@click.argument("fieldgroup")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def fieldgroup_saved(ctx: click.Context, fieldgroup: str, as_json: bool) -> None:
    """A fieldgroup was saved: regenerate every template using it."""
    _fire(ctx, FIELDGROUP_SAVED, {"fieldgroup": fieldgroup}, as_json)
