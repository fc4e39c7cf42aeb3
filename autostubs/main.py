"""
autostubs — CLI entrypoint.

Usage:
    python -m autostubs.main --help
    python -m autostubs.main sync
    python -m autostubs.main generate event basic-page
    python -m autostubs.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from autostubs import __version__
from autostubs.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    cli_level,
    setup_logging,
)

_ACTION_STYLE = {
    "created": ("+", "green"),
    "updated": ("~", "cyan"),
    "unchanged": ("=", "white"),
    "skipped": ("⊘", "yellow"),
    "failed": ("✗", "red"),
}


@click.group()
@click.version_option(version=__version__, prog_name="autostubs")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to autostubs.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """autostubs — keep page class annotations in step with the schema."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=cli_level(verbose=verbose, quiet=quiet, debug=debug),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


def echo_sync_result(ctx: click.Context, result, as_json: bool, title: str) -> None:  # type: ignore[no-untyped-def]
    """Print a SyncResult and exit non-zero on failure."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None

    if not ctx.obj.get("quiet"):
        click.secho(f"\n📝 {title}", fg="cyan", bold=True)
        click.echo(f"   Classes: {result.settings.classes_dir}")
        click.echo()

    for name in result.unknown_templates:
        click.secho(f"   ? {name} ", fg="yellow", nl=False)
        click.echo("(unknown template)")

    for stub in report.results:
        if ctx.obj.get("quiet") and stub.ok and stub.action != "skipped":
            continue
        icon, color = _ACTION_STYLE.get(stub.action, ("•", "white"))
        click.secho(f"   {icon} {stub.template} ", fg=color, nl=False)
        detail = stub.class_name or "-"
        if stub.base_class_corrected:
            detail += " (→ RepeaterMatrixPage)"
        if stub.error:
            detail += f" — {stub.error}"
        click.echo(detail)

    if report.skipped_templates and ctx.obj.get("verbose"):
        click.echo(f"   Skipped: {', '.join(report.skipped_templates)}")

    click.echo()
    color = "green" if report.ok else "red"
    click.secho(
        f"   {report.changed} changed, {report.failed} failed, {len(report.results)} total",
        fg=color,
        bold=True,
    )
    click.echo()
    if not report.ok:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def sync(ctx: click.Context, as_json: bool) -> None:
    """Regenerate the stubs of all templates."""
    from autostubs.core.use_cases.sync import run_sync

    result = run_sync(config_path=ctx.obj.get("config_path"))
    echo_sync_result(ctx, result, as_json, "Sync")


@cli.command()
@click.argument("templates", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, templates: tuple[str, ...], as_json: bool) -> None:
    """Regenerate the stubs of the named templates.

    Examples:

        autostubs generate event

        autostubs generate repeater_contactBlock basic-page
    """
    from autostubs.core.use_cases.sync import run_generate

    result = run_generate(list(templates), config_path=ctx.obj.get("config_path"))
    echo_sync_result(ctx, result, as_json, f"Generate: {', '.join(templates)}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def types(ctx: click.Context, as_json: bool) -> None:
    """List the field type → PHPDoc type table."""
    from autostubs.core.config.loader import ConfigError, load_settings
    from autostubs.core.services.type_resolver import TypeResolver

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    table = TypeResolver(settings).describe()
    if as_json:
        click.echo(json.dumps(table, indent=2))
        return

    width = max(len(k) for k in table)
    for type_id, expr in table.items():
        click.echo(f"   {type_id:<{width}}  {expr}")


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate autostubs.yml and the schema export."""
    from autostubs.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.schema is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Templates: {len(result.schema.templates)}")
        click.echo(f"   Fields: {len(result.schema.fields)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    click.echo()
    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", "-p", default=8000, type=int, help="Port number.")
@click.pass_context
def web(ctx: click.Context, host: str, port: int) -> None:
    "Start the webhook receiver for schema change events."
    from autostubs.ui.web.server import create_app, run_server

    app = create_app(config_path=ctx.obj.get("config_path"))

    click.echo()
    click.secho("⚡ autostubs — webhook receiver", bold=True)
    click.echo(f"   Hooks: http://{host}:{port}/api/hooks/<event>")
    click.echo()

    run_server(app, host=host, port=port, debug=ctx.obj.get("debug", False))


# ── Register sub-command groups from autostubs/ui/cli/ ──────────

from autostubs.ui.cli.hooks import hook  # noqa: E402

cli.add_command(hook)


if __name__ == "__main__":
    cli()
