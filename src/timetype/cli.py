"""``timetype`` CLI: inspect how clocks and durations cross each boundary."""

from __future__ import annotations

import logging
from typing import NoReturn

import click

from timetype import __version__
from timetype.clock import Clock
from timetype.config.logging import configure_logging
from timetype.config.settings import TimetypeSettings, resolve_zone
from timetype.duration import Duration
from timetype.errors import ExternalError, TimetypeError
from timetype.output import clock_fields, duration_fields, render_error, render_fields

logger = logging.getLogger(__name__)


def _fail(settings: TimetypeSettings, exc: TimetypeError) -> NoReturn:
    """Print *exc* to stderr and exit with code 1."""
    logger.debug("Conversion failed", extra={"error": str(exc), "kind": type(exc).__name__})
    click.echo(render_error(str(exc), json_output=settings.json_output), err=True)
    raise SystemExit(1)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="timetype")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """timetype — clock and duration codec inspector."""
    # Unset flags stay None so env vars and TOML can supply them.
    settings = TimetypeSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("text")
@click.option("--zone", default=None, help="Zone to attach (default: settings zone).")
@click.pass_obj
def clock(settings: TimetypeSettings, text: str, zone: str | None) -> None:
    """Parse TEXT as a time of day and show its renders."""
    try:
        tz = resolve_zone(zone) if zone else settings.tz
    except (KeyError, ValueError) as exc:
        raise click.BadParameter(f"Unknown time zone: {zone}", param_hint="--zone") from exc

    try:
        value = Clock.parse(text, tz=tz)
    except TimetypeError as exc:
        _fail(settings, exc)
    click.echo(render_fields(clock_fields(value), json_output=settings.json_output))


@cli.command()
@click.argument("text")
@click.pass_obj
def duration(settings: TimetypeSettings, text: str) -> None:
    """Decode TEXT (a JSON duration, or a bare literal) and show its renders."""
    try:
        try:
            value = Duration.from_json(text)
        except ExternalError:
            if text.startswith('"'):
                raise
            # Bare literals are not JSON; read them as a literal.
            value = Duration.parse(text)
    except TimetypeError as exc:
        _fail(settings, exc)
    click.echo(render_fields(duration_fields(value), json_output=settings.json_output))
