"""CLI entry point - command definition using Click.

Usage:
    clover-report coverage.xml
    clover-report --root ./src --json --pretty coverage.xml

Exit codes:
    0   report printed (including when nothing is uncovered)
    1   bad invocation or configuration
    2   the coverage file is missing or not well-formed XML
"""

import json
import sys

import click
from click.core import ParameterSource

from clover_report import __version__
from clover_report.config import DEFAULT_CONFIG_PATH

EXIT_USAGE = 1
EXIT_LOAD = 2


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_config(config_path: str, root: str | None, explicit: bool):
    """Load config and return it. Exits on error."""
    from clover_report.config import ConfigError, load

    try:
        return load(config_path, required=explicit, project_root=root)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(EXIT_USAGE)


def _usage_error(ctx: click.Context, message: str) -> None:
    """Print usage and *message* on stderr, then exit with the usage status."""
    click.echo(ctx.get_usage(), err=True)
    click.echo(f"Error: {message}", err=True)
    sys.exit(EXIT_USAGE)


def _load_report(path: str):
    """Parse the coverage file and return its root element. Exits on error."""
    from clover_report.loader import ReportError, load

    try:
        return load(path)
    except ReportError as exc:
        click.echo(str(exc), err=True)
        sys.exit(EXIT_LOAD)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command()
@click.argument("coverage_xml", required=False)
@click.option("--root", "root", default=None,
              show_default="project_root from config, else current directory",
              help="Project root used to locate reported source files.")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
@click.option("--no-color", is_flag=True, default=False,
              help="Disable ANSI colors (same as setting NO_COLOR).")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Emit the report as JSON instead of the console listing.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output (requires --json).")
@click.option("--verbose", is_flag=True, default=False,
              help="Print progress details on stderr.")
@click.version_option(__version__, prog_name="clover-report")
@click.pass_context
def cli(ctx: click.Context, coverage_xml: str | None, root: str | None,
        config_path: str, no_color: bool, as_json: bool, pretty: bool,
        verbose: bool) -> None:
    """Show overall and per-file coverage from a Clover XML report, with
    every uncovered statement or method line."""
    from clover_report.config import colors_enabled
    from clover_report.reports.console import Palette, render
    from clover_report.reports.coverage import aggregate

    if not coverage_xml:
        _usage_error(ctx, "Missing argument 'COVERAGE_XML'.")
    if pretty and not as_json:
        _usage_error(ctx, "--pretty can only be used together with --json.")

    explicit = ctx.get_parameter_source("config_path") is not ParameterSource.DEFAULT
    config = _load_config(config_path, root, explicit=explicit)

    if verbose:
        click.echo(f"[verbose] Reading {coverage_xml}", err=True)
        click.echo(f"[verbose] Project root {config.project_root}", err=True)

    document = _load_report(coverage_xml)
    summary = aggregate(document, config.project_root)

    if verbose:
        source = "project metrics" if summary.from_project_metrics else "per-file line counts"
        click.echo(f"[verbose] Overall totals taken from {source}", err=True)
        for entry in summary.files:
            where = entry.full_path if entry.full_path else "not found on disk"
            click.echo(f"[verbose] {entry.cov_path} -> {where}", err=True)

    if as_json:
        indent = 2 if pretty else None
        click.echo(json.dumps(summary.to_dict(), indent=indent, ensure_ascii=False))
        return

    palette = Palette.create(enabled=colors_enabled() and not no_color)
    for line in render(summary, palette,
                       good=config.good_threshold, warning=config.warning_threshold):
        click.echo(line, color=True)


def main(argv: list[str] | None = None) -> None:
    """Console-script entry point; usage errors exit with status 1."""
    try:
        cli.main(args=argv, prog_name="clover-report", standalone_mode=False)
    except click.UsageError as exc:
        exc.show()
        sys.exit(EXIT_USAGE)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(EXIT_USAGE)
