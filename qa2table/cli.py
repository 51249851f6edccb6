"""Command-line interface for qa2table.

Provides one-shot and scheduled runs of the QA pipeline, plus helpers to
preview chunking and the deploy-time cron expression.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from qa2table import __version__
from qa2table.exceptions import InputError
from qa2table.runner import run_once
from qa2table.scheduler import CronSchedule, deploy_cron_expression, run_scheduled
from qa2table.sources import SOURCE_FORMATS, InputSource, create_source
from qa2table.utils import get_config, get_logger, load_config, setup_cli_logging

logger = get_logger(__name__)


def _source_from_options(
    ctx: click.Context,
    input_path: str | None,
    fmt: str | None,
    flush_trailing: bool | None,
) -> InputSource:
    """Build the input source, falling back to the ``input`` config section."""
    config = ctx.obj["config"]
    return create_source(
        fmt or config.get("input.format", "text"),
        input_path or config.get("input.path", "test.txt"),
        flush_trailing=(
            flush_trailing
            if flush_trailing is not None
            else bool(config.get("pipeline.flush_trailing", False))
        ),
    )


def _input_options(func: Any) -> Any:
    func = click.option(
        "--flush-trailing/--drop-trailing",
        default=None,
        help="Keep or drop a final section not followed by a blank line (default: config)",
    )(func)
    func = click.option(
        "--format",
        "fmt",
        type=click.Choice(SOURCE_FORMATS, case_sensitive=False),
        help="Input format: plain text or a JSON list of sections (default: config)",
    )(func)
    func = click.option(
        "--input",
        "-i",
        "input_path",
        type=click.Path(dir_okay=False),
        help="Input file (default: input.path from config)",
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="qa2table")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv)",
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration YAML file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, config: str | None) -> None:
    """qa2table - Generate Q&A pairs from text and store them in Airtable."""
    load_dotenv()
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if config:
        ctx.obj["config"] = load_config(config)
        ctx.obj["config_path"] = Path(config).resolve()
    else:
        ctx.obj["config"] = get_config()
        ctx.obj["config_path"] = None

    setup_cli_logging(verbose=verbose, config=ctx.obj["config"])


@cli.command("run")
@_input_options
@click.option("--dry-run", is_flag=True, help="Log records instead of uploading them")
@click.pass_context
def run_command(
    ctx: click.Context,
    input_path: str | None,
    fmt: str | None,
    flush_trailing: bool | None,
    dry_run: bool,
) -> None:
    """Process the input once and exit."""
    try:
        source = _source_from_options(ctx, input_path, fmt, flush_trailing)
        stats = run_once(source, config=ctx.obj["config"], dry_run=dry_run)
    except (InputError, ValueError) as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(
        click.style(
            f"✓ Processed {stats.pairs} Q&A pairs in {stats.chunks} of {stats.total} sections",
            fg="green",
        )
    )


@cli.command("schedule")
@_input_options
@click.option("--dry-run", is_flag=True, help="Log records instead of uploading them")
@click.option(
    "--cron",
    "cron_expr",
    help="Cron expression (default: two minutes from now, every day)",
)
@click.option(
    "--daily/--pin-date",
    default=True,
    help="With the default expression, repeat every day or fire once on today's date",
)
@click.option("--max-runs", type=int, default=None, help="Stop after N runs")
@click.pass_context
def schedule_command(
    ctx: click.Context,
    input_path: str | None,
    fmt: str | None,
    flush_trailing: bool | None,
    dry_run: bool,
    cron_expr: str | None,
    daily: bool,
    max_runs: int | None,
) -> None:
    """Run the pipeline on a cron schedule."""
    expression = cron_expr or deploy_cron_expression(daily=daily)
    try:
        schedule = CronSchedule.parse(expression)
        source = _source_from_options(ctx, input_path, fmt, flush_trailing)
    except ValueError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    config = ctx.obj["config"]
    click.echo(click.style(f"Scheduled with cron '{expression}'", fg="cyan"))

    runs = run_scheduled(
        lambda: run_once(source, config=config, dry_run=dry_run),
        schedule,
        max_runs=max_runs,
    )
    click.echo(click.style(f"✓ Completed {runs} scheduled runs", fg="green"))


@cli.command("chunk")
@click.argument("input_path", type=click.Path(dir_okay=False))
@click.option(
    "--flush-trailing/--drop-trailing",
    default=None,
    help="Keep or drop a final section not followed by a blank line",
)
@click.pass_context
def chunk_command(ctx: click.Context, input_path: str, flush_trailing: bool | None) -> None:
    """Show the sections a text file is split into."""
    try:
        source = _source_from_options(ctx, input_path, "text", flush_trailing)
        chunks = source.load()
    except (InputError, ValueError) as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for index, chunk in enumerate(chunks, 1):
        click.echo(click.style(f"--- section {index} ---", fg="cyan"))
        click.echo(chunk, nl=False)
    click.echo(f"{len(chunks)} sections")


@cli.command("cron")
@click.option(
    "--daily/--pin-date",
    default=True,
    help="Leave day and month open, or pin them to today so the run fires once",
)
def cron_command(daily: bool) -> None:
    """Print the cron expression for a run two minutes from now."""
    click.echo(deploy_cron_expression(daily=daily))


def main(argv: list[str] | None = None) -> None:  # pragma: no cover
    """Entry point for CLI."""
    cli(args=argv if argv is not None else sys.argv[1:])


if __name__ == "__main__":  # pragma: no cover
    main()
