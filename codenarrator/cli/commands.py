"""CLI commands for CodeNarrator.

Provides the Click-based command group 'codenarrator' with subcommands
for generating per-file documentation and checking API access.
"""

import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import find_dotenv, load_dotenv

from codenarrator import __version__
from codenarrator.analysis.discovery import DiscoveryConfig
from codenarrator.generators.batch_gen import BatchPipeline, FileResult, RunSummary
from codenarrator.generators.llm_client import GenerationError, LLMClient
from codenarrator.generators.throttle import FixedDelayThrottle
from codenarrator.utils.config import SUPPORTED_MODELS, AppConfig, load_config
from codenarrator.utils.logging import setup_logging

logger = logging.getLogger(__name__)

_PREVIEW_COUNT = 5


def _configure(config_path: Optional[str], verbose: bool = False) -> AppConfig:
    """Load the config file and set up logging for a command."""
    config = load_config(config_path)
    setup_logging(
        level="DEBUG" if verbose or config.run.verbose else config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    return config


def _echo_progress(index: int, total: int, result: FileResult) -> None:
    """Print one line per processed file."""
    progress = f"[{index}/{total}]"
    if result.ok:
        click.echo(f"{progress} Documented: {result.relative_path}")
    else:
        click.echo(
            f"{progress} Error processing {result.relative_path}: "
            f"{result.error.message}",
            err=True,
        )


def _echo_summary(summary: RunSummary) -> None:
    """Print the final counts and any per-file errors."""
    click.echo("\nDocumentation generation complete!")
    click.echo(f"{summary.success_count} files successfully documented")
    if summary.error_count:
        click.echo(f"{summary.error_count} files failed:", err=True)
        for error in summary.per_file_errors:
            click.echo(f"  {error.relative_path}: {error.message}", err=True)
    click.echo(f"Output directory: {summary.output_dir}")


@click.group()
@click.version_option(version=__version__, prog_name="codenarrator")
def cli() -> None:
    """CodeNarrator: generate per-file documentation with Gemini."""
    load_dotenv(find_dotenv(usecwd=True))


@cli.command()
@click.argument("path", type=click.Path(file_okay=False), required=False)
@click.option(
    "--output", "-o", type=click.Path(file_okay=False), default=None,
    help="Output folder for documentation.",
)
@click.option("--model", default=None, help="AI model to use (only gemini is supported).")
@click.option("--verbose", is_flag=True, help="Show detailed output.")
@click.option(
    "--config", "config_path", type=click.Path(dir_okay=False), default=None,
    help="Path to a config file.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show which files would be documented without calling the API.",
)
def generate(
    path: Optional[str],
    output: Optional[str],
    model: Optional[str],
    verbose: bool,
    config_path: Optional[str],
    dry_run: bool,
) -> None:
    """Generate Markdown documentation for every source file in PATH.

    PATH may also be set as `input` in the config file. Settings given on
    the command line take precedence over the config file.
    """
    config = _configure(config_path, verbose)
    input_path = path or config.run.input
    output_path = output or config.run.output
    model_name = model or config.run.model
    verbose = verbose or config.run.verbose

    if not input_path:
        raise click.UsageError(
            "No input path provided. Use an argument or define `input` in the config file."
        )

    root = Path(input_path).resolve()
    out_dir = Path(output_path).resolve()
    click.echo(f"Input directory: {root}")
    click.echo(f"Output directory: {out_dir}")
    click.echo(f"Using model: {model_name}")

    if model_name not in SUPPORTED_MODELS:
        logger.warning("Unsupported model %r, falling back to Gemini", model_name)
        click.echo("Only the Gemini model is currently supported", err=True)

    pipeline = BatchPipeline(
        LLMClient(config=config.api),
        discovery_config=DiscoveryConfig.from_settings(config.discovery),
        throttle=FixedDelayThrottle(config.pipeline.request_delay),
        progress=_echo_progress,
    )

    if dry_run or verbose:
        if not root.is_dir():
            raise click.ClickException(f"Folder does not exist: {root}")
        files = pipeline.discover(root, out_dir)
        click.echo(f"Found {len(files)} source files")
        if dry_run:
            for f in files:
                click.echo(f"  Would process: {f.relative_to(root)}")
            click.echo("Dry run complete. No API calls made.")
            return
        for i, f in enumerate(files[:_PREVIEW_COUNT], start=1):
            click.echo(f"  {i}. {f.relative_to(root)}")
        if len(files) > _PREVIEW_COUNT:
            click.echo(f"  ...and {len(files) - _PREVIEW_COUNT} more")

    try:
        summary = pipeline.run(root, out_dir)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if summary.total_files == 0:
        click.echo("No supported files found in the specified directory", err=True)
        return
    _echo_summary(summary)


@cli.command()
@click.option(
    "--config", "config_path", type=click.Path(dir_okay=False), default=None,
    help="Path to a config file.",
)
def check(config_path: Optional[str]) -> None:
    """Check that the API key works and the model is reachable."""
    config = _configure(config_path)
    llm = LLMClient(config=config.api)
    try:
        model_name = llm.check_connection()
    except GenerationError as e:
        raise click.ClickException(f"Failed to access model: {e}") from e
    click.echo(f"Successfully connected to model: {model_name}")
