"""CLI entry point for seedcheck."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from seedcheck.config.defaults import full_battery, quick_battery
from seedcheck.config.schema import LoggingConfig
from seedcheck.core.generator import Random
from seedcheck.io.charts import write_charts
from seedcheck.io.config_loader import load_battery_file
from seedcheck.io.serialize import dump_report
from seedcheck.utils.exceptions import ConfigError
from seedcheck.utils.logging import setup_logging
from seedcheck.validation.tester import CHECK_NAMES, RandomTester

SAMPLE_OPERATIONS = (
    "next_boolean",
    "next_double",
    "next_float",
    "next_gaussian",
    "next_int",
    "next_long",
)


@click.group()
@click.version_option(package_name="seedcheck")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Structured log level (logs go to stderr).",
)
@click.option(
    "--log-format",
    default="console",
    type=click.Choice(["console", "json"]),
    help="Structured log renderer.",
)
def cli(log_level: str, log_format: str) -> None:
    """seedcheck — seedable random generator and statistical self-test."""
    setup_logging(LoggingConfig(level=log_level, format=log_format))


@cli.command()
@click.option(
    "--preset",
    type=click.Choice(["quick", "full"]),
    default="full",
    help="Sample-size preset. Ignored when --config is given.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a JSON or YAML battery config.",
)
@click.option("--seed", default=None, type=int, help="Battery seed (default: system entropy).")
@click.option(
    "--only",
    multiple=True,
    type=click.Choice(CHECK_NAMES),
    help="Run only the named check. May be repeated.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to write the report as JSON.",
)
@click.option(
    "--chart-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write one HTML bucket chart per check.",
)
def run(
    preset: str,
    config_path: Path | None,
    seed: int | None,
    only: tuple[str, ...],
    output_path: Path | None,
    chart_dir: Path | None,
) -> None:
    """Run the statistical check battery and print the error report."""
    if config_path is not None:
        try:
            config = load_battery_file(config_path)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc
    elif preset == "quick":
        config = quick_battery()
    else:
        config = full_battery()

    # CLI overrides
    if seed is not None:
        config = config.model_copy(update={"seed": seed})

    tester = RandomTester(config)
    tester.run_all(only or None)
    tester.report()

    if output_path is not None:
        output_path.write_text(dump_report(tester, config))
        click.echo(f"\nReport written to {output_path}")

    if chart_dir is not None:
        written = write_charts(tester.comparisons, chart_dir)
        click.echo(f"{len(written)} charts written to {chart_dir}")

    sys.exit(0 if tester.passed else 1)


@cli.command()
@click.argument("operation", type=click.Choice(SAMPLE_OPERATIONS))
@click.option("--count", default=10, type=click.IntRange(min=1), help="Number of draws.")
@click.option("--seed", default=None, type=int, help="Generator seed (default: system entropy).")
def sample(operation: str, count: int, seed: int | None) -> None:
    """Print draws from a single generator operation."""
    rng = Random(seed)
    click.echo(f"# {operation}, seed={rng.seed}")
    draw = getattr(rng, operation)
    for _ in range(count):
        click.echo(draw())


if __name__ == "__main__":
    cli()
