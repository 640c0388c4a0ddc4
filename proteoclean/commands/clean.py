"""
CLI command for cleaning a quantification table.
"""

import click

from proteoclean.core.logger import get_logger
from proteoclean.pipeline import (
    load_analysis_config,
    generate_example_config,
    run_analysis,
)

logger = get_logger("proteoclean.commands.clean")


@click.command("clean", short_help="Annotate, filter and transform a quantification table")
@click.option(
    "-c",
    "--config",
    "config_path",
    help="Analysis configuration (.yaml, .yml or .json)",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "-q",
    "--cutoff",
    "cutoffs",
    help="q-value cutoff; repeat for several result tables (overrides the config)",
    type=float,
    multiple=True,
)
@click.option("-o", "--output-dir", help="Output directory (overrides the config)")
@click.option(
    "--exclude-name",
    "exclude_names",
    help="Exact protein name to exclude; repeatable (overrides the config)",
    multiple=True,
)
@click.option(
    "--exclude-pattern",
    "exclude_patterns",
    help="Substring of the protein group to exclude; repeatable (overrides the config)",
    multiple=True,
)
@click.option("--keep-outliers", help="Do not remove runs flagged as outliers", is_flag=True)
@click.option("--strict-join", help="Fail when runs are missing from either table", is_flag=True)
def clean_command(
    config_path: str,
    cutoffs: tuple,
    output_dir: str,
    exclude_names: tuple,
    exclude_patterns: tuple,
    keep_outliers: bool,
    strict_join: bool,
) -> None:
    """
    Run load -> merge -> filter -> transform -> export for one configuration.
    """
    config = load_analysis_config(config_path)

    if cutoffs:
        config.cutoffs = list(cutoffs)
    if output_dir:
        config.output_dir = output_dir
    if strict_join:
        config.validate_join = True
    config.cleaning.apply_overrides(
        {
            "remove_outliers": False if keep_outliers else None,
            "exclude_names": exclude_names or None,
            "exclude_patterns": exclude_patterns or None,
        }
    )

    result = run_analysis(config)

    for name, cleaned in result.tables.items():
        click.echo(f"{name}: {len(cleaned.table)} rows")
        for filter_name, removed in cleaned.removed_by.items():
            click.echo(f"  {filter_name}: -{removed}")
    for path in result.written:
        logger.info("Wrote %s", path)


@click.command("example-config", short_help="Write an example analysis configuration")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "--format",
    "file_format",
    type=click.Choice(["yaml", "json"], case_sensitive=False),
    default=None,
    help="Output format (inferred from the extension by default)",
)
def example_config_command(output: str, file_format: str) -> None:
    """Write an example configuration to OUTPUT."""
    generate_example_config(output, format=file_format)
    click.echo(f"Example configuration written to {output}")
