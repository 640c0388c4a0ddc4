"""
CLI entry point for the proteoclean package.
"""

import logging
from pathlib import Path

import click

from proteoclean.commands.clean import clean_command, example_config_command
from proteoclean.commands.contaminants import fetch_crap_command, build_crap_command
from proteoclean.commands.enrich import enrich_command
from proteoclean.core.logger import configure_logging

import proteoclean

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LOG_LEVELS = ["debug", "info", "warn"]
LOG_LEVELS_TO_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARN,
}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(
    version=proteoclean.__version__,
    package_name="proteoclean",
    message="%(package)s %(version)s",
)
@click.option(
    "-v",
    "--log-level",
    type=click.Choice(LOG_LEVELS, False),
    default="info",
    help="Set the logging level.",
)
@click.option(
    "--log-file",
    type=click.Path(writable=True, path_type=Path),
    required=False,
    help="Write log to this file.",
)
def cli(log_level: str, log_file: Path):
    """
    proteoclean - annotate, clean and filter protein quantification tables.

    Join quantification tables with sample annotation, remove outlier runs,
    contaminants and calibration standards, apply q-value cutoffs and build
    contaminant (cRAP) references.
    """
    configure_logging(level=LOG_LEVELS_TO_LEVELS[log_level.lower()], log_file=log_file)
    logging.captureWarnings(True)


cli.add_command(clean_command)
cli.add_command(example_config_command)
cli.add_command(fetch_crap_command)
cli.add_command(build_crap_command)
cli.add_command(enrich_command)


def main():
    """
    Main function to run the CLI.
    """
    try:
        cli()
    except SystemExit as e:
        if e.code != 0:
            raise


if __name__ == "__main__":
    main()
