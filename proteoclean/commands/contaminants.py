"""
CLI commands for building the contaminant (cRAP) reference.
"""

from pathlib import Path

import click

from proteoclean.contaminants import (
    append_records,
    build_from_accessions,
    fetch_crap,
)
from proteoclean.core.constants import CRAP_URL
from proteoclean.io.fasta import read_sequence_records, write_fasta
from proteoclean.io.tables import load_identifier_list


@click.command("fetch-crap", short_help="Download the cRAP contaminant FASTA")
@click.option("-o", "--output", help="Local FASTA path", required=True, type=click.Path(dir_okay=False))
@click.option("--url", help="Source URL", default=CRAP_URL, show_default=True)
@click.option("--release", help="Release marker to record (default: server Last-Modified)")
@click.option("--overwrite", help="Replace an existing local copy", is_flag=True)
def fetch_crap_command(output: str, url: str, release: str, overwrite: bool) -> None:
    """Download the contaminant reference and record its release."""
    info = fetch_crap(output, url=url, overwrite=overwrite, release=release)
    click.echo(f"{info.n_records} records, release {info.release}, md5 {info.md5}")


@click.command("build-crap", short_help="Build or extend a contaminant FASTA from accessions")
@click.option(
    "-l",
    "--accession-list",
    help="Spreadsheet or table with one accession per row",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("--column", help="Column holding the accessions", default="Accession", show_default=True)
@click.option("--sheet", help="Sheet name for spreadsheets")
@click.option(
    "-b",
    "--base",
    help="Existing FASTA to append to",
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("-o", "--output", help="Output FASTA path", required=True, type=click.Path(dir_okay=False))
@click.option("--fetch", help="Retrieve sequences from UniProt", is_flag=True)
@click.option(
    "--on-duplicate",
    type=click.Choice(["first_wins", "reject"], case_sensitive=False),
    default="first_wins",
    show_default=True,
    help="Policy for accessions already present in the base FASTA",
)
def build_crap_command(
    accession_list: str,
    column: str,
    sheet: str,
    base: str,
    output: str,
    fetch: bool,
    on_duplicate: str,
) -> None:
    """Build contaminant records from a manual accession list."""
    accessions = load_identifier_list(accession_list, column=column, sheet_name=sheet)
    records = build_from_accessions(accessions, fetch=fetch)

    if base:
        records = append_records(read_sequence_records(base), records, on_duplicate=on_duplicate)

    write_fasta(records, Path(output))
    click.echo(f"{len(records)} records written to {output}")
