"""
CLI command for querying the enrichment service with a gene list.
"""

from pathlib import Path

import click

from proteoclean.core.constants import DEFAULT_ENRICHR_LIBRARY, ENRICHR_URL
from proteoclean.enrichment import EnrichrClient, run_enrichment
from proteoclean.io.tables import write_table


@click.command("enrich", short_help="Query Enrichr with an exported gene list")
@click.option(
    "-g",
    "--genes",
    help="Gene list, one symbol per line (e.g. <prefix>_q0.01_genes.txt)",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("-l", "--library", help="Enrichr library", default=DEFAULT_ENRICHR_LIBRARY, show_default=True)
@click.option("--url", help="Enrichr base URL", default=ENRICHR_URL, show_default=True)
@click.option("-o", "--output", help="Output table (.tsv or .csv)", required=True, type=click.Path(dir_okay=False))
def enrich_command(genes: str, library: str, url: str, output: str) -> None:
    """Run an enrichment query; skipped with a warning when the service is down."""
    symbols = [line.strip() for line in Path(genes).read_text().splitlines() if line.strip()]
    result = run_enrichment(symbols, library=library, client=EnrichrClient(base_url=url))
    if result is None:
        click.echo("Enrichment skipped (service unavailable or empty gene list)")
        return
    write_table(result, output)
    click.echo(f"{len(result)} terms written to {output}")
