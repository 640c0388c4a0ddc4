"""
Tests for the proteoclean command line interface.
"""

from pathlib import Path

import pandas as pd
from click.testing import CliRunner

from proteoclean.enrichment import EnrichrClient
from proteoclean.proteoclean_cli import cli

EXAMPLE_DIR = Path(__file__).parent / "example"


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "proteoclean" in result.output


def test_example_config(tmp_path):
    output = tmp_path / "analysis.yaml"

    result = CliRunner().invoke(cli, ["example-config", str(output)])

    assert result.exit_code == 0, result.output
    assert "cleaning:" in output.read_text()


def test_clean(tmp_path):
    out = tmp_path / "out"

    result = CliRunner().invoke(
        cli,
        ["--log-level", "warn", "clean", "-c", str(EXAMPLE_DIR / "analysis.yaml"), "-o", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert "q0.01: 1 rows" in result.output
    assert "q0.05: 3 rows" in result.output
    assert "ContaminantFilter: -1" in result.output
    assert (out / "example_q0.05.tsv").exists()


def test_clean_overrides(tmp_path):
    out = tmp_path / "out"

    result = CliRunner().invoke(
        cli,
        [
            "--log-level",
            "warn",
            "clean",
            "-c",
            str(EXAMPLE_DIR / "analysis.yaml"),
            "-o",
            str(out),
            "-q",
            "0.05",
            "--keep-outliers",
            "--exclude-name",
            "TRFE_HUMAN",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "q0.01" not in result.output
    table = pd.read_csv(out / "example_q0.05.tsv", sep="\t")
    assert "R2" in set(table["Run"])
    assert "TRFE_HUMAN" not in set(table["Protein.Names"])


def test_clean_strict_join_fails(tmp_path):
    result = CliRunner().invoke(
        cli,
        ["clean", "-c", str(EXAMPLE_DIR / "analysis.yaml"), "-o", str(tmp_path), "--strict-join"],
    )

    assert result.exit_code != 0


def test_build_crap(tmp_path):
    accessions = tmp_path / "contaminants.csv"
    pd.DataFrame({"Accession": ["P00761", "P02768"]}).to_csv(accessions, index=False)
    output = tmp_path / "crap_plus.fasta"

    result = CliRunner().invoke(
        cli,
        [
            "build-crap",
            "-l",
            str(accessions),
            "-b",
            str(EXAMPLE_DIR / "crap.fasta"),
            "-o",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    headers = [line.split()[0] for line in output.read_text().splitlines() if line.startswith(">")]
    assert headers == [">sp|P00761|TRYP_PIG", ">sp|P02769|ALBU_BOVIN", ">P02768"]


def test_build_crap_reject(tmp_path):
    accessions = tmp_path / "contaminants.csv"
    pd.DataFrame({"Accession": ["P00761"]}).to_csv(accessions, index=False)

    result = CliRunner().invoke(
        cli,
        [
            "build-crap",
            "-l",
            str(accessions),
            "-b",
            str(EXAMPLE_DIR / "crap.fasta"),
            "-o",
            str(tmp_path / "out.fasta"),
            "--on-duplicate",
            "reject",
        ],
    )

    assert result.exit_code != 0
    assert not (tmp_path / "out.fasta").exists()


def test_enrich_skipped_when_unavailable(tmp_path, monkeypatch):
    genes = tmp_path / "genes.txt"
    genes.write_text("ALB\nTF\n")
    monkeypatch.setattr(EnrichrClient, "is_available", lambda self: False)

    result = CliRunner().invoke(cli, ["enrich", "-g", str(genes), "-o", str(tmp_path / "terms.tsv")])

    assert result.exit_code == 0, result.output
    assert "skipped" in result.output
    assert not (tmp_path / "terms.tsv").exists()
