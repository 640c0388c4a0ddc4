"""
End-to-end cleaning of a protein quantification table.

Stages run strictly in this order:

1. load the quantification and annotation tables
2. inner-join them on the run key
3. per q-value cutoff: remove outlier runs, excluded names, contaminants,
   calibration standards and rows failing the cutoff
4. select columns and derive log2(abundance + 1)
5. drop rows with any missing value
6. export one table and one gene list per cutoff, plus a filter report

Each cutoff is filtered independently from the same merged table.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

import pandas as pd

from proteoclean.annotation.merge import JoinReport, merge_annotation
from proteoclean.contaminants.records import contaminant_accessions
from proteoclean.core.constants import ABUNDANCE, LOG2_ABUNDANCE, format_cutoff
from proteoclean.core.logger import get_logger, log_execution_time, log_function_call
from proteoclean.io.fasta import read_sequence_records
from proteoclean.io.tables import (
    load_annotation,
    load_identifier_list,
    load_quantification,
    write_table,
)
from proteoclean.model.analysis import AnalysisConfig
from proteoclean.model.filters import CleaningConfig
from proteoclean.preprocessing.filters import FilterResult, MissingValueFilter, get_filter_pipeline
from proteoclean.transform import gene_list, transform_table

logger = get_logger("proteoclean.pipeline.analysis")


@dataclass
class CleanedTable:
    """
    Result of cleaning the merged table at one q-value cutoff.

    Attributes
    ----------
    name : str
        Unique name derived from the cutoff, e.g. 'q0.01'.
    cutoff : float
        q-value cutoff used.
    table : pd.DataFrame
        Cleaned, transformed table without missing values.
    results : list[FilterResult]
        Per-filter row counts, in application order.
    report : pd.DataFrame
        ``results`` as a table.
    """

    name: str
    cutoff: float
    table: pd.DataFrame
    results: List[FilterResult] = field(default_factory=list)
    report: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def removed_by(self) -> Dict[str, int]:
        """Rows removed per filter name."""
        return {r.filter_name: r.removed_count for r in self.results}


@dataclass
class AnalysisResult:
    """Everything produced by ``run_analysis``."""

    merged: pd.DataFrame
    join_report: JoinReport
    tables: Dict[str, CleanedTable]
    contaminants: Set[str] = field(default_factory=set)
    written: List[Path] = field(default_factory=list)

    def filter_report(self) -> pd.DataFrame:
        """Concatenated filter reports of every cutoff."""
        reports = [t.report for t in self.tables.values() if not t.report.empty]
        if not reports:
            return pd.DataFrame()
        return pd.concat(reports, ignore_index=True)


@log_function_call(logger)
def clean_table(
    merged: pd.DataFrame,
    cleaning: CleaningConfig,
    cutoff: float,
    contaminants: Optional[Iterable[str]] = None,
    columns: Optional[Sequence[str]] = None,
    abundance_column: str = ABUNDANCE,
    log_column: str = LOG2_ABUNDANCE,
) -> CleanedTable:
    """
    Filter, transform and drop incomplete rows at one q-value cutoff.

    Parameters
    ----------
    merged : pd.DataFrame
        Annotated quantification table; not modified.
    cleaning : CleaningConfig
        Filter settings.
    cutoff : float
        q-value cutoff (rows with a score strictly below it are kept).
    contaminants : Iterable[str], optional
        Contaminant accessions to exclude.
    columns : Sequence[str], optional
        Columns kept before the log transform; all columns if omitted.
    abundance_column : str, optional
        Abundance column to log-transform.
    log_column : str, optional
        Name of the derived column.

    Returns
    -------
    CleanedTable
        Cleaned table and per-filter counts.
    """
    pipeline = get_filter_pipeline(cleaning, cutoff=cutoff, contaminants=contaminants)
    filtered, results = pipeline.apply(merged, stop_on_empty=cleaning.stop_on_empty)

    transformed = transform_table(
        filtered, columns=columns, abundance_column=abundance_column, target=log_column
    )
    complete, missing_result = MissingValueFilter().apply(transformed)
    results.append(missing_result)

    name = format_cutoff(cutoff)
    logger.info(
        "%s: %d of %d rows remain after cleaning", name, len(complete), len(merged)
    )
    return CleanedTable(
        name=name,
        cutoff=cutoff,
        table=complete.reset_index(drop=True),
        results=results,
        report=pipeline.report(results),
    )


def filter_at_cutoffs(
    merged: pd.DataFrame,
    cleaning: CleaningConfig,
    cutoffs: Sequence[float],
    **kwargs,
) -> Dict[str, CleanedTable]:
    """
    Clean the same merged table independently at several cutoffs.

    Returns
    -------
    Dict[str, CleanedTable]
        Tables keyed by their unique names ('q0.01', 'q0.05', ...).

    Raises
    ------
    ValueError
        If two cutoffs map to the same name.
    """
    names = [format_cutoff(c) for c in cutoffs]
    if len(set(names)) != len(names):
        raise ValueError(f"Cutoffs must be distinct, got {list(cutoffs)}")
    return {name: clean_table(merged, cleaning, cutoff, **kwargs) for name, cutoff in zip(names, cutoffs)}


def load_contaminants(config: AnalysisConfig) -> Set[str]:
    """Accessions from the configured cRAP FASTA and manual contaminant list."""
    accessions: Set[str] = set()
    if config.contaminant_fasta:
        accessions |= contaminant_accessions(read_sequence_records(config.contaminant_fasta))
    if config.contaminant_list:
        accessions |= set(
            load_identifier_list(config.contaminant_list, column=config.contaminant_list_column)
        )
    if accessions:
        logger.info("%d contaminant accessions loaded", len(accessions))
    return accessions


def export_results(result: AnalysisResult, config: AnalysisConfig) -> List[Path]:
    """Write per-cutoff tables, gene lists and the filter report."""
    written = []
    for name, cleaned in result.tables.items():
        written.append(write_table(cleaned.table, config.output_path(f"{name}.tsv")))

        if config.gene_column in cleaned.table.columns:
            genes_path = config.output_path(f"{name}_genes.txt")
            genes_path.parent.mkdir(parents=True, exist_ok=True)
            genes_path.write_text("\n".join(gene_list(cleaned.table, column=config.gene_column)) + "\n")
            written.append(genes_path)
        else:
            logger.warning("Gene column '%s' not in %s, no gene list written", config.gene_column, name)

    written.append(write_table(result.filter_report(), config.output_path("filter_report.tsv")))
    return written


@log_execution_time(logger)
def run_analysis(config: AnalysisConfig, export: bool = True) -> AnalysisResult:
    """
    Run the full cleaning workflow described by ``config``.

    Parameters
    ----------
    config : AnalysisConfig
        Session configuration (paths, columns, cutoffs, filters).
    export : bool, optional
        Write result files to ``config.output_dir``.

    Returns
    -------
    AnalysisResult
        Merged table, join report, one cleaned table per cutoff and the
        list of written files.
    """
    quant = load_quantification(
        config.quantification,
        run_column=config.join_key,
        protein_column=config.protein_column,
    )
    annotation = load_annotation(
        config.annotation,
        sheet_name=config.annotation_sheet,
        key=config.join_key,
        outlier_column=config.cleaning.outlier.outlier_column,
    )

    merged, join_report = merge_annotation(
        quant,
        annotation,
        key=config.join_key,
        annotation_columns=config.annotation_columns,
        rename=config.rename,
        validate=config.validate_join,
    )

    contaminants = load_contaminants(config)
    tables = filter_at_cutoffs(
        merged,
        config.cleaning,
        config.cutoffs,
        contaminants=contaminants,
        columns=config.selected_columns,
        abundance_column=config.abundance_column,
        log_column=config.log_column,
    )

    result = AnalysisResult(
        merged=merged, join_report=join_report, tables=tables, contaminants=contaminants
    )
    if export:
        result.written = export_results(result, config)
    return result
