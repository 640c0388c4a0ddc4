"""
Joining quantification tables with sample annotation.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from proteoclean.core.constants import RUN
from proteoclean.core.exceptions import JoinMismatchError, SchemaError
from proteoclean.core.logger import get_logger
from proteoclean.io.tables import require_columns

logger = get_logger("proteoclean.annotation.merge")


@dataclass
class JoinReport:
    """
    What an inner join kept and dropped.

    Attributes
    ----------
    key : str
        Join column.
    input_rows : int
        Quantification rows before the join.
    output_rows : int
        Rows in the merged table.
    unmatched_quantification : list[str]
        Keys found only in the quantification table (their rows are dropped).
    unmatched_annotation : list[str]
        Keys found only in the annotation table.
    """

    key: str
    input_rows: int
    output_rows: int
    unmatched_quantification: List[str] = field(default_factory=list)
    unmatched_annotation: List[str] = field(default_factory=list)

    @property
    def dropped_rows(self) -> int:
        return self.input_rows - self.output_rows

    @property
    def is_complete(self) -> bool:
        """True when every key matched on both sides."""
        return not self.unmatched_quantification and not self.unmatched_annotation


def merge_annotation(
    quant: pd.DataFrame,
    annotation: pd.DataFrame,
    key: str = RUN,
    annotation_columns: Optional[Sequence[str]] = None,
    rename: Optional[Dict[str, str]] = None,
    validate: bool = False,
) -> Tuple[pd.DataFrame, JoinReport]:
    """
    Inner-join a quantification table with its sample annotation.

    Rows whose key has no partner are dropped. This narrowing is intended;
    it is reported in the returned ``JoinReport`` and logged, and only
    raises when ``validate`` is set.

    Parameters
    ----------
    quant : pd.DataFrame
        Quantification table, one row per (run, protein group).
    annotation : pd.DataFrame
        Annotation table, one row per run.
    key : str, optional
        Join column present in both tables.
    annotation_columns : Sequence[str], optional
        Annotation columns to carry into the merged table, by name. The key
        is always included.
    rename : dict, optional
        Explicit ``{old: new}`` renames applied after the merge.
    validate : bool, optional
        Raise ``JoinMismatchError`` when any key is unmatched.

    Returns
    -------
    Tuple[pd.DataFrame, JoinReport]
        Merged table and join statistics.
    """
    require_columns(quant, [key], context="quantification table")
    require_columns(annotation, [key], context="annotation table")

    keys = annotation[key].dropna()
    if keys.duplicated().any():
        duplicated = keys[keys.duplicated()].unique().tolist()
        raise SchemaError(f"Annotation key '{key}' is not unique: {duplicated}")

    if annotation_columns is not None:
        columns = [key] + [col for col in annotation_columns if col != key]
        require_columns(annotation, columns, context="annotation table")
        annotation = annotation[columns]

    overlapping = (set(quant.columns) & set(annotation.columns)) - {key}
    if overlapping:
        logger.warning(
            "Columns %s exist in both tables; pandas suffixes will be added", sorted(overlapping)
        )

    quant_keys = set(quant[key].dropna().astype(str))
    annotation_keys = set(annotation[key].dropna().astype(str))
    report = JoinReport(
        key=key,
        input_rows=len(quant),
        output_rows=0,
        unmatched_quantification=sorted(quant_keys - annotation_keys),
        unmatched_annotation=sorted(annotation_keys - quant_keys),
    )

    if validate and not report.is_complete:
        raise JoinMismatchError(
            f"Join on '{key}' is incomplete: {len(report.unmatched_quantification)} key(s) only in "
            f"quantification, {len(report.unmatched_annotation)} only in annotation",
            unmatched_left=report.unmatched_quantification,
            unmatched_right=report.unmatched_annotation,
        )

    # compare keys as strings so 1 and "1" join
    left = quant[quant[key].notna()]
    left = left.assign(**{key: left[key].astype(str)})
    right = annotation[annotation[key].notna()]
    right = right.assign(**{key: right[key].astype(str)})
    merged = left.merge(right, on=key, how="inner")
    report.output_rows = len(merged)

    if report.unmatched_quantification:
        logger.warning(
            "%d run(s) without annotation dropped by the join: %s",
            len(report.unmatched_quantification),
            report.unmatched_quantification,
        )
    if report.unmatched_annotation:
        logger.warning(
            "%d annotated run(s) absent from the quantification table: %s",
            len(report.unmatched_annotation),
            report.unmatched_annotation,
        )
    logger.info("Merged table: %d of %d rows kept", report.output_rows, report.input_rows)

    if rename:
        merged = rename_columns(merged, rename)

    return merged, report


def rename_columns(df: pd.DataFrame, mapping: Dict[str, str]) -> pd.DataFrame:
    """
    Rename columns explicitly, failing on names that do not exist.

    Raises
    ------
    SchemaError
        If a source column is absent or a target name already exists.
    """
    require_columns(df, mapping.keys(), context="rename")
    clashes = [new for old, new in mapping.items() if new in df.columns and new != old]
    if clashes:
        raise SchemaError(f"rename: target column(s) {clashes} already exist")
    return df.rename(columns=mapping)
