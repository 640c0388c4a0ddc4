"""
Loading and exporting of quantification and annotation tables.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from proteoclean.core.constants import (
    RUN,
    PROTEIN_GROUP,
    OUTLIER,
    TABLE_FORMATS,
    TRUE_VALUES,
    FALSE_VALUES,
)
from proteoclean.core.exceptions import FileFormatError, SchemaError
from proteoclean.core.logger import get_logger

logger = get_logger("proteoclean.io.tables")

PathLike = Union[str, os.PathLike]


def detect_format(path: PathLike) -> str:
    """
    Infer the table format from the file suffix.

    Parameters
    ----------
    path : str or PathLike
        Path to the table.

    Returns
    -------
    str
        One of 'csv', 'tsv', 'excel', 'parquet'.

    Raises
    ------
    FileFormatError
        If the suffix is not a supported table format.
    """
    suffix = Path(path).suffix.lower()
    try:
        return TABLE_FORMATS[suffix]
    except KeyError:
        raise FileFormatError(
            f"Unsupported table format '{suffix}' for {path}. "
            f"Use one of: {', '.join(sorted(TABLE_FORMATS))}"
        ) from None


def load_table(
    path: PathLike,
    file_format: Optional[str] = None,
    sheet_name: Optional[Union[str, int]] = None,
    sep: Optional[str] = None,
) -> pd.DataFrame:
    """
    Load a delimited text, spreadsheet or parquet table.

    Parameters
    ----------
    path : str or PathLike
        Table location.
    file_format : str, optional
        'csv', 'tsv', 'excel' or 'parquet'. Inferred from the suffix if omitted.
    sheet_name : str or int, optional
        Spreadsheet sheet to read (first sheet if omitted).
    sep : str, optional
        Delimiter override for text formats.

    Returns
    -------
    pd.DataFrame
        Loaded table.

    Raises
    ------
    FileFormatError
        If the file does not exist, the format is unknown or the reader fails.
    """
    path = Path(path)
    if not path.exists():
        raise FileFormatError(f"{path} does not exist!")

    file_format = (file_format or detect_format(path)).lower()
    if file_format not in set(TABLE_FORMATS.values()):
        raise FileFormatError(f"Unsupported table format '{file_format}'")

    try:
        if file_format == "csv":
            df = pd.read_csv(path, sep=sep or ",")
        elif file_format == "tsv":
            df = pd.read_csv(path, sep=sep or "\t")
        elif file_format == "excel":
            df = pd.read_excel(path, sheet_name=sheet_name if sheet_name is not None else 0)
        else:
            df = pd.read_parquet(path)
    except (ValueError, OSError, pd.errors.ParserError) as e:
        raise FileFormatError(f"Could not read {path} as {file_format}: {e}") from e

    logger.info("Loaded %d rows x %d columns from %s", len(df), len(df.columns), path)
    return df


def require_columns(df: pd.DataFrame, columns: Iterable[str], context: str = "table") -> None:
    """
    Fail fast when any named column is absent.

    Raises
    ------
    SchemaError
        Naming every absent column.
    """
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise SchemaError(
            f"{context}: missing column(s) {missing}. Available: {list(df.columns)}",
            missing=missing,
        )


def normalize_flag(series: pd.Series) -> pd.Series:
    """
    Convert a boolean-like column to real booleans.

    Native booleans, numeric 0/1 and the strings TRUE/FALSE, T/F, yes/no
    (any case) are accepted. Missing values count as False.

    Raises
    ------
    SchemaError
        If the column holds values that are not boolean-like.
    """
    if series.dtype == bool:
        return series.copy()

    def convert(value):
        if pd.isna(value):
            return False
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        # 1.0 / 0.0 from spreadsheets
        if text in {"1.0", "0.0"}:
            return text == "1.0"
        raise ValueError(value)

    bad = []
    converted = []
    for value in series:
        try:
            converted.append(convert(value))
        except ValueError:
            bad.append(value)
    if bad:
        raise SchemaError(
            f"Column '{series.name}' holds values that are not boolean-like: "
            f"{sorted(set(map(str, bad)))}"
        )
    return pd.Series(converted, index=series.index, name=series.name, dtype=bool)


def load_quantification(
    path: PathLike,
    file_format: Optional[str] = None,
    run_column: str = RUN,
    protein_column: str = PROTEIN_GROUP,
    sep: Optional[str] = None,
) -> pd.DataFrame:
    """Load a quantification table (one row per run and protein group)."""
    df = load_table(path, file_format=file_format, sep=sep)
    require_columns(df, [run_column, protein_column], context=f"quantification table {path}")
    return df


def load_annotation(
    path: PathLike,
    sheet_name: Optional[Union[str, int]] = None,
    key: str = RUN,
    outlier_column: Optional[str] = OUTLIER,
    file_format: Optional[str] = None,
) -> pd.DataFrame:
    """
    Load a sample annotation table.

    The join key must be present and unique. The outlier flag, when the
    column exists, is converted to booleans here so later stages never
    compare strings.

    Parameters
    ----------
    path : str or PathLike
        Annotation file (spreadsheet or delimited text).
    sheet_name : str or int, optional
        Sheet holding the annotation in a spreadsheet.
    key : str, optional
        Run identifier column.
    outlier_column : str, optional
        Outlier flag column, or None to skip flag normalisation.
    file_format : str, optional
        Format override.

    Returns
    -------
    pd.DataFrame
        Annotation table.
    """
    df = load_table(path, file_format=file_format, sheet_name=sheet_name)
    require_columns(df, [key], context=f"annotation table {path}")

    keys = df[key].dropna()
    duplicated = keys[keys.duplicated()].unique().tolist()
    if duplicated:
        raise SchemaError(f"Annotation key '{key}' is not unique: {duplicated}")

    if outlier_column and outlier_column in df.columns:
        df[outlier_column] = normalize_flag(df[outlier_column])
        logger.info(
            "%d of %d runs flagged as outliers", int(df[outlier_column].sum()), len(df)
        )
    return df


def load_identifier_list(
    path: PathLike,
    column: str,
    sheet_name: Optional[Union[str, int]] = None,
    file_format: Optional[str] = None,
) -> List[str]:
    """
    Read a hand-curated identifier list (e.g. contaminant accessions).

    Returns
    -------
    list[str]
        Unique, stripped, non-empty identifiers in file order.
    """
    df = load_table(path, file_format=file_format, sheet_name=sheet_name)
    require_columns(df, [column], context=f"identifier list {path}")
    values = df[column].dropna().astype(str).str.strip()
    values = values[values != ""]
    return list(dict.fromkeys(values))


def write_table(df: pd.DataFrame, path: PathLike, sep: Optional[str] = None) -> Path:
    """
    Write a table as delimited text for downstream tools.

    The delimiter follows the suffix (.csv comma, anything else tab) unless
    given explicitly.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if sep is None:
        sep = "," if path.suffix.lower() == ".csv" else "\t"
    df.to_csv(path, sep=sep, index=False)
    logger.info("Wrote %d rows to %s", len(df), path)
    return path
