"""
Column selection and log-scaling of abundance values.
"""

from typing import Sequence

import numpy as np
import pandas as pd

from proteoclean.core.constants import ABUNDANCE, LOG2_ABUNDANCE
from proteoclean.core.logger import get_logger
from proteoclean.io.tables import require_columns

logger = get_logger("proteoclean.transform.log")


def select_columns(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Keep the named columns, in the given order."""
    require_columns(df, columns, context="column selection")
    return df.loc[:, list(columns)].copy()


def log2_plus_one(values: pd.Series) -> pd.Series:
    """Compute log2(x + 1); missing values stay missing."""
    numeric = pd.to_numeric(values, errors="coerce")
    negative = int((numeric < 0).sum())
    if negative:
        logger.warning("%d negative abundance value(s) found; log2(x + 1) is not monotonic below 0", negative)
    with np.errstate(invalid="ignore", divide="ignore"):
        result = np.log2(numeric + 1)
    # -inf at x == -1
    return result.replace([-np.inf, np.inf], np.nan)


def add_log_abundance(
    df: pd.DataFrame,
    column: str = ABUNDANCE,
    target: str = LOG2_ABUNDANCE,
) -> pd.DataFrame:
    """Return a copy of ``df`` with ``target`` = log2(``column`` + 1)."""
    require_columns(df, [column], context="log transform")
    result = df.copy()
    result[target] = log2_plus_one(result[column])
    return result


def transform_table(
    df: pd.DataFrame,
    columns: Sequence[str] = None,
    abundance_column: str = ABUNDANCE,
    target: str = LOG2_ABUNDANCE,
) -> pd.DataFrame:
    """
    Select columns, then derive the log2 abundance column.

    Missing abundances produce missing log values here; removing them is
    left to the missing-value filter that runs afterwards.
    """
    if columns:
        keep = list(columns)
        if abundance_column not in keep:
            keep.append(abundance_column)
        df = select_columns(df, keep)
    transformed = add_log_abundance(df, column=abundance_column, target=target)
    logger.info(
        "Derived %s for %d rows (%d missing)", target, len(transformed), int(transformed[target].isna().sum())
    )
    return transformed
