"""
Observation-level quality filters.
"""

from typing import Iterable, Optional, Tuple

import pandas as pd

from proteoclean.core.constants import Q_VALUE
from proteoclean.core.logger import get_logger
from proteoclean.preprocessing.filters.base import BaseFilter, FilterResult
from proteoclean.preprocessing.filters.enums import FilterLevel


logger = get_logger("proteoclean.preprocessing.filters.quality")


class QualityThresholdFilter(BaseFilter):
    """Keep rows whose q-value is strictly below a cutoff."""

    def __init__(self, cutoff: float = 0.01, column: str = Q_VALUE):
        """
        Initialize the filter.

        Parameters
        ----------
        cutoff : float, optional
            Rows with ``score < cutoff`` are kept. Must be in (0, 1].
        column : str, optional
            Column holding the score. Missing scores never pass.
        """
        if not 0 < cutoff <= 1:
            raise ValueError(f"q-value cutoff must be in (0, 1], got {cutoff}")
        self.cutoff = cutoff
        self.column = column

    @property
    def name(self) -> str:
        return "QualityThresholdFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.OBSERVATION

    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, FilterResult]:
        input_count = len(df)
        self._require(df, [self.column])

        scores = pd.to_numeric(df[self.column], errors="coerce")
        missing_scores = int(scores.isna().sum())
        filtered_df = df[scores < self.cutoff].copy()
        output_count = len(filtered_df)

        logger.debug(
            "%s: Removed %d rows with %s >= %g (%d without a score)",
            self.name,
            input_count - output_count,
            self.column,
            self.cutoff,
            missing_scores,
        )

        return filtered_df, self._create_result(
            input_count,
            output_count,
            {"cutoff": self.cutoff, "column": self.column, "missing_scores": missing_scores},
        )


class MissingValueFilter(BaseFilter):
    """Drop whole rows holding a missing value in any of the given columns."""

    def __init__(self, columns: Optional[Iterable[str]] = None):
        """
        Initialize the filter.

        Parameters
        ----------
        columns : Iterable[str], optional
            Columns checked for missing values; all columns if omitted.
        """
        self.columns = list(columns) if columns is not None else None

    @property
    def name(self) -> str:
        return "MissingValueFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.OBSERVATION

    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, FilterResult]:
        input_count = len(df)
        if self.columns is not None:
            self._require(df, self.columns)

        filtered_df = df.dropna(subset=self.columns).copy()
        output_count = len(filtered_df)

        checked = self.columns if self.columns is not None else list(df.columns)
        missing_per_column = {
            col: int(n) for col, n in df[checked].isna().sum().items() if n > 0
        }

        logger.debug(
            "%s: Removed %d rows with missing values %s",
            self.name,
            input_count - output_count,
            missing_per_column,
        )

        return filtered_df, self._create_result(
            input_count, output_count, {"missing_per_column": missing_per_column}
        )
