"""
Run-level cleaning filters.
"""

from typing import Tuple

import pandas as pd

from proteoclean.core.constants import OUTLIER, RUN
from proteoclean.core.logger import get_logger
from proteoclean.io.tables import normalize_flag
from proteoclean.preprocessing.filters.base import BaseFilter, FilterResult
from proteoclean.preprocessing.filters.enums import FilterLevel


logger = get_logger("proteoclean.preprocessing.filters.run")


class OutlierRunFilter(BaseFilter):
    """Remove every observation of runs flagged as outliers."""

    def __init__(self, outlier_column: str = OUTLIER, run_column: str = RUN):
        """
        Initialize the filter.

        Parameters
        ----------
        outlier_column : str, optional
            Column holding the outlier flag. Strings such as "TRUE"/"FALSE"
            are accepted; missing flags mean the run is kept.
        run_column : str, optional
            Run identifier column, used for reporting only.
        """
        self.outlier_column = outlier_column
        self.run_column = run_column

    @property
    def name(self) -> str:
        return "OutlierRunFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.RUN

    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, FilterResult]:
        input_count = len(df)
        self._require(df, [self.outlier_column])

        flags = normalize_flag(df[self.outlier_column])
        filtered_df = df[~flags].copy()

        removed_runs = []
        if self.run_column in df.columns:
            removed_runs = sorted(df.loc[flags, self.run_column].astype(str).unique())

        output_count = len(filtered_df)

        logger.debug(
            "%s: Removed %d rows from %d outlier run(s) %s",
            self.name,
            input_count - output_count,
            len(removed_runs),
            removed_runs,
        )

        return filtered_df, self._create_result(
            input_count, output_count, {"removed_runs": removed_runs}
        )
