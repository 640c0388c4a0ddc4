"""
Protein-level exclusion filters.

Two distinct mechanisms are provided: exact set membership
(``ExactMatchExclusionFilter``) and substring containment
(``PatternExclusionFilter``). Each targets its own, separately configured
column. A filter pointed at the wrong column usually removes nothing, so
both log a warning when no row matched.
"""

from typing import Iterable, Optional, Tuple

import pandas as pd

from proteoclean.core.constants import PROTEIN_NAMES, PROTEIN_GROUP
from proteoclean.core.logger import get_logger
from proteoclean.preprocessing.filters.base import BaseFilter, FilterResult
from proteoclean.preprocessing.filters.enums import FilterLevel, MatchMode


logger = get_logger("proteoclean.preprocessing.filters.protein")


class ExactMatchExclusionFilter(BaseFilter):
    """Remove rows whose field equals one of the excluded values."""

    def __init__(
        self,
        values: Iterable[str],
        column: str = PROTEIN_NAMES,
        separator: Optional[str] = None,
        label: str = "ExactMatchExclusionFilter",
    ):
        """
        Initialize the filter.

        Parameters
        ----------
        values : Iterable[str]
            Values to exclude.
        column : str, optional
            Column compared against ``values``.
        separator : str, optional
            Split multi-valued fields on this separator; a row is excluded
            when any token equals an excluded value. Without a separator the
            whole field must match.
        label : str, optional
            Name reported in filter results (distinguishes e.g. contaminant
            removal from a hand-written exclusion list).
        """
        self.values = set(str(v).strip() for v in values)
        self.column = column
        self.separator = separator
        self.label = label
        self.match_mode = MatchMode.EXACT

    @property
    def name(self) -> str:
        return self.label

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.PROTEIN

    def _matches(self, value) -> bool:
        if pd.isna(value):
            return False
        text = str(value).strip()
        if self.separator is None:
            return text in self.values
        return any(token.strip() in self.values for token in text.split(self.separator))

    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, FilterResult]:
        input_count = len(df)
        self._require(df, [self.column])

        if not self.values:
            return df, self._create_result(input_count, input_count, {"column": self.column})

        excluded = df[self.column].apply(self._matches).astype(bool)
        filtered_df = df[~excluded].copy()
        output_count = len(filtered_df)
        matched = sorted(df.loc[excluded, self.column].astype(str).unique())

        if output_count == input_count and input_count > 0:
            logger.warning(
                "%s: none of %d excluded value(s) matched column '%s'; check the column choice",
                self.name,
                len(self.values),
                self.column,
            )
        else:
            logger.debug(
                "%s: Removed %d rows matching %d value(s) in '%s'",
                self.name,
                input_count - output_count,
                len(matched),
                self.column,
            )

        return filtered_df, self._create_result(
            input_count,
            output_count,
            {"column": self.column, "mode": self.match_mode.name, "matched": matched},
        )


class PatternExclusionFilter(BaseFilter):
    """Remove rows whose field contains one of the excluded substrings."""

    def __init__(
        self,
        patterns: Iterable[str],
        column: str = PROTEIN_GROUP,
        case_sensitive: bool = True,
    ):
        """
        Initialize the filter.

        Parameters
        ----------
        patterns : Iterable[str]
            Literal substrings (not regular expressions), e.g. "iRT".
        column : str, optional
            Column searched for the patterns.
        case_sensitive : bool, optional
            Whether matching respects case.
        """
        self.patterns = [str(p) for p in patterns if str(p)]
        self.column = column
        self.case_sensitive = case_sensitive
        self.match_mode = MatchMode.SUBSTRING

    @property
    def name(self) -> str:
        return "PatternExclusionFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.PROTEIN

    def _matches(self, value) -> bool:
        if pd.isna(value):
            return False
        text = str(value)
        if self.case_sensitive:
            return any(pattern in text for pattern in self.patterns)
        text = text.upper()
        return any(pattern.upper() in text for pattern in self.patterns)

    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, FilterResult]:
        input_count = len(df)
        self._require(df, [self.column])

        if not self.patterns:
            return df, self._create_result(input_count, input_count, {"column": self.column})

        excluded = df[self.column].apply(self._matches).astype(bool)
        filtered_df = df[~excluded].copy()
        output_count = len(filtered_df)

        if output_count == input_count and input_count > 0:
            logger.warning(
                "%s: patterns %s matched nothing in column '%s'; check the column choice",
                self.name,
                self.patterns,
                self.column,
            )
        else:
            logger.debug(
                "%s: Removed %d rows containing %s in '%s'",
                self.name,
                input_count - output_count,
                self.patterns,
                self.column,
            )

        return filtered_df, self._create_result(
            input_count,
            output_count,
            {"column": self.column, "mode": self.match_mode.name, "patterns": self.patterns},
        )
