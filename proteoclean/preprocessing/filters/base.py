"""
Base class for cleaning filters.

A filter takes a merged quantification table and returns the rows it keeps
together with a ``FilterResult``. Results are never optional: every removal
is counted, so a filter that silently matched nothing shows up as a zero in
the filter report.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Tuple

import pandas as pd

from proteoclean.core.exceptions import SchemaError
from proteoclean.preprocessing.filters.enums import FilterLevel


@dataclass
class FilterResult:
    """
    Row counts of one filter application.

    Attributes
    ----------
    filter_name : str
        Name of the filter that was applied.
    filter_level : FilterLevel
        What the filter removes (runs, protein groups or single rows).
    input_count : int
        Rows before filtering.
    output_count : int
        Rows after filtering.
    details : dict
        Filter specific information (matched values, removed runs, ...).
    """

    filter_name: str
    filter_level: FilterLevel
    input_count: int
    output_count: int
    details: dict = field(default_factory=dict)

    @property
    def removed_count(self) -> int:
        return self.input_count - self.output_count

    @property
    def removal_rate(self) -> float:
        """Fraction of input rows removed (0 for an empty input)."""
        return self.removed_count / self.input_count if self.input_count else 0.0

    def to_dict(self) -> dict:
        """Flat representation used for filter reports."""
        return {
            "filter": self.filter_name,
            "level": self.filter_level.name,
            "input": self.input_count,
            "output": self.output_count,
            "removed": self.removed_count,
            "removal_rate": self.removal_rate,
        }

    def __repr__(self) -> str:
        return (
            f"FilterResult({self.filter_name}: {self.removed_count}/{self.input_count} rows removed "
            f"({self.removal_rate:.1%}))"
        )


class BaseFilter(ABC):
    """
    Abstract base class for cleaning filters.

    Subclasses provide ``name``, ``level`` and ``apply``. ``apply`` must not
    modify its input and must raise ``SchemaError`` when a column it needs
    is absent, rather than removing nothing.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name reported in results and logs."""

    @property
    @abstractmethod
    def level(self) -> FilterLevel:
        """What the filter removes."""

    @abstractmethod
    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, FilterResult]:
        """
        Filter a table.

        Parameters
        ----------
        df : pd.DataFrame
            Table to filter; left unchanged.
        **kwargs
            Filter specific options.

        Returns
        -------
        Tuple[pd.DataFrame, FilterResult]
            Kept rows and their counts.
        """

    def _require(self, df: pd.DataFrame, columns: Iterable[str]) -> None:
        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise SchemaError(
                f"{self.name}: column(s) {missing} not found. Available: {list(df.columns)}",
                missing=missing,
            )

    def _create_result(self, input_count: int, output_count: int, details: dict = None) -> FilterResult:
        return FilterResult(
            filter_name=self.name,
            filter_level=self.level,
            input_count=input_count,
            output_count=output_count,
            details=details or {},
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
