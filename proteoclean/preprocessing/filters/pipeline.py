"""
Ordered application of cleaning filters to a merged table.
"""

from typing import Iterable, List, Optional, Tuple

import pandas as pd

from proteoclean.core.logger import get_logger
from proteoclean.preprocessing.filters.base import BaseFilter, FilterResult


logger = get_logger("proteoclean.preprocessing.filters.pipeline")

REPORT_COLUMNS = ["pipeline", "filter", "level", "input", "output", "removed", "removal_rate"]


class FilterPipeline:
    """
    Ordered list of cleaning filters sharing one name.

    The name is carried into log records and into the filter report, so the
    tables produced at different cutoffs stay distinguishable.

    Parameters
    ----------
    name : str, optional
        Pipeline name, e.g. 'study_q0.01'.
    filters : Iterable[BaseFilter], optional
        Initial filters, applied in the given order.
    """

    def __init__(self, name: str = "default", filters: Optional[Iterable[BaseFilter]] = None):
        self.name = name
        self.filters: List[BaseFilter] = list(filters or [])

    def add_filter(self, filter_obj: BaseFilter) -> "FilterPipeline":
        """Append one filter; returns the pipeline so calls can be chained."""
        self.filters.append(filter_obj)
        return self

    def add_filters(self, filters: Iterable[BaseFilter]) -> "FilterPipeline":
        """Append several filters, keeping their order."""
        for filter_obj in filters:
            self.add_filter(filter_obj)
        return self

    def apply(
        self,
        df: pd.DataFrame,
        stop_on_empty: bool = True,
        **kwargs,
    ) -> Tuple[pd.DataFrame, List[FilterResult]]:
        """
        Feed the table through every filter in turn.

        Parameters
        ----------
        df : pd.DataFrame
            Merged table; not modified.
        stop_on_empty : bool, optional
            Skip the remaining filters once no row is left.
        **kwargs
            Passed on to each filter.

        Returns
        -------
        Tuple[pd.DataFrame, List[FilterResult]]
            Remaining rows and one result per filter that ran.
        """
        results: List[FilterResult] = []
        current = df

        for filter_obj in self.filters:
            if stop_on_empty and current.empty:
                logger.warning(
                    "Pipeline '%s': no rows left before %s, remaining filters skipped",
                    self.name,
                    filter_obj.name,
                )
                break
            current, result = filter_obj.apply(current, **kwargs)
            results.append(result)
            logger.debug("Pipeline '%s': %r", self.name, result)

        summary = self.summary(results)
        logger.info(
            "Pipeline '%s': %d -> %d rows (%d removed)",
            self.name,
            summary["total_input"],
            summary["total_output"],
            summary["total_removed"],
        )
        return current, results

    def summary(self, results: List[FilterResult]) -> dict:
        """Overall and per-filter removal counts of one ``apply`` call."""
        total_input = results[0].input_count if results else 0
        total_output = results[-1].output_count if results else 0
        total_removed = total_input - total_output
        return {
            "pipeline_name": self.name,
            "total_input": total_input,
            "total_output": total_output,
            "total_removed": total_removed,
            "total_removal_rate": total_removed / total_input if total_input else 0.0,
            "removed_by": {r.filter_name: r.removed_count for r in results},
        }

    def report(self, results: List[FilterResult]) -> pd.DataFrame:
        """One row per applied filter with its input, output and removed counts."""
        rows = [dict(pipeline=self.name, **r.to_dict()) for r in results]
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return f"FilterPipeline(name='{self.name}', filters={[f.name for f in self.filters]})"
