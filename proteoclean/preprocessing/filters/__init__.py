"""
Cleaning filters for the proteoclean package.

This module provides the filters applied to a merged quantification table:
- Run-level outlier removal
- Exact-name and substring exclusion
- q-value thresholding
- Missing-value elimination
"""

from proteoclean.preprocessing.filters.base import BaseFilter, FilterResult
from proteoclean.preprocessing.filters.enums import FilterLevel, MatchMode
from proteoclean.preprocessing.filters.pipeline import FilterPipeline
from proteoclean.preprocessing.filters.run import OutlierRunFilter
from proteoclean.preprocessing.filters.protein import (
    ExactMatchExclusionFilter,
    PatternExclusionFilter,
)
from proteoclean.preprocessing.filters.quality import (
    QualityThresholdFilter,
    MissingValueFilter,
)
from proteoclean.preprocessing.filters.factory import (
    create_outlier_filters,
    create_exclusion_filters,
    create_quality_filters,
    get_filter_pipeline,
)

__all__ = [
    # Base classes
    "BaseFilter",
    "FilterResult",
    "FilterPipeline",
    # Enums
    "FilterLevel",
    "MatchMode",
    # Filters
    "OutlierRunFilter",
    "ExactMatchExclusionFilter",
    "PatternExclusionFilter",
    "QualityThresholdFilter",
    "MissingValueFilter",
    # Factory functions
    "create_outlier_filters",
    "create_exclusion_filters",
    "create_quality_filters",
    "get_filter_pipeline",
]
