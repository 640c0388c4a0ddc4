"""
Preprocessing utilities for the proteoclean package.

This module provides the cleaning filters applied to merged
quantification tables.
"""

from proteoclean.preprocessing.filters import (
    get_filter_pipeline,
    FilterPipeline,
    FilterResult,
    BaseFilter,
    OutlierRunFilter,
    ExactMatchExclusionFilter,
    PatternExclusionFilter,
    QualityThresholdFilter,
    MissingValueFilter,
)

__all__ = [
    "get_filter_pipeline",
    "FilterPipeline",
    "FilterResult",
    "BaseFilter",
    "OutlierRunFilter",
    "ExactMatchExclusionFilter",
    "PatternExclusionFilter",
    "QualityThresholdFilter",
    "MissingValueFilter",
]
