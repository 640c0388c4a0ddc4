"""
Data models for the proteoclean package.

This module provides dataclasses for:
- Cleaning filter configuration
- Analysis session configuration
- Sequence records
"""

from proteoclean.model.filters import (
    OutlierFilterConfig,
    ExclusionFilterConfig,
    QualityFilterConfig,
    CleaningConfig,
)
from proteoclean.model.analysis import AnalysisConfig
from proteoclean.model.sequence import SequenceRecord

__all__ = [
    "OutlierFilterConfig",
    "ExclusionFilterConfig",
    "QualityFilterConfig",
    "CleaningConfig",
    "AnalysisConfig",
    "SequenceRecord",
]
