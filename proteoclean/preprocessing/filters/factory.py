"""
Factory functions for creating cleaning filters.
"""

from typing import Iterable, List, Optional

from proteoclean.core.constants import format_cutoff
from proteoclean.model.filters import (
    CleaningConfig,
    OutlierFilterConfig,
    ExclusionFilterConfig,
    QualityFilterConfig,
)
from proteoclean.preprocessing.filters.base import BaseFilter
from proteoclean.preprocessing.filters.run import OutlierRunFilter
from proteoclean.preprocessing.filters.protein import (
    ExactMatchExclusionFilter,
    PatternExclusionFilter,
)
from proteoclean.preprocessing.filters.quality import QualityThresholdFilter
from proteoclean.preprocessing.filters.pipeline import FilterPipeline


def create_outlier_filters(config: OutlierFilterConfig) -> List[BaseFilter]:
    """
    Create run-level filters from configuration.

    Parameters
    ----------
    config : OutlierFilterConfig
        Outlier filter configuration.

    Returns
    -------
    List[BaseFilter]
        List of configured run filters.
    """
    if not config.enabled:
        return []
    return [OutlierRunFilter(outlier_column=config.outlier_column)]


def create_exclusion_filters(
    config: ExclusionFilterConfig,
    contaminants: Optional[Iterable[str]] = None,
) -> List[BaseFilter]:
    """
    Create named-entity exclusion filters from configuration.

    Parameters
    ----------
    config : ExclusionFilterConfig
        Exclusion filter configuration.
    contaminants : Iterable[str], optional
        Contaminant accessions, matched exactly against
        ``config.contaminant_column``.

    Returns
    -------
    List[BaseFilter]
        Exact-name exclusion, contaminant exclusion and pattern exclusion,
        in that order, for whichever are configured.
    """
    filters = []

    if config.exclude_names:
        filters.append(
            ExactMatchExclusionFilter(
                values=config.exclude_names,
                column=config.name_column,
                separator=config.name_separator,
            )
        )

    contaminants = list(contaminants or [])
    if contaminants:
        filters.append(
            ExactMatchExclusionFilter(
                values=contaminants,
                column=config.contaminant_column,
                separator=config.contaminant_separator,
                label="ContaminantFilter",
            )
        )

    if config.exclude_patterns:
        filters.append(
            PatternExclusionFilter(
                patterns=config.exclude_patterns,
                column=config.pattern_column,
                case_sensitive=config.case_sensitive,
            )
        )

    return filters


def create_quality_filters(config: QualityFilterConfig, cutoff: Optional[float]) -> List[BaseFilter]:
    """
    Create the q-value threshold filter.

    Returns an empty list when the filter is disabled or no cutoff is given.
    """
    if not config.enabled or cutoff is None:
        return []
    return [QualityThresholdFilter(cutoff=cutoff, column=config.score_column)]


def get_filter_pipeline(
    config: CleaningConfig,
    cutoff: Optional[float] = None,
    contaminants: Optional[Iterable[str]] = None,
) -> FilterPipeline:
    """
    Create a complete cleaning pipeline from configuration.

    The pipeline applies filters in the following order:
    1. Outlier runs
    2. Named-entity exclusion (exact names, contaminants, patterns)
    3. Quality threshold

    Parameters
    ----------
    config : CleaningConfig
        Complete cleaning configuration.
    cutoff : float, optional
        q-value cutoff; no threshold filter is added when omitted.
    contaminants : Iterable[str], optional
        Contaminant accessions to exclude.

    Returns
    -------
    FilterPipeline
        Configured filter pipeline ready to apply.
    """
    name = config.name if cutoff is None else f"{config.name}_{format_cutoff(cutoff)}"
    pipeline = FilterPipeline(name=name)

    if not config.enabled:
        return pipeline

    pipeline.add_filters(create_outlier_filters(config.outlier))
    pipeline.add_filters(create_exclusion_filters(config.exclusion, contaminants))
    pipeline.add_filters(create_quality_filters(config.quality, cutoff))

    return pipeline
