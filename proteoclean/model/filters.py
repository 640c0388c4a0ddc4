"""
Filter configuration models for cleaning merged quantification tables.

This module provides dataclasses for configuring outlier removal,
named-entity exclusion and the q-value threshold.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List

from proteoclean.core.constants import (
    OUTLIER,
    PROTEIN_NAMES,
    PROTEIN_GROUP,
    Q_VALUE,
    IRT_PATTERN,
)


@dataclass
class OutlierFilterConfig:
    """
    Configuration for removing runs flagged as outliers.

    Attributes
    ----------
    enabled : bool
        Whether outlier runs are removed.
    outlier_column : str
        Annotation column holding the outlier flag.
    """

    name: str = "default"
    enabled: bool = True
    outlier_column: str = OUTLIER

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExclusionFilterConfig:
    """
    Configuration for named-entity exclusion.

    Exact-match exclusion and pattern exclusion are separate mechanisms and
    each targets its own column.

    Attributes
    ----------
    exclude_names : list[str]
        Values removed by exact match on ``name_column``.
    name_column : str
        Column compared against ``exclude_names``.
    name_separator : str, optional
        If set, multi-valued fields are split and any exact token match
        excludes the row.
    exclude_patterns : list[str]
        Substrings removed from ``pattern_column`` (calibration standards).
    pattern_column : str
        Column searched for ``exclude_patterns``.
    case_sensitive : bool
        Whether pattern matching is case sensitive.
    contaminant_column : str
        Column compared against contaminant reference accessions.
    contaminant_separator : str, optional
        If set, ``contaminant_column`` is split on it and any member
        accession found in the reference excludes the row.
    """

    name: str = "default"
    exclude_names: List[str] = field(default_factory=list)
    name_column: str = PROTEIN_NAMES
    name_separator: Optional[str] = None
    exclude_patterns: List[str] = field(default_factory=lambda: [IRT_PATTERN])
    pattern_column: str = PROTEIN_GROUP
    case_sensitive: bool = True
    contaminant_column: str = PROTEIN_GROUP
    contaminant_separator: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class QualityFilterConfig:
    """
    Configuration for the q-value threshold.

    Attributes
    ----------
    score_column : str
        Column holding the q-value (or other [0, 1] confidence score).
    """

    name: str = "default"
    enabled: bool = True
    score_column: str = Q_VALUE

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CleaningConfig:
    """
    Complete cleaning configuration combining all filter types.

    This is the configuration consumed by ``get_filter_pipeline`` and can be
    embedded in an analysis configuration file.
    """

    name: str = "default"
    outlier: OutlierFilterConfig = field(default_factory=OutlierFilterConfig)
    exclusion: ExclusionFilterConfig = field(default_factory=ExclusionFilterConfig)
    quality: QualityFilterConfig = field(default_factory=QualityFilterConfig)

    # Processing options
    enabled: bool = True
    stop_on_empty: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "CleaningConfig":
        """Create configuration from a dictionary."""
        # nested names are derived from the parent name
        outlier_data = {k: v for k, v in (data.get("outlier") or {}).items() if k != "name"}
        exclusion_data = {k: v for k, v in (data.get("exclusion") or {}).items() if k != "name"}
        quality_data = {k: v for k, v in (data.get("quality") or {}).items() if k != "name"}

        config_name = data.get("name", "custom")

        return cls(
            name=config_name,
            outlier=OutlierFilterConfig(name=f"{config_name}_outlier", **outlier_data),
            exclusion=ExclusionFilterConfig(name=f"{config_name}_exclusion", **exclusion_data),
            quality=QualityFilterConfig(name=f"{config_name}_quality", **quality_data),
            enabled=data.get("enabled", True),
            stop_on_empty=data.get("stop_on_empty", True),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "outlier": self.outlier.to_dict(),
            "exclusion": self.exclusion.to_dict(),
            "quality": self.quality.to_dict(),
            "enabled": self.enabled,
            "stop_on_empty": self.stop_on_empty,
        }

    def apply_overrides(self, overrides: dict) -> None:
        """
        Apply CLI overrides to the configuration.

        Parameters
        ----------
        overrides : dict
            Flat override values; None entries are ignored.
        """
        if overrides.get("remove_outliers") is not None:
            self.outlier.enabled = overrides["remove_outliers"]
        if overrides.get("outlier_column") is not None:
            self.outlier.outlier_column = overrides["outlier_column"]

        if overrides.get("exclude_names") is not None:
            self.exclusion.exclude_names = list(overrides["exclude_names"])
        if overrides.get("name_column") is not None:
            self.exclusion.name_column = overrides["name_column"]
        if overrides.get("exclude_patterns") is not None:
            self.exclusion.exclude_patterns = list(overrides["exclude_patterns"])
        if overrides.get("pattern_column") is not None:
            self.exclusion.pattern_column = overrides["pattern_column"]

        if overrides.get("score_column") is not None:
            self.quality.score_column = overrides["score_column"]
