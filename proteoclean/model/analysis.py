"""
Analysis configuration passed explicitly between pipeline stages.

Every path is stored on the configuration object, so no stage depends on
the process working directory.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from proteoclean.core.constants import (
    RUN,
    PROTEIN_GROUP,
    PROTEIN_NAMES,
    GENES,
    ABUNDANCE,
    Q_VALUE,
    LOG2_ABUNDANCE,
    ANNOTATION_COLUMNS,
    BIOREPLICATE,
    CONDITION,
    DEFAULT_CUTOFFS,
)
from proteoclean.model.filters import CleaningConfig


@dataclass
class AnalysisConfig:
    """
    Inputs, outputs and stage options of one analysis session.

    Attributes
    ----------
    quantification : str
        Quantification table (delimited text or parquet).
    annotation : str
        Sample annotation table.
    annotation_sheet : str, optional
        Sheet holding the annotation when it is a spreadsheet.
    join_key : str
        Column shared by both tables.
    protein_column : str
        Protein group identifier column of the quantification table.
    annotation_columns : list[str]
        Annotation columns carried into the merged table.
    rename : dict
        Explicit post-merge column renames.
    selected_columns : list[str]
        Columns kept before the log transform.
    abundance_column : str
        Abundance column transformed to log2(x + 1).
    log_column : str
        Name of the derived log column.
    gene_column : str
        Column exported as the enrichment gene list.
    cutoffs : list[float]
        q-value cutoffs; one result table is produced per cutoff.
    contaminant_fasta : str, optional
        cRAP FASTA whose accessions are excluded.
    contaminant_list : str, optional
        Spreadsheet/table with manually curated contaminant accessions.
    contaminant_list_column : str
        Column of ``contaminant_list`` holding the accessions.
    output_dir : str
        Directory receiving exported tables.
    output_prefix : str
        File name prefix for exported tables.
    validate_join : bool
        Raise on unmatched join keys instead of dropping them.
    cleaning : CleaningConfig
        Filter settings.
    """

    quantification: str = ""
    annotation: str = ""
    annotation_sheet: Optional[str] = None
    join_key: str = RUN
    protein_column: str = PROTEIN_GROUP
    annotation_columns: List[str] = field(default_factory=lambda: list(ANNOTATION_COLUMNS))
    rename: Dict[str, str] = field(default_factory=dict)
    selected_columns: List[str] = field(
        default_factory=lambda: [
            RUN,
            CONDITION,
            BIOREPLICATE,
            PROTEIN_GROUP,
            PROTEIN_NAMES,
            GENES,
            ABUNDANCE,
            Q_VALUE,
        ]
    )
    abundance_column: str = ABUNDANCE
    log_column: str = LOG2_ABUNDANCE
    gene_column: str = GENES
    cutoffs: List[float] = field(default_factory=lambda: list(DEFAULT_CUTOFFS))
    contaminant_fasta: Optional[str] = None
    contaminant_list: Optional[str] = None
    contaminant_list_column: str = "Accession"
    output_dir: str = "results"
    output_prefix: str = "proteins"
    validate_join: bool = False
    cleaning: CleaningConfig = field(default_factory=CleaningConfig)

    @classmethod
    def from_dict(cls, data: dict, base_dir: Optional[Path] = None) -> "AnalysisConfig":
        """
        Create configuration from a dictionary.

        Relative paths are resolved against ``base_dir`` (the directory of the
        configuration file) rather than the working directory.
        """
        data = dict(data)
        cleaning = CleaningConfig.from_dict(data.pop("cleaning", {}) or {})
        config = cls(cleaning=cleaning, **data)
        if base_dir is not None:
            config.resolve_paths(Path(base_dir))
        return config

    def resolve_paths(self, base_dir: Path) -> None:
        """Make every relative path absolute with respect to ``base_dir``."""
        for attr in ("quantification", "annotation", "contaminant_fasta", "contaminant_list", "output_dir"):
            value = getattr(self, attr)
            if value and not Path(value).is_absolute():
                setattr(self, attr, str((base_dir / value).resolve()))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        cleaning = self.cleaning.to_dict()
        for key in ("outlier", "exclusion", "quality"):
            cleaning[key].pop("name", None)
        return {
            "quantification": self.quantification,
            "annotation": self.annotation,
            "annotation_sheet": self.annotation_sheet,
            "join_key": self.join_key,
            "protein_column": self.protein_column,
            "annotation_columns": list(self.annotation_columns),
            "rename": dict(self.rename),
            "selected_columns": list(self.selected_columns),
            "abundance_column": self.abundance_column,
            "log_column": self.log_column,
            "gene_column": self.gene_column,
            "cutoffs": list(self.cutoffs),
            "contaminant_fasta": self.contaminant_fasta,
            "contaminant_list": self.contaminant_list,
            "contaminant_list_column": self.contaminant_list_column,
            "output_dir": self.output_dir,
            "output_prefix": self.output_prefix,
            "validate_join": self.validate_join,
            "cleaning": cleaning,
        }

    def output_path(self, suffix: str) -> Path:
        """Path of an exported file: ``<output_dir>/<output_prefix>_<suffix>``."""
        return Path(self.output_dir) / f"{self.output_prefix}_{suffix}"
