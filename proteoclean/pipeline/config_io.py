"""
Configuration file I/O for analysis sessions.
"""

import json
from pathlib import Path
from typing import Union, Optional

import yaml

from proteoclean.model.analysis import AnalysisConfig
from proteoclean.core.logger import get_logger


logger = get_logger("proteoclean.pipeline.config_io")


def _infer_format(path: Path, format: Optional[str]) -> str:
    if format is not None:
        return format
    return "json" if path.suffix.lower() == ".json" else "yaml"


def load_analysis_config(config_path: Union[str, Path]) -> AnalysisConfig:
    """
    Load an analysis configuration from YAML or JSON file.

    Relative paths inside the file are resolved against the file's directory.

    Parameters
    ----------
    config_path : Union[str, Path]
        Path to configuration file (.yaml, .yml, or .json).

    Returns
    -------
    AnalysisConfig
        Loaded configuration.

    Raises
    ------
    ValueError
        If file format is not supported.
    FileNotFoundError
        If config file does not exist.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with open(config_path, "r") as f:
            data = json.load(f)
    else:
        raise ValueError(
            f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json"
        )

    logger.info("Loaded analysis configuration from %s", config_path)
    return AnalysisConfig.from_dict(data or {}, base_dir=config_path.parent.resolve())


def save_analysis_config(
    config: AnalysisConfig,
    output_path: Union[str, Path],
    format: Optional[str] = None,
) -> None:
    """
    Save an analysis configuration to YAML or JSON file.

    Parameters
    ----------
    config : AnalysisConfig
        Configuration to save.
    output_path : Union[str, Path]
        Output file path.
    format : str, optional
        Output format ('yaml' or 'json'). Inferred from extension if not provided.
    """
    output_path = Path(output_path)
    format = _infer_format(output_path, format)
    data = config.to_dict()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if format == "yaml":
        with open(output_path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    else:
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

    logger.info("Saved analysis configuration to %s", output_path)


def generate_example_config(
    output_path: Union[str, Path],
    format: Optional[str] = None,
) -> None:
    """
    Generate an example configuration file with default values and comments.

    Parameters
    ----------
    output_path : Union[str, Path]
        Output file path.
    format : str, optional
        Output format ('yaml' or 'json').
    """
    output_path = Path(output_path)
    format = _infer_format(output_path, format)

    if format == "yaml":
        yaml_content = '''# proteoclean analysis configuration
# Relative paths are resolved against the directory of this file.

quantification: report.pg_matrix_long.tsv   # one row per (run, protein group)
annotation: annotation.xlsx                  # one row per run
annotation_sheet: samples                    # sheet name (spreadsheets only)
join_key: Run
protein_column: Protein.Group                # protein group identifier of the quantification table

# Annotation columns carried into the merged table (by name)
annotation_columns: [Run, BioReplicate, Condition, Outlier]
rename: {}                                   # post-merge renames, e.g. {Genes: Gene}

selected_columns: [Run, Condition, BioReplicate, Protein.Group, Protein.Names, Genes, PG.MaxLFQ, PG.Q.Value]
abundance_column: PG.MaxLFQ                  # transformed to log2(x + 1)
log_column: Log2.PG.MaxLFQ
gene_column: Genes                           # exported for enrichment
cutoffs: [0.01, 0.05]                        # one result table per q-value cutoff

contaminant_fasta: null                      # cRAP FASTA, accessions are excluded
contaminant_list: null                       # manual contaminant list (spreadsheet)
contaminant_list_column: Accession

output_dir: results
output_prefix: proteins
validate_join: false                         # true: fail on runs missing from either table

cleaning:
  name: example_config
  enabled: true
  stop_on_empty: true
  outlier:
    enabled: true
    outlier_column: Outlier                  # TRUE/FALSE strings are accepted
  exclusion:
    exclude_names: []                        # exact matches on name_column
    name_column: Protein.Names
    name_separator: null                     # e.g. ";" to match any token
    exclude_patterns: [iRT]                  # substrings searched in pattern_column
    pattern_column: Protein.Group
    case_sensitive: true
    contaminant_column: Protein.Group
    contaminant_separator: null              # e.g. ";" to split multi-accession groups
  quality:
    enabled: true
    score_column: PG.Q.Value                 # rows with score < cutoff are kept
'''
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(yaml_content)
    else:
        config = AnalysisConfig()
        config.cleaning.name = "example_config"
        save_analysis_config(config, output_path, format="json")

    logger.info("Generated example configuration at %s", output_path)
