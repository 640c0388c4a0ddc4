"""
Pipeline orchestration for the proteoclean package.

This module runs load -> merge -> filter -> transform -> export for an
explicit ``AnalysisConfig``.
"""

from proteoclean.pipeline.analysis import (
    AnalysisResult,
    CleanedTable,
    clean_table,
    filter_at_cutoffs,
    load_contaminants,
    export_results,
    run_analysis,
)
from proteoclean.pipeline.config_io import (
    load_analysis_config,
    save_analysis_config,
    generate_example_config,
)

__all__ = [
    "AnalysisResult",
    "CleanedTable",
    "clean_table",
    "filter_at_cutoffs",
    "load_contaminants",
    "export_results",
    "run_analysis",
    "load_analysis_config",
    "save_analysis_config",
    "generate_example_config",
]
