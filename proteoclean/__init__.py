"""
proteoclean - annotation, cleaning and filtering of protein quantification tables.

This package joins mass-spectrometry protein quantification tables with
sample annotation, removes outlier runs, contaminants and calibration
standards, applies q-value cutoffs, derives log2 abundances and builds
contaminant (cRAP) reference files.
"""

__version__ = "0.1.0"

# Import logging configuration
from proteoclean.core.logging_config import initialize_logging

# Initialize logging with default settings
# Users can override these settings by calling configure_logging with their own settings
initialize_logging()

from proteoclean.core.exceptions import (
    ProteoCleanError,
    FileFormatError,
    SchemaError,
    JoinMismatchError,
    ExternalServiceUnavailable,
    DuplicateIdentifierError,
)
from proteoclean.pipeline import run_analysis, load_analysis_config

__all__ = [
    "__version__",
    "initialize_logging",
    "ProteoCleanError",
    "FileFormatError",
    "SchemaError",
    "JoinMismatchError",
    "ExternalServiceUnavailable",
    "DuplicateIdentifierError",
    "run_analysis",
    "load_analysis_config",
]
