"""
Core modules for the proteoclean package.

This module provides fundamental utilities including column constants,
exception types and logging helpers.
"""

from proteoclean.core.constants import (
    RUN,
    PROTEIN_GROUP,
    PROTEIN_NAMES,
    GENES,
    ABUNDANCE,
    Q_VALUE,
    LOG2_ABUNDANCE,
    BIOREPLICATE,
    CONDITION,
    OUTLIER,
    ANNOTATION_COLUMNS,
    MULTI_VALUE_SEPARATOR,
    DEFAULT_CUTOFFS,
    get_accession,
    format_cutoff,
)
from proteoclean.core.exceptions import (
    ProteoCleanError,
    FileFormatError,
    SchemaError,
    JoinMismatchError,
    ExternalServiceUnavailable,
    DuplicateIdentifierError,
)
from proteoclean.core.logger import get_logger, configure_logging, log_execution_time, log_function_call

__all__ = [
    # Constants
    "RUN",
    "PROTEIN_GROUP",
    "PROTEIN_NAMES",
    "GENES",
    "ABUNDANCE",
    "Q_VALUE",
    "LOG2_ABUNDANCE",
    "BIOREPLICATE",
    "CONDITION",
    "OUTLIER",
    "ANNOTATION_COLUMNS",
    "MULTI_VALUE_SEPARATOR",
    "DEFAULT_CUTOFFS",
    "get_accession",
    "format_cutoff",
    # Exceptions
    "ProteoCleanError",
    "FileFormatError",
    "SchemaError",
    "JoinMismatchError",
    "ExternalServiceUnavailable",
    "DuplicateIdentifierError",
    # Logger
    "get_logger",
    "configure_logging",
    "log_execution_time",
    "log_function_call",
]
