"""
Input/Output utilities for the proteoclean package.

This module provides utilities for reading and writing delimited text,
spreadsheet and parquet tables as well as FASTA files.
"""

from proteoclean.io.tables import (
    detect_format,
    load_table,
    load_quantification,
    load_annotation,
    load_identifier_list,
    normalize_flag,
    require_columns,
    write_table,
)
from proteoclean.io.fasta import (
    load_fasta,
    read_sequence_records,
    write_fasta,
)

__all__ = [
    "detect_format",
    "load_table",
    "load_quantification",
    "load_annotation",
    "load_identifier_list",
    "normalize_flag",
    "require_columns",
    "write_table",
    "load_fasta",
    "read_sequence_records",
    "write_fasta",
]
