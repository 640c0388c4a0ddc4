"""
Derived columns and export helpers applied after filtering.
"""

from proteoclean.transform.log import (
    select_columns,
    log2_plus_one,
    add_log_abundance,
    transform_table,
)
from proteoclean.transform.sets import identifier_set, gene_list, compare_protein_sets

__all__ = [
    "select_columns",
    "log2_plus_one",
    "add_log_abundance",
    "transform_table",
    "identifier_set",
    "gene_list",
    "compare_protein_sets",
]
