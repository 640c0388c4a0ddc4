"""
Identifier lists and set comparisons for downstream tools.
"""

from itertools import combinations
from typing import Dict, List, Mapping, Set

import pandas as pd

from proteoclean.core.constants import GENES, PROTEIN_GROUP, MULTI_VALUE_SEPARATOR
from proteoclean.core.logger import get_logger
from proteoclean.io.tables import require_columns

logger = get_logger("proteoclean.transform.sets")


def identifier_set(
    df: pd.DataFrame, column: str = PROTEIN_GROUP, separator: str = None
) -> Set[str]:
    """Unique non-empty identifiers of a column, optionally splitting multi-valued fields."""
    require_columns(df, [column], context="identifier set")
    values = df[column].dropna().astype(str)
    if separator:
        values = values.str.split(separator).explode()
    values = values.str.strip()
    return set(values[values != ""])


def gene_list(
    df: pd.DataFrame, column: str = GENES, separator: str = MULTI_VALUE_SEPARATOR
) -> List[str]:
    """Sorted unique gene symbols, ready for an enrichment query."""
    genes = sorted(identifier_set(df, column=column, separator=separator))
    logger.info("%d unique identifiers in column %s", len(genes), column)
    return genes


def compare_protein_sets(
    tables: Mapping[str, pd.DataFrame], column: str = PROTEIN_GROUP
) -> Dict[str, Dict[str, Set[str]]]:
    """
    Pairwise overlap of identifier sets, as used for Venn-style comparisons.

    Parameters
    ----------
    tables : Mapping[str, pd.DataFrame]
        Named result tables (e.g. {"q0.01": ..., "q0.05": ...}).
    column : str, optional
        Identifier column compared between tables.

    Returns
    -------
    dict
        ``{"<a>_vs_<b>": {"shared": ..., "only_<a>": ..., "only_<b>": ...}}``
    """
    if len(tables) < 2:
        raise ValueError("At least two tables are needed for a comparison")

    sets = {name: identifier_set(df, column=column) for name, df in tables.items()}
    comparison = {}
    for a, b in combinations(sets, 2):
        comparison[f"{a}_vs_{b}"] = {
            "shared": sets[a] & sets[b],
            f"only_{a}": sets[a] - sets[b],
            f"only_{b}": sets[b] - sets[a],
        }
        logger.info(
            "%s vs %s: %d shared, %d only in %s, %d only in %s",
            a,
            b,
            len(sets[a] & sets[b]),
            len(sets[a] - sets[b]),
            a,
            len(sets[b] - sets[a]),
            b,
        )
    return comparison
