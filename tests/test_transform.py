"""
Tests for column selection, log transformation and identifier sets.
"""

import numpy as np
import pandas as pd
import pytest

from proteoclean.core.exceptions import SchemaError
from proteoclean.transform import (
    select_columns,
    log2_plus_one,
    add_log_abundance,
    transform_table,
    identifier_set,
    gene_list,
    compare_protein_sets,
)


@pytest.fixture
def table():
    return pd.DataFrame(
        {
            "Run": ["R1", "R1", "R3"],
            "Protein.Group": ["P1", "P2", "P1;P4"],
            "Genes": ["ALB", "TF", "ALB;APOA1"],
            "PG.MaxLFQ": [0.0, 1.0, np.nan],
            "Operator": ["x", "x", "y"],
        }
    )


class TestLogTransform:
    """Tests for log2(x + 1)."""

    def test_values(self):
        result = log2_plus_one(pd.Series([0.0, 1.0, 3.0, 255.0]))
        assert result.tolist() == [0.0, 1.0, 2.0, 8.0]

    def test_missing_stays_missing(self):
        result = log2_plus_one(pd.Series([1.0, np.nan]))
        assert np.isnan(result.iloc[1])

    def test_minus_one_is_missing(self):
        result = log2_plus_one(pd.Series([-1.0]))
        assert np.isnan(result.iloc[0])

    def test_negative_values_warn(self, caplog):
        with caplog.at_level("WARNING", logger="proteoclean.transform.log"):
            log2_plus_one(pd.Series([-0.5, 2.0]))

        assert caplog.records[0].name == "proteoclean.transform.log"
        assert caplog.records[0].getMessage().startswith("1 negative abundance value(s)")

    def test_monotonic_for_non_negative(self):
        values = pd.Series([0.0, 0.5, 10.0, 1e6])
        result = log2_plus_one(values)
        assert result.is_monotonic_increasing

    def test_add_log_abundance_copies(self, table):
        result = add_log_abundance(table)

        assert "Log2.PG.MaxLFQ" in result.columns
        assert "Log2.PG.MaxLFQ" not in table.columns
        assert result["Log2.PG.MaxLFQ"].tolist()[:2] == [0.0, 1.0]

    def test_missing_abundance_column(self, table):
        with pytest.raises(SchemaError):
            add_log_abundance(table, column="Intensity")


class TestSelection:
    """Tests for column selection."""

    def test_select_keeps_order(self, table):
        result = select_columns(table, ["Genes", "Run"])
        assert list(result.columns) == ["Genes", "Run"]

    def test_select_missing_column(self, table):
        with pytest.raises(SchemaError, match="Condition"):
            select_columns(table, ["Run", "Condition"])

    def test_transform_table_adds_abundance_column(self, table):
        result = transform_table(table, columns=["Run", "Protein.Group"])

        assert list(result.columns) == ["Run", "Protein.Group", "PG.MaxLFQ", "Log2.PG.MaxLFQ"]
        assert "Operator" not in result.columns

    def test_transform_table_all_columns(self, table):
        result = transform_table(table)
        assert set(table.columns) < set(result.columns)


class TestIdentifierSets:
    """Tests for identifier sets and comparisons."""

    def test_gene_list_splits_multi_valued(self, table):
        assert gene_list(table) == ["ALB", "APOA1", "TF"]

    def test_identifier_set_ignores_missing(self):
        df = pd.DataFrame({"Genes": ["ALB", None, " ", "TF"]})
        assert identifier_set(df, column="Genes") == {"ALB", "TF"}

    def test_compare_protein_sets(self):
        strict = pd.DataFrame({"Protein.Group": ["P1"]})
        loose = pd.DataFrame({"Protein.Group": ["P1", "P2", "P3"]})

        comparison = compare_protein_sets({"q0.01": strict, "q0.05": loose})

        overlap = comparison["q0.01_vs_q0.05"]
        assert overlap["shared"] == {"P1"}
        assert overlap["only_q0.01"] == set()
        assert overlap["only_q0.05"] == {"P2", "P3"}

    def test_compare_needs_two_tables(self):
        with pytest.raises(ValueError):
            compare_protein_sets({"q0.01": pd.DataFrame({"Protein.Group": ["P1"]})})
