"""
Tests for joining quantification tables with sample annotation.
"""

import pandas as pd
import pytest

from proteoclean.annotation import merge_annotation, rename_columns
from proteoclean.core.exceptions import JoinMismatchError, SchemaError


@pytest.fixture
def quant():
    return pd.DataFrame(
        {
            "Run": ["R1", "R1", "R2", "R3", "R3"],
            "Protein.Group": ["P1", "P2", "P1", "P1", "P2"],
            "PG.MaxLFQ": [0.2, 0.5, 0.1, 0.3, 0.4],
            "PG.Q.Value": [0.004, 0.02, 0.009, 0.001, 0.03],
        }
    )


@pytest.fixture
def annotation():
    return pd.DataFrame(
        {
            "Run": ["R1", "R2", "R4"],
            "BioReplicate": [1, 1, 2],
            "Condition": ["A", "B", "B"],
            "Outlier": [False, True, False],
            "Operator": ["x", "y", "z"],
        }
    )


class TestMergeAnnotation:
    """Tests for merge_annotation."""

    def test_inner_join_law(self, quant, annotation):
        merged, report = merge_annotation(quant, annotation)

        expected = quant["Run"].isin(annotation["Run"]).sum()
        assert len(merged) == expected == 3
        assert report.output_rows == 3
        assert report.dropped_rows == 2
        assert report.unmatched_quantification == ["R3"]
        assert report.unmatched_annotation == ["R4"]
        assert not report.is_complete

    def test_annotation_columns_by_name(self, quant, annotation):
        merged, _ = merge_annotation(
            quant, annotation, annotation_columns=["Condition", "Outlier"]
        )

        assert "Operator" not in merged.columns
        assert "BioReplicate" not in merged.columns
        assert {"Run", "Condition", "Outlier"} <= set(merged.columns)

    def test_annotation_column_absent(self, quant, annotation):
        with pytest.raises(SchemaError, match="Batch"):
            merge_annotation(quant, annotation, annotation_columns=["Condition", "Batch"])

    def test_rename_after_merge(self, quant, annotation):
        merged, _ = merge_annotation(quant, annotation, rename={"Condition": "Group"})

        assert "Group" in merged.columns
        assert "Condition" not in merged.columns

    def test_rename_absent_column(self, quant, annotation):
        with pytest.raises(SchemaError):
            merge_annotation(quant, annotation, rename={"Cond": "Group"})

    def test_missing_join_key(self, quant, annotation):
        with pytest.raises(SchemaError, match="Sample"):
            merge_annotation(quant, annotation, key="Sample")

    def test_validate_raises_on_mismatch(self, quant, annotation):
        with pytest.raises(JoinMismatchError) as exc_info:
            merge_annotation(quant, annotation, validate=True)
        assert exc_info.value.unmatched_left == ["R3"]
        assert exc_info.value.unmatched_right == ["R4"]

    def test_validate_passes_on_complete_join(self, quant, annotation):
        subset = quant[quant["Run"].isin(["R1", "R2"])]
        complete_annotation = annotation[annotation["Run"].isin(["R1", "R2"])]

        merged, report = merge_annotation(subset, complete_annotation, validate=True)

        assert report.is_complete
        assert len(merged) == len(subset)

    def test_duplicate_annotation_key(self, quant, annotation):
        duplicated = pd.concat([annotation, annotation.iloc[[0]]])
        with pytest.raises(SchemaError, match="not unique"):
            merge_annotation(quant, duplicated)

    def test_missing_annotation_keys_ignored(self, quant, annotation):
        blanks = pd.DataFrame({"Run": [None, None], "Condition": ["C", "D"]})
        with_blanks = pd.concat([annotation, blanks], ignore_index=True)

        merged, report = merge_annotation(quant, with_blanks)

        assert len(merged) == 3
        assert report.unmatched_annotation == ["R4"]

    def test_inputs_not_modified(self, quant, annotation):
        quant_before = quant.copy()
        annotation_before = annotation.copy()

        merge_annotation(quant, annotation, annotation_columns=["Condition"])

        pd.testing.assert_frame_equal(quant, quant_before)
        pd.testing.assert_frame_equal(annotation, annotation_before)

    def test_numeric_and_string_keys_join(self):
        quant = pd.DataFrame({"Run": [1, 2], "Protein.Group": ["P1", "P1"]})
        annotation = pd.DataFrame({"Run": ["1", "2"], "Condition": ["A", "B"]})

        merged, _ = merge_annotation(quant, annotation)

        assert len(merged) == 2


class TestRenameColumns:
    """Tests for explicit renames."""

    def test_rename_onto_existing_column(self):
        df = pd.DataFrame({"a": [1], "b": [2]})
        with pytest.raises(SchemaError, match="already exist"):
            rename_columns(df, {"a": "b"})
