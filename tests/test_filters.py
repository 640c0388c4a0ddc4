"""
Tests for the cleaning filters and the filter pipeline.
"""

import logging

import pandas as pd
import pytest

from proteoclean.core.exceptions import SchemaError
from proteoclean.model.filters import CleaningConfig
from proteoclean.preprocessing.filters import (
    FilterLevel,
    FilterPipeline,
    OutlierRunFilter,
    ExactMatchExclusionFilter,
    PatternExclusionFilter,
    QualityThresholdFilter,
    MissingValueFilter,
    get_filter_pipeline,
)


@pytest.fixture
def merged():
    return pd.DataFrame(
        {
            "Run": ["R1", "R1", "R1", "R1", "R2", "R2", "R3"],
            "Protein.Group": ["P1", "P2", "Biognosys|iRT-Kit_WR_fusion", "P00761", "P1", "P2", "P3"],
            "Protein.Names": ["ALBU_HUMAN", "TRFE_HUMAN", "iRT", "TRYP_PIG", "ALBU_HUMAN", "TRFE_HUMAN", "APOA1_HUMAN"],
            "PG.MaxLFQ": [2e5, 5e4, 9e4, 1e3, 1e5, 4.5e4, None],
            "PG.Q.Value": [0.004, 0.02, 0.001, 0.001, 0.009, 0.003, 0.03],
            "Outlier": ["FALSE", "FALSE", "FALSE", "FALSE", "TRUE", "TRUE", "FALSE"],
        }
    )


class TestOutlierRunFilter:
    """Tests for run-level outlier removal."""

    def test_removes_flagged_runs(self, merged):
        filtered, result = OutlierRunFilter().apply(merged)

        assert "R2" not in set(filtered["Run"])
        assert result.removed_count == 2
        assert result.filter_level == FilterLevel.RUN
        assert result.details["removed_runs"] == ["R2"]

    def test_idempotent(self, merged):
        once, _ = OutlierRunFilter().apply(merged)
        twice, result = OutlierRunFilter().apply(once)

        pd.testing.assert_frame_equal(once, twice)
        assert result.removed_count == 0

    def test_missing_flag_keeps_run(self):
        df = pd.DataFrame({"Run": ["R1", "R2"], "Outlier": [None, True]})

        filtered, _ = OutlierRunFilter().apply(df)

        assert filtered["Run"].tolist() == ["R1"]

    def test_missing_column(self, merged):
        with pytest.raises(SchemaError, match="IsOutlier"):
            OutlierRunFilter(outlier_column="IsOutlier").apply(merged)

    def test_input_not_modified(self, merged):
        before = merged.copy()
        OutlierRunFilter().apply(merged)
        pd.testing.assert_frame_equal(merged, before)


class TestExclusionFilters:
    """Tests for exact-match and substring exclusion."""

    def test_exact_match_on_protein_group(self, merged):
        filtered, result = ExactMatchExclusionFilter({"P2"}, column="Protein.Group").apply(merged)

        assert "P2" not in set(filtered["Protein.Group"])
        assert result.removed_count == 2

    def test_exact_match_is_not_substring(self, merged):
        # "ALBU" is a prefix of ALBU_HUMAN but not equal to it
        filtered, result = ExactMatchExclusionFilter({"ALBU"}).apply(merged)

        assert result.removed_count == 0
        assert len(filtered) == len(merged)

    def test_exact_match_with_separator(self):
        df = pd.DataFrame({"Protein.Group": ["P1;P00761", "P1", "P2"]})

        whole, _ = ExactMatchExclusionFilter({"P00761"}, column="Protein.Group").apply(df)
        split, _ = ExactMatchExclusionFilter(
            {"P00761"}, column="Protein.Group", separator=";"
        ).apply(df)

        assert len(whole) == 3
        assert split["Protein.Group"].tolist() == ["P1", "P2"]

    def test_pattern_exclusion(self, merged):
        filtered, result = PatternExclusionFilter(["iRT"]).apply(merged)

        assert not filtered["Protein.Group"].str.contains("iRT").any()
        assert result.removed_count == 1
        assert result.details["mode"] == "SUBSTRING"

    def test_pattern_is_literal(self):
        df = pd.DataFrame({"Protein.Group": ["P1", "P.2", "PX2"]})

        filtered, _ = PatternExclusionFilter(["P.2"]).apply(df)

        assert filtered["Protein.Group"].tolist() == ["P1", "PX2"]

    def test_pattern_case_insensitive(self, merged):
        sensitive, _ = PatternExclusionFilter(["irt"]).apply(merged)
        insensitive, _ = PatternExclusionFilter(["irt"], case_sensitive=False).apply(merged)

        assert len(sensitive) == len(merged)
        assert len(insensitive) == len(merged) - 1

    def test_wrong_column_warns(self, merged, caplog):
        # gene-style names never occur in the protein group column
        exclusion = ExactMatchExclusionFilter({"ALBU_HUMAN"}, column="Protein.Group")

        with caplog.at_level(logging.WARNING, logger="proteoclean"):
            filtered, result = exclusion.apply(merged)

        assert result.removed_count == 0
        assert "check the column choice" in caplog.text

    def test_missing_column(self, merged):
        with pytest.raises(SchemaError):
            PatternExclusionFilter(["iRT"], column="Protein.Ids").apply(merged)

    def test_empty_exclusion_set_removes_nothing(self, merged):
        filtered, result = ExactMatchExclusionFilter([]).apply(merged)

        assert len(filtered) == len(merged)
        assert result.removed_count == 0


class TestQualityFilters:
    """Tests for the q-value threshold and missing-value removal."""

    def test_strictly_below_cutoff(self):
        df = pd.DataFrame({"PG.Q.Value": [0.009, 0.01, 0.011]})

        filtered, _ = QualityThresholdFilter(0.01).apply(df)

        assert filtered["PG.Q.Value"].tolist() == [0.009]

    def test_missing_score_removed(self):
        df = pd.DataFrame({"PG.Q.Value": [0.001, None]})

        filtered, result = QualityThresholdFilter(0.05).apply(df)

        assert len(filtered) == 1
        assert result.details["missing_scores"] == 1

    def test_larger_cutoff_keeps_superset(self, merged):
        strict, _ = QualityThresholdFilter(0.01).apply(merged)
        loose, _ = QualityThresholdFilter(0.05).apply(merged)

        assert set(strict.index) <= set(loose.index)

    @pytest.mark.parametrize("cutoff", [0, -0.1, 1.5])
    def test_invalid_cutoff(self, cutoff):
        with pytest.raises(ValueError):
            QualityThresholdFilter(cutoff)

    def test_missing_values_drop_whole_rows(self, merged):
        filtered, result = MissingValueFilter().apply(merged)

        assert result.removed_count == 1
        assert not filtered.isna().any().any()
        assert result.details["missing_per_column"] == {"PG.MaxLFQ": 1}

    def test_missing_values_subset(self):
        df = pd.DataFrame({"a": [1.0, None], "b": [None, 2.0]})

        filtered, _ = MissingValueFilter(columns=["a"]).apply(df)

        assert len(filtered) == 1


class TestFilterPipeline:
    """Tests for pipeline assembly and reporting."""

    def test_empty_pipeline(self, merged):
        pipeline = FilterPipeline(name="empty")
        filtered, results = pipeline.apply(merged)

        assert len(pipeline) == 0
        assert len(filtered) == len(merged)
        assert results == []

    def test_factory_order(self):
        config = CleaningConfig.from_dict(
            {"name": "ordered", "exclusion": {"exclude_names": ["TRFE_HUMAN"]}}
        )

        pipeline = get_filter_pipeline(config, cutoff=0.01, contaminants=["P00761"])

        assert pipeline.name == "ordered_q0.01"
        assert [f.name for f in pipeline.filters] == [
            "OutlierRunFilter",
            "ExactMatchExclusionFilter",
            "ContaminantFilter",
            "PatternExclusionFilter",
            "QualityThresholdFilter",
        ]

    def test_disabled_config_yields_empty_pipeline(self):
        config = CleaningConfig.from_dict({"name": "off", "enabled": False})

        assert len(get_filter_pipeline(config, cutoff=0.01)) == 0

    def test_pipeline_counts_and_report(self, merged):
        config = CleaningConfig.from_dict({"name": "report"})
        pipeline = get_filter_pipeline(config, cutoff=0.01, contaminants=["P00761"])

        filtered, results = pipeline.apply(merged)
        report = pipeline.report(results)

        assert filtered["Protein.Group"].tolist() == ["P1"]
        assert report["filter"].tolist() == [
            "OutlierRunFilter",
            "ContaminantFilter",
            "PatternExclusionFilter",
            "QualityThresholdFilter",
        ]
        assert report["removed"].tolist() == [2, 1, 1, 2]
        assert (report["input"] - report["output"] == report["removed"]).all()
        assert report["pipeline"].unique().tolist() == ["report_q0.01"]

    def test_stop_on_empty(self):
        df = pd.DataFrame({"Outlier": [True], "PG.Q.Value": [0.001], "Protein.Group": ["P1"]})
        pipeline = FilterPipeline("stop").add_filters(
            [OutlierRunFilter(), QualityThresholdFilter(0.01)]
        )

        filtered, results = pipeline.apply(df)

        assert filtered.empty
        assert len(results) == 1

    def test_contaminant_separator_independent_of_name_separator(self):
        df = pd.DataFrame(
            {
                "Protein.Group": ["P1;P00761", "P2", "P3"],
                "Protein.Names": ["ALBU_HUMAN;TRYP_PIG", "TRFE_HUMAN", "TRYP_PIG"],
                "PG.Q.Value": [0.001, 0.001, 0.001],
            }
        )
        config = CleaningConfig.from_dict(
            {
                "name": "groups",
                "outlier": {"enabled": False},
                "exclusion": {
                    "exclude_names": ["TRYP_PIG"],
                    "exclude_patterns": [],
                    "contaminant_separator": ";",
                },
            }
        )

        filtered, results = get_filter_pipeline(config, cutoff=0.05, contaminants=["P00761"]).apply(df)

        assert filtered["Protein.Group"].tolist() == ["P2"]
        assert {r.filter_name: r.removed_count for r in results} == {
            "ExactMatchExclusionFilter": 1,
            "ContaminantFilter": 1,
            "QualityThresholdFilter": 0,
        }
