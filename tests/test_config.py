"""
Tests for analysis and cleaning configurations.

This module tests that the example analysis configuration can be loaded,
that generated configurations round-trip and that overrides behave.
"""

import json
from pathlib import Path

import pytest
import yaml

from proteoclean.model.analysis import AnalysisConfig
from proteoclean.model.filters import CleaningConfig
from proteoclean.pipeline import (
    load_analysis_config,
    save_analysis_config,
    generate_example_config,
)
from proteoclean.preprocessing.filters import get_filter_pipeline


EXAMPLE_DIR = Path(__file__).parent / "example"


class TestAnalysisConfiguration:
    """Tests for configuration loading and validation."""

    def test_load_example_config(self):
        """The test-suite configuration loads and resolves its paths."""
        config = load_analysis_config(EXAMPLE_DIR / "analysis.yaml")

        assert isinstance(config, AnalysisConfig)
        assert config.cleaning.name == "example_analysis"
        assert config.cutoffs == [0.01, 0.05]
        assert Path(config.quantification) == (EXAMPLE_DIR / "quant.tsv").resolve()
        assert Path(config.contaminant_fasta).exists()
        assert config.cleaning.exclusion.exclude_patterns == ["iRT"]
        assert config.cleaning.exclusion.pattern_column == "Protein.Group"

    def test_paths_do_not_depend_on_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_analysis_config(EXAMPLE_DIR / "analysis.yaml")

        assert Path(config.annotation).exists()
        assert Path(config.output_dir).is_absolute()

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_analysis_config(tmp_path / "absent.yaml")

    def test_unsupported_config_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("name = 'x'")
        with pytest.raises(ValueError, match="Unsupported config format"):
            load_analysis_config(path)

    def test_generate_example_config(self, tmp_path):
        """Generating a YAML example produces a loadable configuration."""
        output_path = tmp_path / "example.yaml"
        generate_example_config(output_path)

        assert output_path.exists()
        config = load_analysis_config(output_path)
        assert config.cleaning.name == "example_config"
        assert config.annotation_sheet == "samples"
        assert config.cleaning.quality.score_column == "PG.Q.Value"

    def test_generate_json_config(self, tmp_path):
        """Generating a JSON example produces a loadable configuration."""
        output_path = tmp_path / "example.json"
        generate_example_config(output_path, format="json")

        data = json.loads(output_path.read_text())
        assert data["cleaning"]["name"] == "example_config"
        assert "name" not in data["cleaning"]["outlier"]

        config = load_analysis_config(output_path)
        assert config.cutoffs == [0.01, 0.05]

    def test_save_and_reload(self, tmp_path):
        config = AnalysisConfig(
            quantification=str(tmp_path / "quant.tsv"),
            annotation=str(tmp_path / "annotation.xlsx"),
            annotation_sheet="samples",
            cutoffs=[0.01],
            output_dir=str(tmp_path / "results"),
            rename={"Genes": "Gene"},
            cleaning=CleaningConfig.from_dict(
                {"name": "saved", "exclusion": {"exclude_names": ["TRYP_PIG"]}}
            ),
        )
        path = tmp_path / "saved.yaml"

        save_analysis_config(config, path)
        reloaded = load_analysis_config(path)

        assert reloaded.to_dict() == config.to_dict()
        assert yaml.safe_load(path.read_text())["cleaning"]["exclusion"]["exclude_names"] == ["TRYP_PIG"]

    def test_output_path(self, tmp_path):
        config = AnalysisConfig(output_dir=str(tmp_path), output_prefix="study")
        assert config.output_path("q0.01.tsv") == tmp_path / "study_q0.01.tsv"


class TestCleaningConfiguration:
    """Tests for cleaning configuration handling."""

    def test_defaults(self):
        config = CleaningConfig.from_dict({})

        assert config.outlier.enabled is True
        assert config.exclusion.exclude_names == []
        assert config.exclusion.exclude_patterns == ["iRT"]
        assert config.exclusion.name_column == "Protein.Names"
        assert config.exclusion.pattern_column == "Protein.Group"

    def test_nested_names_ignored(self):
        config = CleaningConfig.from_dict({"name": "named", "outlier": {"name": "other"}})
        assert config.outlier.name == "named_outlier"

    def test_round_trip(self):
        config = CleaningConfig.from_dict(
            {"name": "round_trip", "quality": {"score_column": "Global.PG.Q.Value"}}
        )
        again = CleaningConfig.from_dict(config.to_dict())

        assert again.to_dict() == config.to_dict()

    def test_config_apply_overrides(self):
        """CLI overrides replace only the given settings."""
        config = CleaningConfig.from_dict({"name": "override_test"})

        config.apply_overrides(
            {
                "remove_outliers": False,
                "exclude_names": ["TRYP_PIG"],
                "exclude_patterns": None,
                "score_column": "Global.PG.Q.Value",
            }
        )

        assert config.outlier.enabled is False
        assert config.exclusion.exclude_names == ["TRYP_PIG"]
        assert config.exclusion.exclude_patterns == ["iRT"]
        assert config.quality.score_column == "Global.PG.Q.Value"

    def test_unknown_key(self):
        with pytest.raises(TypeError):
            CleaningConfig.from_dict({"outlier": {"threshold": 3}})

    def test_pipeline_from_loaded_config(self):
        config = load_analysis_config(EXAMPLE_DIR / "analysis.yaml")
        pipeline = get_filter_pipeline(config.cleaning, cutoff=0.05)

        assert pipeline.name == "example_analysis_q0.05"
        assert len(pipeline) == 3
