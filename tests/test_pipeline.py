"""
End-to-end run of the CLI on a toy archive.
"""

import json

import numpy as np
import pandas as pd
import pytest
import yaml

from fashion_eda.cli.run_pipeline import main
from fashion_eda.core.analysis_types import AnalysisSettings, ExperimentSpec, PredictionSource
from fashion_eda.pipeline import build_registry, run_analysis_pipeline
from fashion_eda.stages.performance import load_predictions


@pytest.fixture
def config_file(tmp_path, toy_archive, toy_predictions):
    data_dir, name = toy_archive
    cfg = {
        "seed": 0,
        "output_root": "results",
        "experiment": {
            "name": "toy",
            "dataset_path": str(data_dir),
            "dataset_name": name,
            "models": [
                {"name": "perfect", "predictions": str(toy_predictions["perfect"])},
                {"name": "sloppy", "predictions": str(toy_predictions["sloppy"])},
            ],
        },
        "dimensionality": {"threshold": 0.995, "max_plot_components": 10},
        "performance": {"average": "macro"},
    }
    path = tmp_path / "analysis.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_cli_writes_every_output(tmp_path, config_file):
    main(["--config", str(config_file), "--set", "dimensionality.threshold=0.9"])

    out = tmp_path / "results" / "toy"
    for rel in [
        "label_histograms/train.png",
        "label_histograms/test.csv",
        "dimensionality/explained_variance.png",
        "dimensionality/explained_variance.csv",
        "dimensionality/pca_summary.json",
        "performance/comparison.csv",
        "performance/comparison.png",
        "dimensionality_result.json",
        "performance_result.json",
    ]:
        assert (out / rel).exists(), rel

    summary = json.loads((out / "dimensionality_result.json").read_text())
    assert summary["metrics"]["threshold"] == pytest.approx(0.9)
    assert 1 <= summary["metrics"]["n_components"] <= 64
    assert summary["metrics"]["covered_variance"] >= 0.9

    table = pd.read_csv(out / "performance" / "comparison.csv", index_col="model")
    assert list(table.index) == ["perfect", "sloppy"]
    assert (table.loc["perfect", "accuracy_train":"f1_test"] == 1.0).all()
    assert table.loc["sloppy", "accuracy_train"] == pytest.approx(25 / 30)
    assert table.loc["sloppy", "accuracy_test"] == pytest.approx(9 / 12)


def test_output_root_flag_overrides_config(tmp_path, config_file):
    target = tmp_path / "elsewhere"
    main(["--config", str(config_file), "--output-root", str(target)])
    assert (target / "toy" / "performance" / "comparison.csv").exists()


def test_missing_experiment_section(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("seed: 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="experiment"):
        main(["--config", str(path)])


def test_experiment_spec_resolves_relative_paths(tmp_path):
    spec = ExperimentSpec.from_config(
        {
            "name": "rel",
            "dataset_path": "data",
            "models": [{"name": "m", "predictions": "preds/m.npz"}],
        },
        tmp_path,
    )
    assert spec.dataset_path == (tmp_path / "data").resolve()
    assert spec.models[0].path == (tmp_path / "preds" / "m.npz").resolve()
    assert spec.models[0].train_predictions == "out_of_sample"


def test_settings_and_registry_defaults():
    settings = AnalysisSettings.from_cfg({"dimensionality": {"threshold": 0.9}})
    assert settings.dimensionality == {"threshold": 0.9}
    assert settings.performance == {}

    registry = build_registry()
    assert registry.names == ["dimensionality", "performance"]
    # no models configured, so only the PCA stage is enabled
    assert not registry.get("performance").is_enabled(settings.performance)
    assert registry.get("dimensionality").is_enabled(settings.dimensionality)


def test_load_predictions_requires_both_keys(tmp_path):
    np.savez(tmp_path / "half.npz", train_pred=np.zeros(3))
    with pytest.raises(ValueError, match="test_pred"):
        load_predictions(tmp_path / "half.npz")
    with pytest.raises(FileNotFoundError):
        load_predictions(tmp_path / "none.npz")


def test_shared_settings_do_not_leak_models_between_experiments(tmp_path, toy_archive, toy_predictions):
    data_dir, name = toy_archive
    settings = AnalysisSettings.from_cfg({"dimensionality": {"report": False}})

    for model in ("perfect", "sloppy"):
        spec = ExperimentSpec(
            name=model,
            dataset_path=data_dir,
            dataset_name=name,
            models=[PredictionSource(name=model, path=toy_predictions[model])],
        )
        run_analysis_pipeline(spec, settings, tmp_path / "out")

        table = pd.read_csv(tmp_path / "out" / model / "performance" / "comparison.csv", index_col="model")
        assert list(table.index) == [model]

    assert "models" not in settings.performance


def test_models_listed_under_performance_section(tmp_path, toy_archive, toy_predictions):
    data_dir, name = toy_archive
    cfg = {
        "output_root": "results",
        "experiment": {"name": "toy", "dataset_path": str(data_dir), "dataset_name": name},
        "performance": {
            "models": [{"name": "perfect", "predictions": toy_predictions["perfect"].name}],
        },
    }
    path = data_dir / "perf_models.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

    main(["--config", str(path)])

    table = pd.read_csv(data_dir / "results" / "toy" / "performance" / "comparison.csv", index_col="model")
    assert list(table.index) == ["perfect"]


def test_performance_models_become_prediction_sources(tmp_path):
    settings = AnalysisSettings.from_cfg(
        {"performance": {"models": [{"name": "m", "predictions": "preds/m.npz"}]}},
        tmp_path,
    )
    (source,) = settings.performance["models"]
    assert isinstance(source, PredictionSource)
    assert source.path == (tmp_path / "preds" / "m.npz").resolve()
