"""Core types for the analysis pipeline.

Plain dataclasses built from the YAML/JSON config, so stages never touch
raw config dictionaries.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Any, List, Optional

from omegaconf import DictConfig, OmegaConf


def _abs_path(value: Optional[str], project_root: Path) -> Path:
    """Resolve a config path relative to the config directory."""
    if value is None:
        return project_root
    candidate = Path(value)
    return candidate if candidate.is_absolute() else (project_root / candidate).resolve()


@dataclass
class PredictionSource:
    """Prediction archive for one fitted model.

    Attributes:
        name: Model identifier used in the comparison table
        path: ``.npz`` with ``train_pred`` (out-of-sample) and ``test_pred``
        train_predictions: "out_of_sample" or "in_sample"
    """

    name: str
    path: Path
    train_predictions: str = "out_of_sample"

    @classmethod
    def from_config(cls, raw_cfg: Dict[str, Any], project_root: Path) -> "PredictionSource":
        return cls(
            name=str(raw_cfg["name"]),
            path=_abs_path(raw_cfg["predictions"], project_root),
            train_predictions=str(raw_cfg.get("train_predictions", "out_of_sample")),
        )


@dataclass
class ExperimentSpec:
    """Specification for the dataset and the models to compare.

    Attributes:
        name: Experiment name, used as the output subdirectory
        dataset_path: Path to dataset directory
        dataset_name: Dataset filename (.npz)
        models: Prediction archives to evaluate
    """

    name: str
    dataset_path: Path
    dataset_name: str
    models: List[PredictionSource] = field(default_factory=list)

    @classmethod
    def from_config(cls, raw_cfg: Dict[str, Any], project_root: Path) -> "ExperimentSpec":
        """Create ExperimentSpec from a config dict.

        Args:
            raw_cfg: Raw config dictionary (``experiment`` section)
            project_root: Project root path for resolving relative paths

        Returns:
            ExperimentSpec instance
        """
        return cls(
            name=str(raw_cfg.get("name", "experiment")),
            dataset_path=_abs_path(raw_cfg["dataset_path"], project_root),
            dataset_name=str(raw_cfg.get("dataset_name", "fashion.npz")),
            models=[
                PredictionSource.from_config(m, project_root)
                for m in raw_cfg.get("models", []) or []
            ],
        )


@dataclass
class AnalysisSettings:
    """Configuration for all analysis stages.

    Each attribute corresponds to a stage. Values are dictionaries
    containing stage-specific settings.
    """

    dimensionality: Dict[str, Any] = field(default_factory=dict)
    performance: Dict[str, Any] = field(default_factory=dict)
    label_histograms: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_cfg(cls, cfg: Any, project_root: Optional[Path] = None) -> "AnalysisSettings":
        """Create AnalysisSettings from config dict.

        Args:
            cfg: Configuration dictionary or OmegaConf DictConfig
            project_root: Base for relative prediction paths listed under
                ``performance.models`` (defaults to the working directory)

        Returns:
            AnalysisSettings instance
        """

        def _to_dict(name: str) -> Dict[str, Any]:
            """Convert config section to dict."""
            section = cfg.get(name, {})
            if isinstance(section, DictConfig):
                return OmegaConf.to_container(section, resolve=True)  # type: ignore
            return dict(section) if isinstance(section, dict) else {}

        performance = _to_dict("performance")
        if performance.get("models"):
            root = project_root if project_root is not None else Path.cwd()
            performance["models"] = [
                m if isinstance(m, PredictionSource) else PredictionSource.from_config(m, root)
                for m in performance["models"]
            ]

        return cls(
            dimensionality=_to_dict("dimensionality"),
            performance=performance,
            label_histograms=_to_dict("label_histograms"),
        )

    def for_experiment(self, spec: ExperimentSpec) -> "AnalysisSettings":
        """Per-run copy whose performance stage compares the experiment's models.

        Models listed on the experiment take precedence over
        ``performance.models``. The original settings are left untouched.
        """
        models = spec.models or self.performance.get("models", [])
        return replace(
            self,
            dimensionality=dict(self.dimensionality),
            performance={**self.performance, "models": list(models)},
            label_histograms=dict(self.label_histograms),
        )
