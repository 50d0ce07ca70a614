"""
Context and Result data structures for the analysis pipeline.

These dataclasses provide clean interfaces for passing data between stages.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional
import json
import numpy as np

from fashion_eda.core.labels import LabelMap


@dataclass
class AnalysisContext:
    """
    Runtime context for analysis stages.

    Contains all data needed to run analyses:
    - Feature matrices per split (raw and, once reduced, projected)
    - Integer labels per split and the code-to-name lookup
    - Configuration and metadata

    Example:
        >>> context = AnalysisContext(
        ...     matrices={"train": X_tr, "test": X_te},
        ...     labels={"train": y_tr, "test": y_te},
        ...     output_dir=Path("results/fashion")
        ... )
    """

    # Core data
    matrices: Dict[str, np.ndarray] = field(default_factory=dict)
    labels: Dict[str, np.ndarray] = field(default_factory=dict)
    label_map: LabelMap = field(default_factory=LabelMap.default)

    # Metadata
    experiment: str = "unknown"
    output_dir: Optional[Path] = None
    config: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    wandb_run: Optional[Any] = None

    def get_matrix(self, key: str = "train") -> np.ndarray:
        """
        Get a feature matrix.

        Args:
            key: Matrix identifier (e.g., 'train', 'test', 'train_reduced')

        Returns:
            Feature matrix

        Raises:
            KeyError: If matrix not found
        """
        if key not in self.matrices:
            available = list(self.matrices.keys())
            raise KeyError(
                f"Matrix '{key}' not found. Available: {available}"
            )
        return self.matrices[key]

    def get_labels(self, split: str = "train") -> np.ndarray:
        """
        Get integer labels of a split.

        Raises:
            KeyError: If split not found
        """
        if split not in self.labels:
            available = list(self.labels.keys())
            raise KeyError(
                f"Labels for split '{split}' not found. Available: {available}"
            )
        return self.labels[split]

    def has_matrix(self, key: str) -> bool:
        """Check if matrix exists."""
        return key in self.matrices

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (excludes large arrays)."""
        return {
            "experiment": self.experiment,
            "output_dir": str(self.output_dir) if self.output_dir else None,
            "available_matrices": {k: list(v.shape) for k, v in self.matrices.items()},
            "available_labels": list(self.labels.keys()),
            "classes": self.label_map.names,
            "metadata": self.metadata,
        }

    def __repr__(self) -> str:
        mat_keys = list(self.matrices.keys())
        return (
            f"AnalysisContext("
            f"experiment={self.experiment}, "
            f"matrices={mat_keys}, "
            f"classes={len(self.label_map)})"
        )


@dataclass
class StageResult:
    """
    Standardized result from an analysis stage.

    Attributes:
        stage_name: Unique identifier for this stage
        success: Whether the stage completed successfully
        metrics: Scalar metrics (for reporting/logging)
        artifacts: Non-scalar results (arrays, dataframes, etc.)
        metadata: Additional information (timing, parameters, etc.)
        error: Error message if success=False
    """

    stage_name: str
    success: bool = True
    metrics: Dict[str, float] = field(default_factory=dict)
    artifacts: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def add_metric(self, key: str, value: float):
        """Add a scalar metric."""
        self.metrics[key] = float(value)

    def add_artifact(self, key: str, value: Any):
        """Add a non-scalar artifact."""
        self.artifacts[key] = value

    def add_metadata(self, key: str, value: Any):
        """Add metadata."""
        self.metadata[key] = value

    def to_dict(self, include_artifacts: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary.

        Args:
            include_artifacts: If False, exclude large artifacts

        Returns:
            Dictionary representation
        """
        d = {
            "stage_name": self.stage_name,
            "success": self.success,
            "metrics": self.metrics.copy(),
            "metadata": self.metadata.copy(),
        }

        if self.error:
            d["error"] = self.error

        if include_artifacts:
            # numpy arrays and dataframes stay out of the serialized form
            d["artifacts"] = {
                k: v for k, v in self.artifacts.items()
                if isinstance(v, (str, int, float, bool, list, dict))
            }

        return d

    def save_json(self, path: Path, include_artifacts: bool = False):
        """
        Save result as JSON.

        Args:
            path: Output path
            include_artifacts: Also write the serializable artifacts
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Convert numpy types to native Python
        def convert(obj):
            if isinstance(obj, np.integer):
                return int(obj)
            elif isinstance(obj, np.floating):
                return float(obj)
            elif isinstance(obj, np.ndarray):
                return obj.tolist()
            elif isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(item) for item in obj]
            return obj

        data = convert(self.to_dict(include_artifacts=include_artifacts))

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    def __repr__(self) -> str:
        status = "✓" if self.success else "✗"
        n_metrics = len(self.metrics)
        n_artifacts = len(self.artifacts)
        return (
            f"StageResult({status} {self.stage_name}: "
            f"{n_metrics} metrics, {n_artifacts} artifacts)"
        )

