"""
fashion_eda - Exploratory analysis toolkit for image classification datasets

Reduces flattened images with PCA and compares classifiers on a
train (out-of-sample) and a test split.

Quick Start:
    >>> from fashion_eda import DatasetManager, fit_and_select, project, evaluate
    >>>
    >>> dm = DatasetManager("data", "fashion.npz")
    >>> X_train, y_train = dm.get_split("train")
    >>> X_test, y_test = dm.get_split("test")
    >>>
    >>> # Keep the components covering 99.5% of the training variance
    >>> rotation, k, cumulative = fit_and_select(X_train, threshold=0.995)
    >>> Z_train, Z_test = project(X_train, rotation), project(X_test, rotation)
    >>>
    >>> # Compare a fitted model on held-out train folds and on test
    >>> record = evaluate(y_train, oof_pred, y_test, test_pred, "random_forest")

Main Components:
    - core.dataset_manager: Dataset handling
    - internal.analyses.pca_reduction: Covariance PCA and projection
    - internal.analyses.performance: Classification metrics and comparison table
    - stages: Pipeline stages (dimensionality, performance)
"""

__version__ = "0.1.0"

from fashion_eda.core import (
    DatasetManager,
    LabelMap,
    ShapeMismatch,
    LengthMismatch,
    UnknownLabel,
    NumericalDegeneracyWarning,
)
from fashion_eda.internal.analyses.pca_reduction import (
    PrincipalComponentSet,
    principal_components,
    fit_and_select,
    project,
)
from fashion_eda.internal.analyses.performance import (
    PerformanceEvaluator,
    PerformanceRecord,
    evaluate,
    comparison_table,
    out_of_sample_predictions,
)

__all__ = [
    # Version info
    "__version__",

    # Data
    "DatasetManager",
    "LabelMap",

    # Dimensionality reduction
    "PrincipalComponentSet",
    "principal_components",
    "fit_and_select",
    "project",

    # Evaluation
    "PerformanceEvaluator",
    "PerformanceRecord",
    "evaluate",
    "comparison_table",
    "out_of_sample_predictions",

    # Errors
    "ShapeMismatch",
    "LengthMismatch",
    "UnknownLabel",
    "NumericalDegeneracyWarning",
]
