"""
Classification metrics for the train/test model comparison table.

Averaging policy
----------------
Precision, recall and F1 are macro averages over the classes that occur in
either the true or the predicted labels of a split. Declared classes that
occur in neither are left out. A per-class term with an empty denominator
(no predicted positives for precision, no true instances for recall) counts
as 0. Macro F1 is the mean of per-class F1 scores, not the F1 of macro
precision and recall.

Train predictions
-----------------
The train half of a record is only comparable with the test half when the
train predictions are out-of-sample, e.g. the held-out folds of a
cross-validation (see :func:`out_of_sample_predictions`). Callers state
which kind they pass through ``train_predictions``; nothing is converted.
"""

from __future__ import annotations

import warnings
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from sklearn.base import clone
from sklearn.metrics import accuracy_score, precision_recall_fscore_support
from sklearn.model_selection import StratifiedKFold, cross_val_predict

from fashion_eda.core.errors import LengthMismatch, UnknownLabel

plt.switch_backend("Agg")

__all__ = [
    "PerformanceRecord",
    "PerformanceEvaluator",
    "evaluate",
    "comparison_table",
    "plot_comparison",
    "out_of_sample_predictions",
]

OUT_OF_SAMPLE = "out_of_sample"
IN_SAMPLE = "in_sample"
PREDICTION_KINDS = (OUT_OF_SAMPLE, IN_SAMPLE)
AVERAGING_POLICIES = ("macro", "weighted", "micro")

METRIC_COLUMNS = [
    "accuracy_train",
    "precision_train",
    "recall_train",
    "f1_train",
    "accuracy_test",
    "precision_test",
    "recall_test",
    "f1_test",
]


@dataclass(frozen=True)
class PerformanceRecord:
    """One row of the model comparison table."""

    model: str
    accuracy_train: float
    precision_train: float
    recall_train: float
    f1_train: float
    accuracy_test: float
    precision_test: float
    recall_test: float
    f1_test: float
    train_predictions: str = OUT_OF_SAMPLE

    def metrics(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in METRIC_COLUMNS}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PerformanceEvaluator:
    """
    Computes accuracy / precision / recall / F1 for a train and a test split.

    Args:
        labels: declared class set. Any true or predicted value outside it
            raises UnknownLabel. None means the observed values form the set.
        average: multi-class averaging, fixed for every split and model.
            Defaults to "macro" (see module docstring).

    Example:
        >>> ev = PerformanceEvaluator(labels=range(10))
        >>> rec = ev.evaluate(y_tr, oof_tr, y_te, pred_te, "random_forest")
        >>> rec.f1_test
    """

    def __init__(self, labels: Optional[Iterable[Any]] = None, average: str = "macro"):
        if average not in AVERAGING_POLICIES:
            raise ValueError(f"Unknown average '{average}'. Use one of {AVERAGING_POLICIES}.")
        self.labels = None if labels is None else set(np.asarray(list(labels)).tolist())
        self.average = average

    def _check_known(self, split: str, kind: str, values: np.ndarray) -> None:
        if self.labels is None:
            return
        unknown = sorted(set(values.tolist()) - self.labels, key=str)
        if unknown:
            raise UnknownLabel(
                f"{split} {kind} labels contain values outside the declared set: {unknown}"
            )

    def _validate(self, split: str, y_true: Sequence, y_pred: Sequence):
        y_true = np.asarray(y_true).ravel()
        y_pred = np.asarray(y_pred).ravel()
        if y_true.shape[0] != y_pred.shape[0]:
            raise LengthMismatch(
                f"{split} split: {y_true.shape[0]} true labels vs "
                f"{y_pred.shape[0]} predictions"
            )
        if y_true.shape[0] == 0:
            raise ValueError(f"{split} split is empty")
        self._check_known(split, "true", y_true)
        self._check_known(split, "predicted", y_pred)
        return y_true, y_pred

    def split_metrics(self, y_true: Sequence, y_pred: Sequence, split: str = "split") -> Dict[str, float]:
        """Accuracy, precision, recall and F1 for one split."""
        y_true, y_pred = self._validate(split, y_true, y_pred)
        precision, recall, f1, _ = precision_recall_fscore_support(
            y_true, y_pred, average=self.average, zero_division=0
        )
        return {
            "accuracy": float(accuracy_score(y_true, y_pred)),
            "precision": float(precision),
            "recall": float(recall),
            "f1": float(f1),
        }

    def evaluate(
        self,
        train_true: Sequence,
        train_pred: Sequence,
        test_true: Sequence,
        test_pred: Sequence,
        model_name: str,
        *,
        train_predictions: str = OUT_OF_SAMPLE,
    ) -> PerformanceRecord:
        """Build the comparison row for one model.

        Args:
            train_true: true labels of the training split
            train_pred: out-of-sample predictions for the training split
                (held-out cross-validation folds)
            test_true: true labels of the test split
            test_pred: predictions for the test split
            model_name: identifier shown in the comparison table
            train_predictions: "out_of_sample" (expected) or "in_sample".
                In-sample train predictions overstate train performance; they
                are accepted, tagged on the record and warned about.
        """
        if train_predictions not in PREDICTION_KINDS:
            raise ValueError(
                f"train_predictions must be one of {PREDICTION_KINDS}, got '{train_predictions}'"
            )
        # train is checked first so its errors surface before the test split's
        y_tr, p_tr = self._validate("train", train_true, train_pred)
        y_te, p_te = self._validate("test", test_true, test_pred)

        if train_predictions == IN_SAMPLE:
            warnings.warn(
                f"Model '{model_name}': train metrics come from in-sample predictions "
                "and are not comparable with test metrics.",
                UserWarning,
                stacklevel=2,
            )

        train = self.split_metrics(y_tr, p_tr, split="train")
        test = self.split_metrics(y_te, p_te, split="test")
        return PerformanceRecord(
            model=str(model_name),
            accuracy_train=train["accuracy"],
            precision_train=train["precision"],
            recall_train=train["recall"],
            f1_train=train["f1"],
            accuracy_test=test["accuracy"],
            precision_test=test["precision"],
            recall_test=test["recall"],
            f1_test=test["f1"],
            train_predictions=train_predictions,
        )


def evaluate(
    train_true: Sequence,
    train_pred: Sequence,
    test_true: Sequence,
    test_pred: Sequence,
    model_name: str,
    *,
    labels: Optional[Iterable[Any]] = None,
    train_predictions: str = OUT_OF_SAMPLE,
) -> PerformanceRecord:
    """Evaluate one model with the default macro-average policy."""
    return PerformanceEvaluator(labels=labels).evaluate(
        train_true,
        train_pred,
        test_true,
        test_pred,
        model_name,
        train_predictions=train_predictions,
    )


def comparison_table(records: Iterable[PerformanceRecord]) -> pd.DataFrame:
    """Stack records into a DataFrame indexed by model name."""
    columns = [f.name for f in fields(PerformanceRecord)]
    df = pd.DataFrame([r.to_dict() for r in records], columns=columns)
    return df.set_index("model")


def plot_comparison(table: pd.DataFrame, save_path: Path, title: str = "Model comparison") -> Path:
    """Grouped bar chart of the eight metrics per model."""
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    long_df = (
        table[METRIC_COLUMNS]
        .reset_index()
        .melt(id_vars="model", var_name="metric", value_name="score")
    )
    fig, ax = plt.subplots(figsize=(max(8, len(METRIC_COLUMNS) * 1.2), 4.5))
    sns.barplot(data=long_df, x="metric", y="score", hue="model", errorbar=None, ax=ax)
    ax.set_ylim(0, 1.05)
    ax.set_xlabel("")
    ax.set_ylabel("Score")
    ax.set_title(title)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    fig.tight_layout()
    fig.savefig(save_path, dpi=300)
    plt.close(fig)
    return save_path


def out_of_sample_predictions(
    estimator: Any,
    X: np.ndarray,
    y: np.ndarray,
    cv: int = 5,
    random_state: Optional[int] = None,
) -> np.ndarray:
    """Held-out predictions for every training row via stratified K-fold.

    Each row is predicted by a clone of ``estimator`` fit on the other folds,
    which is the kind of train prediction :class:`PerformanceEvaluator`
    expects by default.
    """
    splitter = StratifiedKFold(n_splits=cv, shuffle=True, random_state=random_state)
    return cross_val_predict(clone(estimator), X, y, cv=splitter)
