"""
PCA by covariance eigendecomposition with variance-threshold selection.

The covariance is the sample covariance (columns centred on their means,
normalised by ``N - 1``). Components are the eigenvectors of that matrix,
ordered by descending eigenvalue. Projection is a plain matrix product with
the rotation matrix; no centring is applied, so train and test matrices are
mapped by exactly the same linear map fit on the training data.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy import linalg

from fashion_eda.core.errors import NumericalDegeneracyWarning, ShapeMismatch

__all__ = [
    "PrincipalComponentSet",
    "compute_covariance",
    "principal_components",
    "select_component_count",
    "fit_and_select",
    "project",
]

DEFAULT_THRESHOLD = 0.995


@dataclass(frozen=True)
class PrincipalComponentSet:
    """Components of a covariance matrix, strongest first.

    Attributes:
        components: (F, F) matrix, one unit-norm component per column
        variances: eigenvalue of each component, descending, clipped at 0
        explained_variance_ratio: share of total variance per component
        cumulative_variance: running sum of the ratios, ends at 1.0
        degenerate: True when the covariance had no usable variance
    """

    components: np.ndarray
    variances: np.ndarray
    explained_variance_ratio: np.ndarray
    cumulative_variance: np.ndarray
    degenerate: bool = False

    @property
    def n_features(self) -> int:
        return int(self.components.shape[0])

    def n_components_for(self, threshold: float) -> int:
        _check_threshold(threshold)
        if self.degenerate:
            return self.n_features
        return select_component_count(self.cumulative_variance, threshold)

    def rotation(self, n_components: int) -> np.ndarray:
        if not 1 <= n_components <= self.n_features:
            raise ValueError(
                f"n_components must be in [1, {self.n_features}], got {n_components}"
            )
        return self.components[:, :n_components].copy()


def _check_threshold(threshold: float) -> None:
    if not 0.0 < threshold <= 1.0:
        raise ValueError(f"threshold must be in (0, 1], got {threshold}")


def _as_feature_matrix(matrix: np.ndarray, name: str = "matrix") -> np.ndarray:
    X = np.asarray(matrix, dtype=np.float64)
    if X.ndim != 2:
        raise ShapeMismatch(f"{name} must be a 2D array, got shape {X.shape}")
    return X


def compute_covariance(matrix: np.ndarray, ddof: int = 1) -> np.ndarray:
    """Sample covariance of the columns of ``matrix`` (F x F)."""
    X = _as_feature_matrix(matrix)
    n = X.shape[0]
    if n - ddof <= 0:
        raise ValueError(f"Need more than {ddof} rows to compute a covariance, got {n}")
    Xc = X - X.mean(axis=0, keepdims=True)
    cov = (Xc.T @ Xc) / (n - ddof)
    # symmetrise away rounding
    return (cov + cov.T) / 2.0


def _fix_signs(vectors: np.ndarray) -> np.ndarray:
    # largest-magnitude loading of every component is made positive
    idx = np.argmax(np.abs(vectors), axis=0)
    signs = np.sign(vectors[idx, np.arange(vectors.shape[1])])
    signs[signs == 0] = 1.0
    return vectors * signs


def principal_components(matrix: np.ndarray, ddof: int = 1) -> PrincipalComponentSet:
    """Decompose the covariance of ``matrix`` into ranked components."""
    X = _as_feature_matrix(matrix)
    if X.shape[1] < 2:
        raise ShapeMismatch(f"Need at least 2 features, got {X.shape[1]}")

    cov = compute_covariance(X, ddof=ddof)
    if not np.all(np.isfinite(cov)):
        raise ValueError("Covariance matrix is not finite; check the input scale")
    w, V = linalg.eigh(cov)
    order = np.argsort(w)[::-1]
    variances = np.clip(w[order], 0.0, None)
    components = _fix_signs(V[:, order])

    n_features = X.shape[1]
    total = float(variances.sum())
    degenerate = total <= 0.0
    if degenerate:
        warnings.warn(
            "Covariance matrix has no usable variance; keeping all "
            f"{n_features} components.",
            NumericalDegeneracyWarning,
            stacklevel=2,
        )
        ratio = np.full(n_features, 1.0 / n_features)
    else:
        ratio = variances / total

    cumulative = np.cumsum(ratio)
    return PrincipalComponentSet(
        components=components,
        variances=variances,
        explained_variance_ratio=ratio,
        cumulative_variance=cumulative,
        degenerate=degenerate,
    )


def select_component_count(cumulative: np.ndarray, threshold: float) -> int:
    """Smallest k whose cumulative proportion reaches ``threshold``.

    Falls back to the full length when rounding keeps every prefix below
    the threshold.
    """
    _check_threshold(threshold)
    cumulative = np.asarray(cumulative, dtype=np.float64)
    hits = np.flatnonzero(cumulative >= threshold)
    if hits.size == 0:
        return int(cumulative.size)
    return int(hits[0]) + 1


def fit_and_select(
    train_matrix: np.ndarray,
    threshold: float = DEFAULT_THRESHOLD,
) -> Tuple[np.ndarray, int, np.ndarray]:
    """Fit components on ``train_matrix`` and keep enough to cover ``threshold``.

    Args:
        train_matrix: (N, F) training features, F >= 2, no missing values
        threshold: variance coverage in (0, 1], e.g. 0.995

    Returns:
        (rotation, n_components, cumulative_variance) where rotation has
        shape (F, n_components)
    """
    _check_threshold(threshold)
    pcs = principal_components(train_matrix)
    k = pcs.n_components_for(threshold)
    return pcs.rotation(k), k, pcs.cumulative_variance


def project(matrix: np.ndarray, rotation: np.ndarray) -> np.ndarray:
    """Map ``matrix`` (N, F) into the reduced space (N, K)."""
    X = _as_feature_matrix(matrix)
    R = _as_feature_matrix(rotation, name="rotation")
    if X.shape[1] != R.shape[0]:
        raise ShapeMismatch(
            f"matrix has {X.shape[1]} columns but rotation expects {R.shape[0]} features"
        )
    return X @ R
