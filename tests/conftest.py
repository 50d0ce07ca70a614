"""
Test configuration and fixtures.
"""

import numpy as np
import pytest
from scipy.linalg import hadamard

CLASS_NAMES = ["Trouser", "Bag", "Sneaker"]


@pytest.fixture
def rng():
    """Seeded generator so every test sees the same data."""
    return np.random.default_rng(0)


@pytest.fixture
def diagonal_matrix():
    """8 x 4 matrix whose sample covariance is diag(10, 5, 0.001, 0.0001).

    Columns 1-4 of an 8 x 8 Hadamard matrix are zero-mean and mutually
    orthogonal, each with sample variance 8/7, so rescaling them gives an
    exactly diagonal covariance.
    """
    variances = np.array([10.0, 5.0, 0.001, 0.0001])
    H = hadamard(8)[:, 1:5].astype(float)
    return H * np.sqrt(variances * 7.0 / 8.0)


def _toy_images(labels: np.ndarray, rng: np.random.Generator, size: int = 8) -> np.ndarray:
    images = rng.integers(0, 40, size=(labels.size, size, size))
    for c in np.unique(labels):
        # a bright row per class keeps the classes apart
        images[labels == c, 2 * c, :] = 255
    return images.astype(np.uint8)


@pytest.fixture
def toy_archive(tmp_path, rng):
    """Write a small train/test archive and return its directory and name."""
    y_train = np.tile(np.arange(len(CLASS_NAMES)), 10)
    y_test = np.tile(np.arange(len(CLASS_NAMES)), 4)
    np.savez(
        tmp_path / "toy.npz",
        x_train=_toy_images(y_train, rng),
        y_train=y_train,
        x_test=_toy_images(y_test, rng),
        y_test=y_test,
        class_names=np.array(CLASS_NAMES),
    )
    return tmp_path, "toy.npz"


@pytest.fixture
def toy_predictions(toy_archive):
    """One perfect and one partly wrong prediction archive for the toy data."""
    data_dir, name = toy_archive
    with np.load(data_dir / name) as data:
        y_train, y_test = data["y_train"], data["y_test"]

    perfect = data_dir / "perfect.npz"
    np.savez(perfect, train_pred=y_train, test_pred=y_test)

    sloppy = data_dir / "sloppy.npz"
    train_pred = y_train.copy()
    train_pred[:5] = (train_pred[:5] + 1) % len(CLASS_NAMES)
    test_pred = y_test.copy()
    test_pred[:3] = (test_pred[:3] + 1) % len(CLASS_NAMES)
    np.savez(sloppy, train_pred=train_pred, test_pred=test_pred)
    return {"perfect": perfect, "sloppy": sloppy}
