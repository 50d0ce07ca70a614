"""
Tests for archive loading and pixel preprocessing.
"""

import numpy as np
import pytest

from fashion_eda.core import DatasetManager, LabelMap
from fashion_eda.core.analysis_helpers import flatten_images, normalize_pixels

from .conftest import CLASS_NAMES


def test_splits_are_flat_and_scaled(toy_archive):
    data_dir, name = toy_archive
    dm = DatasetManager(str(data_dir), name)

    X_train, y_train = dm.get_split("train")
    X_test, y_test = dm.get_split("test")

    assert X_train.shape == (30, 64)
    assert X_test.shape == (12, 64)
    assert y_train.shape == (30,)
    assert X_train.min() >= 0.0 and X_train.max() == pytest.approx(1.0)
    assert y_test.dtype == np.int64


def test_loading_is_lazy(toy_archive):
    data_dir, name = toy_archive
    dm = DatasetManager(str(data_dir), name)
    assert "loaded=False" in repr(dm)

    dm.get_split("train")
    assert "loaded=True" in repr(dm)


def test_class_names_come_from_archive(toy_archive):
    data_dir, name = toy_archive
    lm = DatasetManager(str(data_dir), name).get_label_map()
    assert lm.names == CLASS_NAMES


def test_explicit_label_map_wins(toy_archive):
    data_dir, name = toy_archive
    custom = LabelMap.from_names(["x", "y", "z"])
    assert DatasetManager(str(data_dir), name, label_map=custom).get_label_map() is custom


def test_info_reports_counts(toy_archive):
    data_dir, name = toy_archive
    info = DatasetManager(str(data_dir), name).get_info()

    assert info["n_samples_train"] == 30
    assert info["n_samples_test"] == 12
    assert info["n_features"] == 64
    assert info["n_classes"] == 3
    assert info["train_class_counts"] == {n: 10 for n in CLASS_NAMES}


def test_missing_archive(tmp_path):
    with pytest.raises(FileNotFoundError):
        DatasetManager(str(tmp_path), "absent.npz").get_split()


def test_missing_keys(tmp_path):
    np.savez(tmp_path / "partial.npz", x_train=np.zeros((2, 4)), y_train=np.zeros(2))
    with pytest.raises(ValueError, match="x_test"):
        DatasetManager(str(tmp_path), "partial.npz").get_split()


def test_image_label_count_mismatch(tmp_path):
    np.savez(
        tmp_path / "bad.npz",
        x_train=np.zeros((3, 4), dtype=np.uint8),
        y_train=np.zeros(2),
        x_test=np.zeros((1, 4), dtype=np.uint8),
        y_test=np.zeros(1),
    )
    with pytest.raises(ValueError, match="train"):
        DatasetManager(str(tmp_path), "bad.npz").get_split()


def test_unknown_split_name(toy_archive):
    data_dir, name = toy_archive
    with pytest.raises(ValueError):
        DatasetManager(str(data_dir), name).get_split("validation")


def test_flatten_and_normalize_helpers():
    images = np.full((2, 3, 3), 255, dtype=np.uint8)
    flat = normalize_pixels(flatten_images(images))
    assert flat.shape == (2, 9)
    assert np.all(flat == 1.0)

    floats = np.array([[0.25, 0.5]])
    assert normalize_pixels(floats) is floats

    with pytest.raises(ValueError):
        normalize_pixels(np.array([[-1, 2]]))
    with pytest.raises(ValueError):
        flatten_images(np.zeros(3))


def test_feature_count_mismatch_is_raised_on_every_call(tmp_path):
    np.savez(
        tmp_path / "wide.npz",
        x_train=np.zeros((3, 4), dtype=np.uint8),
        y_train=np.zeros(3),
        x_test=np.zeros((2, 5), dtype=np.uint8),
        y_test=np.zeros(2),
    )
    dm = DatasetManager(str(tmp_path), "wide.npz")

    for _ in range(2):
        with pytest.raises(ValueError, match="feature counts"):
            dm.get_split("train")
    assert "loaded=False" in repr(dm)


def test_test_label_mismatch_is_raised_on_every_call(tmp_path):
    np.savez(
        tmp_path / "short.npz",
        x_train=np.zeros((3, 4), dtype=np.uint8),
        y_train=np.zeros(3),
        x_test=np.zeros((2, 4), dtype=np.uint8),
        y_test=np.zeros(1),
    )
    dm = DatasetManager(str(tmp_path), "short.npz")

    with pytest.raises(ValueError, match="test split"):
        dm.get_split("train")
    with pytest.raises(ValueError, match="test split"):
        dm.get_split("test")
