"""
DatasetManager: loads the train/test image archive as flat feature matrices.

The archive is a ``.npz`` file with ``x_train``, ``y_train``, ``x_test``,
``y_test`` and, optionally, ``class_names``. Images are flattened to one
row per sample and integer pixels are scaled into [0, 1].
"""

from pathlib import Path
from typing import Dict, Literal, Optional, Tuple

import numpy as np

from fashion_eda.core.analysis_helpers import flatten_images, normalize_pixels
from fashion_eda.core.labels import LabelMap

REQUIRED_KEYS = ("x_train", "y_train", "x_test", "y_test")


class DatasetManager:
    """
    Manages the train/test splits of an image classification dataset.

    Features:
    - Lazy loading: the archive is read on first access
    - Flat features: (N, H, W) images become (N, H*W) rows in [0, 1]
    - Label lookup: codes map to category names through a LabelMap

    Example:
        >>> dm = DatasetManager("path/to/data", "fashion.npz")
        >>> X_train, y_train = dm.get_split("train")
        >>> dm.get_label_map().name_of(y_train[0])
        'Ankle boot'
    """

    def __init__(
        self,
        dataset_path: str,
        dataset_name: str,
        label_map: Optional[LabelMap] = None,
    ):
        """
        Initialize the dataset manager.

        Args:
            dataset_path: Path to dataset directory
            dataset_name: Name of .npz file
            label_map: Overrides class names stored in the archive
        """
        self.dataset_path = dataset_path
        self.dataset_name = dataset_name
        self._label_map = label_map

        # Lazy storage
        self._splits: Dict[str, Tuple[np.ndarray, np.ndarray]] = {}

    @property
    def archive_path(self) -> Path:
        return Path(self.dataset_path) / self.dataset_name

    def _load(self) -> None:
        path = self.archive_path
        if not path.exists():
            raise FileNotFoundError(f"Dataset archive not found: {path}")

        splits: Dict[str, Tuple[np.ndarray, np.ndarray]] = {}
        with np.load(path, allow_pickle=False) as data:
            missing = [k for k in REQUIRED_KEYS if k not in data.files]
            if missing:
                raise ValueError(f"Dataset archive {path} is missing keys: {missing}")

            for split in ("train", "test"):
                X = normalize_pixels(flatten_images(data[f"x_{split}"]))
                y = np.asarray(data[f"y_{split}"]).astype(np.int64).ravel()
                if X.shape[0] != y.shape[0]:
                    raise ValueError(
                        f"{split} split has {X.shape[0]} images but {y.shape[0]} labels"
                    )
                splits[split] = (X, y)

            label_map = self._label_map
            if label_map is None:
                if "class_names" in data.files:
                    label_map = LabelMap.from_names(str(n) for n in data["class_names"])
                else:
                    label_map = LabelMap.default()

        n_train = splits["train"][0].shape[1]
        n_test = splits["test"][0].shape[1]
        if n_train != n_test:
            raise ValueError(
                f"Train and test feature counts differ: {n_train} vs {n_test}"
            )

        # nothing is kept unless every check passed
        self._splits = splits
        self._label_map = label_map

    def get_split(self, split: Literal["train", "test"] = "train") -> Tuple[np.ndarray, np.ndarray]:
        """
        Get features and integer labels of a split.

        Args:
            split: 'train' or 'test'

        Returns:
            (X, y) with X of shape (N, F) and y of shape (N,)
        """
        if split not in ("train", "test"):
            raise ValueError(f"Unknown split: {split}. Use 'train' or 'test'.")
        if not self._splits:
            self._load()
        return self._splits[split]

    def get_label_map(self) -> LabelMap:
        if not self._splits:
            self._load()
        return self._label_map  # type: ignore[return-value]

    def get_info(self) -> Dict[str, object]:
        """
        Get information about the dataset.

        Returns:
            Dictionary with dataset statistics
        """
        X_train, y_train = self.get_split("train")
        X_test, y_test = self.get_split("test")
        label_map = self.get_label_map()
        counts = {
            label_map.name_of(c) if c in label_map else str(c): int(n)
            for c, n in zip(*np.unique(y_train, return_counts=True))
        }

        return {
            "n_samples_train": int(X_train.shape[0]),
            "n_samples_test": int(X_test.shape[0]),
            "n_features": int(X_train.shape[1]),
            "n_classes": len(label_map),
            "train_class_counts": counts,
            "pixel_range": (float(X_train.min()), float(X_train.max())),
            "dataset_path": self.dataset_path,
            "dataset_name": self.dataset_name,
        }

    def __repr__(self) -> str:
        return (
            f"DatasetManager(path='{self.dataset_path}', "
            f"dataset='{self.dataset_name}', "
            f"loaded={bool(self._splits)})"
        )
