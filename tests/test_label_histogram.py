"""
Tests for the per-split class histogram.
"""

import numpy as np

from fashion_eda.core.labels import LabelMap
from fashion_eda.internal.datasets import compute_label_histogram, plot_label_histogram


def test_every_mapped_class_gets_a_row():
    hist = compute_label_histogram(np.array([0, 0, 2]), LabelMap.from_names(["a", "b", "c"]))

    assert hist["label"].tolist() == [0, 1, 2]
    assert hist["count"].tolist() == [2, 0, 1]
    assert hist["name"].tolist() == ["a", "b", "c"]


def test_codes_outside_the_map_are_still_counted():
    labels = np.array([0, 1, 1, 7])
    hist = compute_label_histogram(labels, LabelMap.from_names(["a", "b"]))

    assert hist["count"].sum() == labels.size
    assert hist.loc[hist["label"] == 7, "count"].item() == 1
    assert hist.loc[hist["label"] == 7, "name"].item() == "7"


def test_plot_writes_file(tmp_path):
    out = tmp_path / "train.png"
    hist = plot_label_histogram(np.array([0, 1, 1]), LabelMap.from_names(["a", "b"]), save_path=out)

    assert out.exists()
    assert hist["count"].tolist() == [1, 2]
