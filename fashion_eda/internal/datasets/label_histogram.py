from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from fashion_eda.core.labels import LabelMap

plt.switch_backend("Agg")


def compute_label_histogram(labels: np.ndarray, label_map: Optional[LabelMap] = None) -> pd.DataFrame:
    unique, counts = np.unique(np.asarray(labels).astype(int), return_counts=True)
    hist = pd.DataFrame({"label": unique, "count": counts})
    if label_map is not None:
        # classes with no samples still get a zero bar, unmapped codes keep theirs
        codes = sorted(set(label_map.codes) | set(unique.tolist()))
        hist = (
            hist.set_index("label")
            .reindex(codes, fill_value=0)
            .rename_axis("label")
            .reset_index()
        )
        hist["name"] = [label_map.name_of(c) if c in label_map else str(c) for c in hist["label"]]
    return hist.sort_values("label").reset_index(drop=True)


def plot_label_histogram(
    labels: np.ndarray,
    label_map: Optional[LabelMap] = None,
    title: str | None = None,
    save_path: str | Path | None = None,
):
    hist = compute_label_histogram(labels, label_map)
    fig, ax = plt.subplots(figsize=(9, 5))
    ax.bar(hist["label"], hist["count"], color="steelblue", alpha=0.85)
    ax.set_xlabel("Class")
    ax.set_ylabel("Count")
    ax.set_title(title or "Class histogram")
    ax.set_xticks(hist["label"])
    if "name" in hist:
        ax.set_xticklabels(hist["name"], rotation=45, ha="right")
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, dpi=300)
    plt.close(fig)
    return hist
