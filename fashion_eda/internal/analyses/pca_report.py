from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from fashion_eda.internal.analyses.pca_reduction import PrincipalComponentSet

plt.switch_backend("Agg")


@dataclass
class PCAComponentReport:
    component: int
    variance: float
    variance_ratio: float
    cumulative_ratio: float


@dataclass
class PCASummary:
    n_features: int
    n_components: int
    threshold: float
    covered_variance: float
    degenerate: bool
    component_reports: List[PCAComponentReport]


def _save_fig(fig: Figure, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=300)
    plt.close(fig)


def _plot_cumulative(ax, cumulative: np.ndarray, threshold: float, n_components: int):
    ks = np.arange(1, len(cumulative) + 1)
    ax.plot(ks, cumulative, color="indianred", lw=1.5)
    ax.axhline(threshold, ls="--", lw=1, color="grey", label=f"threshold = {threshold:g}")
    ax.axvline(n_components, ls=":", lw=1, color="steelblue", label=f"K = {n_components}")
    ax.set_xlabel("Number of components")
    ax.set_ylabel("Cumulative explained variance")
    ax.set_ylim(0, 1.02)
    ax.set_title("Cumulative explained variance")
    ax.legend(loc="lower right")


def _plot_variance_ratio(ax, explained_variance_ratio: np.ndarray, max_components: int = 50):
    shown = explained_variance_ratio[:max_components]
    ax.bar(range(1, len(shown) + 1), shown, color="steelblue", alpha=0.85)
    ax.set_xlabel("Component")
    ax.set_ylabel("Explained variance ratio")
    ax.set_title(f"Explained variance per component (first {len(shown)})")


def summarize_components(
    pcs: PrincipalComponentSet,
    threshold: float,
    n_components: int,
) -> PCASummary:
    reports = [
        PCAComponentReport(
            component=i + 1,
            variance=float(pcs.variances[i]),
            variance_ratio=float(pcs.explained_variance_ratio[i]),
            cumulative_ratio=float(pcs.cumulative_variance[i]),
        )
        for i in range(pcs.n_features)
    ]
    return PCASummary(
        n_features=pcs.n_features,
        n_components=int(n_components),
        threshold=float(threshold),
        covered_variance=float(pcs.cumulative_variance[n_components - 1]),
        degenerate=bool(pcs.degenerate),
        component_reports=reports,
    )


def _save_summary_json(summary: PCASummary, out_path: Path, max_components: Optional[int] = None):
    out_path.parent.mkdir(parents=True, exist_ok=True)
    comps = summary.component_reports
    if max_components is not None:
        comps = comps[:max_components]
    payload = {
        "n_features": summary.n_features,
        "n_components": summary.n_components,
        "threshold": summary.threshold,
        "covered_variance": summary.covered_variance,
        "degenerate": summary.degenerate,
        "components": [asdict(comp) for comp in comps],
    }
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def generate_variance_report(
    pcs: PrincipalComponentSet,
    *,
    threshold: float,
    n_components: int,
    out_dir: Path,
    max_plot_components: int = 50,
) -> Dict[str, object]:
    """Write the scree/cumulative plots, per-component CSV and JSON summary."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(1, 2, figsize=(12, 4.5))
    _plot_cumulative(axes[0], pcs.cumulative_variance, threshold, n_components)
    _plot_variance_ratio(axes[1], pcs.explained_variance_ratio, max_components=max_plot_components)
    _save_fig(fig, out_dir / "explained_variance.png")

    summary = summarize_components(pcs, threshold, n_components)
    _save_summary_json(summary, out_dir / "pca_summary.json", max_components=n_components)

    explained_df = pd.DataFrame([asdict(c) for c in summary.component_reports])
    explained_df.to_csv(out_dir / "explained_variance.csv", index=False)

    return {
        "plot_path": str(out_dir / "explained_variance.png"),
        "explained_variance_path": str(out_dir / "explained_variance.csv"),
        "summary_json": str(out_dir / "pca_summary.json"),
        "covered_variance": summary.covered_variance,
    }
