"""Dataset utilities used by the analysis pipeline."""

from .label_histogram import compute_label_histogram, plot_label_histogram

__all__ = [
    "compute_label_histogram",
    "plot_label_histogram",
]
