"""Analysis helpers used by the modular pipeline."""

from . import (
    pca_reduction,
    pca_report,
    performance,
)

__all__ = [
    "pca_reduction",
    "pca_report",
    "performance",
]
