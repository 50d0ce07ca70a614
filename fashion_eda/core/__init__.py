"""
Core components of the fashion_eda pipeline.

This module contains the fundamental building blocks:
- dataset_manager: Train/test archive loading and pixel normalization
- labels: Code-to-category lookup table
- context: Shared context for analysis stages
- analysis_types: Config-derived dataclasses
- errors: Error types of the reduction and evaluation helpers
"""

from fashion_eda.core.dataset_manager import DatasetManager
from fashion_eda.core.context import AnalysisContext, StageResult
from fashion_eda.core.labels import LabelMap, FASHION_CLASS_NAMES
from fashion_eda.core.errors import (
    AnalysisError,
    ShapeMismatch,
    LengthMismatch,
    UnknownLabel,
    NumericalDegeneracyWarning,
)

__all__ = [
    "DatasetManager",
    "AnalysisContext",
    "StageResult",
    "LabelMap",
    "FASHION_CLASS_NAMES",
    "AnalysisError",
    "ShapeMismatch",
    "LengthMismatch",
    "UnknownLabel",
    "NumericalDegeneracyWarning",
]
