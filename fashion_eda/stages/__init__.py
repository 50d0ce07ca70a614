"""
Analysis stages for the fashion_eda pipeline.

Available stages:
- DimensionalityStage: PCA fit on train, threshold selection, projection
- PerformanceStage: train/test metrics per model and comparison table
"""

from fashion_eda.stages.base import BaseStage, StageRegistry
from fashion_eda.stages.dimensionality import DimensionalityStage
from fashion_eda.stages.performance import PerformanceStage

__all__ = [
    'BaseStage',
    'StageRegistry',
    'DimensionalityStage',
    'PerformanceStage',
]
