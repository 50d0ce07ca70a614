"""
Internal helpers bundled with the public pipeline.

Numerical routines and report writers used by the stages.
"""

__all__ = ["analyses", "datasets"]
