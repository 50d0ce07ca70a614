"""Error types raised by the reduction and evaluation helpers."""


class AnalysisError(ValueError):
    """Base class for invalid inputs to an analysis routine."""


class ShapeMismatch(AnalysisError):
    """A matrix does not line up with the rotation it is projected by."""


class LengthMismatch(AnalysisError):
    """Paired label and prediction sequences have different lengths."""


class UnknownLabel(AnalysisError):
    """A label value falls outside the declared class set."""


class NumericalDegeneracyWarning(UserWarning):
    """Covariance carries no usable variance; full rank is kept."""
