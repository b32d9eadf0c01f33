"""
Custom exceptions for the anomaly evaluation harness.

None of these conditions are transient: callers surface them immediately
rather than retrying.
"""


class AnomalyEvaluationError(Exception):
    """Base exception for detection and evaluation failures."""
    pass


class EmptySeriesError(AnomalyEvaluationError):
    """Raised when a detector or metric receives a zero-length input."""
    pass


class ShapeMismatchError(AnomalyEvaluationError):
    """Raised when two label sequences that must be aligned differ in length."""
    pass


class InvalidLabelError(AnomalyEvaluationError):
    """Raised when a label sequence contains a value outside {0, 1}."""
    pass


class InvalidParameterError(AnomalyEvaluationError):
    """Raised when a detector or sweep hyperparameter is out of range."""
    pass


class NonConvergentError(AnomalyEvaluationError):
    """Raised when a threshold sweep cannot reach full recall."""
    pass


class DetectorFitError(AnomalyEvaluationError):
    """
    Raised when an external collaborator (SVM, forest, decomposition) fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, detector: str, params: dict, cause: BaseException):
        self.detector = detector
        self.params = dict(params)
        super().__init__(f"{detector} failed with params {self.params}: {cause}")
