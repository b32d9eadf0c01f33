"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, config
from .exceptions import (
    AnomalyEvaluationError,
    DetectorFitError,
    EmptySeriesError,
    InvalidLabelError,
    InvalidParameterError,
    NonConvergentError,
    ShapeMismatchError,
)
from .logging_config import setup_logging

__all__ = [
    "Config",
    "config",
    "setup_logging",
    "AnomalyEvaluationError",
    "DetectorFitError",
    "EmptySeriesError",
    "InvalidLabelError",
    "InvalidParameterError",
    "NonConvergentError",
    "ShapeMismatchError",
]
