"""
Anomaly module: the Detector abstraction and the built-in detectors.

Implements interquartile-range thresholding, one-class SVM over time-delay
embeddings, seasonal-hybrid ESD, and isolation-forest scoring.
"""

from .base import Detector, LabelingDetector, ScoringDetector
from .esd import generalized_esd, seasonal_hybrid_esd, seasonal_residuals
from .iqr import StatisticalIQR
from .isolation_forest import IsolationForestScore
from .seasonal import SeasonalHybridESD
from .svm import OneClassSVMEmbedding, mark_outlier_runs, time_delay_embedding

__all__ = [
	"Detector",
	"LabelingDetector",
	"ScoringDetector",
	"StatisticalIQR",
	"OneClassSVMEmbedding",
	"SeasonalHybridESD",
	"IsolationForestScore",
	"time_delay_embedding",
	"mark_outlier_runs",
	"generalized_esd",
	"seasonal_hybrid_esd",
	"seasonal_residuals",
]
