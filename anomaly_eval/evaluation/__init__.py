"""
Evaluation module: metrics, grid search, PR curves and detector comparison.
"""

from .comparison import compare_detectors, evaluate_detector
from .grid_search import grid_search, iter_grid
from .metrics import confusion, evaluate, f1, precision, recall
from .pr_curve import pr_curve_sweep, score_pr_curve

__all__ = [
    "confusion",
    "precision",
    "recall",
    "f1",
    "evaluate",
    "grid_search",
    "iter_grid",
    "pr_curve_sweep",
    "score_pr_curve",
    "evaluate_detector",
    "compare_detectors",
]
