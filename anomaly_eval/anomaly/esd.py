"""
Seasonal-hybrid ESD (S-H-ESD) anomaly search.

Decomposes the series with STL when a seasonal period is supplied, removes
the seasonal component and the median, and runs a generalized extreme
studentized deviate test on the residuals using median/MAD ("hybrid") in
place of mean/std.

Input and output are DataFrames with ``timestamp`` and ``value`` columns. The
returned anomalies are in removal order (most extreme first), not in series
order.
"""

import logging
from typing import List, Literal, Optional

import numpy as np
import pandas as pd
from scipy import stats
from scipy.stats import median_abs_deviation
from statsmodels.tsa.seasonal import STL

logger = logging.getLogger(__name__)

Direction = Literal["positive", "negative", "both"]


def seasonal_residuals(values: np.ndarray, period: Optional[int] = None) -> np.ndarray:
    """
    Residuals fed to the ESD test: ``value - seasonal - median(value)``.

    The seasonal term is only removed when ``period`` is given and the series
    spans at least two full periods.
    """
    values = np.asarray(values, dtype=np.float64)
    residuals = values - np.median(values)
    if period is not None and values.size >= 2 * period:
        seasonal = STL(values, period=period, robust=True).fit().seasonal
        residuals = residuals - np.asarray(seasonal)
    return residuals


def _deviations(data: np.ndarray, center: float, direction: Direction) -> np.ndarray:
    if direction == "positive":
        return data - center
    if direction == "negative":
        return center - data
    return np.abs(data - center)


def generalized_esd(
    residuals: np.ndarray,
    max_outliers: int,
    alpha: float = 0.05,
    direction: Direction = "both",
) -> List[int]:
    """
    Generalized ESD test with median/MAD statistics.
    
    Args:
        residuals: Values to test
        max_outliers: Upper bound on the number of anomalies (capped at N-2)
        alpha: Significance level
        direction: Which tail(s) to test
    
    Returns:
        Positions of anomalies in removal order
    """
    data = np.asarray(residuals, dtype=np.float64)
    n = data.size
    max_outliers = min(int(max_outliers), n - 2)
    if max_outliers < 1:
        return []

    candidates = np.arange(n)
    removed: List[int] = []
    num_anoms = 0

    for i in range(1, max_outliers + 1):
        sample = data[candidates]
        center = np.median(sample)
        spread = median_abs_deviation(sample, scale="normal")
        if spread == 0:
            break

        deviations = _deviations(sample, center, direction)
        pos = int(np.argmax(deviations))
        statistic = deviations[pos] / spread

        removed.append(int(candidates[pos]))
        candidates = np.delete(candidates, pos)

        # Critical value lambda_i
        if direction == "both":
            p = 1 - alpha / (2 * (n - i + 1))
        else:
            p = 1 - alpha / (n - i + 1)
        t = stats.t.ppf(p, n - i - 1)
        critical = (n - i) * t / np.sqrt((n - i - 1 + t ** 2) * (n - i + 1))

        if statistic > critical:
            num_anoms = i

    return removed[:num_anoms]


def seasonal_hybrid_esd(
    frame: pd.DataFrame,
    max_anoms: float = 0.1,
    direction: Direction = "both",
    alpha: float = 0.05,
    period: Optional[int] = None,
) -> pd.DataFrame:
    """
    Run S-H-ESD over a ``timestamp``/``value`` frame.
    
    Args:
        frame: Input frame with ``timestamp`` and ``value`` columns
        max_anoms: Maximum fraction of points that may be flagged
        direction: positive, negative or both
        alpha: Significance level of the ESD test
        period: Seasonal period in samples (None disables decomposition)
    
    Returns:
        DataFrame of anomalous rows (``timestamp``, ``value``) in removal order
    """
    values = frame["value"].to_numpy(dtype=np.float64)
    max_outliers = int(np.floor(values.size * max_anoms))

    residuals = seasonal_residuals(values, period)
    positions = generalized_esd(residuals, max_outliers, alpha=alpha, direction=direction)

    logger.debug(
        "S-H-ESD flagged %d of at most %d points (n=%d)", len(positions), max_outliers, values.size
    )
    return frame.iloc[positions][["timestamp", "value"]].reset_index(drop=True)
