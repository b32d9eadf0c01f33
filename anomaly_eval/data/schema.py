"""
Schema definitions for the evaluation harness.

Two kinds of objects live here:

- ``Series``: the immutable input every detector and metric reads. Values and
  timestamps are held as read-only numpy arrays so no detector can mutate the
  data it was handed.
- Result models (pydantic): confusion counts, precision-recall points and
  curves, grid-search rows and tables, and per-detector comparison reports.

Design rationale:
- Index alignment is the central invariant: label[i] always refers to
  values[i], never to a timestamp lookup after reordering.
- Result objects are fresh per run and owned by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field
from sklearn.metrics import auc

from anomaly_eval.core.exceptions import EmptySeriesError, ShapeMismatchError


def _frozen_array(data: Sequence[float]) -> np.ndarray:
    array = np.array(data, dtype=np.float64, copy=True).ravel()
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class Series:
    """
    Univariate time series: aligned ``timestamps`` and ``values``.

    Attributes:
        timestamps: numeric timestamps (float64), ascending as supplied
        values: observations (float64)

    Notes:
        - Length must be >= 1; empty input raises EmptySeriesError
        - The harness does not re-sort; callers supply ordered input
        - Arrays are copied and made read-only at construction
    """

    timestamps: np.ndarray
    values: np.ndarray

    def __post_init__(self) -> None:
        timestamps = _frozen_array(self.timestamps)
        values = _frozen_array(self.values)

        if values.size == 0:
            raise EmptySeriesError("Series must contain at least one point")
        if timestamps.size != values.size:
            raise ShapeMismatchError(
                f"timestamps ({timestamps.size}) and values ({values.size}) differ in length"
            )

        object.__setattr__(self, "timestamps", timestamps)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return int(self.values.size)

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "Series":
        """Build a series whose timestamps are the positions 0..N-1."""
        values = np.asarray(values, dtype=np.float64)
        return cls(timestamps=np.arange(values.size, dtype=np.float64), values=values)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        value_col: str = "value",
        timestamp_col: Optional[str] = "timestamp",
    ) -> "Series":
        """
        Build a series from a DataFrame.

        Datetime timestamp columns are converted to epoch seconds. If
        ``timestamp_col`` is None the row positions are used.
        """
        if timestamp_col is None:
            return cls.from_values(df[value_col].to_numpy())

        ts = df[timestamp_col]
        if pd.api.types.is_datetime64_any_dtype(ts):
            epoch = pd.Timestamp("1970-01-01", tz=ts.dt.tz)
            ts = (ts - epoch) / pd.Timedelta(seconds=1)

        return cls(timestamps=ts.to_numpy(dtype=np.float64), values=df[value_col].to_numpy())

    def to_frame(self) -> pd.DataFrame:
        """Return a fresh ``timestamp``/``value`` DataFrame."""
        return pd.DataFrame({"timestamp": self.timestamps.copy(), "value": self.values.copy()})


class ConfusionCounts(BaseModel):
    """
    Confusion-matrix counts for two aligned label sequences.

    Fields:
    - true_positive: truth 1, prediction 1
    - false_positive: truth 0, prediction 1
    - true_negative: truth 0, prediction 0
    - false_negative: truth 1, prediction 0
    """

    true_positive: int = Field(ge=0)
    false_positive: int = Field(ge=0)
    true_negative: int = Field(ge=0)
    false_negative: int = Field(ge=0)

    @property
    def total(self) -> int:
        return self.true_positive + self.false_positive + self.true_negative + self.false_negative


class PRPoint(BaseModel):
    """One precision-recall point, optionally tagged with the threshold that produced it."""

    precision: float = Field(ge=0.0, le=1.0)
    recall: float = Field(ge=0.0, le=1.0)
    threshold: Optional[float] = None


class PRCurve(BaseModel):
    """
    Ordered precision-recall points.

    Sweep curves start at the seed point (precision=1, recall=0) and end at
    the first point whose recall reached 1.0.
    """

    points: List[PRPoint]

    @property
    def precisions(self) -> List[float]:
        return [p.precision for p in self.points]

    @property
    def recalls(self) -> List[float]:
        return [p.recall for p in self.points]

    def auc(self) -> float:
        """Area under the curve (trapezoidal, recall on the x axis)."""
        if len(self.points) < 2:
            return 0.0
        ordered = sorted(self.points, key=lambda p: p.recall)
        return float(auc([p.recall for p in ordered], [p.precision for p in ordered]))


class GridRow(BaseModel):
    """One evaluated hyperparameter combination."""

    params: Dict[str, Any]
    f1: float = Field(ge=0.0, le=1.0)
    precision: float = Field(ge=0.0, le=1.0)
    recall: float = Field(ge=0.0, le=1.0)


class GridResult(BaseModel):
    """
    Full grid-search table.

    Every combination is retained (not only the best) and rows are ordered
    by descending F1. Ties keep evaluation order.
    """

    detector: str
    rows: List[GridRow]

    @property
    def best(self) -> GridRow:
        return self.rows[0]

    def __len__(self) -> int:
        return len(self.rows)

    def to_frame(self) -> pd.DataFrame:
        """Flatten the table: one column per parameter plus the metrics."""
        records = [
            {**row.params, "f1": row.f1, "precision": row.precision, "recall": row.recall}
            for row in self.rows
        ]
        return pd.DataFrame.from_records(records)


class DetectorReport(BaseModel):
    """Single-run evaluation of one detector against ground truth."""

    detector: str
    params: Dict[str, Any]
    confusion: ConfusionCounts
    precision: float = Field(ge=0.0, le=1.0)
    recall: float = Field(ge=0.0, le=1.0)
    f1: float = Field(ge=0.0, le=1.0)
    flagged: int = Field(ge=0)


class ComparisonReport(BaseModel):
    """Side-by-side reports for several detectors, ordered by descending F1."""

    reports: List[DetectorReport]

    @property
    def best(self) -> DetectorReport:
        return self.reports[0]

    def to_frame(self) -> pd.DataFrame:
        records = [
            {
                "detector": r.detector,
                "precision": r.precision,
                "recall": r.recall,
                "f1": r.f1,
                "flagged": r.flagged,
                "tp": r.confusion.true_positive,
                "fp": r.confusion.false_positive,
                "tn": r.confusion.true_negative,
                "fn": r.confusion.false_negative,
            }
            for r in self.reports
        ]
        return pd.DataFrame.from_records(records)
