"""Helpers shared by the evaluation drivers."""

from typing import Any, Callable, Sequence, Union

import numpy as np

from anomaly_eval.anomaly.base import Detector
from anomaly_eval.core.exceptions import ShapeMismatchError
from anomaly_eval.data.labels import as_labels
from anomaly_eval.data.schema import Series

DetectorFactory = Callable[..., Detector]
DetectorFamily = Union[Detector, DetectorFactory]


def truth_for(series: Series, truth: Sequence[int]) -> np.ndarray:
    """Validate ground truth and check it is aligned with ``series``."""
    labels = as_labels(truth, "truth")
    if labels.size != len(series):
        raise ShapeMismatchError(
            f"truth has {labels.size} labels but the series has {len(series)} points"
        )
    return labels


def family_name(family: Any) -> str:
    name = getattr(family, "name", None)
    if isinstance(name, str):
        return name
    return getattr(family, "__name__", type(family).__name__)
