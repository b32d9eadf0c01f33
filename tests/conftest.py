"""
Pytest configuration and shared fixtures.

Provides test configuration instances and small labelled series for unit and
integration tests.
"""

from typing import Tuple

import numpy as np
import pytest

from anomaly_eval.core.config import Config
from anomaly_eval.data.schema import Series


@pytest.fixture
def mock_config(tmp_path):
    """
    Fixture providing test configuration with explicit values (not from .env).

    Returns:
        Config: Test instance writing logs under a temporary directory
    """
    return Config(log_level="WARNING", logs_dir=tmp_path / "logs")


@pytest.fixture
def spike_series() -> Series:
    """Six points with a single obvious spike at index 3."""
    return Series.from_values([1, 2, 3, 100, 4, 5])


@pytest.fixture
def spike_truth() -> list:
    return [0, 0, 0, 1, 0, 0]


@pytest.fixture
def seasonal_data() -> Tuple[Series, np.ndarray]:
    """
    Fixture providing a seasonal series with injected anomalies.

    240 hourly points with a daily (24-sample) sine, light Gaussian noise,
    and three spikes at indices 50 (+6), 130 (-6) and 200 (+6).

    Returns:
        (Series, truth) where truth is an int8 array aligned with the series
    """
    rng = np.random.default_rng(7)
    n = 240
    t = np.arange(n)
    values = np.sin(2 * np.pi * t / 24) + rng.normal(0.0, 0.1, n)
    truth = np.zeros(n, dtype=np.int8)
    for idx, delta in ((50, 6.0), (130, -6.0), (200, 6.0)):
        values[idx] += delta
        truth[idx] = 1
    return Series(timestamps=t * 3600.0, values=values), truth


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
