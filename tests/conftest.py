"""
Pytest configuration and shared fixtures for plotpipe testing.

This module provides common fixtures: small polars data factories and a
guard that clears runtime configuration overrides between tests.
"""

import os
import tempfile

# Keep test log files out of the user's home directory; must happen before
# plotpipe is imported because the plotting package sets up its log sink.
os.environ.setdefault("PLOTPIPE_LOG_DIR", tempfile.mkdtemp(prefix="plotpipe-logs-"))

import numpy as np  # noqa: E402
import polars as pl  # noqa: E402
import pytest  # noqa: E402

from plotpipe.config.unified import clear_runtime_overrides  # noqa: E402


# =============================================================================
# Test Data Factories
# =============================================================================

@pytest.fixture
def flowers():
    """Small iris-like frame: two numeric columns and a three-level species."""
    return pl.DataFrame({
        "length": [5.1, 4.9, 6.4, 6.9, 6.3, 5.8, 7.1],
        "width": [1.4, 1.4, 4.5, 4.9, 6.0, 5.1, 5.9],
        "species": ["setosa", "setosa", "versicolor", "versicolor",
                    "virginica", "virginica", "virginica"],
        "size_class": ["small", "small", "large", "large", "small", "large", "large"],
    })


@pytest.fixture
def series_factory():
    """Factory for long-format time series with one line per group."""
    def _make_series(groups: int = 3, points: int = 4) -> pl.DataFrame:
        rows = []
        for g in range(groups):
            for t in range(points):
                rows.append({"group": f"g{g}", "t": t, "value": float(g * 10 + t)})
        return pl.DataFrame(rows)

    return _make_series


@pytest.fixture
def signed_values():
    """Numeric column straddling zero."""
    return pl.DataFrame({
        "x": [1.0, 2.0, 3.0, 4.0],
        "y": [2.0, 1.0, 4.0, 3.0],
        "delta": [-2.0, -0.5, 0.5, 3.0],
    })


@pytest.fixture
def grid():
    """Small 2-D matrix for surface and heatmap traces."""
    return np.arange(12, dtype=float).reshape(3, 4)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_runtime_overrides():
    """Runtime configuration overrides never leak between tests."""
    yield
    clear_runtime_overrides()
