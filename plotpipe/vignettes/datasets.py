"""
Example datasets used by the vignettes.

The tabular sets ship with plotly (``plotly.data``) and are converted to
polars; ``volcano`` is a synthetic elevation grid.
"""

from functools import lru_cache

import numpy as np
import plotly.data
import polars as pl


@lru_cache(maxsize=None)
def iris() -> pl.DataFrame:
    return pl.from_pandas(plotly.data.iris())


@lru_cache(maxsize=None)
def tips() -> pl.DataFrame:
    return pl.from_pandas(plotly.data.tips())


@lru_cache(maxsize=None)
def gapminder() -> pl.DataFrame:
    return pl.from_pandas(plotly.data.gapminder())


def volcano(rows: int = 87, cols: int = 61) -> np.ndarray:
    """
    Elevation grid of a volcano-shaped cone with a crater.

    Returns
    -------
    np.ndarray
        ``rows`` x ``cols`` heights in metres, roughly 94 to 195.
    """
    y, x = np.mgrid[-1:1:rows * 1j, -1:1:cols * 1j]
    r = np.sqrt((x * 1.2) ** 2 + (y + 0.1) ** 2)
    cone = np.exp(-(r ** 2) * 3.0)
    crater = 0.35 * np.exp(-(r ** 2) * 40.0)
    ridge = 0.08 * np.sin(3 * x) * np.cos(2 * y)
    return 94 + 100 * (cone - crater + ridge + 0.06)
