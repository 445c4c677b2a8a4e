"""
Resolution of visual-encoding arguments against trace data.

An encoding value can be a polars expression (evaluated against the data),
the name of a column, an explicit sequence of values, or a scalar constant.
``I(value)`` marks a value as a literal even when it matches a column name.
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import pandas as pd
import polars as pl

from plotpipe.utilities.error_handling.exceptions import EncodingError

# Arguments that are looked up in the data
DATA_KEYS = (
    'x', 'y', 'z', 'color', 'symbol', 'group', 'split',
    'text', 'size', 'hovertext', 'customdata', 'ids'
)

# Positional encodings must name real data; an unknown string is an error
STRICT_KEYS = ('x', 'y', 'z', 'group', 'split')


class AsIs:
    """Wrapper marking an encoding value as a literal, never a column name."""

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"I({self.value!r})"


def I(value: Any) -> AsIs:  # noqa: E743
    """Treat ``value`` as a literal (``I("red")`` is the color red, not a column)."""
    return AsIs(value)


@dataclass
class Resolved:
    """
    One resolved encoding.

    ``series`` is set for per-row values, ``value`` for constants and
    ``matrix`` for 2-D ``z`` grids.
    """
    key: str
    series: Optional[pl.Series] = None
    value: Any = None
    matrix: Optional[list] = None

    @property
    def is_column(self) -> bool:
        return self.series is not None

    @property
    def is_matrix(self) -> bool:
        return self.matrix is not None

    @property
    def name(self) -> str:
        if self.series is not None and self.series.name:
            return self.series.name
        return self.key


def as_polars(data: Any) -> Optional[pl.DataFrame]:
    """Convert a supported data source to a polars DataFrame."""
    if data is None or isinstance(data, pl.DataFrame):
        return data
    if isinstance(data, pl.LazyFrame):
        return data.collect()
    if isinstance(data, pd.DataFrame):
        return pl.from_pandas(data, include_index=False)
    if isinstance(data, dict):
        return pl.DataFrame(data)
    raise EncodingError(
        f"Unsupported data source of type {type(data).__name__}; "
        "expected a polars or pandas DataFrame or a dict of columns"
    )


def _is_matrix(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim == 2
    if isinstance(value, pd.DataFrame):
        return True
    if isinstance(value, (list, tuple)) and value:
        return all(isinstance(row, (list, tuple, np.ndarray)) for row in value)
    return False


def _to_matrix(value: Any) -> list:
    if isinstance(value, pd.DataFrame):
        value = value.to_numpy()
    return np.asarray(value, dtype=float).tolist()


def _to_series(key: str, value: Any) -> pl.Series:
    if isinstance(value, pl.Series):
        return value if value.name else value.alias(key)
    if isinstance(value, pd.Series):
        series = pl.from_pandas(value)
        return series.alias(value.name if isinstance(value.name, str) else key)
    if isinstance(value, np.ndarray):
        return pl.Series(key, value.tolist())
    return pl.Series(key, list(value))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, range, np.ndarray, pd.Series, pl.Series))


def resolve(key: str, value: Any, data: Optional[pl.DataFrame]) -> Resolved:
    """
    Resolve one encoding against ``data``.

    Parameters
    ----------
    key : str
        Encoding name (``x``, ``color``, ...).
    value : Any
        The argument as passed by the caller.
    data : pl.DataFrame, optional
        Data of the trace being built.

    Returns
    -------
    Resolved
    """
    if isinstance(value, AsIs):
        literal = value.value
        if key == 'z' and _is_matrix(literal):
            return Resolved(key, matrix=_to_matrix(literal))
        if _is_sequence(literal):
            return Resolved(key, series=_to_series(key, literal))
        return Resolved(key, value=literal)

    if isinstance(value, pl.Expr):
        if data is None:
            raise EncodingError(
                f"'{key}' is an expression but the chart has no data", encoding=key
            )
        try:
            series = data.select(value).to_series()
        except pl.exceptions.ColumnNotFoundError as e:
            raise EncodingError(
                f"Column for '{key}' not found in data: {e}",
                encoding=key, available=data.columns
            ) from e
        except pl.exceptions.PolarsError as e:
            raise EncodingError(f"Cannot evaluate '{key}': {e}", encoding=key) from e
        if series.len() == 1 and data.height != 1:
            return Resolved(key, value=series.item())
        return Resolved(key, series=series)

    if isinstance(value, str):
        if data is not None and value in data.columns:
            return Resolved(key, series=data.get_column(value))
        if key in STRICT_KEYS:
            raise EncodingError(
                f"Missing column '{value}' for '{key}'",
                encoding=key,
                available=data.columns if data is not None else []
            )
        return Resolved(key, value=value)

    if key == 'z' and _is_matrix(value):
        return Resolved(key, matrix=_to_matrix(value))

    if _is_sequence(value):
        return Resolved(key, series=_to_series(key, value))

    return Resolved(key, value=value)
