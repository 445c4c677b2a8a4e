"""
Expansion of one trace specification into plotly trace dictionaries.

A single added series can become several plotly traces: discrete color,
symbol and split encodings produce one trace per level (one legend entry
each), while numeric color stays on a single trace with a colorbar.
"""

import itertools
from typing import Any, Dict, List, Optional

import numpy as np
import polars as pl

from plotpipe.config.unified import get_config
from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import ChartSpecError, EncodingError
from plotpipe.utilities.plotting.encodings import DATA_KEYS, Resolved, resolve
from plotpipe.utilities.plotting.scales import (
    DIVERGING, MISSING_LABEL, SEQUENTIAL,
    ColorMapping, SymbolMapping,
    continuous_colorscale, discrete_levels,
    resolve_color_mapping, resolve_symbol_mapping
)

logger = get_logger()

SCATTER_TYPES = ('scatter', 'scattergl', 'scatter3d', 'scatterpolar', 'scatterternary')
MATRIX_TYPES = ('surface', 'heatmap', 'contour')
MARKER_TYPES = SCATTER_TYPES + ('bar', 'histogram', 'box', 'violin', 'funnel')

# Per-point columns copied onto every plotly trace
VECTOR_KEYS = ('x', 'y', 'z', 'text', 'hovertext', 'customdata', 'ids')

# Pixel diameter range for data-mapped marker sizes
SIZE_RANGE = (6.0, 30.0)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``; override wins."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def infer_type(resolved: Dict[str, Resolved]) -> str:
    """Pick a trace type from the encodings that are present."""
    if 'z' in resolved:
        inferred = 'surface' if resolved['z'].is_matrix else 'scatter3d'
    elif 'x' in resolved and 'y' in resolved:
        inferred = 'scatter'
    elif 'x' in resolved or 'y' in resolved:
        inferred = 'histogram'
    else:
        raise ChartSpecError("Cannot infer a trace type: no x, y or z encoding given")

    logger.info(f"No trace type specified: inferring '{inferred}'")
    return inferred


def default_mode(trace_type: str, resolved: Dict[str, Resolved]) -> Optional[str]:
    """Scatter-like traces get markers, or lines when grouped."""
    if trace_type not in SCATTER_TYPES:
        return None
    if 'group' in resolved:
        return 'lines'
    mode = get_config('default_mode', 'plotting', 'markers')
    logger.info(f"No scatter mode specifier: setting mode to {mode}")
    return mode


def _scale_sizes(series: pl.Series) -> pl.Series:
    if not series.dtype.is_numeric():
        raise EncodingError(
            f"size requires numeric data, got {series.dtype}", encoding="size"
        )
    lo_px, hi_px = SIZE_RANGE
    values = series.cast(pl.Float64)
    lo, hi = values.min(), values.max()
    if lo is None or hi == lo:
        return pl.Series('size', [(lo_px + hi_px) / 2] * values.len())
    return ((values - lo) / (hi - lo) * (hi_px - lo_px) + lo_px).alias('size')


def _common_length(columns: Dict[str, pl.Series]) -> int:
    lengths = {key: series.len() for key, series in columns.items()}
    distinct = set(lengths.values())
    if len(distinct) > 1:
        detail = ", ".join(f"{key}={n}" for key, n in lengths.items())
        raise EncodingError(f"Encodings have different lengths: {detail}")
    return distinct.pop() if distinct else 0


def _level_filter(key: str, level: Any) -> pl.Expr:
    if level is None:
        return pl.col(key).is_null()
    return pl.col(key) == level


def _levels_with_missing(series: pl.Series) -> List[Any]:
    levels = discrete_levels(series)
    if series.null_count() > 0:
        levels.append(None)
    return levels


def _columns_with_group_gaps(part: pl.DataFrame) -> Dict[str, list]:
    """
    Order rows by group and separate groups with ``None`` so that line
    segments never connect across groups.
    """
    out = {column: [] for column in part.columns if column != 'group'}
    for i, level in enumerate(_levels_with_missing(part.get_column('group'))):
        rows = part.filter(_level_filter('group', level))
        for column, values in out.items():
            if i > 0:
                values.append(None)
            values.extend(rows.get_column(column).to_list())
    return out


def _level_label(level: Any) -> str:
    return MISSING_LABEL if level is None else str(level)


def _matrix_trace(trace_type: str, resolved: Dict[str, Resolved], colors: Any,
                  name: Optional[str], extra: Dict[str, Any]) -> Dict[str, Any]:
    z = resolved['z']
    if not z.is_matrix:
        raise EncodingError(
            f"'{trace_type}' traces need z as a 2-D matrix", encoding="z"
        )

    trace: Dict[str, Any] = {'type': trace_type, 'z': z.matrix}
    for key in ('x', 'y'):
        if key in resolved and resolved[key].is_column:
            trace[key] = resolved[key].series.to_list()

    grid = np.asarray(z.matrix, dtype=float)
    lo, hi = np.nanmin(grid), np.nanmax(grid)
    kind = DIVERGING if lo < 0 < hi else SEQUENTIAL
    trace['colorscale'] = continuous_colorscale(kind, colors)
    if kind == DIVERGING:
        trace['cmid' if trace_type == 'surface' else 'zmid'] = 0.0
    if name is not None:
        trace['name'] = name

    return deep_merge(trace, extra)


def expand_trace(attrs: Dict[str, Any], data: Optional[pl.DataFrame],
                 sort_x: bool = False) -> List[Dict[str, Any]]:
    """
    Resolve one trace specification into plotly trace dictionaries.

    Parameters
    ----------
    attrs : dict
        Merged trace attributes (encodings plus plotly passthrough options).
    data : pl.DataFrame, optional
        Data the encodings are evaluated against.
    sort_x : bool
        Order rows by x before drawing (used by ``add_lines``).

    Returns
    -------
    list of dict
        One dictionary per plotly trace, each with a ``type`` key.
    """
    extra = dict(attrs)
    colors = extra.pop('colors', None)
    symbols = extra.pop('symbols', None)
    trace_type = extra.pop('type', None)
    mode = extra.pop('mode', None)
    name = extra.pop('name', None)

    resolved: Dict[str, Resolved] = {}
    for key in DATA_KEYS:
        value = extra.pop(key, None)
        if value is not None:
            resolved[key] = resolve(key, value, data)

    if trace_type is None:
        trace_type = infer_type(resolved)
    if trace_type in MATRIX_TYPES or ('z' in resolved and resolved['z'].is_matrix):
        return [_matrix_trace(trace_type, resolved, colors, name, extra)]
    if mode is None:
        mode = default_mode(trace_type, resolved)

    columns = {key: r.series.alias(key) for key, r in resolved.items() if r.is_column}
    n_rows = _common_length(columns)
    frame = pl.DataFrame(list(columns.values())) if columns else pl.DataFrame()

    if sort_x and 'x' in frame.columns:
        frame = frame.sort('x', maintain_order=True)
    if 'size' in frame.columns:
        frame = frame.with_columns(_scale_sizes(frame.get_column('size')))

    color_map: Optional[ColorMapping] = None
    symbol_map: Optional[SymbolMapping] = None
    split_keys: List[str] = []
    if 'color' in columns:
        color_map = resolve_color_mapping(
            frame.get_column('color'), colors, title=resolved['color'].name
        )
        if color_map.is_discrete:
            split_keys.append('color')
    if 'symbol' in columns:
        symbol_map = resolve_symbol_mapping(
            frame.get_column('symbol'), symbols, title=resolved['symbol'].name
        )
        split_keys.append('symbol')
    if 'split' in columns:
        split_keys.append('split')

    use_group_gaps = 'group' in frame.columns and trace_type in SCATTER_TYPES
    if 'group' in frame.columns and not use_group_gaps:
        logger.debug(f"group has no effect on '{trace_type}' traces")

    level_lists = [_levels_with_missing(frame.get_column(key)) for key in split_keys]
    traces: List[Dict[str, Any]] = []
    for combo in itertools.product(*level_lists):
        part = frame
        for key, level in zip(split_keys, combo):
            part = part.filter(_level_filter(key, level))
        if split_keys and part.height == 0:
            continue

        if use_group_gaps:
            values = _columns_with_group_gaps(part)
        else:
            values = {column: part.get_column(column).to_list() for column in part.columns}
        n_points = len(values[next(iter(values))]) if values else 0

        trace: Dict[str, Any] = {'type': trace_type}
        if mode is not None:
            trace['mode'] = mode
        for key in VECTOR_KEYS:
            if key in values:
                trace[key] = values[key]
            elif key in resolved and key in ('x', 'y', 'z'):
                trace[key] = [resolved[key].value] * max(n_points, n_rows, 1)
            elif key in resolved:
                trace[key] = resolved[key].value

        marker: Dict[str, Any] = {}
        line: Dict[str, Any] = {}
        levels = dict(zip(split_keys, combo))

        if color_map is not None and color_map.is_discrete:
            marker['color'] = line['color'] = color_map.color_for(levels['color'])
        elif color_map is not None:
            marker.update(color_map.marker_kwargs(pl.Series('color', values['color'])))
            if traces:
                marker['showscale'] = False
        elif 'color' in resolved:
            marker['color'] = line['color'] = resolved['color'].value

        if symbol_map is not None:
            marker['symbol'] = symbol_map.symbol_for(levels['symbol'])
        elif 'symbol' in resolved:
            marker['symbol'] = resolved['symbol'].value

        if 'size' in values:
            # plotly rejects null sizes; gap and missing rows get the smallest marker
            marker['size'] = [SIZE_RANGE[0] if s is None else s for s in values['size']]
            marker['sizemode'] = 'diameter'
        elif 'size' in resolved:
            marker['size'] = resolved['size'].value

        if combo:
            label = "<br />".join(_level_label(level) for level in combo)
            trace['name'] = label
            trace['legendgroup'] = label
            trace['showlegend'] = True
        elif name is not None:
            trace['name'] = name

        if trace_type in MARKER_TYPES and marker:
            trace['marker'] = marker
        if trace_type in SCATTER_TYPES and line and mode and 'lines' in mode:
            trace['line'] = line

        traces.append(deep_merge(trace, extra))

    return traces
