"""
Subplot composition: arrange several charts in one figure.

Each input chart is built and its traces are placed in one grid cell,
filled row by row. Axis layout options of each chart are moved to the axes
of its cell; all other layout options are merged, first chart wins.
Render hooks are carried over, with trace numbers in their data renumbered
to the combined figure.
"""

import math
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from plotpipe.config.unified import get_config
from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import SubplotError
from plotpipe.utilities.plotting.chart import Chart, RenderHook
from plotpipe.utilities.plotting.traces import deep_merge

logger = get_logger()

SCENE_TYPES = ('surface', 'scatter3d', 'mesh3d', 'cone', 'streamtube',
               'volume', 'isosurface')


def _as_figure(item: Union[Chart, go.Figure]) -> go.Figure:
    if isinstance(item, Chart):
        return item.build()
    if isinstance(item, go.Figure):
        return item
    raise SubplotError(
        f"subplot() takes charts or plotly figures, got {type(item).__name__}"
    )


def _cell_type(fig: go.Figure) -> str:
    types = {trace.type for trace in fig.data}
    if types and types <= set(SCENE_TYPES):
        return 'scene'
    if types & set(SCENE_TYPES):
        raise SubplotError(
            "A chart mixing 3-D and 2-D traces cannot share one subplot cell"
        )
    return 'xy'


def _layout_options(item: Union[Chart, go.Figure]) -> Dict[str, Any]:
    if isinstance(item, Chart):
        return dict(item.layout_options)
    options = item.layout.to_plotly_json()
    options.pop('template', None)
    return options


def _indexes_curves(hook: RenderHook) -> bool:
    return isinstance(hook.data, dict) and 'curves' in hook.data


def _shift_hooks(hooks: Sequence[RenderHook], offset: int) -> List[RenderHook]:
    """Renumber the trace indices in hook data to count from ``offset``."""
    shifted = []
    for hook in hooks:
        if _indexes_curves(hook) and offset:
            curves = [curve + offset for curve in hook.data['curves']]
            hook = replace(hook, data=dict(hook.data, curves=curves))
        shifted.append(hook)
    return shifted


def _combine_hooks(hooks: Sequence[RenderHook]) -> Tuple[RenderHook, ...]:
    """
    Fold hooks that run the same callback with the same settings into one
    hook covering all of their traces.
    """
    combined: List[RenderHook] = []
    for hook in hooks:
        if _indexes_curves(hook):
            settings = {k: v for k, v in hook.data.items() if k != 'curves'}
            for i, seen in enumerate(combined):
                if (_indexes_curves(seen) and seen.js == hook.js
                        and {k: v for k, v in seen.data.items() if k != 'curves'} == settings):
                    curves = list(seen.data['curves']) + list(hook.data['curves'])
                    combined[i] = replace(seen, data=dict(seen.data, curves=curves))
                    break
            else:
                combined.append(hook)
        else:
            combined.append(hook)
    return tuple(combined)


def subplot(*charts: Union[Chart, go.Figure],
            nrows: int = 1,
            shareX: bool = False,
            shareY: bool = False,
            titles: Optional[Sequence[str]] = None,
            widths: Optional[Sequence[float]] = None,
            heights: Optional[Sequence[float]] = None,
            margin: Optional[float] = None,
            which_layout: Union[str, int, Sequence[int]] = "merge") -> Chart:
    """
    Arrange charts in a grid.

    Parameters
    ----------
    *charts : Chart or go.Figure
        Charts to place, in row-major order.
    nrows : int
        Number of grid rows; columns are derived from the chart count.
    shareX, shareY : bool
        Share x axes within columns / y axes within rows.
    titles : sequence of str, optional
        One title per chart.
    widths, heights : sequence of float, optional
        Relative column widths and row heights.
    margin : float, optional
        Space around each cell as a fraction of the figure.
    which_layout : "merge", int or sequence of int
        Whose layout options to keep: every chart's ("merge", first chart
        wins on conflicts) or only those of the charts at the given positions.

    Returns
    -------
    Chart
        A chart wrapping the composed figure; it can still be piped into
        ``layout`` and ``on_render``.
    """
    if not charts:
        raise SubplotError("subplot() needs at least one chart")
    if nrows < 1 or nrows > len(charts):
        raise SubplotError(
            f"nrows must be between 1 and the number of charts ({len(charts)}), got {nrows}"
        )
    if titles is not None and len(titles) != len(charts):
        raise SubplotError(
            f"Got {len(titles)} titles for {len(charts)} charts"
        )

    if which_layout == "merge":
        layout_sources = set(range(len(charts)))
    else:
        if isinstance(which_layout, (str, int)):
            positions = [which_layout]
        else:
            positions = list(which_layout)
        if any(not isinstance(i, int) or not 0 <= i < len(charts) for i in positions):
            raise SubplotError(
                f"which_layout must be 'merge' or chart positions below {len(charts)}, "
                f"got {which_layout!r}"
            )
        layout_sources = set(positions)

    ncols = math.ceil(len(charts) / nrows)
    figures = [_as_figure(chart) for chart in charts]

    specs: List[List[Optional[Dict[str, str]]]] = [[None] * ncols for _ in range(nrows)]
    for i, fig in enumerate(figures):
        specs[i // ncols][i % ncols] = {'type': _cell_type(fig)}

    if margin is None:
        margin = get_config('subplot_margin', 'plotting', 0.02)

    try:
        out = make_subplots(
            rows=nrows,
            cols=ncols,
            specs=specs,
            shared_xaxes=shareX,
            shared_yaxes=shareY,
            subplot_titles=list(titles) if titles is not None else None,
            column_widths=list(widths) if widths is not None else None,
            row_heights=list(heights) if heights is not None else None,
            horizontal_spacing=2 * margin if ncols > 1 else None,
            vertical_spacing=2 * margin if nrows > 1 else None
        )
    except ValueError as e:
        raise SubplotError(f"Invalid subplot grid: {e}") from e

    layout: Dict[str, Any] = {}
    hooks: List[RenderHook] = []
    offset = 0
    for i, (item, fig) in enumerate(zip(charts, figures)):
        row, col = i // ncols + 1, i % ncols + 1
        for trace in fig.data:
            out.add_trace(trace.to_plotly_json(), row=row, col=col)

        options = _layout_options(item) if i in layout_sources else {}
        cell = out.get_subplot(row, col)
        if specs[row - 1][col - 1]['type'] == 'scene':
            if 'scene' in options:
                layout[cell.plotly_name] = options.pop('scene')
        else:
            for axis_key, axis in (('xaxis', cell.xaxis), ('yaxis', cell.yaxis)):
                if axis_key in options:
                    layout[axis.plotly_name] = options.pop(axis_key)

        # First chart wins on conflicting options
        layout = deep_merge(options, layout)

        if isinstance(item, Chart):
            hooks += _shift_hooks(item.render_hooks, offset)
        offset += len(fig.data)

    if layout:
        out.update_layout(layout)

    logger.debug(f"Composed {len(charts)} charts into a {nrows}x{ncols} grid")
    return Chart(base_figure=out, render_hooks=_combine_hooks(hooks))
