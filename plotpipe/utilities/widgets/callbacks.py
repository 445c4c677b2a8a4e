"""
Hover highlighting for marker charts.

Hovering a point paints that single marker in the highlight color with a
partial restyle of its own trace; unhovering puts the original color back.
``HoverHighlightState`` runs the same mutate-then-revert steps against a
figure in Python.
"""

import json
from dataclasses import replace
from string import Template
from typing import Any, List, Optional

import plotly.colors as pc
import plotly.graph_objects as go

from plotpipe.config.unified import get_config
from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import ChartSpecError
from plotpipe.utilities.plotting.chart import Chart
from plotpipe.utilities.widgets.rendering import on_render

logger = get_logger()

MARKER_TRACE_TYPES = ('scatter', 'scattergl', 'scatter3d', 'scatterpolar', 'scatterternary')

HOVER_JS = Template("""function(el, x, opts) {
  var highlightColor = $color;
  var highlightSize = $size;
  var saved = null;

  function restore() {
    if (saved === null) { return; }
    var marker = el.data[saved.curve].marker;
    var update = {};
    var colors = marker.color.slice();
    colors[saved.point] = saved.color;
    update['marker.color'] = [colors];
    if (saved.size !== undefined) {
      var sizes = marker.size.slice();
      sizes[saved.point] = saved.size;
      update['marker.size'] = [sizes];
    }
    Plotly.restyle(el, update, [saved.curve]);
    saved = null;
  }

  el.on('plotly_hover', function(data) {
    var cn = data.points[0].curveNumber;
    var pn = data.points[0].pointNumber;
    if (opts.curves.indexOf(cn) < 0) { return; }
    restore();
    var marker = el.data[cn].marker;
    var update = {};
    var colors = marker.color.slice();
    saved = {curve: cn, point: pn, color: colors[pn]};
    colors[pn] = highlightColor;
    update['marker.color'] = [colors];
    if (highlightSize !== null) {
      var sizes = marker.size.slice();
      saved.size = sizes[pn];
      sizes[pn] = highlightSize;
      update['marker.size'] = [sizes];
    }
    Plotly.restyle(el, update, [cn]);
  });

  el.on('plotly_unhover', function(data) {
    restore();
  });
}""")


def hover_highlight_js(color: str = "red", size: Optional[float] = None) -> str:
    """Source of the hover/unhover callback for ``on_render``."""
    return HOVER_JS.substitute(color=json.dumps(color), size=json.dumps(size))


def _has_markers(trace) -> bool:
    if trace.type not in MARKER_TRACE_TYPES:
        return False
    # plotly.js draws markers by default for small scatter traces
    return trace.mode is None or 'markers' in trace.mode


def _point_count(trace) -> int:
    for key in ('x', 'y', 'z', 'r', 'a'):
        values = getattr(trace, key, None)
        if values is not None:
            return len(values)
    return 0


def _is_numeric_array(values) -> bool:
    return any(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values)


def expand_marker_arrays(fig: go.Figure, size: Optional[float] = None) -> List[int]:
    """
    Give every marker trace a per-point color array (and size array when a
    highlight size is used) so that one point can be restyled alone.

    Traces colored through a numeric colorscale are left untouched.

    Returns
    -------
    list of int
        Curve numbers that can be highlighted.
    """
    colorway = fig.layout.template.layout.colorway or pc.qualitative.Plotly
    highlightable = []
    for curve, trace in enumerate(fig.data):
        if not _has_markers(trace):
            continue
        n_points = _point_count(trace)
        color = trace.marker.color
        if color is None:
            color = colorway[curve % len(colorway)]
        if isinstance(color, str):
            trace.marker.color = [color] * n_points
        elif _is_numeric_array(color):
            logger.debug(f"Trace {curve} uses a colorscale; skipped for hover highlight")
            continue
        if size is not None:
            marker_size = trace.marker.size
            if marker_size is None:
                marker_size = 6
            if isinstance(marker_size, (int, float)):
                trace.marker.size = [marker_size] * n_points
        highlightable.append(curve)
    return highlightable


def hover_highlight(chart: Chart, color: Optional[str] = None,
                    size: Optional[float] = None) -> Chart:
    """
    Highlight the hovered marker in ``color`` and restore it on unhover.

    The chart is built now so that marker colors can be expanded to
    per-point arrays; traces added afterwards are not highlighted.

    Parameters
    ----------
    chart : Chart
        Chart with at least one marker trace.
    color : str, optional
        Highlight color, default from the ``[hover]`` config.
    size : float, optional
        Marker size while hovered; size is unchanged when omitted.

    Returns
    -------
    Chart
    """
    color = color or get_config('highlight_color', 'hover', 'red')
    fig = chart.build()
    curves = expand_marker_arrays(fig, size)
    if not curves:
        raise ChartSpecError("hover_highlight needs at least one marker trace")

    logger.debug(f"Hover highlight enabled on traces {curves}")
    prepared = replace(
        chart,
        base_figure=fig,
        traces=(),
        implied_trace=None,
        layout_options={}
    )
    hook_data = {'curves': curves, 'color': color, 'size': size}
    return on_render(prepared, hover_highlight_js(color, size), hook_data)


class HoverHighlightState:
    """
    Python model of the hover callback acting on a figure.

    ``hover`` reddens one point of one trace, ``unhover`` puts back exactly
    the value it replaced. Hovering a new point first restores the old one.
    """

    def __init__(self, fig: go.Figure, curves: List[int],
                 color: str = "red", size: Optional[float] = None):
        self.fig = fig
        self.curves = list(curves)
        self.color = color
        self.size = size
        self.saved: Optional[dict] = None

    @classmethod
    def from_chart(cls, chart: Chart) -> "HoverHighlightState":
        """State for a chart returned by :func:`hover_highlight`."""
        for hook in chart.render_hooks:
            if isinstance(hook.data, dict) and 'curves' in hook.data:
                return cls(
                    chart.build(), hook.data['curves'],
                    color=hook.data.get('color', 'red'), size=hook.data.get('size')
                )
        raise ChartSpecError("Chart has no hover highlight hook")

    def marker_color(self, curve: int, point: int) -> Any:
        return self.fig.data[curve].marker.color[point]

    def hover(self, curve: int, point: int) -> bool:
        """Apply the hover step; False when the trace is not highlightable."""
        if curve not in self.curves:
            return False
        self.unhover()

        marker = self.fig.data[curve].marker
        colors = list(marker.color)
        self.saved = {'curve': curve, 'point': point, 'color': colors[point]}
        colors[point] = self.color
        marker.color = colors

        if self.size is not None:
            sizes = list(marker.size)
            self.saved['size'] = sizes[point]
            sizes[point] = self.size
            marker.size = sizes
        return True

    def unhover(self) -> None:
        """Restore the point changed by the last hover; no-op otherwise."""
        if self.saved is None:
            return
        marker = self.fig.data[self.saved['curve']].marker
        colors = list(marker.color)
        colors[self.saved['point']] = self.saved['color']
        marker.color = colors
        if 'size' in self.saved:
            sizes = list(marker.size)
            sizes[self.saved['point']] = self.saved['size']
            marker.size = sizes
        self.saved = None
