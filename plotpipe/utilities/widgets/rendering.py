"""
Post-render hooks for rendered chart widgets.

A hook is the source of a JavaScript function ``function(el, x, data)``.
Once plotly.js has drawn the chart it is called with the plot element, the
figure specification (``x.data`` and ``x.layout``) and optional extra data.
"""

import json
import re
from dataclasses import replace
from typing import Any, Iterable

import plotly.graph_objects as go
import plotly.io as pio
from plotly.utils import PlotlyJSONEncoder

from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import RenderHookError
from plotpipe.utilities.plotting.chart import Chart, RenderHook

logger = get_logger()

_FUNCTION_RE = re.compile(r"^\s*(async\s+)?function\b[^(]*\(")
_ARROW_RE = re.compile(r"^\s*(async\s+)?(\([^)]*\)|[A-Za-z_$][\w$]*)\s*=>")


def is_function_source(js: str) -> bool:
    """True when ``js`` looks like a JavaScript function expression."""
    return bool(_FUNCTION_RE.match(js) or _ARROW_RE.match(js))


def on_render(chart: Chart, js: str, data: Any = None) -> Chart:
    """
    Attach a post-render callback to a chart.

    Parameters
    ----------
    chart : Chart
        Chart the hook belongs to.
    js : str
        JavaScript function source, called as ``js(el, x, data)``.
    data : Any, optional
        JSON-serializable value passed as the third argument.

    Returns
    -------
    Chart
    """
    if not isinstance(js, str) or not is_function_source(js):
        raise RenderHookError(
            "on_render expects the source of a JavaScript function, "
            "e.g. \"function(el, x) { ... }\""
        )
    try:
        json.dumps(data, cls=PlotlyJSONEncoder)
    except TypeError as e:
        raise RenderHookError(f"Render hook data is not JSON serializable: {e}") from e

    logger.debug(f"Registered render hook #{len(chart.render_hooks) + 1}")
    return replace(chart, render_hooks=chart.render_hooks + (RenderHook(js=js, data=data),))


def _script_json(value: str) -> str:
    # Keep "</script>" inside string values from closing the script element
    return value.replace("</", "<\\/")


def render_post_script(hooks: Iterable[RenderHook], fig: go.Figure) -> str:
    """
    JavaScript that invokes every hook against the rendered plot.

    ``{plot_id}`` is substituted by plotly with the id of the plot element.
    """
    spec = _script_json(pio.to_json(fig, validate=False))
    lines = [
        "var el = document.getElementById('{plot_id}');",
        f"var x = {spec};"
    ]
    for hook in hooks:
        payload = _script_json(json.dumps(hook.data, cls=PlotlyJSONEncoder))
        lines.append(f"({hook.js.strip()})(el, x, {payload});")
    return "\n".join(lines)
