"""
plotpipe - pipe-friendly chart specifications on top of plotly.

Charts are built by chaining calls (``plot_ly(df, ...).filter(...).add_lines(...)``),
visual encodings (color, symbol, group) are resolved to plotly traces with
sensible default scales, and post-render JavaScript hooks can be attached to
the rendered widget.
"""

__version__ = "0.1.0"

from plotpipe.utilities.plotting import (  # noqa: E402
    Chart,
    I,
    plot_ly,
    subplot,
    to_html,
    save_html
)
from plotpipe.utilities.widgets import (  # noqa: E402
    hover_highlight,
    on_render
)

__all__ = [
    'Chart',
    'I',
    'hover_highlight',
    'on_render',
    'plot_ly',
    'save_html',
    'subplot',
    'to_html',
    '__version__'
]
