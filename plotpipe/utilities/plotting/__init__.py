"""
Chart construction on top of plotly.

This package provides the chart specification and its pipe interface,
encoding resolution, default scales, subplot composition and export.
"""

from plotpipe.utilities.configuration.logging_config import setup_utility_logging
from plotpipe.utilities.plotting.encodings import AsIs, I
from plotpipe.utilities.plotting.chart import Chart, RenderHook, TraceSpec, plot_ly
from plotpipe.utilities.plotting.scales import (
    ColorMapping,
    SymbolMapping,
    classify,
    resolve_color_mapping,
    resolve_symbol_mapping
)
from plotpipe.utilities.plotting.subplots import subplot
from plotpipe.utilities.plotting.export import (
    figure_download_link,
    save_html,
    show,
    to_html,
    to_image
)

setup_utility_logging("plotting")

__all__ = [
    'AsIs',
    'Chart',
    'ColorMapping',
    'I',
    'RenderHook',
    'SymbolMapping',
    'TraceSpec',
    'classify',
    'figure_download_link',
    'plot_ly',
    'resolve_color_mapping',
    'resolve_symbol_mapping',
    'save_html',
    'show',
    'subplot',
    'to_html',
    'to_image'
]
