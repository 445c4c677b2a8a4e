"""
Widget customization: post-render hooks and ready-made callbacks.
"""

from plotpipe.utilities.widgets.rendering import (
    is_function_source,
    on_render,
    render_post_script
)
from plotpipe.utilities.widgets.callbacks import (
    HoverHighlightState,
    expand_marker_arrays,
    hover_highlight,
    hover_highlight_js
)

__all__ = [
    'HoverHighlightState',
    'expand_marker_arrays',
    'hover_highlight',
    'hover_highlight_js',
    'is_function_source',
    'on_render',
    'render_post_script'
]
