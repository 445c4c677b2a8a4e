"""
Streamlit helpers for the vignette gallery.
"""

from plotpipe.utilities.ui.vignette_display import (
    render_chart,
    render_download_link,
    render_example,
    render_vignette
)

__all__ = [
    'render_chart',
    'render_download_link',
    'render_example',
    'render_vignette'
]
