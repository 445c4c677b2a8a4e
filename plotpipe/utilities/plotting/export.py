"""
Export utilities: HTML widgets, static images and download links.

Post-render hooks registered on a chart are injected into the HTML output
as plotly's ``post_script``, which runs once the plot element exists.
"""

import base64
import pathlib
from typing import Optional, Union

import plotly.graph_objects as go
import plotly.io as pio

from plotpipe.config.unified import get_config
from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.plotting.chart import Chart

logger = get_logger()


def _figure_and_hooks(item: Union[Chart, go.Figure]):
    if isinstance(item, Chart):
        return item.build(), item.render_hooks
    return item, ()


def to_html(item: Union[Chart, go.Figure],
            full_html: bool = True,
            include_plotlyjs: Union[bool, str, None] = None,
            div_id: Optional[str] = None) -> str:
    """
    Render a chart as a standalone HTML widget.

    Parameters
    ----------
    item : Chart or go.Figure
        What to render.
    full_html : bool
        Emit a complete document rather than a ``<div>`` fragment.
    include_plotlyjs : bool or str, optional
        How plotly.js is included; defaults to the ``[export]`` config.
    div_id : str, optional
        Id of the plot element.

    Returns
    -------
    str
    """
    fig, hooks = _figure_and_hooks(item)
    if include_plotlyjs is None:
        include_plotlyjs = get_config('include_plotlyjs', 'export', 'cdn')

    post_script = None
    if hooks:
        from plotpipe.utilities.widgets.rendering import render_post_script
        post_script = render_post_script(hooks, fig)
        logger.debug(f"Injecting {len(hooks)} render hook(s) into HTML output")

    return pio.to_html(
        fig,
        full_html=full_html,
        include_plotlyjs=include_plotlyjs,
        div_id=div_id,
        post_script=post_script
    )


def save_html(item: Union[Chart, go.Figure], path: Union[str, pathlib.Path],
              **kwargs) -> pathlib.Path:
    """Write :func:`to_html` output to ``path`` and return the path."""
    path = pathlib.Path(path)
    path.write_text(to_html(item, **kwargs), encoding='utf-8')
    return path


def show(item: Union[Chart, go.Figure], renderer: Optional[str] = None) -> None:
    """Display a chart with plotly's renderers, hooks included."""
    fig, hooks = _figure_and_hooks(item)
    if hooks:
        from plotpipe.utilities.widgets.rendering import render_post_script
        fig.show(renderer=renderer, post_script=render_post_script(hooks, fig))
    else:
        fig.show(renderer=renderer)


def to_image(item: Union[Chart, go.Figure], format: Optional[str] = None,
             scale: Optional[float] = None) -> bytes:
    """
    Render a static image with kaleido.

    Render hooks are browser-side only and do not affect static images.
    """
    fig, _ = _figure_and_hooks(item)
    # Copy so that a figure passed in by the caller keeps its own axes
    fig = go.Figure(fig)
    fig.update_xaxes(automargin=True)
    fig.update_yaxes(automargin=True)
    return fig.to_image(
        format=format or get_config('image_format', 'export', 'png'),
        scale=scale or get_config('image_scale', 'export', 2)
    )


def figure_download_link(
        item: Union[Chart, go.Figure],
        filename="plot.png",
        scale=2,
        button_text="Download high-res PNG"
        ) -> str:
    """
    Build a download link for a high-resolution PNG of a figure.

    Parameters
    ----------
    item : Chart or go.Figure
        The figure to export.
    filename : str
        The filename for the downloaded PNG.
    scale : int or float
        The scale factor for the image resolution (default 2).
    button_text : str
        The text to display for the download link.

    Returns
    -------
    str
        An ``<a>`` element with the image inlined as base64.
    """
    img_bytes = to_image(item, format="png", scale=scale)
    b64 = base64.b64encode(img_bytes).decode()
    return f'<a href="data:image/png;base64,{b64}" download="{filename}">{button_text}</a>'
