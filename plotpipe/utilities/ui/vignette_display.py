"""
Streamlit rendering of vignettes for the gallery.

Charts without render hooks go through ``st.plotly_chart``; charts with
hooks are embedded as HTML so their JavaScript runs in the browser.
"""

import streamlit as st
import streamlit.components.v1 as components

from plotpipe.config.unified import get_config
from plotpipe.utilities.error_handling import PlotpipeError, error_handler
from plotpipe.utilities.plotting import Chart, figure_download_link, to_html
from plotpipe.vignettes.registry import Example, Vignette


def render_chart(chart: Chart, key: str) -> None:
    """Draw one chart in the current streamlit container."""
    height = get_config('default_height', 'global', 450)
    if chart.render_hooks:
        html = to_html(chart, full_html=False, include_plotlyjs="cdn")
        components.html(html, height=height + 40)
    else:
        st.plotly_chart(chart.build(), key=key)


def render_download_link(chart: Chart, filename: str) -> None:
    """PNG download link; kaleido problems degrade to an info message."""
    try:
        link = figure_download_link(chart, filename=filename)
    except (ValueError, RuntimeError) as e:
        error_handler.handle_error(e, "PNG export unavailable", severity="info")
        return
    st.markdown(link, unsafe_allow_html=True)


def render_example(example: Example, key: str) -> None:
    """Title, narrative and chart of one example."""
    st.markdown(f"### {example.title}")
    st.markdown(example.description)
    try:
        chart = example.build()
        render_chart(chart, key=key)
    except PlotpipeError as e:
        error_handler.handle_error(e, f"Example '{example.title}' failed")
        return

    with st.expander("Download", icon=":material/download:"):
        if st.button("Prepare PNG", key=f"{key}_png"):
            render_download_link(chart, filename=f"{key}.png")


def render_vignette(vignette: Vignette) -> None:
    """Every example of a vignette, one after another."""
    st.markdown(f"## {vignette.title}")
    st.markdown(vignette.summary)
    st.markdown("---")
    for i, example in enumerate(vignette.examples):
        render_example(example, key=f"{vignette.slug}_{i}")
