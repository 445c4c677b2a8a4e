"""
Vignette: attach JavaScript callbacks to the rendered widget.
"""

import streamlit as st

from plotpipe.menu import menu
from plotpipe.utilities.configuration.logging_config import setup_page_logging
from plotpipe.utilities.ui import render_vignette
from plotpipe.vignettes import get_vignette

setup_page_logging("render_callbacks")

TITLE = "Render Callbacks"
ICON = ":material/touch_app:"

st.set_page_config(
    page_title=TITLE, page_icon=ICON,
    layout="wide"
    )


def main():
    menu()
    render_vignette(get_vignette("callbacks"))


if __name__ == "__main__":
    main()
