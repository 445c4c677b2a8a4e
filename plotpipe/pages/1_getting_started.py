"""
Vignette: create charts with plot_ly and extend them through a chain of calls.
"""

import streamlit as st

from plotpipe.menu import menu
from plotpipe.utilities.configuration.logging_config import setup_page_logging
from plotpipe.utilities.ui import render_vignette
from plotpipe.vignettes import get_vignette

setup_page_logging("getting_started")

TITLE = "Getting Started"
ICON = ":material/play_arrow:"

st.set_page_config(
    page_title=TITLE, page_icon=ICON,
    layout="wide"
    )


def main():
    menu()
    render_vignette(get_vignette("intro"))


if __name__ == "__main__":
    main()
