"""
Vignette: arrange several charts in a subplot grid.
"""

import streamlit as st

from plotpipe.menu import menu
from plotpipe.utilities.configuration.logging_config import setup_page_logging
from plotpipe.utilities.ui import render_vignette
from plotpipe.vignettes import get_vignette

setup_page_logging("subplots")

TITLE = "Subplots"
ICON = ":material/grid_view:"

st.set_page_config(
    page_title=TITLE, page_icon=ICON,
    layout="wide"
    )


def main():
    menu()
    render_vignette(get_vignette("subplots"))


if __name__ == "__main__":
    main()
