"""
Vignette: map data to color, symbols and groups, and replace the default scales.
"""

import streamlit as st

from plotpipe.menu import menu
from plotpipe.utilities.configuration.logging_config import setup_page_logging
from plotpipe.utilities.ui import render_vignette
from plotpipe.vignettes import get_vignette

setup_page_logging("color_symbol")

TITLE = "Color, Symbols & Groups"
ICON = ":material/palette:"

st.set_page_config(
    page_title=TITLE, page_icon=ICON,
    layout="wide"
    )


def main():
    menu()
    render_vignette(get_vignette("color-symbol"))


if __name__ == "__main__":
    main()
