"""
Main page of the plotpipe gallery: lists the vignettes.
"""

import streamlit as st

from plotpipe.config.unified import get_config
from plotpipe.menu import menu
from plotpipe.utilities.configuration.logging_config import setup_page_logging
from plotpipe.vignettes import all_vignettes

setup_page_logging("index")

TITLE = get_config('app_title', 'global', "plotpipe gallery")
ICON = ":material/insert_chart:"

st.set_page_config(
    page_title=TITLE, page_icon=ICON,
    layout="wide"
    )


def main():
    menu()
    st.markdown(f"# {TITLE}")
    st.markdown(
        "Each page is a short vignette showing how charts are built by "
        "chaining calls, how data maps to color, symbols and groups, how "
        "charts combine into subplots and how JavaScript callbacks attach to "
        "the rendered widget."
    )
    for vignette in all_vignettes():
        st.markdown(f"**{vignette.title}**: {vignette.summary}")


if __name__ == "__main__":
    main()
