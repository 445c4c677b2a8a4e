"""
Navigation menu for the plotpipe gallery.
"""

import streamlit as st

PAGES = [
    ("index.py", "Main Page", ":material/home:"),
    ("pages/1_getting_started.py", "Getting Started", ":material/play_arrow:"),
    ("pages/2_color_symbol.py", "Color, Symbols & Groups", ":material/palette:"),
    ("pages/3_subplots.py", "Subplots", ":material/grid_view:"),
    ("pages/4_render_callbacks.py", "Render Callbacks", ":material/touch_app:"),
]


def menu():
    with st.sidebar.expander("**Navigation**",
                             icon=":material/explore:",
                             expanded=True):
        for page, label, icon in PAGES:
            st.page_link(page, label=label, icon=icon)
