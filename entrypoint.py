"""
Launch the plotpipe vignette gallery.

Server settings come from ``GALLERY_*`` environment variables, e.g.
``GALLERY_SERVER_PORT=8600 python entrypoint.py``.
"""

import sys
from pathlib import Path

import streamlit.web.cli as stcli
from pydantic_settings import BaseSettings, SettingsConfigDict

GALLERY_ROOT = Path(__file__).resolve().parent / "plotpipe"


class GalleryConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GALLERY_")

    browser_server_address: str = "localhost"
    server_port: int = 8501
    headless: bool = True
    primary_color: str = "#133955"


def gallery_script(name: str = "index.py") -> str:
    return str(GALLERY_ROOT / name)


def streamlit_argv(config: GalleryConfig) -> list[str]:
    """Command line handed to ``streamlit run``."""
    options = {
        "browser.serverAddress": config.browser_server_address,
        "browser.gatherUsageStats": "false",
        "server.port": config.server_port,
        "server.headless": str(config.headless).lower(),
        "client.toolbarMode": "minimal",
        # The gallery draws its own menu
        "client.showSidebarNavigation": "false",
        "global.developmentMode": "false",
        "theme.primaryColor": config.primary_color,
        "theme.backgroundColor": "#FFFFFF",
        "theme.secondaryBackgroundColor": "#EBECF0",
        "theme.textColor": "#262730",
    }
    return ["streamlit", "run", gallery_script()] + [
        f"--{name}={value}" for name, value in options.items()
    ]


if __name__ == "__main__":
    sys.argv = streamlit_argv(GalleryConfig())
    sys.exit(stcli.main())
