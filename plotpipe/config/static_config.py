"""
TOML-backed defaults for palettes, hover styling, export and logging.

This is the bottom layer of plotpipe's configuration and must not import
any other plotpipe module: the logging and plotting layers import it.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml

PACKAGED_OPTIONS = Path(__file__).resolve().parent / "options.toml"


def locate_options(cwd: Optional[Path] = None) -> Path:
    """
    Pick the options file to read.

    ``$PLOTPIPE_CONFIG`` wins; then a project-local ``plotpipe/config/
    options.toml`` or ``options.toml`` under ``cwd``; then the file shipped
    with the package.
    """
    env_path = os.environ.get("PLOTPIPE_CONFIG")
    if env_path:
        return Path(env_path)

    cwd = cwd or Path.cwd()
    for candidate in (cwd / "plotpipe" / "config" / "options.toml", cwd / "options.toml"):
        if candidate.exists():
            return candidate
    return PACKAGED_OPTIONS


class StaticConfigManager:
    """
    Read-only view of one options file, parsed on first access.

    A missing or unparsable file yields an empty configuration, so every
    lookup falls through to the caller's default.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = Path(config_path) if config_path is not None else locate_options()
        self._parsed: Optional[Dict[str, Any]] = None

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _options(self) -> Dict[str, Any]:
        if self._parsed is None:
            try:
                self._parsed = toml.loads(self._config_path.read_text(encoding='utf-8'))
            except (OSError, toml.TomlDecodeError):
                self._parsed = {}
        return self._parsed

    def get_value(self, key: str, section: str = 'global', default: Any = None) -> Any:
        """
        Look up ``[section] key``.

        Parameters
        ----------
        key : str
            Option name.
        section : str
            TOML table name.
        default : Any
            Returned when the table or the key is absent.

        Returns
        -------
        Any
        """
        return self._options().get(section, {}).get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Whole ``[section]`` table, empty when absent."""
        return self._options().get(section, {})

    def get_all(self) -> Dict[str, Any]:
        return self._options()

    def has_section(self, section: str) -> bool:
        return section in self._options()

    def has_key(self, key: str, section: str = 'global') -> bool:
        return key in self.get_section(section)

    def clear_cache(self) -> None:
        """Re-read the file on the next lookup."""
        self._parsed = None


# Shared instance used by plotpipe.config.unified
static_config = StaticConfigManager()


def get_static_value(key: str, section: str = 'global', default: Any = None) -> Any:
    return static_config.get_value(key, section, default)


def get_static_section(section: str) -> Dict[str, Any]:
    return static_config.get_section(section)
