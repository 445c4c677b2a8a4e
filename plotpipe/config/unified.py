"""
Configuration lookups used throughout plotpipe.

Values resolve in order: a runtime override set in this process, then the
options file, then the default passed by the caller. Overrides let the
gallery and the tests switch palettes or export settings without touching
the TOML file.
"""

from typing import Any, Dict

from plotpipe.config.static_config import static_config


class ConfigManager:
    """Runtime overrides layered over the static options file."""

    def __init__(self):
        # "section.key" -> value
        self._overrides: Dict[str, Any] = {}

    @staticmethod
    def _slot(key: str, section: str) -> str:
        return f"{section}.{key}"

    def get(self, key: str, section: str = 'global', default: Any = None) -> Any:
        """
        Resolve ``[section] key``.

        Parameters
        ----------
        key : str
            Option name.
        section : str
            TOML table name.
        default : Any
            Used when neither an override nor the options file has a value.

        Returns
        -------
        Any
        """
        slot = self._slot(key, section)
        if slot in self._overrides:
            return self._overrides[slot]
        return static_config.get_value(key, section, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Copy of ``[section]`` with this section's overrides applied."""
        merged = dict(static_config.get_section(section))
        prefix = f"{section}."
        merged.update({
            slot[len(prefix):]: value
            for slot, value in self._overrides.items()
            if slot.startswith(prefix)
        })
        return merged

    def get_static(self, key: str, section: str = 'global', default: Any = None) -> Any:
        return static_config.get_value(key, section, default)

    def set_override(self, key: str, value: Any, section: str = 'global') -> None:
        self._overrides[self._slot(key, section)] = value

    def clear_override(self, key: str, section: str = 'global') -> None:
        self._overrides.pop(self._slot(key, section), None)

    def clear_all_overrides(self) -> None:
        self._overrides.clear()

    def get_all_overrides(self) -> Dict[str, Any]:
        return dict(self._overrides)


config = ConfigManager()


def get_config(key: str, section: str = 'global', default: Any = None) -> Any:
    """
    Resolve a configuration value (override, then options file, then default).

    Examples
    --------
    >>> get_config('qualitative_palette', 'plotting', 'Set2')
    'Set2'
    """
    return config.get(key, section, default)


def get_static_config(key: str, section: str = 'global', default: Any = None) -> Any:
    """The options-file value, ignoring runtime overrides."""
    return config.get_static(key, section, default)


def get_config_section(section: str) -> Dict[str, Any]:
    return config.get_section(section)


def set_runtime_override(key: str, value: Any, section: str = 'global') -> None:
    """Override ``[section] key`` for the rest of the process."""
    config.set_override(key, value, section)


def clear_runtime_overrides() -> None:
    config.clear_all_overrides()
