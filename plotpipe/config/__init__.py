"""
Configuration package: static TOML settings plus runtime overrides.
"""

from plotpipe.config.unified import (
    ConfigManager,
    clear_runtime_overrides,
    get_config,
    get_config_section,
    get_static_config,
    set_runtime_override
)

__all__ = [
    'ConfigManager',
    'clear_runtime_overrides',
    'get_config',
    'get_config_section',
    'get_static_config',
    'set_runtime_override'
]
