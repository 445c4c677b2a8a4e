"""
Logging configuration shared by the library and the gallery.
"""

from plotpipe.utilities.configuration.logging_config import (
    LoggingConfig,
    get_log_directory,
    get_logger,
    get_logging_config,
    setup_debug_logging,
    setup_module_logging,
    setup_page_logging,
    setup_utility_logging
)

__all__ = [
    'LoggingConfig',
    'get_log_directory',
    'get_logger',
    'get_logging_config',
    'setup_debug_logging',
    'setup_module_logging',
    'setup_page_logging',
    'setup_utility_logging'
]
