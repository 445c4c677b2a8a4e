"""
Log sinks for the chart library and the gallery.

Library modules log through the shared loguru logger; this module decides
where those records end up. Every area of plotpipe (a gallery page, a
plotting utility, a debug session) gets its own rotating file in the log
directory, with rotation, retention and level read from ``[logging]``.
"""

import os
import pathlib
from typing import Dict, Optional, Tuple

from loguru import logger

from plotpipe.config.unified import get_config

# module type -> (file name pattern, level, rotation, retention);
# None falls back to the [logging] config
SINK_PROFILES: Dict[str, Tuple[str, Optional[str], Optional[str], Optional[str]]] = {
    "page": ("page_{name}_error", None, None, None),
    "utility": ("utility_{name}_error", None, None, None),
    "debug": ("debug_{name}", "DEBUG", "5 MB", "3 days"),
}


def default_log_dir() -> pathlib.Path:
    """``$PLOTPIPE_LOG_DIR`` when set, else ``~/.plotpipe/logs``."""
    env_dir = os.environ.get("PLOTPIPE_LOG_DIR")
    if env_dir:
        return pathlib.Path(env_dir)
    return pathlib.Path.home() / ".plotpipe" / "logs"


class LoggingConfig:
    """
    Owner of plotpipe's file sinks.

    Sinks are keyed by file path, so asking twice for the same page or
    utility log adds a single sink.
    """

    DEFAULT_ROTATION = "10 MB"
    DEFAULT_RETENTION = "10 days"
    DEFAULT_LEVEL = "WARNING"
    RECORD_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"

    def __init__(self, base_log_dir: Optional[pathlib.Path] = None):
        """
        Parameters
        ----------
        base_log_dir : pathlib.Path, optional
            Where log files are written; see :func:`default_log_dir`.
        """
        self.log_dir = pathlib.Path(base_log_dir) if base_log_dir is not None else default_log_dir()
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._sinks: Dict[str, int] = {}

    def setup_logger(self, log_name: str, level: Optional[str] = None,
                     rotation: Optional[str] = None, retention: Optional[str] = None,
                     format_string: Optional[str] = None) -> None:
        """
        Add a rotating file sink ``<log_dir>/<log_name>.log``.

        Parameters
        ----------
        log_name : str
            File name without the ``.log`` suffix.
        level, rotation, retention : str, optional
            loguru sink settings; missing ones come from ``[logging]``.
        format_string : str, optional
            Record format, :attr:`RECORD_FORMAT` by default.
        """
        path = self.log_dir / f"{log_name}.log"
        if str(path) in self._sinks:
            return

        self._sinks[str(path)] = logger.add(
            path,
            level=level or get_config('level', 'logging', self.DEFAULT_LEVEL),
            rotation=rotation or get_config('rotation', 'logging', self.DEFAULT_ROTATION),
            retention=retention or get_config('retention', 'logging', self.DEFAULT_RETENTION),
            format=format_string or self.RECORD_FORMAT
        )

    def setup_module_logging(self, module_type: str, module_name: str) -> None:
        """
        Add the sink for one area of the package.

        Parameters
        ----------
        module_type : str
            One of the :data:`SINK_PROFILES` keys ('page', 'utility', 'debug').
        module_name : str
            Page or utility name, used in the file name.
        """
        if module_type not in SINK_PROFILES:
            raise ValueError(f"Unknown module_type: {module_type}")
        pattern, level, rotation, retention = SINK_PROFILES[module_type]
        self.setup_logger(pattern.format(name=module_name), level, rotation, retention)

    def remove_all(self) -> None:
        """Detach every sink added through this config."""
        for sink_id in self._sinks.values():
            try:
                logger.remove(sink_id)
            except ValueError:
                # Already removed elsewhere
                continue
        self._sinks.clear()

    def get_log_directory(self) -> pathlib.Path:
        return self.log_dir

    def list_log_files(self) -> list[pathlib.Path]:
        return sorted(self.log_dir.glob("*.log"))


_logging_config: Optional[LoggingConfig] = None


def get_logging_config() -> LoggingConfig:
    """Process-wide :class:`LoggingConfig`, created on first use."""
    global _logging_config
    if _logging_config is None:
        _logging_config = LoggingConfig()
    return _logging_config


def setup_module_logging(module_type: str, module_name: str) -> None:
    get_logging_config().setup_module_logging(module_type, module_name)


def setup_page_logging(page_name: str) -> None:
    """Error log for one gallery page."""
    get_logging_config().setup_module_logging("page", page_name)


def setup_utility_logging(utility_name: str) -> None:
    """Error log for one library area (plotting, widgets, ...)."""
    get_logging_config().setup_module_logging("utility", utility_name)


def setup_debug_logging(module_name: str) -> None:
    """Verbose short-lived log while investigating one module."""
    get_logging_config().setup_module_logging("debug", module_name)


def get_log_directory() -> pathlib.Path:
    return get_logging_config().get_log_directory()


def get_logger():
    """
    The shared loguru logger.

    Returns
    -------
    loguru.Logger
    """
    return logger
