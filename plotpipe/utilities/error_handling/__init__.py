"""
Error handling for plotpipe.

Library code raises the exceptions defined in ``exceptions``; the gallery
is the only layer that catches them, logs them and shows a message to the
person browsing the vignettes.
"""

import functools
from typing import Any, Callable

from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import (
    ChartSpecError,
    EncodingError,
    PlotpipeError,
    RenderHookError,
    SubplotError
)

# Severities whose log record carries the traceback
TRACEBACK_SEVERITIES = ('error', 'critical')


class StandardErrorHandler:
    """
    Logs a caught error at a severity and optionally displays it in streamlit.

    Mistakes in the caller's data (a misspelt column, mismatched encoding
    lengths) are shown but not logged: they say nothing about plotpipe.
    """

    USER_DATA_INDICATORS = (
        'missing column', 'not found in data', 'length', 'encoding',
        'no data', 'invalid format'
    )

    def __init__(self):
        self.logger = get_logger()

    def handle_error(self, error: Exception, context: str = "",
                     severity: str = "error", show_user: bool = True) -> str:
        """
        Log and display one error.

        Parameters
        ----------
        error : Exception
            The caught error.
        context : str
            What was being done, prefixed to the message.
        severity : str
            'debug', 'info', 'warning', 'error' or 'critical'.
        show_user : bool
            Display the message in the running streamlit app.

        Returns
        -------
        str
            The message that was logged and shown.
        """
        message = f"{context}: {error}" if context else str(error)

        if self._should_log_error(error, context):
            log = self.logger.opt(exception=error) if severity in TRACEBACK_SEVERITIES \
                else self.logger
            getattr(log, severity, log.error)(message)

        if show_user:
            self._show_user(message, severity)
        return message

    def _show_user(self, message: str, severity: str) -> None:
        import streamlit as st

        if severity in TRACEBACK_SEVERITIES:
            st.error(f"An error occurred: {message}", icon=":material/error:")
        elif severity == 'warning':
            st.warning(f"Warning: {message}", icon=":material/warning:")
        elif severity == 'info':
            st.info(message, icon=":material/info:")

    def _should_log_error(self, error: Exception, context: str) -> bool:
        """False for problems with the caller's data, True otherwise."""
        if isinstance(error, EncodingError):
            return False
        text = f"{error} {context}".lower()
        return not any(indicator in text for indicator in self.USER_DATA_INDICATORS)


error_handler = StandardErrorHandler()


def with_error_handling(context: str = "", severity: str = "error",
                        show_user: bool = True, fallback: Any = None):
    """
    Decorator turning a raised ``PlotpipeError`` into a handled message.

    Other exceptions propagate unchanged.

    Parameters
    ----------
    context : str
        Message prefix; the function name when empty.
    severity : str
        Severity passed to :meth:`StandardErrorHandler.handle_error`.
    show_user : bool
        Display the message in streamlit.
    fallback : Any
        Value returned in place of the failed call.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except PlotpipeError as e:
                error_handler.handle_error(e, context or func.__name__, severity, show_user)
                return fallback
        return wrapper
    return decorator


__all__ = [
    'ChartSpecError',
    'EncodingError',
    'PlotpipeError',
    'RenderHookError',
    'StandardErrorHandler',
    'SubplotError',
    'error_handler',
    'with_error_handling'
]
