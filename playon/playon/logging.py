"""
Centralized logging and error handling for PlayOn.

This module provides consistent logging configuration and custom exceptions
across the entire application.
"""

import logging
from contextlib import contextmanager
from typing import Optional, Union
from rich.logging import RichHandler
from rich.console import Console

from .constants import DEFAULT_LOG_FILE

# Global console instance for the entire application
console = Console()


class PlayOnError(Exception):
    """Base exception for all PlayOn-specific errors."""
    pass


class ConfigError(PlayOnError):
    """Raised when there's a configuration-related error."""
    pass


class APIError(PlayOnError):
    """Raised when an external API call fails."""
    pass


class CatalogSearchError(APIError):
    """Raised when a catalog search fails in transport or returns something unreadable."""
    pass


class WindowAccessError(PlayOnError):
    """Raised when window titles cannot be read on this platform."""
    pass


class PlayOnLogger:
    """
    Centralized logging configuration for PlayOn.

    Full detail goes to a UTF-8 log file; warnings and errors go to the
    console through rich.
    """

    def __init__(self, log_file: str = DEFAULT_LOG_FILE):
        self.log_file = log_file
        self.console = console
        self.file_handler: Optional[logging.FileHandler] = None
        self.console_handler: Optional[RichHandler] = None
        self._setup_root_logger()

    def _create_file_handler(self, level: int = logging.INFO) -> logging.FileHandler:
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # UTF-8 so titles in any script survive on Windows
        file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        return file_handler

    def _setup_root_logger(self) -> None:
        """Configure the root logger with file and console handlers."""
        self.file_handler = self._create_file_handler()

        self.console_handler = RichHandler(
            console=self.console,
            show_path=False,
            show_time=True,
            show_level=True,
            markup=False,
            keywords=[]
        )
        self.console_handler.setLevel(logging.WARNING)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)

        # Clear existing handlers to avoid duplicates
        root_logger.handlers = []
        root_logger.addHandler(self.file_handler)
        root_logger.addHandler(self.console_handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def set_log_file(self, log_file: str) -> None:
        """
        Redirect file logging to a new path, keeping the current file level.

        Modules configure logging at import time with the default path, so
        the configured path can only be applied afterwards.
        """
        root_logger = logging.getLogger()
        level = self.file_handler.level
        root_logger.removeHandler(self.file_handler)
        self.file_handler.close()

        self.log_file = log_file
        self.file_handler = self._create_file_handler(level)
        root_logger.addHandler(self.file_handler)

    def handler_for(self, handler_type: str) -> logging.Handler:
        """Returns this logger's 'console' or 'file' handler."""
        return self.console_handler if handler_type == "console" else self.file_handler

    def _set_handler_level(self, handler: logging.Handler, level: Union[str, int]) -> None:
        root_logger = logging.getLogger()
        numeric_level = _to_numeric_level(level)

        # Ensure root logger allows this level
        if numeric_level < root_logger.level:
            root_logger.setLevel(numeric_level)

        handler.setLevel(numeric_level)

    def set_console_level(self, level: Union[str, int]) -> None:
        """
        Set the console logging level.

        Args:
            level: Logging level (e.g., 'DEBUG', 'INFO', 'WARNING')
        """
        self._set_handler_level(self.console_handler, level)

    def set_file_level(self, level: Union[str, int]) -> None:
        """
        Set the file logging level.

        Args:
            level: Logging level (e.g., 'DEBUG', 'INFO', 'WARNING')
        """
        self._set_handler_level(self.file_handler, level)


def _to_numeric_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


# Global logger instance
_logger_instance: Optional[PlayOnLogger] = None


def setup_logging(log_file: Optional[str] = None) -> PlayOnLogger:
    """
    Set up the global logging configuration.

    Args:
        log_file: Path to the log file. If logging is already set up with a
            different path, file logging moves to this one. None keeps the
            current path (or the default on first setup).

    Returns:
        The configured PlayOnLogger instance
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = PlayOnLogger(log_file or DEFAULT_LOG_FILE)
    elif log_file and log_file != _logger_instance.log_file:
        _logger_instance.set_log_file(log_file)
    return _logger_instance


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    This should be called in each module as:
        from playon.playon.logging import get_logger
        logger = get_logger(__name__)
    """
    if _logger_instance is None:
        setup_logging()
    return logging.getLogger(name)


def set_log_level(level: Union[str, int], handler_type: str = "both") -> None:
    """
    Set the logging level for console, file, or both handlers.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'WARNING', 'ERROR')
        handler_type: 'console', 'file', or 'both'
    """
    if _logger_instance is None:
        setup_logging()

    if handler_type in ("console", "both"):
        _logger_instance.set_console_level(level)
    if handler_type in ("file", "both"):
        _logger_instance.set_file_level(level)


@contextmanager
def temporary_log_level(level: Union[str, int], handler_type: str = "console"):
    """
    Temporarily change the log level.

    Usage:
        with temporary_log_level("DEBUG"):
            ...
    """
    if _logger_instance is None:
        setup_logging()

    root_logger = logging.getLogger()
    target = _logger_instance.handler_for(handler_type)
    numeric_level = _to_numeric_level(level)

    previous_root_level = root_logger.level
    previous_level = target.level
    target.setLevel(numeric_level)
    # The root logger must let the records through to the handler
    if numeric_level < previous_root_level:
        root_logger.setLevel(numeric_level)

    try:
        yield
    finally:
        root_logger.setLevel(previous_root_level)
        target.setLevel(previous_level)


def log_api_call(url: str, method: str, params: Optional[dict] = None) -> None:
    """
    Log an API call with sensitive data masking.
    Logs at DEBUG level.
    """
    logger = logging.getLogger("playon.api")

    # Quick check to avoid processing if not debug
    if not logger.isEnabledFor(logging.DEBUG):
        return

    safe_params = "None"
    if params:
        masked = params.copy()
        keys_to_mask = ['api_key', 'token', 'password', 'secret', 'key']
        for k in masked:
            if isinstance(k, str) and any(m in k.lower() for m in keys_to_mask):
                masked[k] = "********"
        safe_params = str(masked)

    logger.debug(f"API CALL: {method} {url} | Params: {safe_params}")


__all__ = [
    "console",
    "PlayOnError",
    "ConfigError",
    "APIError",
    "CatalogSearchError",
    "WindowAccessError",
    "PlayOnLogger",
    "setup_logging",
    "get_logger",
    "set_log_level",
    "temporary_log_level",
    "log_api_call",
]
