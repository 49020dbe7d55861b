"""
Logging utilities for treekit.

This module provides a colored console formatter and a standardized logger
setup with console and optional file output.
"""

import sys
import logging
from pathlib import Path
from typing import Optional, Union

from colorama import Fore, Style, init as colorama_init

# Default log format
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Default log level
DEFAULT_LOG_LEVEL = logging.INFO

# Translate ANSI codes on Windows consoles
colorama_init()


class ColoredFormatter(logging.Formatter):
    """
    A console formatter for clean, colored output.

    INFO messages are printed as-is, warnings and errors are colored, and
    debug messages get a DEBUG: prefix. With a format string the message is
    formatted normally first and then colored by level.
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    def __init__(self, fmt: str = None, datefmt: str = None, use_colors: bool = True):
        """
        Initialize the formatter.

        Args:
            fmt: Log format string (None = bare message)
            datefmt: Date format string
            use_colors: Whether to use colors
        """
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors
        self.plain = fmt is None

    def format(self, record):
        if self.plain:
            message = record.getMessage()
            if record.levelno == logging.DEBUG:
                message = f"DEBUG: {message}"
            elif record.levelno >= logging.CRITICAL:
                message = f"{record.levelname}: {message}"
            if record.exc_info:
                message = f"{message}\n{self.formatException(record.exc_info)}"
        else:
            message = super().format(record)

        if self.use_colors and record.levelno in self.COLORS:
            message = f"{self.COLORS[record.levelno]}{message}{Style.RESET_ALL}"

        return message


def setup_logger(
    name: Optional[str] = 'treekit',
    level: int = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = DEFAULT_LOG_FORMAT,
    use_colors: bool = True
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name (None = root logger)
        level: Logging level
        log_file: Path to log file (optional)
        log_format: Log format string (None = bare console messages; the
            log file always gets DEFAULT_LOG_FORMAT then)
        use_colors: Whether to use colors in console output

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(log_format, use_colors=use_colors and sys.stderr.isatty())
    )
    logger.addHandler(console_handler)

    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(file_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def set_log_level(
    logger: Union[logging.Logger, str],
    level: Union[int, str]
) -> None:
    """
    Set the log level for a logger and all of its handlers.

    Args:
        logger: Logger or logger name
        level: Log level (can be int or string like 'DEBUG', 'INFO', etc.)
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)

    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
