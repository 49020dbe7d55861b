"""
Initialization file for the treekit.utils package.

This package provides platform and logging helpers for the treekit library.
"""

import logging

# Set up package-level logger
logger = logging.getLogger(__name__)

# Import module functions
from .compat import is_windows

from .logger import (
    setup_logger, set_log_level, ColoredFormatter,
    DEFAULT_LOG_FORMAT
)

# Define exported functions
__all__ = [
    # Compatibility functions
    'is_windows',

    # Logger functions
    'setup_logger', 'set_log_level', 'ColoredFormatter',
    'DEFAULT_LOG_FORMAT'
]
