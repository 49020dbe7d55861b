"""
Compatibility utilities for cross-platform operations.

The external copy tool used for mirroring only exists on Windows; these
checks let callers warn early instead of failing on a missing executable.
"""

import platform
import logging

# Set up module-level logger
logger = logging.getLogger(__name__)

# Detect platform
PLATFORM = platform.system().lower()


def is_windows() -> bool:
    """
    Check if the current platform is Windows.

    Returns:
        bool: True if Windows, False otherwise
    """
    return PLATFORM == 'windows'

