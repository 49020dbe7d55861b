"""
mirrorcheck - Mirror a directory tree and verify the copy by content hash.

Usage:
    mirrorcheck OPERATION --src SOURCE --dst DESTINATION --log-dir LOGDIR [OPTIONS]

Operations:
    RUN                Mirror with robocopy, then verify every file by hash
    MIRROR             Run only the mirror phase
    VERIFY             Run only the verification phase (resumable)
    CONFIG             View or modify configuration settings

Exit status:
    0  success
    1  verification found problems (or another error occurred)
    2  mirror phase failed
    3  mirror phase and verification both failed
    4  source directory not found
"""

import logging

# Version information
__version__ = "0.2.0"

# Set up package-level logger
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Don't add handlers here - they are configured by mirrorcheck.py's setup_logging

# Import core functionality
from .mirrorcheck import main

__all__ = ['main']
