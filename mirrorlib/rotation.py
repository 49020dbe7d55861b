"""
Size-bounded log rotation.

A log that has grown to the size limit is renamed to the lowest free
numbered archive name (hash_log.txt -> hash_log-1.txt, hash_log-2.txt, ...),
so the next write to the original name starts a fresh file.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Union

from treekit.paths import numbered_path, next_numbered_path
from .errors import RotationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LOG_SIZE = 50 * 1024 * 1024


def archive_path_for(log_path: Union[str, Path], number: int) -> Path:
    """Return the archive name with the given number for log_path."""
    return numbered_path(log_path, number)


def next_archive_path(log_path: Union[str, Path]) -> Path:
    """Return the lowest-numbered archive name for log_path not yet on disk."""
    return next_numbered_path(log_path)


def rotate_if_needed(log_path: Union[str, Path], max_size_bytes: int = DEFAULT_MAX_LOG_SIZE) -> Optional[Path]:
    """
    Rotate a log file aside if it has reached the size limit.

    Args:
        log_path: Path to the active log file
        max_size_bytes: Size at or above which the file is rotated

    Returns:
        Path of the archive the log was renamed to, or None if no rotation
        was needed (including when the log does not exist)

    Raises:
        ValueError: If max_size_bytes is not positive
        RotationError: If the rename fails
    """
    if max_size_bytes <= 0:
        raise ValueError(f"max_size_bytes must be positive, got {max_size_bytes}")

    log_path = Path(log_path)
    try:
        size = log_path.stat().st_size
    except FileNotFoundError:
        return None

    if size < max_size_bytes:
        return None

    archive_path = next_archive_path(log_path)
    try:
        os.rename(log_path, archive_path)
    except OSError as e:
        raise RotationError(log_path, archive_path, e) from e

    logger.info(f"Rotated {log_path.name} ({size} bytes) to {archive_path.name}")
    return archive_path
