"""
Path utilities for tree comparison.

Keys used to correlate files across two trees, and helpers for picking
numbered sibling names that do not collide with existing files.
"""

import os
import logging
from pathlib import Path
from typing import Union

# Set up module-level logger
logger = logging.getLogger(__name__)


def relative_key(path: Union[str, Path], root: Union[str, Path]) -> str:
    """
    Get the key that identifies a file within a tree.

    The key is the path with the root prefix stripped, using the platform's
    native separator and never starting with a separator.

    Args:
        path: Path to a file under root
        root: Root directory of the tree

    Returns:
        Relative path string

    Raises:
        ValueError: If path is not located under root
    """
    rel_path = Path(path).relative_to(Path(root))
    return str(rel_path).lstrip(os.sep)


def numbered_path(path: Union[str, Path], number: int, separator: str = '-') -> Path:
    """
    Build a sibling of path with a number inserted before the extension.

    Example: numbered_path('logs/run.txt', 2) -> logs/run-2.txt

    Args:
        path: Original path
        number: Number to insert
        separator: Text placed between the stem and the number

    Returns:
        Numbered sibling path
    """
    path_obj = Path(path)
    return path_obj.parent / f"{path_obj.stem}{separator}{number}{path_obj.suffix}"


def next_numbered_path(path: Union[str, Path], separator: str = '-', start: int = 1) -> Path:
    """
    Find the lowest-numbered sibling of path that does not exist yet.

    Numbers are probed sequentially from start; gaps left by deleted files
    are reused.

    Args:
        path: Original path
        separator: Text placed between the stem and the number
        start: First number to try

    Returns:
        Numbered path that doesn't exist yet
    """
    counter = start

    while True:
        candidate = numbered_path(path, counter, separator)
        if not candidate.exists():
            return candidate
        counter += 1
