"""
Persistent record of files already confirmed identical.

The checkpoint file holds one relative path per line and is only ever
appended to. Names that are not valid UTF-8 are stored as their original
bytes (surrogateescape), so every key read back matches the key written.
Loading deduplicates, so a path appended twice (for example after an
interrupted run) is harmless.
"""

import logging
from pathlib import Path
from typing import Iterator, Set, Union

logger = logging.getLogger(__name__)


def load_checkpoint(checkpoint_path: Union[str, Path]) -> Set[str]:
    """
    Load the set of checkpointed relative paths.

    Args:
        checkpoint_path: Path to the checkpoint file

    Returns:
        Set of relative paths; empty if the file does not exist
    """
    path_obj = Path(checkpoint_path)
    entries = set()

    if not path_obj.exists():
        logger.debug(f"No checkpoint at {path_obj}, starting fresh")
        return entries

    with open(path_obj, 'r', encoding='utf-8', errors='surrogateescape') as f:
        for line in f:
            # Only the terminator; spaces belong to the file name
            line = line.rstrip('\r\n')
            if line:
                entries.add(line)

    logger.info(f"Loaded {len(entries)} checkpointed files from {path_obj}")
    return entries


def append_checkpoint(checkpoint_path: Union[str, Path], rel_path: str) -> None:
    """
    Append one relative path to the checkpoint file.

    Args:
        checkpoint_path: Path to the checkpoint file
        rel_path: Relative path confirmed identical
    """
    path_obj = Path(checkpoint_path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    with open(path_obj, 'a', encoding='utf-8', errors='surrogateescape') as f:
        f.write(rel_path + '\n')
        f.flush()


class CheckpointStore:
    """In-memory view of a checkpoint file that writes through on add."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._entries: Set[str] = set()

    def load(self) -> Set[str]:
        """Read the checkpoint file, replacing the in-memory set."""
        self._entries = load_checkpoint(self.path)
        return set(self._entries)

    def add(self, rel_path: str) -> bool:
        """
        Record a relative path as verified.

        Returns:
            True if the path was appended, False if it was already present
        """
        if rel_path in self._entries:
            return False
        append_checkpoint(self.path, rel_path)
        self._entries.add(rel_path)
        return True

    def __contains__(self, rel_path: str) -> bool:
        return rel_path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
