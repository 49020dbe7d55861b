"""
File and directory hashing utilities.

This module calculates content hashes for single files and builds a mapping
from relative path to hash for a whole directory tree. Per-file failures are
collected instead of aborting the walk, so callers decide how to treat an
unreadable file.
"""

import os
import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .paths import relative_key

# Set up module-level logger
logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS = ('MD5', 'SHA1', 'SHA256', 'SHA512')
DEFAULT_ALGORITHM = 'SHA256'
DEFAULT_BUFFER_SIZE = 65536


class FileHashError(Exception):
    """Raised when a single file cannot be read for hashing."""

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot hash {self.path}: {cause}")


class DirectoryNotFoundError(Exception):
    """Raised when the root of a tree to index does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Directory does not exist or is not a directory: {self.path}")


@dataclass
class HashIndex:
    """Hashes for every readable file under a root, plus per-file failures."""
    root: Path
    algorithm: str
    hashes: Dict[str, str] = field(default_factory=dict)
    errors: List[Tuple[str, FileHashError]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def __contains__(self, key: str) -> bool:
        return key in self.hashes

    def __len__(self) -> int:
        return len(self.hashes)

    @property
    def failed_keys(self) -> set:
        return {key for key, _ in self.errors}


def normalize_algorithm(algorithm: str) -> str:
    """
    Validate a hash algorithm name and return its canonical spelling.

    Args:
        algorithm: Algorithm name, any case (e.g. 'sha256')

    Returns:
        Upper-case algorithm name

    Raises:
        ValueError: If the algorithm is not supported
    """
    alg_normalized = (algorithm or '').upper().replace('-', '')
    if alg_normalized not in SUPPORTED_ALGORITHMS:
        raise ValueError(
            f"Unsupported hash algorithm: {algorithm} "
            f"(choose from {', '.join(SUPPORTED_ALGORITHMS)})"
        )
    return alg_normalized


def _new_hash(algorithm: str):
    alg_normalized = normalize_algorithm(algorithm)
    if alg_normalized == 'MD5':
        return hashlib.md5()
    elif alg_normalized == 'SHA1':
        return hashlib.sha1()
    elif alg_normalized == 'SHA256':
        return hashlib.sha256()
    return hashlib.sha512()


def calculate_file_hash(
    file_path: Union[str, Path],
    algorithm: str = DEFAULT_ALGORITHM,
    buffer_size: int = DEFAULT_BUFFER_SIZE
) -> str:
    """
    Calculate the hash of a file's content.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm to use (MD5, SHA1, SHA256 or SHA512)
        buffer_size: Size of the buffer for reading the file in chunks

    Returns:
        Lower-case hex digest

    Raises:
        ValueError: If the algorithm is not supported
        FileHashError: If the file cannot be opened or read
    """
    hash_obj = _new_hash(algorithm)
    path_obj = Path(file_path)

    try:
        # Read file in chunks to keep memory flat for large files
        with open(path_obj, 'rb') as f:
            while True:
                data = f.read(buffer_size)
                if not data:
                    break
                hash_obj.update(data)
    except OSError as e:
        raise FileHashError(path_obj, e) from e

    return hash_obj.hexdigest()


def _collect_files(root: Path) -> List[Path]:
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        for filename in filenames:
            path = Path(dirpath) / filename
            # Skip sockets, fifos and dangling links
            if path.is_file():
                files.append(path)
    return files


def _hash_one(path: Path, root: Path, algorithm: str):
    key = relative_key(path, root)
    try:
        return key, calculate_file_hash(path, algorithm), None
    except FileHashError as e:
        return key, None, e


def build_hash_map(
    root: Union[str, Path],
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
    skip: Optional[Iterable[str]] = None,
    progress_callback: Optional[Callable[[int, int, str], None]] = None
) -> HashIndex:
    """
    Hash every regular file under a directory tree.

    Keys are paths relative to root (see relative_key). A file that cannot
    be read is recorded in HashIndex.errors and the walk continues. Files
    whose key is in skip are listed in HashIndex.skipped without being read.

    Args:
        root: Directory to index
        algorithm: Hash algorithm to use
        workers: Number of threads hashing files (1 = hash serially)
        skip: Relative keys to leave unhashed
        progress_callback: Optional callback(current, total, key)

    Returns:
        HashIndex with the hashes and any per-file errors

    Raises:
        ValueError: If the algorithm is not supported
        DirectoryNotFoundError: If root is missing or not a directory
    """
    algorithm = normalize_algorithm(algorithm)
    root_path = Path(root)

    if not root_path.is_dir():
        raise DirectoryNotFoundError(root_path)

    index = HashIndex(root=root_path, algorithm=algorithm)
    skip_keys = set(skip or ())
    files = []
    for file_path in _collect_files(root_path):
        key = relative_key(file_path, root_path)
        if key in skip_keys:
            index.skipped.append(key)
        else:
            files.append(file_path)
    total_files = len(files)
    logger.info(f"Calculating {algorithm} hashes for {total_files} files in {root_path}")

    def record(position, result):
        key, digest, error = result
        if error is not None:
            logger.warning(f"Failed to hash {key}: {error.cause}")
            index.errors.append((key, error))
        else:
            index.hashes[key] = digest

        if progress_callback:
            progress_callback(position, total_files, key)
        if position % 1000 == 0:
            logger.debug(f"Progress: {position}/{total_files} files hashed in {root_path}")

    if workers > 1 and total_files > 1:
        # Workers only compute; the map is filled here as results arrive in order
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = pool.map(lambda p: _hash_one(p, root_path, algorithm), files)
            for position, result in enumerate(results, 1):
                record(position, result)
    else:
        for position, file_path in enumerate(files, 1):
            record(position, _hash_one(file_path, root_path, algorithm))

    logger.debug(f"Hashed {len(index.hashes)} files in {root_path} ({len(index.errors)} failed)")
    return index
