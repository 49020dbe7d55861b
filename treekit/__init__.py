"""
treekit - A small toolkit for hashing and comparing directory trees.

This package provides content hashing for single files and whole trees,
relative path handling, and logging helpers. It knows nothing about
mirroring; mirrorlib builds the verification workflow on top of it.
"""

import logging

# Set up package-level logger
logger = logging.getLogger(__name__)

# Don't add handlers here - applications configure the root logger

from .hashing import (
    SUPPORTED_ALGORITHMS,
    DEFAULT_ALGORITHM,
    FileHashError,
    DirectoryNotFoundError,
    HashIndex,
    normalize_algorithm,
    calculate_file_hash,
    build_hash_map,
)

from .paths import (
    relative_key,
    numbered_path,
    next_numbered_path,
)

__version__ = '0.2.0'

# __all__ defines the public API
__all__ = [
    # Version
    '__version__',

    # Hashing
    'SUPPORTED_ALGORITHMS',
    'DEFAULT_ALGORITHM',
    'FileHashError',
    'DirectoryNotFoundError',
    'HashIndex',
    'normalize_algorithm',
    'calculate_file_hash',
    'build_hash_map',

    # Paths
    'relative_key',
    'numbered_path',
    'next_numbered_path',
]
