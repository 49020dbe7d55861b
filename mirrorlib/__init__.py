"""
mirrorlib - Library for verifying mirrored directory trees.

This package runs the external mirroring step, then checks the copy by
content hash with a resumable checkpoint and a size-bounded hash log.
"""

import logging

# Set up package-level logger
logger = logging.getLogger(__name__)

# Import core functionality
from .errors import (
    MirrorCheckError,
    SourceMissingError,
    MirrorInvocationError,
    RotationError
)

from .rotation import (
    DEFAULT_MAX_LOG_SIZE,
    archive_path_for,
    next_archive_path,
    rotate_if_needed
)

from .checkpoint import (
    CheckpointStore,
    load_checkpoint,
    append_checkpoint
)

from .verification import (
    VerificationStatus,
    FileOutcome,
    VerificationReport,
    HashLog,
    verify_mirror
)

from .mirror import (
    MirrorOptions,
    MirrorResult,
    MirrorStatus,
    build_mirror_command,
    classify_exit_code,
    run_mirror
)

__version__ = '0.2.0'

# __all__ defines the public API
__all__ = [
    # Version
    '__version__',

    # Errors
    'MirrorCheckError',
    'SourceMissingError',
    'MirrorInvocationError',
    'RotationError',

    # Rotation
    'DEFAULT_MAX_LOG_SIZE',
    'archive_path_for',
    'next_archive_path',
    'rotate_if_needed',

    # Checkpoint
    'CheckpointStore',
    'load_checkpoint',
    'append_checkpoint',

    # Verification
    'VerificationStatus',
    'FileOutcome',
    'VerificationReport',
    'HashLog',
    'verify_mirror',

    # Mirroring
    'MirrorOptions',
    'MirrorResult',
    'MirrorStatus',
    'build_mirror_command',
    'classify_exit_code',
    'run_mirror'
]
