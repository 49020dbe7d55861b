"""
Exception types raised by mirrorlib.

Verification findings (hash mismatches, files missing from the destination)
are reported in a VerificationReport and never raised.
"""

from pathlib import Path
from typing import Optional, Union


class MirrorCheckError(Exception):
    """Base class for mirrorlib errors."""


class SourceMissingError(MirrorCheckError):
    """The source root does not exist or is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Source directory not found: {self.path}")


class MirrorInvocationError(MirrorCheckError):
    """The external copy tool could not be started."""

    def __init__(self, command: str, cause: Optional[Exception] = None):
        self.command = command
        self.cause = cause
        message = f"Could not run mirror command '{command}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class RotationError(MirrorCheckError):
    """An oversize log file could not be renamed aside."""

    def __init__(self, log_path: Union[str, Path], archive_path: Union[str, Path], cause: Exception):
        self.log_path = Path(log_path)
        self.archive_path = Path(archive_path)
        self.cause = cause
        super().__init__(f"Failed to rotate {self.log_path} to {self.archive_path}: {cause}")
