"""
Invocation of the external mirroring tool.

The copy itself is done by robocopy (or a compatible executable); this module
only builds its argument list, runs it, and classifies the exit code.
Robocopy exit codes are bit flags: 0 means nothing needed copying, 1 means
files were copied, 2 and 3 add "extra files found in destination", and 8 or
above means some copies failed.
"""

import subprocess
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from treekit.utils.compat import is_windows
from .errors import MirrorInvocationError

logger = logging.getLogger(__name__)

DEFAULT_MIRROR_COMMAND = 'robocopy'
DEFAULT_SUCCESS_THRESHOLD = 3


class MirrorStatus(Enum):
    """How the mirror phase ended."""
    SUCCESS = "success"
    SUCCESS_WITH_WARNINGS = "success_with_warnings"
    FAILURE = "failure"


@dataclass
class MirrorOptions:
    """Settings passed to the copy tool."""
    command: str = DEFAULT_MIRROR_COMMAND
    retries: int = 5
    retry_wait: int = 5
    inter_packet_gap: int = 0
    success_threshold: int = DEFAULT_SUCCESS_THRESHOLD


@dataclass
class MirrorResult:
    """Exit code and classification of one mirror invocation."""
    exit_code: int
    status: MirrorStatus
    command: List[str] = field(default_factory=list)

    @property
    def is_successful(self) -> bool:
        return self.status != MirrorStatus.FAILURE


def build_mirror_command(
    source: Union[str, Path],
    dest: Union[str, Path],
    log_file: Union[str, Path],
    options: Optional[MirrorOptions] = None
) -> List[str]:
    """
    Build the argument list for a robocopy mirror run.

    Selected behavior: copy subdirectories including empty ones, keep data,
    attributes and timestamps (also on directories), retry failed copies,
    throttle with an inter-packet gap, skip files whose destination copy is
    not older, leave directory names out of the output, and tee the output
    to the console while appending it to log_file.

    Args:
        source: Source directory
        dest: Destination directory
        log_file: File the tool appends its own log to
        options: Retry and throttling settings

    Returns:
        Command as a list of arguments
    """
    if options is None:
        options = MirrorOptions()

    return [
        options.command,
        str(source),
        str(dest),
        '/E',
        '/COPY:DAT',
        '/DCOPY:T',
        f'/R:{options.retries}',
        f'/W:{options.retry_wait}',
        f'/IPG:{options.inter_packet_gap}',
        '/XO',
        '/NDL',
        '/TEE',
        f'/LOG+:{log_file}',
    ]


def classify_exit_code(exit_code: int, success_threshold: int = DEFAULT_SUCCESS_THRESHOLD) -> MirrorStatus:
    """
    Classify a copy tool exit code.

    Codes 0 and 1 are clean successes, codes from 2 up to the threshold are
    successes with warnings (extra files in the destination), anything
    negative or above the threshold is a failure.
    """
    if exit_code < 0 or exit_code > success_threshold:
        return MirrorStatus.FAILURE
    if exit_code <= 1:
        return MirrorStatus.SUCCESS
    return MirrorStatus.SUCCESS_WITH_WARNINGS


def run_mirror(
    source: Union[str, Path],
    dest: Union[str, Path],
    log_file: Union[str, Path],
    options: Optional[MirrorOptions] = None,
    dry_run: bool = False
) -> MirrorResult:
    """
    Run the copy tool once and classify its exit code.

    The tool inherits the console, so its tee'd output is shown as it runs.

    Args:
        source: Source directory
        dest: Destination directory
        log_file: File the tool appends its own log to
        options: Copy tool settings
        dry_run: Only log the command that would run

    Returns:
        MirrorResult with exit code and status

    Raises:
        MirrorInvocationError: If the tool cannot be started
    """
    if options is None:
        options = MirrorOptions()

    cmd = build_mirror_command(source, dest, log_file, options)
    logger.info(f"Mirror command: {subprocess.list2cmdline(cmd)}")

    if dry_run:
        logger.info("[DRY RUN] Mirror command not executed")
        return MirrorResult(exit_code=0, status=MirrorStatus.SUCCESS, command=cmd)

    if options.command == DEFAULT_MIRROR_COMMAND and not is_windows():
        logger.warning("robocopy is only available on Windows")

    try:
        completed = subprocess.run(cmd, check=False)
    except OSError as e:
        raise MirrorInvocationError(options.command, e) from e

    status = classify_exit_code(completed.returncode, options.success_threshold)
    logger.debug(f"Mirror exit code {completed.returncode} classified as {status.value}")

    return MirrorResult(exit_code=completed.returncode, status=status, command=cmd)
