"""
Verification of a mirrored directory tree.

This module compares the content hashes of a source tree and its mirror,
skipping files a previous run already confirmed, and records every outcome
in a size-bounded hash log. The checkpoint makes the pass resumable: an
interrupted run picks up where it stopped.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Union

from treekit.hashing import (
    DEFAULT_ALGORITHM,
    DirectoryNotFoundError,
    HashIndex,
    build_hash_map,
    normalize_algorithm,
)
from .checkpoint import CheckpointStore
from .errors import RotationError, SourceMissingError
from .rotation import DEFAULT_MAX_LOG_SIZE, rotate_if_needed

logger = logging.getLogger(__name__)

SUCCESS_BANNER = "All files verified successfully."


class VerificationStatus(Enum):
    """Outcome of comparing one source file with its mirror."""
    VERIFIED = "verified"
    MISMATCH = "mismatch"
    MISSING = "missing"


@dataclass
class FileOutcome:
    """Result of verifying a single relative path."""
    rel_path: str
    status: VerificationStatus
    source_hash: Optional[str] = None
    dest_hash: Optional[str] = None

    @property
    def log_line(self) -> str:
        if self.status == VerificationStatus.VERIFIED:
            return f"Verified: {self.rel_path}"
        elif self.status == VerificationStatus.MISMATCH:
            return f"Hash mismatch: {self.rel_path}"
        return f"Missing in destination: {self.rel_path}"


@dataclass
class VerificationReport:
    """Counts and error messages from one verification pass."""
    verified: int = 0
    mismatched: int = 0
    missing: int = 0
    skipped: int = 0
    hash_failures: int = 0
    errors: List[str] = field(default_factory=list)
    archives: List[Path] = field(default_factory=list)
    elapsed: float = 0.0

    def add_outcome(self, outcome: FileOutcome) -> None:
        """Count an outcome; findings also become error messages."""
        if outcome.status == VerificationStatus.VERIFIED:
            self.verified += 1
        elif outcome.status == VerificationStatus.MISMATCH:
            self.mismatched += 1
            self.errors.append(outcome.log_line)
        elif outcome.status == VerificationStatus.MISSING:
            self.missing += 1
            self.errors.append(outcome.log_line)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def is_successful(self) -> bool:
        """Check if the pass found no problems."""
        return not self.errors

    def get_summary(self) -> Dict[str, int]:
        """Get summary statistics."""
        return {
            "verified": self.verified,
            "mismatched": self.mismatched,
            "missing": self.missing,
            "skipped": self.skipped,
            "hash_failures": self.hash_failures,
            "errors": self.error_count,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the report."""
        return {
            "successful": self.is_successful,
            "summary": self.get_summary(),
            "errors": list(self.errors),
            "archives": [str(p) for p in self.archives],
            "elapsed_seconds": round(self.elapsed, 3),
        }


class HashLog:
    """
    Append-only text log kept under a size limit by rotation.

    Each write opens the file in append mode, so the log holds every line
    written before a crash. A rotation failure is logged and writing
    continues to the oversize file.
    """

    def __init__(self, path: Union[str, Path], max_size_bytes: int = DEFAULT_MAX_LOG_SIZE):
        if max_size_bytes <= 0:
            raise ValueError(f"max_size_bytes must be positive, got {max_size_bytes}")
        self.path = Path(path)
        self.max_size_bytes = max_size_bytes
        self.archives: List[Path] = []

    def rotate(self) -> Optional[Path]:
        """Rotate the log if it is at or over the limit."""
        try:
            archive = rotate_if_needed(self.path, self.max_size_bytes)
        except RotationError as e:
            logger.warning(f"{e} - continuing without rotation")
            return None

        if archive is not None:
            self.archives.append(archive)
        return archive

    def write(self, line: str) -> None:
        """Append one line, then rotate if the log is now oversize."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'a', encoding='utf-8', errors='surrogateescape') as f:
            f.write(line + '\n')
        self.rotate()


def _index_tree(root: Path, algorithm: str, workers: int, skip) -> HashIndex:
    return build_hash_map(root, algorithm=algorithm, workers=workers, skip=skip)


def _build_indexes(source_root: Path, dest_root: Path, algorithm: str,
                   parallel: bool, workers: int, skip):
    dest_exists = dest_root.is_dir()
    if not dest_exists:
        logger.warning(f"Destination directory not found: {dest_root} - treating it as empty")

    if parallel and dest_exists:
        # Both maps must be complete before the compare step reads them
        with ThreadPoolExecutor(max_workers=2) as pool:
            source_future = pool.submit(_index_tree, source_root, algorithm, workers, skip)
            dest_future = pool.submit(_index_tree, dest_root, algorithm, workers, skip)
            source_index = source_future.result()
            dest_index = dest_future.result()
    else:
        source_index = _index_tree(source_root, algorithm, workers, skip)
        if dest_exists:
            dest_index = _index_tree(dest_root, algorithm, workers, skip)
        else:
            dest_index = HashIndex(root=dest_root, algorithm=algorithm)

    return source_index, dest_index


def classify(rel_path: str, source_hash: str, dest_hashes: Dict[str, str],
             dest_failed: Optional[Set[str]] = None) -> FileOutcome:
    """
    Classify one source file against the destination index.

    A destination file that exists but could not be hashed counts as a
    mismatch, since its content cannot be confirmed equal.
    """
    if rel_path in dest_hashes:
        dest_hash = dest_hashes[rel_path]
        if source_hash == dest_hash:
            return FileOutcome(rel_path, VerificationStatus.VERIFIED, source_hash, dest_hash)
        return FileOutcome(rel_path, VerificationStatus.MISMATCH, source_hash, dest_hash)

    if dest_failed and rel_path in dest_failed:
        return FileOutcome(rel_path, VerificationStatus.MISMATCH, source_hash, None)

    return FileOutcome(rel_path, VerificationStatus.MISSING, source_hash, None)


def verify_mirror(
    source_root: Union[str, Path],
    dest_root: Union[str, Path],
    checkpoint_path: Union[str, Path],
    log_path: Union[str, Path],
    max_log_size: int = DEFAULT_MAX_LOG_SIZE,
    algorithm: str = DEFAULT_ALGORITHM,
    parallel: bool = False,
    workers: int = 1,
    progress_callback: Optional[Callable[[int, int, str], None]] = None
) -> VerificationReport:
    """
    Verify that every source file exists in the destination with equal content.

    Files listed in the checkpoint are skipped without any comparison or log
    line. Every other source file produces exactly one outcome: verified
    (appended to the checkpoint), hash mismatch, or missing in destination.
    Files that only exist in the destination are not examined.

    Args:
        source_root: Root of the source tree
        dest_root: Root of the mirrored tree
        checkpoint_path: File recording already verified relative paths
        log_path: Hash log file to append outcomes to
        max_log_size: Size in bytes at which the hash log is rotated
        algorithm: Hash algorithm (MD5, SHA1, SHA256 or SHA512)
        parallel: Build the source and destination maps concurrently
        workers: Threads per tree used for hashing files
        progress_callback: Optional callback(current, total, rel_path)

    Returns:
        VerificationReport with counts and error messages

    Raises:
        SourceMissingError: If the source root is missing or not a directory
        ValueError: If the algorithm or max_log_size is invalid
    """
    start_time = time.time()
    source_root = Path(source_root)
    dest_root = Path(dest_root)
    algorithm = normalize_algorithm(algorithm)

    if not source_root.is_dir():
        raise SourceMissingError(source_root)

    hash_log = HashLog(log_path, max_log_size)
    report = VerificationReport()

    # 1. Make room before the pass starts
    hash_log.rotate()

    # 2. What earlier runs already confirmed
    checkpoint = CheckpointStore(checkpoint_path)
    checkpoint.load()

    # 3. Hash both trees, leaving checkpointed files unread
    try:
        source_index, dest_index = _build_indexes(
            source_root, dest_root, algorithm, parallel, workers, skip=set(checkpoint)
        )
    except DirectoryNotFoundError as e:
        # Source vanished between the check above and the walk
        raise SourceMissingError(source_root) from e

    # A destination failure is not an error of its own: its source file is
    # reported as a mismatch, or not at all if it only exists in the destination
    failures = [("source", item) for item in source_index.errors]
    failures += [("destination", item) for item in dest_index.errors]
    for tree, (rel_path, error) in failures:
        message = f"Hash failure ({tree}): {rel_path}: {error.cause}"
        report.hash_failures += 1
        if tree == "source":
            report.errors.append(message)
        hash_log.write(message)
        logger.error(message)

    # 4. Compare every source file not already checkpointed
    report.skipped = len(source_index.skipped)
    dest_failed = dest_index.failed_keys
    total_files = len(source_index.hashes)
    for index, (rel_path, source_hash) in enumerate(source_index.hashes.items(), 1):
        if progress_callback:
            progress_callback(index, total_files, rel_path)

        if rel_path in checkpoint:
            continue

        outcome = classify(rel_path, source_hash, dest_index.hashes, dest_failed)
        if outcome.status == VerificationStatus.VERIFIED:
            checkpoint.add(rel_path)
            logger.debug(outcome.log_line)
        else:
            logger.warning(outcome.log_line)

        report.add_outcome(outcome)
        hash_log.write(outcome.log_line)

    # 5. Summary
    if report.is_successful:
        hash_log.write(SUCCESS_BANNER)
        logger.info(SUCCESS_BANNER)
    else:
        banner = f"Verification FAILED with {report.error_count} error(s):"
        hash_log.write(banner)
        logger.error(banner)
        for message in report.errors:
            hash_log.write(message)

    report.archives = list(hash_log.archives)
    report.elapsed = time.time() - start_time

    logger.info(
        f"Verification finished: {report.verified} verified, {report.mismatched} mismatched, "
        f"{report.missing} missing, {report.skipped} skipped"
    )
    return report
