"""
VERIFY operation handler for mirrorcheck.

Compares source and destination by hash, resuming from the checkpoint in
the log directory, and prints a summary of the pass.
"""

import logging
from typing import Optional

from mirrorlib import SourceMissingError, VerificationReport, verify_mirror
from mirrorcheck.config import MirrorCheckConfig
from mirrorcheck.utils import (
    EXIT_SOURCE_MISSING,
    EXIT_SUCCESS,
    EXIT_VERIFY_FAILED,
    check_source,
    colorize,
    ensure_log_dir,
    format_duration,
    get_verify_settings,
    save_json,
)

logger = logging.getLogger(__name__)


def display_summary(report: VerificationReport, title: str = 'Verification Summary'):
    """Print the counts from a verification pass."""
    summary = report.get_summary()

    print(f"\n{colorize(title, 'BOLD')}:")
    print(f"  Verified:      {colorize(str(summary['verified']), 'GREEN')}")
    print(f"  Mismatched:    {colorize(str(summary['mismatched']), 'RED')}")
    print(f"  Missing:       {colorize(str(summary['missing']), 'RED')}")
    print(f"  Hash failures: {colorize(str(summary['hash_failures']), 'YELLOW')}")
    print(f"  Skipped:       {summary['skipped']} (already verified)")
    if report.archives:
        print(f"  Log rotations: {len(report.archives)}")
    print(f"  Elapsed:       {format_duration(report.elapsed)}")


def run_verification_phase(args, cfg, logger) -> Optional[VerificationReport]:
    """
    Verify the destination for the paths in args.

    Returns:
        The report, or None if the source directory is missing
    """
    settings = get_verify_settings(args, cfg)
    logger.info(f"Verifying {args.dst} against {args.src} ({settings['algorithm']})")
    logger.debug(f"Hash log: {settings['log_path']}")
    logger.debug(f"Checkpoint: {settings['checkpoint_path']}")

    try:
        report = verify_mirror(
            args.src,
            args.dst,
            checkpoint_path=settings['checkpoint_path'],
            log_path=settings['log_path'],
            max_log_size=settings['max_log_size'],
            algorithm=settings['algorithm'],
            parallel=settings['parallel'],
            workers=settings['workers'],
        )
    except SourceMissingError as e:
        logger.error(str(e))
        return None

    if not getattr(args, 'quiet', False):
        display_summary(report)

    if getattr(args, 'report', None):
        if save_json(report.to_dict(), args.report):
            logger.info(f"Verification report saved to {args.report}")

    return report


def handle_verify_operation(args, logger):
    """Handle VERIFY operation"""
    logger.info("Starting VERIFY operation")

    if not check_source(args, logger):
        return EXIT_SOURCE_MISSING

    ensure_log_dir(args)
    cfg = MirrorCheckConfig()

    report = run_verification_phase(args, cfg, logger)
    if report is None:
        return EXIT_SOURCE_MISSING
    return EXIT_SUCCESS if report.is_successful else EXIT_VERIFY_FAILED
