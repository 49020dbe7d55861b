"""
RUN operation handler for mirrorcheck.

Mirror phase first, verification phase second. The two phases report
separately: a failed mirror does not stop verification, and the exit
status tells the caller which phase failed.
"""

import logging

from mirrorcheck.config import MirrorCheckConfig
from mirrorcheck.handlers.mirror import run_mirror_phase
from mirrorcheck.handlers.verify import run_verification_phase
from mirrorcheck.utils import (
    EXIT_BOTH_FAILED,
    EXIT_MIRROR_FAILED,
    EXIT_SOURCE_MISSING,
    EXIT_SUCCESS,
    EXIT_VERIFY_FAILED,
    check_source,
    ensure_log_dir,
)

logger = logging.getLogger(__name__)


def handle_run_operation(args, logger):
    """Handle RUN operation"""
    logger.info("Starting RUN operation")

    if not check_source(args, logger):
        return EXIT_SOURCE_MISSING

    ensure_log_dir(args)
    cfg = MirrorCheckConfig()

    mirror_ok = True
    if args.skip_mirror:
        logger.info("Skipping mirror phase")
    else:
        mirror_ok = run_mirror_phase(args, cfg, logger)
        if not mirror_ok:
            logger.warning("Continuing with verification of the current destination")

    report = run_verification_phase(args, cfg, logger)
    if report is None:
        return EXIT_SOURCE_MISSING

    if not mirror_ok and not report.is_successful:
        return EXIT_BOTH_FAILED
    elif not mirror_ok:
        return EXIT_MIRROR_FAILED
    elif not report.is_successful:
        return EXIT_VERIFY_FAILED
    return EXIT_SUCCESS
