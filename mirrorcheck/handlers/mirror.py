"""
MIRROR operation handler for mirrorcheck.

Runs the external copy tool once and reports how it ended. A failed
mirror is reported, never raised, so RUN can still verify whatever the
destination holds.
"""

import logging

from mirrorlib import MirrorInvocationError, MirrorStatus, run_mirror
from mirrorcheck.config import MirrorCheckConfig
from mirrorcheck.utils import (
    EXIT_MIRROR_FAILED,
    EXIT_SOURCE_MISSING,
    EXIT_SUCCESS,
    check_source,
    colorize,
    ensure_log_dir,
    find_command,
    get_mirror_log_path,
    get_mirror_options,
)

logger = logging.getLogger(__name__)


def run_mirror_phase(args, cfg, logger) -> bool:
    """
    Run the copy tool for the paths in args.

    Returns:
        True if the copy tool reported success (with or without warnings)
    """
    options = get_mirror_options(args, cfg)
    mirror_log = get_mirror_log_path(args, cfg)
    dry_run = getattr(args, 'dry_run', False)

    if not dry_run and find_command(options.command) is None:
        logger.error(f"Copy tool not found: {options.command}")
        return False

    logger.info(f"Mirroring {args.src} -> {args.dst}")
    try:
        result = run_mirror(args.src, args.dst, mirror_log, options, dry_run=dry_run)
    except MirrorInvocationError as e:
        logger.error(str(e))
        return False

    if result.status == MirrorStatus.FAILURE:
        logger.error(colorize(f"Mirror phase FAILED (exit code {result.exit_code}), see {mirror_log}", 'RED'))
    elif result.status == MirrorStatus.SUCCESS_WITH_WARNINGS:
        logger.warning(f"Mirror phase completed with warnings (exit code {result.exit_code})")
    else:
        logger.info(colorize("Mirror phase completed successfully", 'GREEN'))

    return result.is_successful


def handle_mirror_operation(args, logger):
    """Handle MIRROR operation"""
    logger.info("Starting MIRROR operation")

    if not check_source(args, logger):
        return EXIT_SOURCE_MISSING

    ensure_log_dir(args)
    cfg = MirrorCheckConfig()

    if run_mirror_phase(args, cfg, logger):
        return EXIT_SUCCESS
    return EXIT_MIRROR_FAILED
