#!/usr/bin/env python3
"""
mirrorcheck.py - Mirror a directory tree and verify the copy by content hash

The mirror phase delegates copying to robocopy. The verification phase
hashes both trees, compares every source file with its copy, and records
each outcome in a hash log that is rotated before it grows past a size
limit. Files already confirmed in an earlier run are kept in a checkpoint
file, so an interrupted verification resumes instead of starting over.

Examples:
    # Mirror and verify
    mirrorcheck RUN --src "D:/data" --dst "//nas/backup/data" --log-dir "D:/logs"

    # Verify only, resuming from the checkpoint in D:/logs
    mirrorcheck VERIFY --src "D:/data" --dst "//nas/backup/data" --log-dir "D:/logs"

    # Show the copy command without running it
    mirrorcheck MIRROR --src "D:/data" --dst "E:/data" --log-dir "D:/logs" --dry-run
"""

import sys
import logging
import platform

from treekit.utils.logger import DEFAULT_LOG_FORMAT, set_log_level, setup_logger

from . import __version__, utils
from .cli import create_parser
from .config import MirrorCheckConfig
from .handlers import (
    handle_mirror_operation,
    handle_run_operation,
    handle_verify_operation,
)


def setup_logging(args):
    """Set up logging based on verbosity level"""
    log_level = logging.INFO
    if args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.WARNING

    # Bare colored messages normally, timestamped records when verbose
    log_format = DEFAULT_LOG_FORMAT if args.verbose else None
    setup_logger(None, log_level, log_file=args.log, log_format=log_format,
                 use_colors=not args.no_color)

    # Package loggers only set levels; output goes through the root logger
    for module_name in ['mirrorcheck', 'mirrorlib', 'treekit']:
        module_logger = logging.getLogger(module_name)

        for handler in module_logger.handlers[:]:
            module_logger.removeHandler(handler)

        set_log_level(module_logger, log_level)
        module_logger.propagate = True

    return logging.getLogger('mirrorcheck')


def _parse_config_value(value: str):
    """Convert a CONFIG SET value to bool or int where it looks like one"""
    if value.lower() == 'true':
        return True
    elif value.lower() == 'false':
        return False
    elif value.isdigit():
        return int(value)
    return value


def handle_config_operation(args, logger):
    """Handle CONFIG operation"""
    cfg = MirrorCheckConfig()

    if not args.config_operation:
        logger.error("No config operation specified")
        return 1

    if args.config_operation == 'VIEW':
        config_dict = cfg.to_dict()

        if args.section:
            if args.section in config_dict:
                print(f"Configuration section '{args.section}':")
                for key, value in config_dict[args.section].items():
                    print(f"  {key}: {value}")
            else:
                logger.error(f"Configuration section '{args.section}' not found")
                return 1
        else:
            print(f"Current configuration ({cfg.config_path}):")
            for section, section_data in config_dict.items():
                print(f"\n[{section}]")
                for key, value in section_data.items():
                    print(f"  {key}: {value}")

        return 0

    elif args.config_operation == 'SET':
        key_parts = args.key.split('.')
        if len(key_parts) != 2:
            logger.error("Configuration key must be in the format 'section.option'")
            return 1

        value = _parse_config_value(args.value)
        cfg.set(args.key, value)

        if cfg.save_global_config():
            print(f"Set {args.key} = {value} in global configuration")
            return 0
        else:
            logger.error("Failed to save configuration")
            return 1

    elif args.config_operation == 'RESET':
        if args.section:
            if not cfg.reset_section(args.section):
                logger.error(f"Configuration section '{args.section}' not found")
                return 1
            message = f"Reset configuration section '{args.section}' to defaults"
        else:
            cfg.reset_to_defaults()
            message = "Reset configuration to defaults"

        if cfg.save_global_config():
            print(message)
            return 0
        else:
            logger.error("Failed to save configuration")
            return 1

    else:
        logger.error(f"Unknown config operation: {args.config_operation}")
        return 1


def main(argv=None):
    """Main entry point for the program"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Set up logging
    logger = setup_logging(args)

    # Disable colors if requested
    if args.no_color:
        utils.disable_color()

    # Log platform information
    logger.debug(f"Platform: {platform.platform()}")
    logger.debug(f"Python version: {platform.python_version()}")
    logger.debug(f"mirrorcheck {__version__} invoked with: {' '.join(sys.argv)}")

    # Check for required operation
    if not args.operation:
        parser.print_help()
        return 1

    # Handle operations
    try:
        if args.operation == 'RUN':
            return handle_run_operation(args, logger)
        elif args.operation == 'MIRROR':
            return handle_mirror_operation(args, logger)
        elif args.operation == 'VERIFY':
            return handle_verify_operation(args, logger)
        elif args.operation == 'CONFIG':
            return handle_config_operation(args, logger)
        else:
            logger.error(f"Unknown operation: {args.operation}")
            return 1
    except Exception as e:
        logger.exception(f"Error during {args.operation} operation")
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
