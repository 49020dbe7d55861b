"""
Utility functions for the mirrorcheck command-line tool.

This module provides formatting, colorization, report output and command
lookup helpers for the CLI.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from colorama import Fore, Style

from mirrorlib.mirror import MirrorOptions

# Set up module-level logger
logger = logging.getLogger(__name__)

COLORS = {
    'RED': Fore.RED,
    'GREEN': Fore.GREEN,
    'YELLOW': Fore.YELLOW,
    'CYAN': Fore.CYAN,
    'BOLD': Style.BRIGHT,
}

# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFY_FAILED = 1
EXIT_MIRROR_FAILED = 2
EXIT_BOTH_FAILED = 3
EXIT_SOURCE_MISSING = 4

# Flag to indicate if color is enabled
color_enabled = True


def disable_color():
    """Disable colored output."""
    global color_enabled
    color_enabled = False


def enable_color():
    """Enable colored output."""
    global color_enabled
    color_enabled = True


def colorize(text: str, color: str) -> str:
    """
    Add color to text for terminal output.

    Args:
        text: The text to colorize
        color: The color to apply (must be a key in COLORS dict)

    Returns:
        Colorized string if color is enabled, otherwise the original string
    """
    if not color_enabled or color not in COLORS:
        return text

    return f"{COLORS[color]}{text}{Style.RESET_ALL}"


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds as a human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 60:
        return f"{seconds:.1f} seconds"
    elif seconds < 3600:
        return f"{seconds / 60:.1f} minutes"
    else:
        return f"{seconds / 3600:.1f} hours"


def save_json(data: Any, file_path: Union[str, Path], pretty: bool = True) -> bool:
    """
    Save data to a JSON file.

    Args:
        data: Data to save
        file_path: Path to save to
        pretty: Whether to format the JSON for human readability

    Returns:
        True if successful, False otherwise
    """
    try:
        path_obj = Path(file_path)
        path_obj.parent.mkdir(parents=True, exist_ok=True)

        with open(path_obj, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(data, f, indent=2)
            else:
                json.dump(data, f)

        return True
    except OSError as e:
        logger.error(f"Error saving JSON to {file_path}: {e}")
        return False


def find_command(command: str) -> Optional[str]:
    """
    Find the full path to a command in PATH.

    Args:
        command: Command name or path

    Returns:
        Full path to the command, or None if not found
    """
    if os.path.dirname(command):
        return command if os.path.isfile(command) else None

    # On Windows a bare name may need one of the PATHEXT extensions
    if os.name == 'nt' and not command.lower().endswith(('.exe', '.bat', '.cmd')):
        exts = os.environ.get('PATHEXT', '.EXE').split(os.pathsep)
        possible_cmds = [command + ext for ext in exts]
    else:
        possible_cmds = [command]

    for path_dir in os.environ.get('PATH', '').split(os.pathsep):
        path_dir = path_dir.strip('"')
        for cmd in possible_cmds:
            cmd_path = os.path.join(path_dir, cmd)
            if os.path.isfile(cmd_path) and os.access(cmd_path, os.X_OK):
                return cmd_path

    return None


def _option(args, name: str, cfg, key: str):
    """Command-line value if given, otherwise the configured one."""
    value = getattr(args, name, None)
    if value is None:
        value = cfg.get(key)
    return value


def get_mirror_options(args, cfg) -> MirrorOptions:
    """Build copy tool options from the command line and configuration."""
    return MirrorOptions(
        command=_option(args, 'mirror_command', cfg, 'mirror.command'),
        retries=_option(args, 'retries', cfg, 'mirror.retries'),
        retry_wait=_option(args, 'retry_wait', cfg, 'mirror.retry_wait'),
        inter_packet_gap=_option(args, 'inter_packet_gap', cfg, 'mirror.inter_packet_gap'),
        success_threshold=_option(args, 'success_threshold', cfg, 'mirror.success_threshold'),
    )


def get_verify_settings(args, cfg) -> dict:
    """Collect verification settings from the command line and configuration."""
    log_dir = Path(args.log_dir)
    checkpoint = getattr(args, 'checkpoint', None)
    return {
        'algorithm': _option(args, 'hash', cfg, 'verify.hash_algorithm'),
        'max_log_size': _option(args, 'max_log_size', cfg, 'verify.max_log_size'),
        'parallel': bool(_option(args, 'parallel', cfg, 'verify.parallel')),
        'workers': _option(args, 'workers', cfg, 'verify.workers'),
        'log_path': log_dir / cfg.get('verify.log_file_name'),
        'checkpoint_path': Path(checkpoint) if checkpoint else log_dir / cfg.get('verify.checkpoint_file_name'),
    }


def get_mirror_log_path(args, cfg) -> Path:
    """Log file the copy tool appends to."""
    return Path(args.log_dir) / cfg.get('mirror.log_file_name')


def check_source(args, logger) -> bool:
    """
    Check that the source directory exists before any work is done.

    Returns:
        True if the source is a directory, False otherwise (error logged)
    """
    source = Path(args.src)
    if not source.is_dir():
        logger.error(f"Source directory not found: {source}")
        return False
    return True


def ensure_log_dir(args) -> Path:
    """Create the log directory if it does not exist yet."""
    log_dir = Path(args.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
