"""
Command-line interface and argument parser for mirrorcheck.

This module contains all CLI-related functionality including
argument parsing, help text, and command structure definition.
"""

import argparse
from mirrorcheck import __version__, __doc__

HASH_CHOICES = ['MD5', 'SHA1', 'SHA256', 'SHA512']


def create_parser():
    """Create argument parser with all CLI options"""
    parser = argparse.ArgumentParser(
        prog='mirrorcheck',
        description=f'mirrorcheck v{__version__} - Mirror a directory tree and verify the copy by content hash',
        epilog='For detailed command help: mirrorcheck [COMMAND] --help\n\n' + __doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # General options
    parser.add_argument('--version', '-V', action='version',
                        version=f'mirrorcheck {__version__}')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose output')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress all non-error output')
    parser.add_argument('--log', help='Write diagnostic log to specified file')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable colored output')

    # Create subparsers for operations
    subparsers = parser.add_subparsers(dest='operation', help='Operation to perform')

    # === RUN operation ===
    run_parser = subparsers.add_parser('RUN',
                                       help='Mirror the source tree, then verify the copy',
                                       description='''Mirror the source tree to the destination, then verify every file by hash.

The verification phase runs even if the mirror phase reports a failure, so the
hash log always shows the state of the destination.

Common usage patterns:

1. Mirror and verify (most common):
   mirrorcheck RUN --src "D:\\data" --dst "\\\\nas\\backup\\data" --log-dir "D:\\logs"

2. Verify only, reusing an earlier copy:
   mirrorcheck RUN --src "D:\\data" --dst "E:\\data" --log-dir "D:\\logs" --skip-mirror

3. Throttle the copy over a slow link:
   mirrorcheck RUN --src "D:\\data" --dst "\\\\nas\\data" --log-dir "D:\\logs" --ipg 50''',
                                       formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_location_args(run_parser)
    _add_mirror_args(run_parser)
    _add_verification_args(run_parser)
    run_parser.add_argument('--skip-mirror', action='store_true',
                            help='Skip the mirror phase and only verify')

    # === MIRROR operation ===
    mirror_parser = subparsers.add_parser('MIRROR',
                                          help='Run only the mirror phase',
                                          description='Copy new and changed files from source to destination '
                                                      'using the external copy tool (robocopy).',
                                          epilog='Examples:\n'
                                                 '  Mirror a tree:               mirrorcheck MIRROR --src D:/data --dst E:/data --log-dir D:/logs\n'
                                                 '  Show the command only:       mirrorcheck MIRROR --src D:/data --dst E:/data --log-dir D:/logs --dry-run',
                                          formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_location_args(mirror_parser)
    _add_mirror_args(mirror_parser)
    mirror_parser.add_argument('--dry-run', action='store_true',
                               help='Show the copy command without running it')

    # === VERIFY operation ===
    verify_parser = subparsers.add_parser('VERIFY',
                                          help='Verify the destination against the source by hash',
                                          description='Compare the hash of every source file with its copy in the destination. '
                                                      'Files confirmed in an earlier run (listed in the checkpoint) are skipped, '
                                                      'so an interrupted verification resumes where it stopped. '
                                                      'Files that exist only in the destination are not reported.',
                                          epilog='Examples:\n'
                                                 '  Verify a copy:               mirrorcheck VERIFY --src D:/data --dst E:/data --log-dir D:/logs\n'
                                                 '  Use SHA512:                  mirrorcheck VERIFY --src D:/data --dst E:/data --log-dir D:/logs --hash SHA512\n'
                                                 '  Save a JSON report:          mirrorcheck VERIFY --src D:/data --dst E:/data --log-dir D:/logs --report run.json',
                                          formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_location_args(verify_parser)
    _add_verification_args(verify_parser)

    # === CONFIG operation ===
    config_parser = subparsers.add_parser('CONFIG',
                                          help='View or modify configuration settings',
                                          description='View or modify mirrorcheck configuration settings.',
                                          epilog='Examples:\n'
                                                 '  View all configuration:          mirrorcheck CONFIG VIEW\n'
                                                 '  View specific section:           mirrorcheck CONFIG VIEW --section verify\n'
                                                 '  Set a value:                     mirrorcheck CONFIG SET verify.hash_algorithm SHA512\n'
                                                 '  Reset to defaults:               mirrorcheck CONFIG RESET\n'
                                                 '  Reset specific section:          mirrorcheck CONFIG RESET --section mirror',
                                          formatter_class=argparse.RawDescriptionHelpFormatter)
    config_subparsers = config_parser.add_subparsers(dest='config_operation', help='Configuration operation')

    # CONFIG VIEW
    view_parser = config_subparsers.add_parser('VIEW', help='View configuration')
    view_parser.add_argument('--section', help='View specific configuration section')

    # CONFIG SET
    set_parser = config_subparsers.add_parser('SET', help='Set configuration value')
    set_parser.add_argument('key', help='Configuration key (e.g., "verify.max_log_size")')
    set_parser.add_argument('value', help='Value to set')

    # CONFIG RESET
    reset_parser = config_subparsers.add_parser('RESET', help='Reset configuration to defaults')
    reset_parser.add_argument('--section', help='Reset specific configuration section only')

    return parser


def _add_location_args(parser):
    """Add source, destination and log directory arguments to a parser"""
    parser.add_argument('--src', required=True,
                        help='Source directory to mirror and verify')
    parser.add_argument('--dst', required=True,
                        help='Destination directory (the mirror)')
    parser.add_argument('--log-dir', required=True,
                        help='Directory for the hash log, checkpoint and copy log')


def _add_mirror_args(parser):
    """Add copy-tool arguments to a parser"""
    parser.add_argument('--retries', type=int,
                        help='Retries for a failed copy (default: 5)')
    parser.add_argument('--retry-wait', type=int,
                        help='Seconds to wait between retries (default: 5)')
    parser.add_argument('--ipg', type=int, dest='inter_packet_gap',
                        help='Inter-packet gap in milliseconds, to throttle bandwidth (default: 0)')
    parser.add_argument('--robocopy', dest='mirror_command',
                        help='Copy tool executable (default: robocopy)')
    parser.add_argument('--success-threshold', type=int,
                        help='Highest copy tool exit code still counted as success (default: 3)')


def _add_verification_args(parser):
    """Add verification-related arguments to a parser"""
    parser.add_argument('--hash', choices=HASH_CHOICES, type=str.upper,
                        help='Hash algorithm to use (default: SHA256)')
    parser.add_argument('--max-log-size', type=int,
                        help='Rotate the hash log once it reaches this many bytes (default: 50 MB)')
    parser.add_argument('--checkpoint',
                        help='Checkpoint file (default: hash_checkpoint.txt in the log directory)')
    parser.add_argument('--parallel', action='store_true', default=None,
                        help='Hash the source and destination trees concurrently')
    parser.add_argument('--workers', type=int,
                        help='Threads per tree used for hashing files (default: 1)')
    parser.add_argument('--report',
                        help='Save a JSON report of the verification to file')
