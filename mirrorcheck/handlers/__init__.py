"""
Operation handlers for mirrorcheck commands.

This module contains the implementation of the mirrorcheck operations,
organized to keep the main mirrorcheck.py file manageable.
"""

from .mirror import handle_mirror_operation, run_mirror_phase
from .verify import handle_verify_operation, run_verification_phase
from .run import handle_run_operation

__all__ = [
    'handle_mirror_operation',
    'handle_verify_operation',
    'handle_run_operation',
    'run_mirror_phase',
    'run_verification_phase',
]
