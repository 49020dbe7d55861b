"""
Configuration for the mirrorcheck tool.

Settings are grouped in sections and stored as JSON in a global config
file. Values given on the command line override stored values, which
override the built-in defaults below.
"""

import os
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'MIRRORCHECK_CONFIG'

DEFAULT_CONFIG = {
    'general': {
        'verbose': False,
        'color': True,
    },
    'verify': {
        'hash_algorithm': 'SHA256',
        'max_log_size': 50 * 1024 * 1024,
        'log_file_name': 'hash_verification_log.txt',
        'checkpoint_file_name': 'hash_checkpoint.txt',
        'parallel': False,
        'workers': 1,
    },
    'mirror': {
        'command': 'robocopy',
        'retries': 5,
        'retry_wait': 5,
        'inter_packet_gap': 0,
        'success_threshold': 3,
        'log_file_name': 'mirror_log.txt',
    },
}


def get_global_config_path() -> Path:
    """Location of the global config file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / '.mirrorcheck' / 'config.json'


class MirrorCheckConfig:
    """Sectioned settings backed by a JSON file."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else get_global_config_path()
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self._load()

    def _load(self) -> None:
        if not self.config_path.exists():
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_path}: {e}")
            return

        if not isinstance(stored, dict):
            logger.warning(f"Ignoring config file {self.config_path}: expected a JSON object")
            return

        for section, values in stored.items():
            if isinstance(values, dict):
                self.config.setdefault(section, {}).update(values)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value by dotted key, e.g. 'verify.hash_algorithm'.

        Args:
            key: 'section.option' key
            default: Value returned when the key is not set

        Returns:
            Stored value or default
        """
        section, _, option = key.partition('.')
        return self.config.get(section, {}).get(option, default)

    def set(self, key: str, value: Any) -> None:
        """Set a value by dotted key, creating the section if needed."""
        section, _, option = key.partition('.')
        if not option:
            raise ValueError("Configuration key must be in the format 'section.option'")
        self.config.setdefault(section, {})[option] = value

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self.config)

    def reset_section(self, section: str) -> bool:
        """Reset one section to its defaults. Returns False for unknown sections."""
        if section not in DEFAULT_CONFIG:
            return False
        self.config[section] = copy.deepcopy(DEFAULT_CONFIG[section])
        return True

    def reset_to_defaults(self) -> None:
        self.config = copy.deepcopy(DEFAULT_CONFIG)

    def save_global_config(self) -> bool:
        """
        Write the settings to the config file.

        Returns:
            True if successful, False otherwise
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {self.config_path}: {e}")
            return False
