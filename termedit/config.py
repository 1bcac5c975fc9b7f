"""User configuration for the editor.

Settings live in a JSON file in the OS-appropriate config directory.
A missing or unreadable file means defaults; bad values are ignored
key by key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "termedit"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "termedit.log"


@dataclass
class EditorConfig:
    quit_times: int = EditorConstants.QUIT_TIMES
    message_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT
    input_timeout: float = EditorConstants.INPUT_TIMEOUT
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def resolved_log_file(self) -> Path:
        """Return the log file path, defaulting to the user log directory."""
        if self.log_file:
            return Path(self.log_file).expanduser()
        return Path(platformdirs.user_log_dir(APP_NAME)) / LOG_FILENAME


def default_config_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILENAME


def _valid(key: str, value: Any) -> bool:
    if key == 'quit_times':
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if key in ('message_timeout', 'input_timeout'):
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    if key == 'log_level':
        return isinstance(value, str) and value.upper() in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
    if key == 'log_file':
        return value is None or isinstance(value, str)
    return False


def config_from_dict(data: Dict[str, Any]) -> EditorConfig:
    """Build a config from parsed JSON, skipping unknown keys and bad values."""
    config = EditorConfig()
    known = {f.name for f in fields(EditorConfig)}
    for key, value in data.items():
        if key not in known:
            logger.debug("Ignoring unknown config key %r", key)
            continue
        if not _valid(key, value):
            logger.warning(f"Invalid value for {key}: {value!r}, using default")
            continue
        if key == 'log_level':
            value = value.upper()
        setattr(config, key, value)
    return config


def load_config(path: Optional[Path] = None) -> EditorConfig:
    """Load the editor config, falling back to defaults on any problem."""
    path = path or default_config_path()
    if not path.exists():
        return EditorConfig()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return EditorConfig()
    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a dict), ignoring")
        return EditorConfig()
    return config_from_dict(data)
