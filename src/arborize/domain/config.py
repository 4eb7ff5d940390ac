from __future__ import annotations

"""
Configuration Domain Management.

Dict-based runtime configuration with JSON persistence in the user data
directory. The file location can be overridden through ARBORIZE_CONFIG.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from arborize.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_ENV_VAR = "ARBORIZE_CONFIG"
CONFIG_FILE_NAME = "config.json"
OUTPUT_FORMATS = ("ascii", "json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Filesystem expansion
        "input_path": os.getcwd(),
        "show_hidden": False,
        "follow_symlinks": False,
        "dirs_first": False,
        "max_depth": None,

        # Build strategy
        "effectful": False,
        "timeout_seconds": None,

        # Presentation
        "output_format": "ascii",

        # Diagnostics
        "log_level": "WARNING",
        "log_file": None,
    }


def get_config_path() -> str:
    """Resolve the persistent configuration file location."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    A missing file yields the defaults. An unreadable or malformed file is
    reported as a warning and also yields the defaults.

    Args:
        path: Explicit file to read. Defaults to get_config_path().

    Returns:
        Dict[str, Any]: Merged configuration.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file {config_path}. Using defaults.")
        return config

    config.update(data)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration as JSON.

    Args:
        config: Configuration dictionary to save.
        path: Explicit destination. Defaults to get_config_path().

    Returns:
        bool: True when the file was written.
    """
    config_path = path or get_config_path()
    try:
        os.makedirs(os.path.dirname(config_path), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration to {config_path}: {e}")
        return False

    logger.debug(f"Configuration saved to {config_path}")
    return True
