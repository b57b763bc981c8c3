from __future__ import annotations

"""
Configuration Domain Management.

Default settings for a copy run and their JSON persistence in the user data
directory. Stored state is merged over the defaults on load, so new keys
appear automatically after an upgrade.
"""

import json
import logging
import os
from typing import Any, Dict

from treenormalizer.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"


def get_config_file() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default settings of a copy run.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Sources and destination
        "sources": [],
        "destination_dir": "",
        "into": "",

        # Copy behaviour
        "preserve_timestamps": True,
    }


def get_default_app_state() -> Dict[str, Any]:
    """Full structure of the persisted state file."""
    return {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load the persisted state, falling back to defaults on any problem.

    Returns:
        Dict[str, Any]: The loaded state merged over the defaults.
    """
    state = get_default_app_state()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    if isinstance(data.get("last_session"), dict):
        state["last_session"].update(data["last_session"])

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist the application state to disk.

    Args:
        state: The state dictionary to save.
    """
    config_file = get_config_file()
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """Return the last saved session merged over the defaults."""
    defaults = get_default_config()
    defaults.update(load_app_state().get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """Save ``config`` as the last session."""
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
