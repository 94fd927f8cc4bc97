"""Path resolution for buildprofile storage locations.

This module provides path resolution based on BUILDPROFILE_HOME environment variable,
following XDG-like directory structure within that root.

Contract:
- Inputs: Environment variables (BUILDPROFILE_HOME)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get BUILDPROFILE_HOME from environment.

    Returns:
        Path to root directory (default: .buildprofile)
    """
    root = os.environ.get("BUILDPROFILE_HOME", ".buildprofile")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($BUILDPROFILE_HOME/config)
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("BUILDPROFILE_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_state_dir() -> Path:
    """Get state directory.

    Returns:
        Path to state directory ($BUILDPROFILE_HOME/state)

    Environment Variables:
        BUILDPROFILE_STATE_DIR: Override state directory location
        (falls back to $BUILDPROFILE_HOME/state if not set)

    Example:
        >>> state_dir = get_state_dir()
        >>> assert state_dir.name == "state" or "BUILDPROFILE_STATE_DIR" in os.environ
    """
    state_dir: Path = get_home_dir() / "state"

    env_override: str | None = os.environ.get("BUILDPROFILE_STATE_DIR")
    if env_override is not None:
        state_dir = Path(env_override).resolve()

    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir


def get_history_path() -> Path:
    """Get release history file path.

    Returns:
        Path to release history ($BUILDPROFILE_HOME/state/releases.json)
    """
    return get_state_dir() / "releases.json"
