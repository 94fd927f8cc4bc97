"""Storage module for buildprofile.

Public Interface:
    - get_home_dir: Get BUILDPROFILE_HOME
    - get_config_dir: Get config directory
    - get_state_dir: Get state directory
    - get_history_path: Get release history file
"""

from .paths import get_config_dir
from .paths import get_history_path
from .paths import get_home_dir
from .paths import get_state_dir

__all__ = [
    "get_home_dir",
    "get_config_dir",
    "get_state_dir",
    "get_history_path",
]
