"""Configuration loading for the buildprofile tool.

This module handles loading tool configuration from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: ResolverSettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import ResolverSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# buildprofile configuration
# This configures the resolver tool; build settings live in declaration files

log_level: "info"

# Build type resolved when --build-type is not given (debug, profile, release)
build_type: "release"

# Fail release builds that would be signed with the debug identity
strict_signing: false

# Record resolved release builds so version codes keep increasing
record_releases: false

# Values the host framework supplies (referenced as flutter.<name>)
framework:
  min_sdk_version: 21
  target_sdk_version: 34
  compile_sdk_version: 36
  ndk_version: "27.0.12077973"
"""


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to buildprofile.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "buildprofile.yaml"
    """
    return get_config_dir() / "buildprofile.yaml"


def create_default_config() -> None:
    """Create default config file if it doesn't exist.

    Example:
        >>> create_default_config()
        >>> assert get_config_path().exists()
    """
    config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return

    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")


def load_config(config_path: Path | None = None) -> ResolverSettings:
    """Load tool configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with BUILDPROFILE_ (e.g., BUILDPROFILE_STRICT_SIGNING);
    nested framework values use a double underscore
    (BUILDPROFILE_FRAMEWORK__MIN_SDK_VERSION).

    Args:
        config_path: Optional config file path (default: buildprofile.yaml in config dir)

    Returns:
        Validated resolver settings

    Example:
        >>> settings = load_config()
        >>> assert isinstance(settings, ResolverSettings)
    """
    if config_path is None:
        config_path = get_config_path()

        # Create default config if it doesn't exist
        if not config_path.exists():
            create_default_config()

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")
    else:
        logger.warning(f"Config file not found: {config_path}")

    if not isinstance(yaml_settings, dict):
        logger.warning(f"Ignoring config {config_path}: top level must be a mapping")
        yaml_settings = {}

    # Only pass YAML values that don't have corresponding env vars; init
    # arguments would otherwise shadow the environment
    prefix = "BUILDPROFILE_"
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"{prefix}{key.upper()}"
        if env_key in os.environ:
            continue
        if key == "framework" and isinstance(value, dict):
            value = {
                name: item for name, item in value.items() if f"{env_key}__{name.upper()}" not in os.environ
            }
        filtered_yaml[key] = value

    settings = ResolverSettings(**filtered_yaml)

    logger.debug(
        f"Configuration loaded: build_type={settings.build_type.value}, "
        f"strict_signing={settings.strict_signing}, log_level={settings.log_level}"
    )

    return settings
