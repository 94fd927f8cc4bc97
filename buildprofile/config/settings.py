"""Settings models for the buildprofile tool.

This module defines the configuration structure for the resolver tool
itself, separate from the build declarations it resolves.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from ..models import BuildType
from ..models import FrameworkDefaults


class ResolverSettings(BaseSettings):
    """Configuration for the buildprofile tool.

    Attributes:
        log_level: Logging level (default: info)
        build_type: Build type resolved when none is given (default: release)
        strict_signing: Fail release builds that fall back to debug signing
        record_releases: Record resolved release builds in the release history
        framework: Framework-supplied defaults (``flutter.*`` values)

    Example:
        >>> settings = ResolverSettings()
        >>> assert settings.build_type is BuildType.RELEASE
        >>> assert settings.framework.min_sdk_version == 21
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDPROFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "info"
    build_type: BuildType = BuildType.RELEASE
    strict_signing: bool = False
    record_releases: bool = False

    framework: FrameworkDefaults = Field(default_factory=FrameworkDefaults)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.lower()
        if level not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError(f"Unknown log level: {v}")
        return level
