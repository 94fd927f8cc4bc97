"""Resolved build profile models."""

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from .base import CamelCaseModel
from .dependencies import Dependency
from .enums import BuildType
from .enums import JavaVersion
from .framework import DEFAULT_PLUGINS
from .framework import FeatureFlags
from .signing import DEBUG_SIGNING
from .signing import SigningIdentity


class BuildProfile(CamelCaseModel):
    """Normalized settings for one build invocation.

    Constructed by the resolver from raw declarations and immutable
    thereafter. Field names serialize as camelCase for the packager.
    """

    model_config = ConfigDict(extra="forbid")

    application_id: str = Field(min_length=1, description="Reverse-domain application identifier")
    namespace: str | None = Field(default=None, description="Code namespace (defaults to application_id)")
    min_sdk: int = Field(gt=0, description="Minimum supported SDK level")
    target_sdk: int = Field(gt=0, description="Target SDK level")
    compile_sdk: int = Field(gt=0, description="SDK level compiled against")
    ndk_version: str | None = Field(default=None, pattern=r"^\d+(\.\d+)+$", description="NDK version")
    version_code: int = Field(gt=0, description="Monotonic release number")
    version_name: str = Field(min_length=1, description="User-visible version string")
    source_compatibility: JavaVersion = Field(description="Java source language level")
    target_compatibility: JavaVersion = Field(description="Java bytecode language level")
    jvm_target: JavaVersion | None = Field(default=None, description="Kotlin JVM target")
    desugaring_enabled: bool = Field(default=False, description="Core library desugaring")
    multi_dex_enabled: bool = Field(default=False, description="Multidex packaging")
    test_instrumentation_runner: str | None = Field(default=None, description="Instrumentation runner class")
    dependencies: tuple[Dependency, ...] = Field(default=(), description="Declared dependencies")
    build_type: BuildType = Field(default=BuildType.RELEASE, description="Build variant")
    signing_config: str | None = Field(default=None, description="Selected signing identity name")
    signing_configs: dict[str, SigningIdentity] = Field(default_factory=dict, description="Declared signing identities")
    plugins: tuple[str, ...] = Field(default=DEFAULT_PLUGINS, description="Build plugins in application order")
    features: FeatureFlags = Field(default_factory=FeatureFlags, description="Optional capabilities")
    flutter_source: str = Field(default="../..", description="Framework project root relative to the module")

    @field_validator("source_compatibility", "target_compatibility", "jvm_target", mode="before")
    @classmethod
    def parse_java_version(cls, v: Any) -> Any:
        if v is None:
            return v
        return JavaVersion.parse(v)

    @field_validator("version_name", mode="before")
    @classmethod
    def coerce_version_name(cls, v: Any) -> Any:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("dependencies", mode="before")
    @classmethod
    def parse_dependencies(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, list | tuple):
            return tuple(Dependency.parse(item) for item in v)
        return v

    @property
    def is_release(self) -> bool:
        return self.build_type is BuildType.RELEASE

    @property
    def uses_debug_signing(self) -> bool:
        return self.signing_config == DEBUG_SIGNING

    @property
    def desugaring_dependencies(self) -> tuple[Dependency, ...]:
        return tuple(dep for dep in self.dependencies if dep.is_desugaring)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize for the external packager (camelCase keys, JSON types)."""
        return self.model_dump(by_alias=True, mode="json")


class ResolutionWarning(CamelCaseModel):
    """Non-fatal finding attached to a successful resolution.

    Attributes:
        field: Setting the warning refers to
        message: Human-readable description
    """

    field: str
    message: str


class SigningFallbackWarning(ResolutionWarning):
    """Release build signed with the debug identity.

    Attributes:
        identity: Identity actually selected (always "debug")
        requested: Signing config requested by the declaration, if any
    """

    field: str = "signingConfig"
    identity: str = DEBUG_SIGNING
    requested: str | None = None


class ResolvedProfile(BaseModel):
    """Successful resolution result: the profile plus any warnings."""

    model_config = ConfigDict(frozen=True)

    profile: BuildProfile
    warnings: tuple[SigningFallbackWarning, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
