"""Dependency coordinates declared by a build."""

from collections.abc import Mapping
from typing import Any

from pydantic import Field
from pydantic import field_validator

from .base import CamelCaseModel

DESUGARING_CONFIGURATION = "coreLibraryDesugaring"
DESUGARING_LIBRARIES = frozenset({"desugar_jdk_libs", "desugar_jdk_libs_nio", "desugar_jdk_libs_minimal"})


class Dependency(CamelCaseModel):
    """A (name, version) dependency with optional group and configuration.

    Attributes:
        name: Artifact name (e.g., "desugar_jdk_libs")
        version: Artifact version
        group: Maven group (e.g., "com.android.tools")
        configuration: Gradle configuration the dependency is added to
    """

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    group: str | None = None
    configuration: str = "implementation"

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> Any:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def coordinate(self) -> str:
        """Maven coordinate string (``group:name:version``)."""
        if self.group:
            return f"{self.group}:{self.name}:{self.version}"
        return f"{self.name}:{self.version}"

    @property
    def is_desugaring(self) -> bool:
        """Whether this dependency provides core library desugaring."""
        return self.configuration == DESUGARING_CONFIGURATION or self.name in DESUGARING_LIBRARIES

    @classmethod
    def parse(cls, value: Any) -> "Dependency":
        """Build a dependency from any of its raw declaration forms.

        Supported forms:
            - ``("desugar_jdk_libs", "2.0.4")`` name/version pair
            - ``"com.android.tools:desugar_jdk_libs:2.0.4"`` coordinate
            - ``{"name": ..., "version": ..., "group": ...}`` mapping
            - ``{"coreLibraryDesugaring": "<coordinate>"}`` configuration mapping

        Raises:
            ValueError: If the value matches none of the forms
        """
        if isinstance(value, Dependency):
            return value

        if isinstance(value, str):
            return cls._from_coordinate(value)

        if isinstance(value, list | tuple):
            if len(value) != 2:
                raise ValueError(f"Dependency pair must be (name, version), got {value!r}")
            name, version = value
            return cls(name=name, version=version)

        if isinstance(value, Mapping):
            if len(value) == 1:
                ((configuration, coordinate),) = value.items()
                if configuration not in cls.model_fields and isinstance(coordinate, str):
                    return cls._from_coordinate(coordinate, configuration=configuration)
            return cls.model_validate(value)

        raise ValueError(f"Unsupported dependency declaration: {value!r}")

    @classmethod
    def _from_coordinate(cls, coordinate: str, configuration: str = "implementation") -> "Dependency":
        parts = coordinate.strip().split(":")
        if len(parts) == 3:
            group, name, version = parts
            return cls(group=group, name=name, version=version, configuration=configuration)
        if len(parts) == 2:
            name, version = parts
            return cls(name=name, version=version, configuration=configuration)
        raise ValueError(f"Invalid dependency coordinate: {coordinate!r}")
