"""Framework-supplied defaults and optional capabilities."""

from typing import Any

from pydantic import Field
from pydantic import field_validator

from .base import CamelCaseModel
from .enums import JavaVersion

ANDROID_APPLICATION_PLUGIN = "com.android.application"
KOTLIN_ANDROID_PLUGINS = ("kotlin-android", "org.jetbrains.kotlin.android")
FLUTTER_PLUGIN = "dev.flutter.flutter-gradle-plugin"
GOOGLE_SERVICES_PLUGIN = "com.google.gms.google-services"

DEFAULT_PLUGINS = (ANDROID_APPLICATION_PLUGIN, "kotlin-android", FLUTTER_PLUGIN)

# Lowest SDK level the Firebase plugins support
FIREBASE_MIN_SDK = 21


class FrameworkDefaults(CamelCaseModel):
    """Values the host mobile framework supplies to the build.

    These are the ``flutter.*`` properties a build file can reference
    (``minSdk = flutter.minSdkVersion``). They are passed explicitly to the
    resolver rather than read from ambient build state.

    Attributes:
        min_sdk_version: Default minimum SDK level
        target_sdk_version: Default target SDK level
        compile_sdk_version: Default compile SDK level
        ndk_version: Default NDK version
        version_code: Version code from the app manifest
        version_name: Version name from the app manifest
        source_compatibility: Default Java source level
        target_compatibility: Default Java target level
    """

    min_sdk_version: int = Field(default=21, gt=0)
    target_sdk_version: int = Field(default=34, gt=0)
    compile_sdk_version: int = Field(default=36, gt=0)
    ndk_version: str | None = "27.0.12077973"
    version_code: int = Field(default=1, gt=0)
    version_name: str = "1.0.0"
    source_compatibility: JavaVersion = JavaVersion.VERSION_11
    target_compatibility: JavaVersion = JavaVersion.VERSION_11

    @field_validator("source_compatibility", "target_compatibility", mode="before")
    @classmethod
    def parse_java_version(cls, v: Any) -> JavaVersion:
        return JavaVersion.parse(v)

    def references(self) -> dict[str, Any]:
        """Values addressable as ``flutter.<name>`` from a declaration."""
        return self.model_dump(by_alias=True)

    def as_settings(self) -> dict[str, Any]:
        """Defaults expressed as raw build setting keys."""
        settings: dict[str, Any] = {
            "minSdk": self.min_sdk_version,
            "targetSdk": self.target_sdk_version,
            "compileSdk": self.compile_sdk_version,
            "versionCode": self.version_code,
            "versionName": self.version_name,
            "sourceCompatibility": self.source_compatibility,
            "targetCompatibility": self.target_compatibility,
        }
        if self.ndk_version is not None:
            settings["ndkVersion"] = self.ndk_version
        return settings


class FeatureFlags(CamelCaseModel):
    """Optional build capabilities toggled explicitly.

    Attributes:
        firebase: Apply the Google services plugin for Firebase
    """

    firebase: bool = False
