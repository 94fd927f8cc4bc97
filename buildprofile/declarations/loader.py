"""Loading build declarations from YAML documents.

A declaration mirrors the layout of an Android module build file:

    plugins: [com.android.application, kotlin-android, dev.flutter.flutter-gradle-plugin]
    android:
      namespace: com.example.app
      compileSdk: 36
      compileOptions: {sourceCompatibility: VERSION_11, isCoreLibraryDesugaringEnabled: true}
      kotlinOptions: {jvmTarget: "11"}
      defaultConfig: {applicationId: com.example.app, minSdk: flutter.minSdkVersion}
      buildTypes: {release: {signingConfig: debug}}
    dependencies:
      - coreLibraryDesugaring: com.android.tools:desugar_jdk_libs:2.0.4
    flutter: {source: ../..}

It is flattened into the raw settings mapping the resolver consumes. A
document without an ``android`` section is taken as already flat.

Contract:
- Inputs: Declaration file path or parsed document
- Outputs: Flat raw settings dictionary
- Side Effects: None (read-only)
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ..errors import DeclarationError
from ..models import BuildType

logger = logging.getLogger(__name__)

# android blocks whose keys are lifted to the top level unchanged
FLATTENED_BLOCKS = ("defaultConfig", "compileOptions")


def read_declaration(path: Path) -> dict[str, Any]:
    """Read a declaration document without flattening it.

    Args:
        path: Path to YAML declaration

    Returns:
        Parsed document (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        DeclarationError: If the YAML is invalid or the root is not a mapping
    """
    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DeclarationError(str(path), f"Invalid YAML: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DeclarationError(str(path), "Declaration must be a mapping")

    logger.debug(f"Read declaration from {path}")
    return document


def flatten_declaration(document: Mapping[str, Any], build_type: BuildType | str | None = None) -> dict[str, Any]:
    """Flatten a nested declaration into raw settings.

    Args:
        document: Parsed declaration
        build_type: Build type whose ``buildTypes`` block applies
            (default: the document's ``buildType`` or release)

    Returns:
        Flat raw settings

    Raises:
        DeclarationError: If a section has the wrong shape

    Example:
        >>> flatten_declaration({"android": {"defaultConfig": {"minSdk": 21}}})["minSdk"]
        21
    """
    if "android" not in document:
        settings: dict[str, Any] = dict(document)
        if build_type is not None:
            settings["buildType"] = _build_type(build_type)
        return settings

    selected = _build_type(build_type or document.get("buildType", BuildType.RELEASE))

    settings = {}
    for key, value in document.items():
        if key in ("android", "flutter"):
            continue
        settings[key] = value

    android = _section(document, "android")
    for key, value in android.items():
        if key in FLATTENED_BLOCKS:
            settings.update(_section(android, key, prefix="android."))
        elif key == "kotlinOptions":
            kotlin = _section(android, key, prefix="android.")
            if "jvmTarget" in kotlin:
                settings["jvmTarget"] = kotlin["jvmTarget"]
        elif key == "buildTypes":
            _apply_build_type(settings, _section(android, key, prefix="android."), selected)
        else:
            settings[key] = value

    if "flutter" in document:
        flutter = _section(document, "flutter")
        if "source" in flutter:
            settings["flutterSource"] = flutter["source"]

    settings["buildType"] = selected
    return settings


def load_declaration(path: Path, build_type: BuildType | str | None = None) -> dict[str, Any]:
    """Read and flatten a declaration file.

    Args:
        path: Path to YAML declaration
        build_type: Build type whose ``buildTypes`` block applies

    Returns:
        Flat raw settings ready for resolution
    """
    settings = flatten_declaration(read_declaration(path), build_type)
    logger.info(f"Loaded declaration {path} ({len(settings)} settings)")
    return settings


def _build_type(value: Any) -> str:
    try:
        return BuildType(value).value
    except ValueError as e:
        raise DeclarationError("buildType", f"Unknown build type '{value}'") from e


def _section(parent: Mapping[str, Any], key: str, prefix: str = "") -> Mapping[str, Any]:
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DeclarationError(f"{prefix}{key}", "Section must be a mapping")
    return value


def _apply_build_type(settings: dict[str, Any], build_types: Mapping[str, Any], selected: str) -> None:
    block = _section(build_types, selected, prefix="android.buildTypes.")
    for key, value in block.items():
        if key == "signingConfig":
            settings["signingConfig"] = value
        else:
            logger.debug(f"Ignoring buildTypes.{selected}.{key}: not part of the resolved profile")
