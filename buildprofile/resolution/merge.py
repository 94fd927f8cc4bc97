"""Merging raw settings with framework defaults.

Contract:
- Inputs: Raw setting mappings, FrameworkDefaults
- Outputs: New merged dictionaries (inputs are never mutated)
- Side Effects: None
"""

import re
from collections.abc import Mapping
from typing import Any

from ..errors import SchemaError
from ..models import FrameworkDefaults

# Gradle DSL spellings accepted for the canonical setting names
KEY_ALIASES = {
    "minSdkVersion": "minSdk",
    "targetSdkVersion": "targetSdk",
    "compileSdkVersion": "compileSdk",
    "isCoreLibraryDesugaringEnabled": "desugaringEnabled",
    "coreLibraryDesugaringEnabled": "desugaringEnabled",
    "isMultiDexEnabled": "multiDexEnabled",
}

FRAMEWORK_REF = re.compile(r"^flutter\.(?P<name>[A-Za-z_][A-Za-z0-9_]*)$")


def merge_settings(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge raw settings, with override taking precedence.

    Uses simple deep merge strategy:
    - Nested mappings are merged recursively
    - Lists from override replace base lists (no concatenation)
    - Override values win at leaf nodes

    Args:
        base: Lower-precedence settings (e.g., framework defaults)
        override: Explicit settings

    Returns:
        Merged settings dictionary

    Example:
        >>> merged = merge_settings({"minSdk": 21, "targetSdk": 34}, {"targetSdk": 35})
        >>> merged["minSdk"], merged["targetSdk"]
        (21, 35)
    """
    merged = dict(base)

    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value

    return merged


def normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Rename Gradle DSL spellings to canonical setting names.

    Raises:
        SchemaError: If both a spelling and its canonical name are present
    """
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        canonical = KEY_ALIASES.get(key, key)
        if canonical in normalized:
            raise SchemaError(key, f"Duplicate setting (also given as '{canonical}')")
        normalized[canonical] = value
    return normalized


def substitute_framework_refs(settings: Mapping[str, Any], defaults: FrameworkDefaults) -> dict[str, Any]:
    """Replace ``flutter.<name>`` string values with framework-supplied values.

    Args:
        settings: Merged raw settings
        defaults: Framework defaults providing the referenced values

    Returns:
        Settings with every framework reference substituted

    Raises:
        SchemaError: If a reference names an unknown framework value
    """
    return _substitute(settings, defaults.references(), prefix="")


def _substitute(settings: Mapping[str, Any], references: dict[str, Any], prefix: str) -> dict[str, Any]:
    substituted: dict[str, Any] = {}
    for key, value in settings.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping):
            substituted[key] = _substitute(value, references, prefix=f"{path}.")
            continue

        match = FRAMEWORK_REF.match(value) if isinstance(value, str) else None
        if match is None:
            substituted[key] = value
            continue

        name = match.group("name")
        if name not in references or references[name] is None:
            raise SchemaError(path, f"Unknown framework reference '{value}'")
        substituted[key] = references[name]
    return substituted
