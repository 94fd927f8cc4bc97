"""Profile resolver.

Turns raw build settings into a validated, immutable BuildProfile in a
single pass. Fatal problems raise a ProfileValidationError naming the
first failing setting; non-fatal findings are attached to the result.

Contract:
- Inputs: Raw settings mapping, FrameworkDefaults, resolution options
- Outputs: ResolvedProfile
- Side Effects: None (logs warnings only)
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..errors import MissingDependencyError
from ..errors import OrderingViolation
from ..errors import SchemaError
from ..errors import SigningError
from ..models import DEBUG_SIGNING
from ..models import RELEASE_SIGNING
from ..models import BuildProfile
from ..models import BuildType
from ..models import FrameworkDefaults
from ..models import ResolvedProfile
from ..models import SigningFallbackWarning
from ..models.framework import ANDROID_APPLICATION_PLUGIN
from ..models.framework import FIREBASE_MIN_SDK
from ..models.framework import FLUTTER_PLUGIN
from ..models.framework import GOOGLE_SERVICES_PLUGIN
from ..models.framework import KOTLIN_ANDROID_PLUGINS
from .merge import merge_settings
from .merge import normalize_keys
from .merge import substitute_framework_refs

logger = logging.getLogger(__name__)

PACKAGE_IDENTIFIER = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$")


def resolve(
    raw_settings: Mapping[str, Any],
    defaults: FrameworkDefaults | None = None,
    *,
    build_type: BuildType | str | None = None,
    strict_signing: bool = False,
    previous_version_code: int | None = None,
) -> ResolvedProfile:
    """Resolve raw build settings into a validated profile.

    Args:
        raw_settings: Setting names mapped to raw scalar values
        defaults: Framework-supplied defaults (explicit settings win)
        build_type: Override for the ``buildType`` setting
        strict_signing: Fail instead of warning when a release build
            falls back to debug signing
        previous_version_code: Version code of the last recorded release

    Returns:
        ResolvedProfile with the immutable profile and any warnings

    Raises:
        SchemaError: Missing/mistyped setting or malformed identifier
        OrderingViolation: SDK, language level, version or plugin ordering broken
        MissingDependencyError: Desugaring enabled without its dependency
        SigningError: Debug fallback under strict signing

    Example:
        >>> result = resolve({"applicationId": "com.example.app", "targetSdk": 34})
        >>> result.profile.min_sdk
        21
    """
    defaults = defaults or FrameworkDefaults()

    settings = merge_settings(defaults.as_settings(), normalize_keys(raw_settings))
    settings = substitute_framework_refs(settings, defaults)
    if build_type is not None:
        settings["buildType"] = build_type

    profile = _parse(settings)

    _check_sdk_levels(profile)
    _check_language_levels(profile)
    _check_version_code(profile, previous_version_code)
    plugins = _resolve_plugins(profile)
    _check_identifiers(profile)
    _check_dependencies(profile)
    signing_config, warnings = _resolve_signing(profile, strict=strict_signing)

    profile = profile.model_copy(
        update={
            "namespace": profile.namespace or profile.application_id,
            "jvm_target": profile.jvm_target or profile.target_compatibility,
            "plugins": plugins,
            "signing_config": signing_config,
        }
    )

    logger.info(
        f"Resolved {profile.build_type.value} profile for {profile.application_id} "
        f"(sdk {profile.min_sdk}/{profile.target_sdk}/{profile.compile_sdk}, signing={signing_config})"
    )
    return ResolvedProfile(profile=profile, warnings=warnings)


def _parse(settings: dict[str, Any]) -> BuildProfile:
    try:
        return BuildProfile.model_validate(settings)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        message = "Required setting missing" if error["type"] == "missing" else error["msg"]
        raise SchemaError(field, message) from e


def _check_sdk_levels(profile: BuildProfile) -> None:
    if profile.min_sdk > profile.target_sdk:
        raise OrderingViolation("minSdk", f"minSdk {profile.min_sdk} exceeds targetSdk {profile.target_sdk}")
    if profile.target_sdk > profile.compile_sdk:
        raise OrderingViolation("targetSdk", f"targetSdk {profile.target_sdk} exceeds compileSdk {profile.compile_sdk}")
    if profile.features.firebase and profile.min_sdk < FIREBASE_MIN_SDK:
        raise OrderingViolation("minSdk", f"Firebase requires minSdk >= {FIREBASE_MIN_SDK}, got {profile.min_sdk}")


def _check_language_levels(profile: BuildProfile) -> None:
    source, target = profile.source_compatibility, profile.target_compatibility
    if source > target:
        raise OrderingViolation(
            "sourceCompatibility", f"sourceCompatibility {source.label} exceeds targetCompatibility {target.label}"
        )
    if profile.jvm_target is not None and profile.jvm_target != target:
        raise OrderingViolation(
            "jvmTarget", f"jvmTarget {profile.jvm_target.label} does not match targetCompatibility {target.label}"
        )


def _check_version_code(profile: BuildProfile, previous_version_code: int | None) -> None:
    if previous_version_code is not None and profile.version_code <= previous_version_code:
        raise OrderingViolation(
            "versionCode",
            f"versionCode {profile.version_code} must exceed last released versionCode {previous_version_code}",
        )


def _resolve_plugins(profile: BuildProfile) -> tuple[str, ...]:
    plugins = profile.plugins
    if len(set(plugins)) != len(plugins):
        raise SchemaError("plugins", "Plugins must not be applied twice")
    if ANDROID_APPLICATION_PLUGIN not in plugins:
        raise SchemaError("plugins", f"Application builds must apply '{ANDROID_APPLICATION_PLUGIN}'")

    if FLUTTER_PLUGIN in plugins:
        flutter_index = plugins.index(FLUTTER_PLUGIN)
        for required in (ANDROID_APPLICATION_PLUGIN, *KOTLIN_ANDROID_PLUGINS):
            if required in plugins and plugins.index(required) > flutter_index:
                raise OrderingViolation("plugins", f"'{FLUTTER_PLUGIN}' must be applied after '{required}'")

    if GOOGLE_SERVICES_PLUGIN in plugins and not profile.features.firebase:
        raise SchemaError("plugins", f"Enable features.firebase instead of listing '{GOOGLE_SERVICES_PLUGIN}'")
    if profile.features.firebase and GOOGLE_SERVICES_PLUGIN not in plugins:
        plugins = (*plugins, GOOGLE_SERVICES_PLUGIN)
    return plugins


def _check_identifiers(profile: BuildProfile) -> None:
    if not PACKAGE_IDENTIFIER.match(profile.application_id):
        raise SchemaError("applicationId", f"'{profile.application_id}' is not a valid package identifier")
    if profile.namespace is not None and not PACKAGE_IDENTIFIER.match(profile.namespace):
        raise SchemaError("namespace", f"'{profile.namespace}' is not a valid package identifier")


def _check_dependencies(profile: BuildProfile) -> None:
    seen: set[str] = set()
    for dep in profile.dependencies:
        if dep.name in seen:
            raise SchemaError("dependencies", f"Dependency '{dep.name}' declared more than once")
        seen.add(dep.name)

    if profile.desugaring_enabled and not profile.desugaring_dependencies:
        raise MissingDependencyError(
            "dependencies", "desugaringEnabled is set but no desugaring dependency (e.g., desugar_jdk_libs) is declared"
        )


def _resolve_signing(profile: BuildProfile, strict: bool) -> tuple[str, tuple[SigningFallbackWarning, ...]]:
    requested = profile.signing_config
    identities = profile.signing_configs

    if not profile.is_release:
        if requested and requested in identities:
            return requested, ()
        return DEBUG_SIGNING, ()

    if requested == DEBUG_SIGNING:
        candidate = None
    elif requested:
        candidate = requested
    else:
        candidate = RELEASE_SIGNING if RELEASE_SIGNING in identities else None

    if candidate is not None and candidate in identities and identities[candidate].is_complete:
        return candidate, ()

    if requested == DEBUG_SIGNING:
        reason = "the debug identity was requested explicitly"
    elif candidate is None:
        reason = "no release signing identity is configured"
    elif candidate not in identities:
        reason = f"signing config '{candidate}' is not declared"
    else:
        reason = f"signing config '{candidate}' has no storeFile or keyAlias"
    message = f"Release build falls back to the '{DEBUG_SIGNING}' signing identity: {reason}"

    if strict:
        raise SigningError("signingConfig", message)

    logger.warning(message)
    return DEBUG_SIGNING, (SigningFallbackWarning(message=message, requested=requested),)
