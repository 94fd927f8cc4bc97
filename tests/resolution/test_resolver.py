"""Unit tests for the profile resolver."""

from typing import Any

import pytest
from pydantic import ValidationError

from buildprofile.errors import MissingDependencyError
from buildprofile.errors import OrderingViolation
from buildprofile.errors import SchemaError
from buildprofile.errors import SigningError
from buildprofile.models import BuildProfile
from buildprofile.models import BuildType
from buildprofile.models import FrameworkDefaults
from buildprofile.models import JavaVersion
from buildprofile.models import SigningFallbackWarning
from buildprofile.resolution import resolve


@pytest.mark.unit
class TestResolveValidSettings:
    """Test successful resolution."""

    def test_resolves_desugaring_example(self, raw_settings: dict[str, Any]) -> None:
        """Test the desugaring example resolves with every field normalized."""
        result = resolve(raw_settings)
        profile = result.profile

        assert isinstance(profile, BuildProfile)
        assert profile.application_id == "com.example.app"
        assert (profile.min_sdk, profile.target_sdk, profile.compile_sdk) == (21, 34, 36)
        assert profile.desugaring_enabled is True
        assert profile.dependencies[0].name == "desugar_jdk_libs"
        assert profile.dependencies[0].version == "2.0.4"

    def test_resolution_is_idempotent(self, raw_settings: dict[str, Any]) -> None:
        """Test resolving the same settings twice yields identical results."""
        first = resolve(raw_settings)
        second = resolve(raw_settings)

        assert first == second
        assert first.profile.to_json_dict() == second.profile.to_json_dict()

    def test_does_not_mutate_input(self, raw_settings: dict[str, Any]) -> None:
        """Test raw settings are left untouched."""
        snapshot = dict(raw_settings)

        resolve(raw_settings)

        assert raw_settings == snapshot

    def test_profile_is_immutable(self, raw_settings: dict[str, Any]) -> None:
        """Test resolved profiles cannot be modified."""
        profile = resolve(raw_settings).profile

        with pytest.raises(ValidationError):
            profile.min_sdk = 30  # type: ignore[misc]

    def test_framework_defaults_fill_missing_settings(self) -> None:
        """Test framework defaults supply SDK levels and versions."""
        defaults = FrameworkDefaults(min_sdk_version=23, target_sdk_version=35, compile_sdk_version=35)

        profile = resolve({"applicationId": "com.example.app"}, defaults).profile

        assert (profile.min_sdk, profile.target_sdk, profile.compile_sdk) == (23, 35, 35)
        assert profile.version_code == 1
        assert profile.version_name == "1.0.0"
        assert profile.ndk_version == "27.0.12077973"

    def test_explicit_settings_override_defaults(self) -> None:
        """Test explicit settings take precedence over framework defaults."""
        profile = resolve({"applicationId": "com.example.app", "minSdk": 26}).profile

        assert profile.min_sdk == 26

    def test_framework_minsdkversion_key_is_accepted(self) -> None:
        """Test the framework's minSdkVersion spelling maps to minSdk."""
        profile = resolve({"applicationId": "com.example.app", "minSdkVersion": 24}).profile

        assert profile.min_sdk == 24

    def test_framework_reference_is_substituted(self) -> None:
        """Test flutter.<name> values resolve from framework defaults."""
        defaults = FrameworkDefaults(min_sdk_version=22)

        profile = resolve({"applicationId": "com.example.app", "minSdk": "flutter.minSdkVersion"}, defaults).profile

        assert profile.min_sdk == 22

    def test_namespace_defaults_to_application_id(self, raw_settings: dict[str, Any]) -> None:
        """Test namespace falls back to the application id."""
        profile = resolve(raw_settings).profile

        assert profile.namespace == "com.example.app"

    def test_jvm_target_defaults_to_target_compatibility(self) -> None:
        """Test jvmTarget follows targetCompatibility when omitted."""
        settings = {
            "applicationId": "com.example.app",
            "sourceCompatibility": "VERSION_1_8",
            "targetCompatibility": "17",
        }

        profile = resolve(settings).profile

        assert profile.source_compatibility is JavaVersion.VERSION_1_8
        assert profile.jvm_target is JavaVersion.VERSION_17

    def test_json_output_uses_camel_case(self, raw_settings: dict[str, Any]) -> None:
        """Test serialized profiles use the packager's field names."""
        data = resolve(raw_settings).profile.to_json_dict()

        assert data["applicationId"] == "com.example.app"
        assert data["minSdk"] == 21
        assert data["sourceCompatibility"] == 11
        assert data["desugaringEnabled"] is True
        assert data["signingConfig"] == "debug"


@pytest.mark.unit
class TestResolveSchemaErrors:
    """Test SchemaError cases."""

    def test_missing_application_id(self) -> None:
        """Test missing applicationId names the field."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"minSdk": 21})

        assert exc_info.value.field == "applicationId"

    def test_wrong_type(self) -> None:
        """Test non-integer SDK levels are rejected."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": "com.example.app", "targetSdk": "latest"})

        assert exc_info.value.field == "targetSdk"

    def test_non_positive_sdk(self) -> None:
        """Test SDK levels must be positive."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": "com.example.app", "minSdk": 0})

        assert exc_info.value.field == "minSdk"

    def test_unknown_setting(self) -> None:
        """Test unknown settings are rejected rather than ignored."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": "com.example.app", "minSdkk": 21})

        assert exc_info.value.field == "minSdkk"

    @pytest.mark.parametrize("application_id", ["example", "com..example", "com.1example", "com.example-app", ""])
    def test_invalid_application_id(self, application_id: str) -> None:
        """Test identifiers must follow package syntax."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": application_id})

        assert exc_info.value.field == "applicationId"

    def test_invalid_namespace(self) -> None:
        """Test namespace must follow package syntax."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": "com.example.app", "namespace": "not a namespace"})

        assert exc_info.value.field == "namespace"

    def test_duplicate_dependency_names(self) -> None:
        """Test dependency names must be unique."""
        settings = {
            "applicationId": "com.example.app",
            "dependencies": [("core-ktx", "1.12.0"), ("core-ktx", "1.13.0")],
        }

        with pytest.raises(SchemaError) as exc_info:
            resolve(settings)

        assert exc_info.value.field == "dependencies"

    def test_unknown_framework_reference(self) -> None:
        """Test unknown flutter.* references fail."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": "com.example.app", "minSdk": "flutter.minimumSdk"})

        assert exc_info.value.field == "minSdk"

    def test_unknown_java_version(self) -> None:
        """Test unrecognized language levels fail."""
        with pytest.raises(SchemaError) as exc_info:
            resolve({"applicationId": "com.example.app", "sourceCompatibility": "VERSION_42"})

        assert exc_info.value.field == "sourceCompatibility"


@pytest.mark.unit
class TestResolveOrdering:
    """Test OrderingViolation cases."""

    def test_min_sdk_above_target_sdk(self, raw_settings: dict[str, Any]) -> None:
        """Test minSdk greater than targetSdk fails."""
        raw_settings.update(minSdk=34, targetSdk=21)

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(raw_settings)

        assert exc_info.value.field == "minSdk"

    def test_target_sdk_above_compile_sdk(self, raw_settings: dict[str, Any]) -> None:
        """Test targetSdk greater than compileSdk fails."""
        raw_settings.update(targetSdk=36, compileSdk=35)

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(raw_settings)

        assert exc_info.value.field == "targetSdk"

    @pytest.mark.parametrize(("min_sdk", "target_sdk", "compile_sdk"), [(21, 34, 36), (34, 34, 34), (1, 2, 3)])
    def test_ordered_sdk_levels_resolve(self, min_sdk: int, target_sdk: int, compile_sdk: int) -> None:
        """Test ordered SDK levels always resolve."""
        settings = {
            "applicationId": "com.example.app",
            "minSdk": min_sdk,
            "targetSdk": target_sdk,
            "compileSdk": compile_sdk,
        }

        profile = resolve(settings).profile

        assert profile.min_sdk <= profile.target_sdk <= profile.compile_sdk

    def test_source_above_target_compatibility(self) -> None:
        """Test sourceCompatibility greater than targetCompatibility fails."""
        settings = {
            "applicationId": "com.example.app",
            "sourceCompatibility": "VERSION_17",
            "targetCompatibility": "VERSION_11",
        }

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(settings)

        assert exc_info.value.field == "sourceCompatibility"

    def test_jvm_target_mismatch(self) -> None:
        """Test jvmTarget must match targetCompatibility."""
        settings = {"applicationId": "com.example.app", "targetCompatibility": "11", "jvmTarget": "17"}

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(settings)

        assert exc_info.value.field == "jvmTarget"

    def test_version_code_must_increase(self) -> None:
        """Test versionCode must exceed the last release."""
        settings = {"applicationId": "com.example.app", "versionCode": 5}

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(settings, previous_version_code=5)

        assert exc_info.value.field == "versionCode"
        assert resolve(settings, previous_version_code=4).profile.version_code == 5

    def test_flutter_plugin_after_android_plugins(self) -> None:
        """Test the Flutter plugin must follow the Android and Kotlin plugins."""
        settings = {
            "applicationId": "com.example.app",
            "plugins": ["com.android.application", "dev.flutter.flutter-gradle-plugin", "kotlin-android"],
        }

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(settings)

        assert exc_info.value.field == "plugins"

    def test_sdk_ordering_checked_before_identifier(self) -> None:
        """Test the first failing invariant is reported."""
        with pytest.raises(OrderingViolation):
            resolve({"applicationId": "bad", "minSdk": 34, "targetSdk": 21})


@pytest.mark.unit
class TestResolveDesugaring:
    """Test desugaring dependency requirement."""

    def test_desugaring_without_dependency(self, raw_settings: dict[str, Any]) -> None:
        """Test desugaring without dependencies fails."""
        raw_settings["dependencies"] = []

        with pytest.raises(MissingDependencyError) as exc_info:
            resolve(raw_settings)

        assert exc_info.value.field == "dependencies"

    def test_desugaring_with_unrelated_dependencies(self, raw_settings: dict[str, Any]) -> None:
        """Test unrelated dependencies do not satisfy desugaring."""
        raw_settings["dependencies"] = ["androidx.core:core-ktx:1.13.1"]

        with pytest.raises(MissingDependencyError):
            resolve(raw_settings)

    def test_desugaring_configuration_counts(self, raw_settings: dict[str, Any]) -> None:
        """Test a coreLibraryDesugaring dependency satisfies desugaring."""
        raw_settings["dependencies"] = [{"coreLibraryDesugaring": "com.android.tools:desugar_jdk_libs_nio:2.0.4"}]

        profile = resolve(raw_settings).profile

        assert profile.desugaring_dependencies[0].group == "com.android.tools"

    def test_gradle_desugaring_flag_spelling(self) -> None:
        """Test isCoreLibraryDesugaringEnabled maps to desugaringEnabled."""
        with pytest.raises(MissingDependencyError):
            resolve({"applicationId": "com.example.app", "isCoreLibraryDesugaringEnabled": True})

    def test_desugaring_disabled_needs_no_dependency(self) -> None:
        """Test no dependency is required when desugaring is off."""
        profile = resolve({"applicationId": "com.example.app", "desugaringEnabled": False}).profile

        assert profile.dependencies == ()


@pytest.mark.unit
class TestResolveSigning:
    """Test signing identity selection."""

    def test_release_without_identity_falls_back_to_debug(self, raw_settings: dict[str, Any]) -> None:
        """Test release builds fall back to debug signing with a warning."""
        result = resolve(raw_settings, build_type="release")

        assert result.profile.signing_config == "debug"
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert isinstance(warning, SigningFallbackWarning)
        assert warning.identity == "debug"
        assert warning.field == "signingConfig"
        assert "debug" in warning.message

    def test_fallback_is_logged(self, raw_settings: dict[str, Any], caplog: pytest.LogCaptureFixture) -> None:
        """Test the fallback is surfaced as a log warning."""
        resolve(raw_settings, build_type=BuildType.RELEASE)

        assert "falls back to the 'debug' signing identity" in caplog.text

    def test_explicit_debug_request_warns(self, raw_settings: dict[str, Any], release_identity: dict[str, Any]) -> None:
        """Test requesting debug signing for a release still warns."""
        raw_settings.update(signingConfig="debug", signingConfigs={"release": release_identity})

        result = resolve(raw_settings)

        assert result.profile.signing_config == "debug"
        assert result.warnings[0].requested == "debug"

    def test_declared_release_identity_is_used(
        self, raw_settings: dict[str, Any], release_identity: dict[str, Any]
    ) -> None:
        """Test a complete release identity is selected without warnings."""
        raw_settings["signingConfigs"] = {"release": release_identity}

        result = resolve(raw_settings)

        assert result.profile.signing_config == "release"
        assert result.warnings == ()

    def test_named_identity_is_used(self, raw_settings: dict[str, Any], release_identity: dict[str, Any]) -> None:
        """Test a requested, declared identity is selected."""
        raw_settings.update(signingConfig="upload", signingConfigs={"upload": release_identity})

        result = resolve(raw_settings)

        assert result.profile.signing_config == "upload"
        assert not result.has_warnings

    def test_undeclared_identity_falls_back(self, raw_settings: dict[str, Any]) -> None:
        """Test requesting an undeclared identity falls back to debug."""
        raw_settings["signingConfig"] = "release"

        result = resolve(raw_settings)

        assert result.profile.uses_debug_signing
        assert "not declared" in result.warnings[0].message

    def test_incomplete_identity_falls_back(self, raw_settings: dict[str, Any]) -> None:
        """Test an identity without keystore or alias is not used."""
        raw_settings["signingConfigs"] = {"release": {"storeFile": "release.jks"}}

        result = resolve(raw_settings)

        assert result.profile.signing_config == "debug"
        assert result.has_warnings

    def test_debug_build_uses_debug_identity(self, raw_settings: dict[str, Any]) -> None:
        """Test debug builds sign with debug without warnings."""
        result = resolve(raw_settings, build_type="debug")

        assert result.profile.build_type is BuildType.DEBUG
        assert result.profile.signing_config == "debug"
        assert result.warnings == ()

    def test_strict_signing_rejects_fallback(self, raw_settings: dict[str, Any]) -> None:
        """Test strict signing turns the fallback into an error."""
        with pytest.raises(SigningError) as exc_info:
            resolve(raw_settings, strict_signing=True)

        assert exc_info.value.field == "signingConfig"

    def test_secrets_are_masked_in_output(self, raw_settings: dict[str, Any], release_identity: dict[str, Any]) -> None:
        """Test signing passwords never appear in serialized profiles."""
        raw_settings["signingConfigs"] = {"release": release_identity}

        data = resolve(raw_settings).profile.to_json_dict()

        assert "store-secret" not in str(data)
        assert data["signingConfigs"]["release"]["keyAlias"] == "upload"


@pytest.mark.unit
class TestResolveFeatures:
    """Test optional capability flags."""

    def test_firebase_appends_google_services_plugin(self) -> None:
        """Test enabling Firebase applies the Google services plugin last."""
        profile = resolve({"applicationId": "com.example.app", "features": {"firebase": True}}).profile

        assert profile.plugins[-1] == "com.google.gms.google-services"
        assert profile.features.firebase is True

    def test_firebase_disabled_by_default(self) -> None:
        """Test the Google services plugin is absent by default."""
        profile = resolve({"applicationId": "com.example.app"}).profile

        assert "com.google.gms.google-services" not in profile.plugins

    def test_google_services_plugin_requires_flag(self) -> None:
        """Test listing the plugin directly is rejected in favor of the flag."""
        settings = {
            "applicationId": "com.example.app",
            "plugins": ["com.android.application", "com.google.gms.google-services"],
        }

        with pytest.raises(SchemaError) as exc_info:
            resolve(settings)

        assert exc_info.value.field == "plugins"

    def test_firebase_requires_min_sdk_21(self) -> None:
        """Test Firebase raises the minimum SDK floor."""
        settings = {"applicationId": "com.example.app", "minSdk": 19, "features": {"firebase": True}}

        with pytest.raises(OrderingViolation) as exc_info:
            resolve(settings)

        assert exc_info.value.field == "minSdk"

    def test_application_plugin_required(self) -> None:
        """Test the Android application plugin must be applied."""
        with pytest.raises(SchemaError):
            resolve({"applicationId": "com.example.app", "plugins": ["kotlin-android"]})
