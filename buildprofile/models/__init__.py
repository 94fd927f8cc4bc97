"""Data models for build profile resolution.

Public Interface:
    - BuildProfile: Resolved, immutable build settings
    - ResolvedProfile: Profile plus non-fatal warnings
    - SigningFallbackWarning: Release build using the debug identity
    - Dependency, SigningIdentity, FeatureFlags, FrameworkDefaults
    - BuildType, JavaVersion
"""

from .base import CamelCaseModel
from .dependencies import Dependency
from .enums import BuildType
from .enums import JavaVersion
from .framework import FeatureFlags
from .framework import FrameworkDefaults
from .profile import BuildProfile
from .profile import ResolutionWarning
from .profile import ResolvedProfile
from .profile import SigningFallbackWarning
from .signing import DEBUG_SIGNING
from .signing import RELEASE_SIGNING
from .signing import SigningIdentity

__all__ = [
    "CamelCaseModel",
    "BuildProfile",
    "BuildType",
    "DEBUG_SIGNING",
    "Dependency",
    "FeatureFlags",
    "FrameworkDefaults",
    "JavaVersion",
    "RELEASE_SIGNING",
    "ResolutionWarning",
    "ResolvedProfile",
    "SigningFallbackWarning",
    "SigningIdentity",
]
