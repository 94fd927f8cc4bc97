"""Build profile resolution.

Resolves the declarative settings of an Android build variant into a
validated, immutable BuildProfile for the packaging toolchain.

Public Interface:
    - resolve: Resolve raw settings into a ResolvedProfile
    - load_declaration: Read a YAML declaration into raw settings
    - BuildProfile, ResolvedProfile, FrameworkDefaults: Core models
    - ProfileValidationError and subclasses: Error taxonomy
"""

from .declarations import load_declaration
from .errors import DeclarationError
from .errors import MissingDependencyError
from .errors import OrderingViolation
from .errors import ProfileValidationError
from .errors import SchemaError
from .errors import SigningError
from .models import BuildProfile
from .models import BuildType
from .models import FrameworkDefaults
from .models import ResolvedProfile
from .models import SigningFallbackWarning
from .resolution import resolve

__all__ = [
    "resolve",
    "load_declaration",
    "BuildProfile",
    "BuildType",
    "FrameworkDefaults",
    "ResolvedProfile",
    "SigningFallbackWarning",
    "ProfileValidationError",
    "SchemaError",
    "DeclarationError",
    "OrderingViolation",
    "MissingDependencyError",
    "SigningError",
]
