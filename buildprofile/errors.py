"""Error taxonomy for build profile resolution.

All fatal errors abort resolution and carry the name of the offending
setting. No partial profile is ever returned alongside an error.
"""


class ProfileValidationError(Exception):
    """Raised when raw settings cannot be resolved into a profile.

    Attributes:
        field: Raw setting name that failed (camelCase, dotted for nested keys)
        message: Description of the failure
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class SchemaError(ProfileValidationError):
    """Required setting missing, of the wrong type, or malformed."""


class DeclarationError(SchemaError):
    """Declaration document could not be read or has the wrong shape."""


class OrderingViolation(ProfileValidationError):
    """An ordering invariant (SDK levels, language levels, versions, plugins) is broken."""


class MissingDependencyError(ProfileValidationError):
    """A capability is enabled without the dependency it requires."""


class SigningError(ProfileValidationError):
    """Release build would fall back to debug signing under strict signing."""
