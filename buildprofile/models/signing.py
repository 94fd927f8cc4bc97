"""Signing identity declarations."""

from pydantic import SecretStr

from .base import CamelCaseModel

DEBUG_SIGNING = "debug"
RELEASE_SIGNING = "release"


class SigningIdentity(CamelCaseModel):
    """A named keystore identity used to sign an artifact.

    The resolver only selects an identity; it never reads the keystore.

    Attributes:
        store_file: Path to the keystore
        store_password: Keystore password
        key_alias: Alias of the signing key
        key_password: Key password
    """

    store_file: str | None = None
    store_password: SecretStr | None = None
    key_alias: str | None = None
    key_password: SecretStr | None = None

    @property
    def is_complete(self) -> bool:
        """Whether the identity names both a keystore and a key."""
        return bool(self.store_file) and bool(self.key_alias)
