"""Enumerations for build profiles."""

from enum import Enum
from enum import IntEnum
from typing import Any


class BuildType(str, Enum):
    """Build variants produced by the host framework."""

    DEBUG = "debug"
    PROFILE = "profile"
    RELEASE = "release"


class JavaVersion(IntEnum):
    """Ordinal Java language levels for source/target compatibility."""

    VERSION_1_8 = 8
    VERSION_9 = 9
    VERSION_10 = 10
    VERSION_11 = 11
    VERSION_12 = 12
    VERSION_13 = 13
    VERSION_14 = 14
    VERSION_15 = 15
    VERSION_16 = 16
    VERSION_17 = 17
    VERSION_18 = 18
    VERSION_19 = 19
    VERSION_20 = 20
    VERSION_21 = 21
    VERSION_22 = 22
    VERSION_23 = 23
    VERSION_24 = 24
    VERSION_25 = 25

    @property
    def label(self) -> str:
        """Version as written in ``jvmTarget`` (``"1.8"``, ``"11"``)."""
        if self is JavaVersion.VERSION_1_8:
            return "1.8"
        return str(self.value)

    @classmethod
    def parse(cls, value: Any) -> "JavaVersion":
        """Parse a language level from its common spellings.

        Accepts ``JavaVersion.VERSION_11``, ``VERSION_11``, ``"11"``, ``11``,
        ``"1.8"``, ``1.8`` and ``VERSION_1_8``.

        Raises:
            ValueError: If the value is not a known language level
        """
        if isinstance(value, JavaVersion):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unrecognized Java version: {value!r}")
        if isinstance(value, int):
            return cls(value)

        text = str(value).strip()
        text = text.removeprefix("JavaVersion.").removeprefix("VERSION_").replace("_", ".")
        if text.startswith("1."):
            text = text[2:]
        if not text.isdigit():
            raise ValueError(f"Unrecognized Java version: {value!r}")
        return cls(int(text))
