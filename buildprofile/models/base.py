"""Base models for profile serialization."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelCaseModel(BaseModel):
    """Immutable base model using camelCase keys for input and serialization.

    Attributes are snake_case in Python; raw build settings and JSON output
    use the camelCase names the build toolchain expects (``minSdk``,
    ``applicationId``, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
