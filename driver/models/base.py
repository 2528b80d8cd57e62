"""Base class for the immutable in-memory models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from driver.errors import InvalidEnumValue, ModelError


class DomainModel(BaseModel):
    """Frozen pydantic model that reports invalid input as ModelError.

    Settlements are read by several stages of an auction round, so they are
    validated once at construction and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, /, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            raise model_error(type(self).__name__, err) from err


def model_error(model_name: str, err: ValidationError) -> ModelError:
    """Translate a pydantic ValidationError into the driver's error types."""
    if any(error["type"] == "enum" for error in err.errors()):
        return InvalidEnumValue(f"Invalid {model_name}: {err}")
    return ModelError(f"Invalid {model_name}: {err}")
