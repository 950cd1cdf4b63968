"""Reusable, strict base models for the sponge specification."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    Every value type of the specification (field elements, sponge parameters,
    squeeze sizes) derives from this model: instances are validated once at
    construction and can never be mutated afterwards, so they can be shared
    freely between sponge instances.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )
