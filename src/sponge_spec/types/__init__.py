"""Reusable type definitions for the sponge specification."""

from .base import StrictBaseModel
from .exceptions import (
    AbsorbError,
    SpongeConfigurationError,
    SpongeError,
    SynthesisError,
)

__all__ = [
    "StrictBaseModel",
    # Exceptions
    "SpongeError",
    "SpongeConfigurationError",
    "AbsorbError",
    "SynthesisError",
]
