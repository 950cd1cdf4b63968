"""Tests for the strict base model."""

import pytest
from pydantic import ValidationError

from sponge_spec.types import StrictBaseModel


class Sample(StrictBaseModel):
    count: int


def test_strict_and_frozen() -> None:
    """No coercion, no extra fields, no mutation."""
    assert Sample(count=3).count == 3
    with pytest.raises(ValidationError):
        Sample(count="3")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        Sample(count=3, extra=1)  # type: ignore[call-arg]
    with pytest.raises(ValidationError):
        Sample(count=3).count = 4  # type: ignore[misc]
