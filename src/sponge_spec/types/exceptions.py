"""Exception hierarchy for the sponge specification."""

from __future__ import annotations

from typing import Any


class SpongeError(Exception):
    """
    Base exception for all sponge-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class SpongeConfigurationError(SpongeError):
    """
    Raised when sponge or permutation parameters are inconsistent.

    These errors are detected when the parameter set is constructed and are
    never repaired silently (no truncation, no padding of tables).

    Attributes:
        parameter: The name of the offending parameter.
        detail: Description of the inconsistency.
    """

    def __init__(self, parameter: str, detail: str) -> None:
        self.parameter = parameter
        self.detail = detail
        super().__init__(f"Invalid {parameter}: {detail}")


class AbsorbError(SpongeError):
    """
    Raised when a value has no canonical encoding into the sponge's field.

    Attributes:
        type_name: The Python type of the rejected value.
        value: The rejected value (may be truncated for display).
        detail: Additional context about the error.
    """

    def __init__(self, type_name: str, value: Any = None, *, detail: str | None = None) -> None:
        self.type_name = type_name
        self.value = value
        self.detail = detail

        msg = f"Cannot absorb value of type {type_name}"
        if detail:
            msg = f"{msg}: {detail}"
        if value is not None:
            value_repr = repr(value)
            if len(value_repr) > 50:
                value_repr = value_repr[:47] + "..."
            msg = f"{msg} ({value_repr})"

        super().__init__(msg)


class SynthesisError(SpongeError):
    """
    Raised when constraints cannot be synthesized soundly.

    Synthesis errors are caller bugs detected while the constraint system is
    being built (for example a bit decomposition wider than the field), never
    at proving time.
    """
