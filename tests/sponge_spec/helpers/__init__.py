"""Test helpers for the sponge unit tests."""

from .builders import F97, SMALL_KOALABEAR_PARAMS, TOY_PARAMS, make_toy_params

__all__ = [
    "F97",
    "TOY_PARAMS",
    "SMALL_KOALABEAR_PARAMS",
    "make_toy_params",
]
