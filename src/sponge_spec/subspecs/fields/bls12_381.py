"""
The scalar field of the BLS12-381 curve.

This is the field in which pairing-based SNARKs over BLS12-381 express their
constraints, so a sponge over `Fr` can be mirrored in-circuit at native cost.
"""

from typing import ClassVar

from .prime_field import PrimeFieldElement

R: int = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
"""The order r of the BLS12-381 prime-order subgroup."""

R_BITS: int = 255
"""The number of bits in r."""


class Fr(PrimeFieldElement):
    """An element in the BLS12-381 scalar field F_r."""

    MODULUS: ClassVar[int] = R
