"""Prime fields consumed by the sponge."""

from .bls12_381 import R, R_BITS, Fr
from .koalabear import P, P_BITS, Fp
from .prime_field import PrimeFieldElement

__all__ = [
    "PrimeFieldElement",
    "Fp",
    "P",
    "P_BITS",
    "Fr",
    "R",
    "R_BITS",
]
