"""The KoalaBear prime field, a small field used for cheap sponge instances."""

from typing import ClassVar

from .prime_field import PrimeFieldElement

# =================================================================
# Field Constants
#
# The prime is chosen because the cube map (x -> x^3) is an
# automorphism of the multiplicative group.
# =================================================================

P: int = 2**31 - 2**24 + 1
"""The KoalaBear Prime: P = 2^31 - 2^24 + 1"""

P_BITS: int = 31
"""The number of bits in the prime P."""


class Fp(PrimeFieldElement):
    """An element in the KoalaBear prime field F_p."""

    MODULUS: ClassVar[int] = P
