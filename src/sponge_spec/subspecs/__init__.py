"""Subspecifications of the algebraic sponge."""

from .poseidon import (
    DEFAULT_PARAMS,
    DomainSeparatedSponge,
    DomainSeparatedSpongeVar,
    PoseidonParameters,
    PoseidonSponge,
    PoseidonSpongeVar,
)
from .sponge import CryptographicSponge, CryptographicSpongeVar, FieldElementSize

__all__ = [
    "CryptographicSponge",
    "CryptographicSpongeVar",
    "DomainSeparatedSponge",
    "DomainSeparatedSpongeVar",
    "FieldElementSize",
    "PoseidonParameters",
    "PoseidonSponge",
    "PoseidonSpongeVar",
    "DEFAULT_PARAMS",
]
