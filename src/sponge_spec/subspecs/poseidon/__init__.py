"""Specification for the Poseidon permutation and its duplex sponges."""

from .constants import (
    DEFAULT_PARAMS,
    PARAMS_BLS12_381,
    PARAMS_KOALABEAR,
    cauchy_mds,
    derive_parameters,
    derive_round_constants,
)
from .constraints import PoseidonSpongeVar
from .domain_separated import DomainSeparatedSponge, DomainSeparatedSpongeVar
from .parameters import PoseidonParameters
from .permutation import permute
from .sponge import Absorbing, DuplexSpongeMode, PoseidonDuplex, PoseidonSponge, Squeezing

__all__ = [
    "PoseidonParameters",
    "permute",
    "derive_parameters",
    "derive_round_constants",
    "cauchy_mds",
    "PARAMS_BLS12_381",
    "PARAMS_KOALABEAR",
    "DEFAULT_PARAMS",
    "Absorbing",
    "Squeezing",
    "DuplexSpongeMode",
    "PoseidonDuplex",
    "PoseidonSponge",
    "PoseidonSpongeVar",
    "DomainSeparatedSponge",
    "DomainSeparatedSpongeVar",
]
