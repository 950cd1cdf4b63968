"""
Domain-separated Poseidon sponges.

A domain-separated sponge is a fresh sponge that has absorbed a domain tag
before anything else. Two protocols using different tags therefore never
share a challenge stream, even when they absorb identical transcripts.

The wrappers build their inner sponge from the parameters themselves, so the
tag is always the first thing the sponge absorbs.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Self

from ..fields import PrimeFieldElement
from ..r1cs import Boolean, ConstraintSystem, FpVar
from ..sponge import CryptographicSponge, CryptographicSpongeVar, domain_separator_bytes
from .constraints import PoseidonSpongeVar
from .parameters import PoseidonParameters
from .sponge import PoseidonSponge

logger = logging.getLogger(__name__)


class DomainSeparatedSponge(CryptographicSponge):
    """
    A native Poseidon sponge bound to a domain.

    Equivalent to `PoseidonSponge(params).fork(domain)`.

    Args:
        params: The parameter set of the inner sponge.
        domain: The domain tag.
    """

    def __init__(self, params: PoseidonParameters, domain: bytes) -> None:
        self.domain = bytes(domain)
        self.sponge = PoseidonSponge(params)
        self.sponge.absorb(domain_separator_bytes(self.domain))
        logger.debug("Bound a %s sponge to domain %r", params.field.__name__, self.domain)

    @property
    def field(self) -> type[PrimeFieldElement]:
        return self.sponge.field

    def absorb(self, value: Any) -> None:
        self.sponge.absorb(value)

    def squeeze_field_elements(self, num_elements: int) -> list[PrimeFieldElement]:
        return self.sponge.squeeze_field_elements(num_elements)

    def squeeze_bits(self, num_bits: int) -> list[bool]:
        return self.sponge.squeeze_bits(num_bits)

    def clone(self) -> Self:
        cloned = copy.copy(self)
        cloned.sponge = self.sponge.clone()
        return cloned


class DomainSeparatedSpongeVar(CryptographicSpongeVar):
    """
    A circuit Poseidon sponge bound to a domain.

    The tag is a public constant, so binding it costs no constraints beyond
    the permutations its absorption triggers.

    Raises:
        SynthesisError: If `cs` is over another field than `params`.
    """

    def __init__(self, cs: ConstraintSystem, params: PoseidonParameters, domain: bytes) -> None:
        self.domain = bytes(domain)
        self.sponge = PoseidonSpongeVar(cs, params)
        self.sponge.absorb(domain_separator_bytes(self.domain))

    @property
    def cs(self) -> ConstraintSystem:
        return self.sponge.cs

    @property
    def field(self) -> type[PrimeFieldElement]:
        return self.sponge.field

    def absorb(self, value: Any) -> None:
        self.sponge.absorb(value)

    def squeeze_field_elements(self, num_elements: int) -> list[FpVar]:
        return self.sponge.squeeze_field_elements(num_elements)

    def squeeze_bits(self, num_bits: int) -> list[Boolean]:
        return self.sponge.squeeze_bits(num_bits)

    def clone(self) -> Self:
        cloned = copy.copy(self)
        cloned.sponge = self.sponge.clone()
        return cloned
