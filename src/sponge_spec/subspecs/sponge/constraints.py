"""
The constraint-system counterpart of the sponge interface.

Every method mirrors its native namesake in `interface.py`: for the same
absorbed values, the witnesses of the returned variables equal the native
outputs bit for bit.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Self

from sponge_spec.types import SynthesisError

from ..fields import PrimeFieldElement
from ..r1cs import Boolean, ConstraintSystem, FpVar, UInt8Var, UInt8Vec
from .interface import FieldElementSize, domain_separator_bytes

logger = logging.getLogger(__name__)


class CryptographicSpongeVar(ABC):
    """A sponge whose state lives in a constraint system."""

    @property
    @abstractmethod
    def cs(self) -> ConstraintSystem:
        """The constraint system receiving the sponge's constraints."""

    @property
    @abstractmethod
    def field(self) -> type[PrimeFieldElement]:
        """The field the sponge state lives in."""

    @abstractmethod
    def absorb(self, value: Any) -> None:
        """Absorb the canonical encoding of `value`."""

    @abstractmethod
    def squeeze_field_elements(self, num_elements: int) -> list[FpVar]:
        """Squeeze `num_elements` field variables."""

    @abstractmethod
    def squeeze_bits(self, num_bits: int) -> list[Boolean]:
        """Squeeze `num_bits` constrained bits."""

    @abstractmethod
    def clone(self) -> Self:
        """A copy of the sponge sharing the same constraint system."""

    def squeeze_bytes(self, num_bytes: int) -> UInt8Vec:
        """Squeeze `num_bytes` bytes, built from `squeeze_bits(8 * num_bytes)`."""
        bits = self.squeeze_bits(8 * num_bytes)
        return UInt8Vec(UInt8Var(bits[i : i + 8]) for i in range(0, len(bits), 8))

    def squeeze_field_elements_with_sizes(
        self, sizes: Sequence[FieldElementSize]
    ) -> list[FpVar]:
        """Squeeze one field variable per requested size."""
        if not sizes:
            return []
        if all(size.is_full for size in sizes):
            return self.squeeze_field_elements(len(sizes))

        try:
            total_bits = FieldElementSize.sum(sizes, self.field)
        except ValueError as e:
            raise SynthesisError(str(e)) from e

        bits = self.squeeze_bits(total_bits)
        output: list[FpVar] = []
        offset = 0
        for size in sizes:
            num_bits = size.num_bits(self.field)
            output.append(FpVar.from_bits_le(bits[offset : offset + num_bits], self.field, self.cs))
            offset += num_bits
        return output

    def fork(self, domain: bytes) -> Self:
        """
        Derive an independent sponge for a sub-protocol.

        The domain is a public constant, so forking costs no constraints
        beyond the permutations the absorption triggers.
        """
        forked = self.clone()
        forked.absorb(domain_separator_bytes(domain))
        logger.debug("Forked %s with a %d-byte domain", type(self).__name__, len(domain))
        return forked
