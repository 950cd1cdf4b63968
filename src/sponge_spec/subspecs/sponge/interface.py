"""
The generic cryptographic sponge interface.

A sponge alternates between absorbing transcript data and squeezing
challenges. Concrete sponges only implement field-element absorption and
squeezing; bytes, sized field elements, and forks are derived here so every
implementation shares one definition of them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Self

from pydantic import Field

from sponge_spec.types import StrictBaseModel

from ..fields import PrimeFieldElement
from .absorb import bits_to_bytes_le

logger = logging.getLogger(__name__)


class FieldElementSize(StrictBaseModel):
    """
    The requested size of a squeezed field element.

    A full-size element carries `capacity_bits` bits of the sponge output; a
    truncated one only `truncated_bits` bits, which is cheaper to consume in
    protocols that only need short challenges.
    """

    truncated_bits: int | None = Field(
        default=None, gt=0, description="Number of bits, or None for a full-size element."
    )

    @classmethod
    def full(cls) -> FieldElementSize:
        """A full-size element."""
        return cls()

    @classmethod
    def truncated(cls, num_bits: int) -> FieldElementSize:
        """An element holding only `num_bits` bits."""
        return cls(truncated_bits=num_bits)

    @property
    def is_full(self) -> bool:
        """Whether this is a full-size element."""
        return self.truncated_bits is None

    def num_bits(self, field: type[PrimeFieldElement]) -> int:
        """
        The number of squeezed bits this size consumes.

        Raises:
            ValueError: If a truncated size exceeds the field's capacity.
        """
        if self.truncated_bits is None:
            return field.capacity_bits()
        if self.truncated_bits > field.capacity_bits():
            raise ValueError(
                f"{self.truncated_bits} bits exceed the {field.capacity_bits()}-bit "
                f"capacity of {field.__name__}"
            )
        return self.truncated_bits

    @staticmethod
    def sum(sizes: Sequence[FieldElementSize], field: type[PrimeFieldElement]) -> int:
        """The total number of bits consumed by `sizes`."""
        return sum(size.num_bits(field) for size in sizes)


class CryptographicSponge(ABC):
    """
    A sponge over concrete field elements.

    Sponges are single-owner state machines: they are not safe to mutate from
    several threads, and `clone`/`fork` always return deep copies so that a
    derived transcript can never influence its parent.
    """

    @property
    @abstractmethod
    def field(self) -> type[PrimeFieldElement]:
        """The field the sponge state lives in."""

    @abstractmethod
    def absorb(self, value: Any) -> None:
        """Absorb the canonical encoding of `value`."""

    @abstractmethod
    def squeeze_field_elements(self, num_elements: int) -> list[PrimeFieldElement]:
        """Squeeze `num_elements` field elements."""

    @abstractmethod
    def squeeze_bits(self, num_bits: int) -> list[bool]:
        """Squeeze `num_bits` unbiased bits."""

    @abstractmethod
    def clone(self) -> Self:
        """A deep copy of the sponge."""

    def squeeze_bytes(self, num_bytes: int) -> bytes:
        """
        Squeeze `num_bytes` bytes.

        The bytes are `squeeze_bits(8 * num_bytes)` packed eight bits per
        byte, least significant bit first.
        """
        return bits_to_bytes_le(self.squeeze_bits(8 * num_bytes))

    def squeeze_field_elements_with_sizes(
        self, sizes: Sequence[FieldElementSize]
    ) -> list[PrimeFieldElement]:
        """
        Squeeze one field element per requested size.

        When every size is full the elements are squeezed directly. Otherwise
        the total number of bits is squeezed at once and consecutive windows
        of the requested widths are read as little-endian integers.
        """
        if not sizes:
            return []
        if all(size.is_full for size in sizes):
            return self.squeeze_field_elements(len(sizes))

        bits = self.squeeze_bits(FieldElementSize.sum(sizes, self.field))
        output: list[PrimeFieldElement] = []
        offset = 0
        for size in sizes:
            num_bits = size.num_bits(self.field)
            output.append(self.field.from_bits_le(bits[offset : offset + num_bits]))
            offset += num_bits
        return output

    def fork(self, domain: bytes) -> Self:
        """
        Derive an independent sponge for a sub-protocol.

        The parent is cloned, and the clone absorbs the domain's length as
        eight little-endian bytes followed by the domain itself. The parent
        is left unchanged.

        Args:
            domain: The separator tag of the sub-protocol.

        Returns:
            The forked sponge.
        """
        forked = self.clone()
        forked.absorb(domain_separator_bytes(domain))
        logger.debug("Forked %s with a %d-byte domain", type(self).__name__, len(domain))
        return forked


def domain_separator_bytes(domain: bytes) -> bytes:
    """The bytes absorbed to separate a domain: `len(domain)` as u64 LE, then `domain`."""
    return len(domain).to_bytes(8, byteorder="little") + bytes(domain)
