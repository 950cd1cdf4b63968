"""
Canonical encodings of absorbable values.

Everything a protocol commits to passes through these encodings, so they are
part of the transcript format: the same logical value must always produce the
same sequence, and distinct values of the same shape must never collide.

### Encoding Rules

- A field element of the sponge's field is absorbed as itself.
- `bool` is embedded as 0 or 1; `int` in `[0, MODULUS)` is embedded directly.
- `bytes` and bit strings are prefixed with their length and packed
  little-endian, `capacity_bits` bits per element. The length prefix keeps
  `b"\\x01"` and `b"\\x01\\x00"` apart.
- A `BitString` is always a bit string, even when empty. A plain non-empty
  list or tuple made only of `bool` is read as one too.
- Other lists and tuples, the empty ones included, concatenate the encodings
  of their items in order.
- Any other object may implement the `Absorb` protocol.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import singledispatch
from typing import Any, Protocol, runtime_checkable

from sponge_spec.types import AbsorbError

from ..fields import PrimeFieldElement


@runtime_checkable
class Absorb(Protocol):
    """A value that knows its own canonical sponge encoding."""

    def to_sponge_field_elements(
        self, field: type[PrimeFieldElement]
    ) -> Sequence[PrimeFieldElement]:
        """Encode the value as elements of `field`."""
        ...


class BitString(tuple[Any, ...]):
    """
    An explicit bit string.

    A plain list of `bool` is only recognized as a bit string by its items,
    so an empty one reads as the empty sequence. Wrapping the bits commits to
    the length prefix regardless, so `BitString(())` encodes as `[0]` just
    like `b""`.

    Native bit strings hold `bool` items; circuit bit strings may also hold
    `Boolean` variables.
    """

    __slots__ = ()


# =================================================================
# Field Element Encoding
# =================================================================


@singledispatch
def to_sponge_field_elements(value: Any, field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    """
    Encode a value as a sequence of elements of `field`.

    Args:
        value: The value to encode.
        field: The sponge's field.

    Returns:
        The canonical encoding.

    Raises:
        AbsorbError: If the value has no encoding in `field`.
    """
    if isinstance(value, Absorb):
        return list(value.to_sponge_field_elements(field))
    raise AbsorbError(type(value).__name__, value)


@to_sponge_field_elements.register
def _(value: PrimeFieldElement, field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    _check_field(value, field)
    return [value]


@to_sponge_field_elements.register
def _(value: bool, field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    return [field(value=int(value))]


@to_sponge_field_elements.register
def _(value: int, field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    return [field(value=_check_int(value, field))]


@to_sponge_field_elements.register(bytes)
@to_sponge_field_elements.register(bytearray)
def _(value: bytes, field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    return pack_bits(bytes_to_bits_le(value), len(value), field)


@to_sponge_field_elements.register
def _(value: BitString, field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    for item in value:
        if not isinstance(item, bool):
            raise AbsorbError(
                type(item).__name__, item, detail="bit strings only hold bool items"
            )
    return pack_bits(list(value), len(value), field)


@to_sponge_field_elements.register(list)
@to_sponge_field_elements.register(tuple)
def _(value: Sequence[Any], field: type[PrimeFieldElement]) -> list[PrimeFieldElement]:
    if value and all(isinstance(item, bool) for item in value):
        return pack_bits(list(value), len(value), field)
    elements: list[PrimeFieldElement] = []
    for item in value:
        elements.extend(to_sponge_field_elements(item, field))
    return elements


# =================================================================
# Bit Encoding
# =================================================================


@singledispatch
def to_sponge_bits(value: Any, field: type[PrimeFieldElement]) -> list[bool]:
    """
    Encode a value as a sequence of bits.

    Field elements and integers contribute `modulus_bits` little-endian bits,
    bytes contribute eight little-endian bits each, booleans one bit. Objects
    implementing `Absorb` contribute the bits of their field elements.

    Raises:
        AbsorbError: If the value has no encoding in `field`.
    """
    if isinstance(value, Absorb):
        bits: list[bool] = []
        for element in value.to_sponge_field_elements(field):
            bits.extend(element.to_bits_le())
        return bits
    raise AbsorbError(type(value).__name__, value)


@to_sponge_bits.register
def _(value: PrimeFieldElement, field: type[PrimeFieldElement]) -> list[bool]:
    _check_field(value, field)
    return value.to_bits_le()


@to_sponge_bits.register
def _(value: bool, field: type[PrimeFieldElement]) -> list[bool]:
    return [value]


@to_sponge_bits.register
def _(value: int, field: type[PrimeFieldElement]) -> list[bool]:
    return field(value=_check_int(value, field)).to_bits_le()


@to_sponge_bits.register(bytes)
@to_sponge_bits.register(bytearray)
def _(value: bytes, field: type[PrimeFieldElement]) -> list[bool]:
    return bytes_to_bits_le(value)


@to_sponge_bits.register(list)
@to_sponge_bits.register(tuple)
def _(value: Sequence[Any], field: type[PrimeFieldElement]) -> list[bool]:
    bits: list[bool] = []
    for item in value:
        bits.extend(to_sponge_bits(item, field))
    return bits


# =================================================================
# Packing Helpers
# =================================================================


def bytes_to_bits_le(data: bytes) -> list[bool]:
    """Expand bytes into bits, least significant bit of each byte first."""
    return [bool((byte >> i) & 1) for byte in data for i in range(8)]


def bits_to_bytes_le(bits: Sequence[bool]) -> bytes:
    """Pack bits into bytes, eight per byte, least significant bit first."""
    if len(bits) % 8:
        raise ValueError(f"Bit length {len(bits)} is not a multiple of 8")
    return bytes(
        sum(1 << j for j, bit in enumerate(bits[i : i + 8]) if bit) for i in range(0, len(bits), 8)
    )


def pack_bits(
    bits: Sequence[bool], length: int, field: type[PrimeFieldElement]
) -> list[PrimeFieldElement]:
    """
    Pack a bit string into field elements behind a length prefix.

    Args:
        bits: The bits, least significant first within each element.
        length: The length to commit to (bytes for byte strings, bits otherwise).
        field: The target field.

    Returns:
        `[length]` followed by one element per `capacity_bits` bits.
    """
    usable = field.capacity_bits()
    return [field(value=_check_int(length, field))] + [
        field.from_bits_le(list(bits[i : i + usable])) for i in range(0, len(bits), usable)
    ]


def _check_field(value: PrimeFieldElement, field: type[PrimeFieldElement]) -> None:
    if type(value) is not field:
        raise AbsorbError(
            type(value).__name__, value, detail=f"expected an element of {field.__name__}"
        )


def _check_int(value: int, field: type[PrimeFieldElement]) -> int:
    if not 0 <= value < field.MODULUS:
        raise AbsorbError(
            "int", value, detail=f"integers must lie in [0, {field.__name__}.MODULUS)"
        )
    return value
