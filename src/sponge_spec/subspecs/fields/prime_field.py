"""
Core definition of a prime field element.

The sponge treats field elements as opaque values: it needs addition,
multiplication, exponentiation, equality, and a canonical fixed-width
little-endian encoding. Concrete fields subclass `PrimeFieldElement` and fix
the class-level `MODULUS`.
"""

from typing import ClassVar, Self

from pydantic import Field, field_validator

from sponge_spec.types import StrictBaseModel


class PrimeFieldElement(StrictBaseModel):
    """
    An element of the prime field F_p, where p is the subclass's `MODULUS`.

    All arithmetic is performed modulo p. Elements of different fields never
    mix: binary operators return `NotImplemented` for foreign operands, which
    lets circuit variables take over through their reflected operators.
    """

    MODULUS: ClassVar[int]
    """The prime modulus p of the field."""

    value: int = Field(ge=0, description="Field element value in the range [0, MODULUS)")

    @field_validator("value", mode="before")
    @classmethod
    def reduce_modulo_p(cls, v: int) -> int:
        """Reduces an integer input modulo the field's prime before validation."""
        return v % cls.MODULUS

    # =================================================================
    # Field Constants
    # =================================================================

    @classmethod
    def modulus_bits(cls) -> int:
        """The number of bits needed to represent the modulus."""
        return cls.MODULUS.bit_length()

    @classmethod
    def capacity_bits(cls) -> int:
        """
        The number of bits every field element can carry without bias.

        Any integer below 2^capacity_bits is smaller than the modulus, so
        the low `capacity_bits` bits of a uniformly random element are
        uniformly random. This is one less than the modulus bit length.
        """
        return cls.modulus_bits() - 1

    @classmethod
    def num_bytes(cls) -> int:
        """The size of the canonical byte encoding."""
        return (cls.modulus_bits() + 7) // 8

    @classmethod
    def zero(cls) -> Self:
        """The additive identity."""
        return cls(value=0)

    @classmethod
    def one(cls) -> Self:
        """The multiplicative identity."""
        return cls(value=1)

    # =================================================================
    # Arithmetic
    # =================================================================

    def __add__(self, other: Self) -> Self:
        """Field addition."""
        if type(other) is not type(self):
            return NotImplemented
        return self.__class__(value=self.value + other.value)

    def __sub__(self, other: Self) -> Self:
        """Field subtraction."""
        if type(other) is not type(self):
            return NotImplemented
        return self.__class__(value=self.value - other.value)

    def __neg__(self) -> Self:
        """Field negation."""
        return self.__class__(value=-self.value)

    def __mul__(self, other: Self) -> Self:
        """Field multiplication."""
        if type(other) is not type(self):
            return NotImplemented
        return self.__class__(value=self.value * other.value)

    def __pow__(self, exponent: int) -> Self:
        """Field exponentiation."""
        return self.__class__(value=pow(self.value, exponent, self.MODULUS))

    def inverse(self) -> Self:
        """Computes the multiplicative inverse."""
        if self.value == 0:
            raise ZeroDivisionError("Cannot invert the zero element.")
        # a^(p-2) is the multiplicative inverse of a in F_p
        return self ** (self.MODULUS - 2)

    def __truediv__(self, other: Self) -> Self:
        """Field division."""
        if type(other) is not type(self):
            return NotImplemented
        return self * other.inverse()

    def __int__(self) -> int:
        return self.value

    # =================================================================
    # Canonical Encodings
    # =================================================================

    def __bytes__(self) -> bytes:
        """
        Serialize the field element using Python's bytes protocol.

        Returns:
            `num_bytes()` little-endian bytes of the canonical value.
        """
        return self.value.to_bytes(self.num_bytes(), byteorder="little")

    def to_bytes_le(self) -> bytes:
        """Alias of `bytes(element)`."""
        return bytes(self)

    @classmethod
    def from_bytes_le(cls, data: bytes) -> Self:
        """
        Deserialize a field element from its canonical encoding.

        Args:
            data: `num_bytes()` little-endian bytes.

        Returns:
            Deserialized field element.

        Raises:
            ValueError: If data has incorrect length or represents an invalid field value.
        """
        if len(data) != cls.num_bytes():
            raise ValueError(f"Expected {cls.num_bytes()} bytes, got {len(data)}")

        value = int.from_bytes(data, byteorder="little")

        if value >= cls.MODULUS:
            raise ValueError(f"Value {value} exceeds field modulus {cls.MODULUS}")

        return cls(value=value)

    def to_bits_le(self) -> list[bool]:
        """
        The canonical little-endian bit decomposition.

        Returns:
            Exactly `modulus_bits()` bits, least significant first.
        """
        return [bool((self.value >> i) & 1) for i in range(self.modulus_bits())]

    @classmethod
    def from_bits_le(cls, bits: list[bool]) -> Self:
        """
        Recompose an element from little-endian bits, reducing modulo p.

        Args:
            bits: Bits, least significant first. Any length is accepted.

        Returns:
            The element `sum(bits[i] * 2^i) mod p`.
        """
        acc = 0
        for i, bit in enumerate(bits):
            if bit:
                acc |= 1 << i
        return cls(value=acc)
