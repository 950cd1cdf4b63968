"""Byte circuit variables, stored as eight little-endian booleans."""

from __future__ import annotations

from collections.abc import Sequence

from sponge_spec.types import SynthesisError

from .boolean import Boolean
from .constraint_system import ConstraintSystem


class UInt8Var:
    """
    A byte inside a constraint system.

    Attributes:
        bits: Eight booleans, least significant first.
    """

    __slots__ = ("bits",)

    def __init__(self, bits: Sequence[Boolean]) -> None:
        if len(bits) != 8:
            raise SynthesisError(f"A byte needs exactly 8 bits, got {len(bits)}")
        self.bits = list(bits)

    @property
    def value(self) -> int:
        """The concrete byte."""
        return sum(1 << i for i, bit in enumerate(self.bits) if bit.value)

    @classmethod
    def constant(cls, value: int) -> UInt8Var:
        """A constant byte."""
        _check_byte(value)
        return cls([Boolean.constant(bool((value >> i) & 1)) for i in range(8)])

    @classmethod
    def new_witness(cls, cs: ConstraintSystem, value: int) -> UInt8Var:
        """Allocate a private byte as eight boolean witnesses."""
        _check_byte(value)
        return cls([Boolean.new_witness(cs, bool((value >> i) & 1)) for i in range(8)])

    @classmethod
    def new_input(cls, cs: ConstraintSystem, value: int) -> UInt8Var:
        """Allocate a public byte as eight boolean inputs."""
        _check_byte(value)
        return cls([Boolean.new_input(cs, bool((value >> i) & 1)) for i in range(8)])

    @classmethod
    def constant_vec(cls, data: bytes) -> UInt8Vec:
        """Constant bytes for every byte of `data`."""
        return UInt8Vec(cls.constant(byte) for byte in data)

    @classmethod
    def new_witness_vec(cls, cs: ConstraintSystem, data: bytes) -> UInt8Vec:
        """Private bytes for every byte of `data`."""
        return UInt8Vec(cls.new_witness(cs, byte) for byte in data)

    @classmethod
    def new_input_vec(cls, cs: ConstraintSystem, data: bytes) -> UInt8Vec:
        """Public bytes for every byte of `data`."""
        return UInt8Vec(cls.new_input(cs, byte) for byte in data)

    def __repr__(self) -> str:
        return f"UInt8Var(value={self.value})"


class UInt8Vec(list[UInt8Var]):
    """
    A byte string inside a constraint system.

    The circuit counterpart of `bytes`: it is absorbed with its length prefix
    even when it is empty, which a plain list of bytes cannot be.
    """

    @property
    def value(self) -> bytes:
        """The concrete bytes."""
        return bytes(byte.value for byte in self)


def _check_byte(value: int) -> None:
    if not 0 <= value < 256:
        raise SynthesisError(f"{value} is not a byte")
