"""
Field-element circuit variables.

An `FpVar` mirrors a `PrimeFieldElement` inside a constraint system. It always
carries the concrete value it stands for, so every gadget computes its witness
with exactly the native field arithmetic. Constants stay outside the
constraint system until they meet a variable.

### Cost Model

- Addition, subtraction, negation, and multiplication by a constant only
  rewrite linear combinations and cost no constraints.
- Multiplying two variables allocates one witness and one constraint.
- `x ** e` uses square-and-multiply over the bits of `e`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from sponge_spec.types import SynthesisError

from ..fields import PrimeFieldElement
from .boolean import Boolean
from .constraint_system import ConstraintSystem
from .linear_combination import LinearCombination, Variable

Operand = Union["FpVar", PrimeFieldElement, int]
"""Anything an `FpVar` can be combined with."""


class FpVar:
    """
    A field element inside a constraint system.

    Attributes:
        value: The concrete field element this variable is assigned.
        cs: The owning constraint system, or None for constants.
        lc: The linear combination computing the value, or None for constants.
    """

    __slots__ = ("cs", "lc", "value")

    def __init__(
        self,
        value: PrimeFieldElement,
        cs: ConstraintSystem | None = None,
        lc: LinearCombination | None = None,
    ) -> None:
        self.value = value
        self.cs = cs
        self.lc = lc

    # =================================================================
    # Allocation
    # =================================================================

    @classmethod
    def constant(cls, value: PrimeFieldElement) -> FpVar:
        """A constant. Constants cost nothing."""
        return cls(value)

    @classmethod
    def new_input(cls, cs: ConstraintSystem, value: PrimeFieldElement) -> FpVar:
        """Allocate a public variable."""
        var = cs.new_input_variable(value)
        return cls(value, cs, LinearCombination.from_variable(cs.modulus, var))

    @classmethod
    def new_witness(cls, cs: ConstraintSystem, value: PrimeFieldElement) -> FpVar:
        """Allocate a private variable."""
        var = cs.new_witness_variable(value)
        return cls(value, cs, LinearCombination.from_variable(cs.modulus, var))

    @property
    def field(self) -> type[PrimeFieldElement]:
        """The field this variable ranges over."""
        return type(self.value)

    @property
    def is_constant(self) -> bool:
        """Whether this variable is a constant."""
        return self.cs is None

    def to_lc(self) -> LinearCombination:
        """The variable as a linear combination; constants become multiples of one."""
        if self.lc is None:
            return LinearCombination.constant(self.field.MODULUS, self.value.value)
        return self.lc

    def _coerce(self, other: Operand) -> FpVar | None:
        if isinstance(other, FpVar):
            if other.field is not self.field:
                raise SynthesisError(
                    f"Cannot combine {self.field.__name__} and {other.field.__name__} variables"
                )
            return other
        if isinstance(other, PrimeFieldElement):
            if type(other) is not self.field:
                raise SynthesisError(
                    f"Cannot combine a {self.field.__name__} variable "
                    f"with a {type(other).__name__} constant"
                )
            return FpVar.constant(other)
        if isinstance(other, int):
            return FpVar.constant(self.field(value=other))
        return None

    def _common_cs(self, other: FpVar) -> ConstraintSystem | None:
        if self.cs is not None and other.cs is not None and self.cs is not other.cs:
            raise SynthesisError("Operands belong to different constraint systems")
        return self.cs if self.cs is not None else other.cs

    # =================================================================
    # Arithmetic
    # =================================================================

    def __add__(self, other: Operand) -> FpVar:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        cs = self._common_cs(rhs)
        value = self.value + rhs.value
        if cs is None:
            return FpVar.constant(value)
        return FpVar(value, cs, self.to_lc() + rhs.to_lc())

    __radd__ = __add__

    def __neg__(self) -> FpVar:
        if self.cs is None:
            return FpVar.constant(-self.value)
        return FpVar(-self.value, self.cs, -self.to_lc())

    def __sub__(self, other: Operand) -> FpVar:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: Operand) -> FpVar:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs + (-self)

    def __mul__(self, other: Operand) -> FpVar:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        cs = self._common_cs(rhs)
        value = self.value * rhs.value
        if cs is None:
            return FpVar.constant(value)

        # Scaling by a constant is linear.
        if rhs.is_constant:
            return FpVar(value, cs, self.to_lc().scale(rhs.value.value))
        if self.is_constant:
            return FpVar(value, cs, rhs.to_lc().scale(self.value.value))

        # Two variables: allocate the product and constrain it.
        product = FpVar.new_witness(cs, value)
        cs.enforce_constraint(self.to_lc(), rhs.to_lc(), product.to_lc())
        return product

    __rmul__ = __mul__

    def square(self) -> FpVar:
        """The square of this variable."""
        return self * self

    def __pow__(self, exponent: int) -> FpVar:
        """
        Exponentiation by a constant, via square-and-multiply.

        Bits of the exponent are consumed from the most significant end.
        The leading square of one is a constant and therefore free.
        """
        if exponent < 0:
            raise SynthesisError("Exponent must be non-negative")
        result = FpVar.constant(self.field.one())
        for bit in bin(exponent)[2:] if exponent else "":
            result = result.square()
            if bit == "1":
                result = result * self
        return result

    def enforce_equal(self, other: Operand) -> None:
        """Constrain two values to be equal."""
        rhs = self._coerce(other)
        if rhs is None:
            raise SynthesisError(f"Cannot compare with {type(other).__name__}")
        cs = self._common_cs(rhs)
        if cs is None:
            if self.value != rhs.value:
                raise SynthesisError("Cannot enforce equality of two distinct constants")
            return
        diff = self.to_lc() - rhs.to_lc()
        cs.enforce_constraint(diff, cs.one(), LinearCombination(cs.modulus))

    # =================================================================
    # Bit Decomposition
    # =================================================================

    def to_bits_le(self, num_bits: int | None = None) -> list[Boolean]:
        """
        Decompose the variable into little-endian bits.

        Each bit is an allocated boolean (`b * (1 - b) = 0`) and the bits are
        constrained to recompose to this variable. A full-width decomposition
        additionally enforces that the bits encode the canonical
        representative, i.e. a number below the modulus; without that check
        a prover could choose the bits of `x + p` instead of `x`.

        Args:
            num_bits: Width of the decomposition. Defaults to the modulus
                bit length. Narrower widths act as a range check.

        Returns:
            `num_bits` booleans, least significant first.

        Raises:
            SynthesisError: If `num_bits` exceeds the modulus bit length, in
                which case the recomposition could wrap around the modulus.
        """
        modulus_bits = self.field.modulus_bits()
        if num_bits is None:
            num_bits = modulus_bits
        if not 0 < num_bits <= modulus_bits:
            raise SynthesisError(
                f"Bit width {num_bits} is inconsistent with the "
                f"{modulus_bits}-bit modulus of {self.field.__name__}"
            )

        value_bits = self.value.to_bits_le()[:num_bits]

        if self.cs is None:
            if self.value.value >> num_bits:
                raise SynthesisError(f"Constant does not fit in {num_bits} bits")
            return [Boolean.constant(bit) for bit in value_bits]

        cs = self.cs
        bits = [Boolean.new_witness(cs, bit) for bit in value_bits]
        FpVar.from_bits_le(bits, self.field, cs).enforce_equal(self)
        if num_bits == modulus_bits:
            Boolean.enforce_in_field_le(bits, self.field.MODULUS)
        return bits

    @staticmethod
    def from_bits_le(
        bits: Sequence[Boolean],
        field: type[PrimeFieldElement],
        cs: ConstraintSystem | None = None,
    ) -> FpVar:
        """
        Recompose little-endian bits into a field variable, free of constraints.

        Args:
            bits: Booleans, least significant first.
            field: The target field.
            cs: The constraint system, used when every bit is a constant.

        Returns:
            The variable `sum(bits[i] * 2^i)`.
        """
        modulus = field.MODULUS
        owners = {id(bit.cs): bit.cs for bit in bits if bit.cs is not None}
        if len(owners) > 1:
            raise SynthesisError("Bits belong to different constraint systems")
        owner = next(iter(owners.values())) if owners else None
        if owner is not None and cs is not None and owner is not cs:
            raise SynthesisError("Bits belong to a different constraint system")

        value = field.from_bits_le([bit.value for bit in bits])
        if owner is None:
            return FpVar.constant(value)

        terms: dict[Variable, int] = {}
        for i, bit in enumerate(bits):
            weight = pow(2, i, modulus)
            for var, coeff in bit.to_lc(modulus).terms.items():
                terms[var] = terms.get(var, 0) + coeff * weight
        return FpVar(value, owner, LinearCombination(modulus, terms))

    def __repr__(self) -> str:
        kind = "constant" if self.is_constant else "variable"
        return f"FpVar({kind}, value={self.value.value})"
