"""
Boolean circuit variables.

A `Boolean` is either a compile-time constant or a linear combination that is
constrained to take only the values 0 and 1. Freshly allocated booleans carry
the constraint `b * (1 - b) = 0`; booleans derived through `not_`, `and_` and
`or_` are boolean by construction and need no extra check.
"""

from __future__ import annotations

from collections.abc import Sequence

from sponge_spec.types import SynthesisError

from .constraint_system import ConstraintSystem
from .linear_combination import LinearCombination


class Boolean:
    """
    A bit inside a constraint system.

    Attributes:
        cs: The owning constraint system, or None for constants.
        lc: The linear combination holding the bit, or None for constants.
        value: The concrete bit.
    """

    __slots__ = ("cs", "lc", "value")

    def __init__(
        self, value: bool, cs: ConstraintSystem | None = None, lc: LinearCombination | None = None
    ) -> None:
        self.value = bool(value)
        self.cs = cs
        self.lc = lc

    # =================================================================
    # Allocation
    # =================================================================

    @classmethod
    def constant(cls, value: bool) -> Boolean:
        """A constant bit. Constants cost nothing."""
        return cls(value)

    @classmethod
    def new_witness(cls, cs: ConstraintSystem, value: bool) -> Boolean:
        """Allocate a private bit and enforce that it is boolean."""
        var = cs.new_witness_variable(cs.field(value=int(bool(value))))
        return cls._enforce_boolean(cs, value, LinearCombination.from_variable(cs.modulus, var))

    @classmethod
    def new_input(cls, cs: ConstraintSystem, value: bool) -> Boolean:
        """Allocate a public bit and enforce that it is boolean."""
        var = cs.new_input_variable(cs.field(value=int(bool(value))))
        return cls._enforce_boolean(cs, value, LinearCombination.from_variable(cs.modulus, var))

    @classmethod
    def _enforce_boolean(cls, cs: ConstraintSystem, value: bool, lc: LinearCombination) -> Boolean:
        # b * (1 - b) = 0 holds exactly for b in {0, 1}.
        cs.enforce_constraint(lc, cs.one() - lc, LinearCombination(cs.modulus))
        return cls(value, cs, lc)

    @property
    def is_constant(self) -> bool:
        """Whether this bit is a constant."""
        return self.cs is None

    def to_lc(self, modulus: int) -> LinearCombination:
        """The bit as a linear combination over a field of the given modulus."""
        if self.lc is None:
            return LinearCombination.constant(modulus, int(self.value))
        return self.lc

    # =================================================================
    # Logic
    # =================================================================

    def not_(self) -> Boolean:
        """Logical negation, free of constraints."""
        if self.cs is None or self.lc is None:
            return Boolean.constant(not self.value)
        return Boolean(not self.value, self.cs, self.cs.one() - self.lc)

    def and_(self, other: Boolean) -> Boolean:
        """Logical conjunction, one constraint unless an operand is constant."""
        if self.is_constant:
            return other if self.value else Boolean.constant(False)
        if other.is_constant:
            return self if other.value else Boolean.constant(False)

        cs = _common_cs(self, other)
        value = self.value and other.value
        var = cs.new_witness_variable(cs.field(value=int(value)))
        result = LinearCombination.from_variable(cs.modulus, var)
        cs.enforce_constraint(self.to_lc(cs.modulus), other.to_lc(cs.modulus), result)
        return Boolean(value, cs, result)

    def or_(self, other: Boolean) -> Boolean:
        """Logical disjunction, through De Morgan's law."""
        return self.not_().and_(other.not_()).not_()

    def enforce_equal(self, other: Boolean) -> None:
        """Constrain two bits to be equal."""
        if self.is_constant and other.is_constant:
            if self.value != other.value:
                raise SynthesisError("Cannot enforce equality of two distinct constant bits")
            return

        cs = _common_cs(self, other)
        diff = self.to_lc(cs.modulus) - other.to_lc(cs.modulus)
        cs.enforce_constraint(diff, cs.one(), LinearCombination(cs.modulus))

    @staticmethod
    def kary_and(bits: Sequence[Boolean]) -> Boolean:
        """Conjunction of all bits."""
        if not bits:
            raise SynthesisError("kary_and requires at least one bit")
        result = bits[0]
        for bit in bits[1:]:
            result = result.and_(bit)
        return result

    @staticmethod
    def enforce_kary_nand(bits: Sequence[Boolean]) -> None:
        """Constrain at least one of the bits to be false."""
        Boolean.kary_and(bits).enforce_equal(Boolean.constant(False))

    # =================================================================
    # Range Checks
    # =================================================================

    @staticmethod
    def enforce_smaller_or_equal_than_le(
        bits: Sequence[Boolean], element: int
    ) -> tuple[list[Boolean], Boolean]:
        """
        Constrain the little-endian number `bits` to be at most `element`.

        ### Algorithm

        Bits are scanned from the most significant end alongside the binary
        expansion of `element`:

        1.  Bits above the length of `element` must all be zero.
        2.  Ones of `element` extend the current run; `last_run` records
            whether the number agreed with `element` on every previous run
            of ones.
        3.  At a zero of `element`, if `last_run` is set the number must
            have a zero there too, otherwise it would exceed `element`.

        Args:
            bits: The number to bound, least significant bit first.
            element: The inclusive upper bound.

        Returns:
            The trailing run of ones and the last run flag.
        """
        element_bits_be = [bit == "1" for bit in bin(element)[2:]] if element else []
        element_num_bits = len(element_bits_be)
        bits_be = list(reversed(bits))

        # Any bit beyond the length of `element` must be zero.
        if len(bits) > element_num_bits:
            or_result = Boolean.constant(False)
            for should_be_zero in bits[element_num_bits:]:
                or_result = or_result.or_(should_be_zero)
            or_result.enforce_equal(Boolean.constant(False))
            bits_be = bits_be[len(bits) - element_num_bits :]

        last_run = Boolean.constant(True)
        current_run: list[Boolean] = []
        for b, a in zip(element_bits_be, bits_be, strict=True):
            if b:
                # This is part of a run of ones.
                current_run.append(a)
            else:
                if current_run:
                    # A run of ones just ended: fold it into `last_run`.
                    current_run.append(last_run)
                    last_run = Boolean.kary_and(current_run)
                    current_run = []
                # If `last_run` is true then `a` must be false.
                Boolean.enforce_kary_nand([last_run, a])

        return current_run, last_run

    @staticmethod
    def enforce_in_field_le(bits: Sequence[Boolean], modulus: int) -> None:
        """
        Constrain the little-endian number `bits` to be below an odd prime.

        `bits < p` is equivalent to `bits <= p - 1`, and `p - 1` ends in a
        zero bit, so the comparison never leaves a trailing run of ones.
        """
        run, _ = Boolean.enforce_smaller_or_equal_than_le(bits, modulus - 1)
        assert not run, "p - 1 must end in a run of zeros"

    def __repr__(self) -> str:
        kind = "constant" if self.is_constant else "variable"
        return f"Boolean({kind}, value={self.value})"


def _common_cs(*items: Boolean) -> ConstraintSystem:
    systems = {id(item.cs): item.cs for item in items if item.cs is not None}
    if len(systems) != 1:
        raise SynthesisError("Operands belong to different constraint systems")
    return next(iter(systems.values()))
