"""Variables and linear combinations of a rank-1 constraint system."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class VariableKind(Enum):
    """Where a variable's assignment lives."""

    INSTANCE = "instance"
    """Public inputs. Instance variable 0 is the constant one."""

    WITNESS = "witness"
    """Private, prover-only assignments."""


@dataclass(frozen=True, slots=True)
class Variable:
    """A handle to one allocated variable of a constraint system."""

    kind: VariableKind
    index: int


ONE = Variable(VariableKind.INSTANCE, 0)
"""The variable that is always assigned the value one."""


class LinearCombination:
    """
    A sparse linear combination `sum(coeff_i * var_i)` over F_p.

    Linear combinations are immutable values: every operator returns a new
    instance. Additions and scalings never create constraints, which is what
    makes the additive parts of the permutation free inside the circuit.
    """

    __slots__ = ("modulus", "terms")

    def __init__(self, modulus: int, terms: dict[Variable, int] | None = None) -> None:
        self.modulus = modulus
        self.terms: dict[Variable, int] = {}
        if terms:
            for var, coeff in terms.items():
                coeff %= modulus
                if coeff:
                    self.terms[var] = coeff

    @classmethod
    def from_variable(cls, modulus: int, var: Variable, coeff: int = 1) -> LinearCombination:
        """The linear combination `coeff * var`."""
        return cls(modulus, {var: coeff})

    @classmethod
    def constant(cls, modulus: int, value: int) -> LinearCombination:
        """The linear combination `value * ONE`."""
        return cls(modulus, {ONE: value})

    def __add__(self, other: LinearCombination) -> LinearCombination:
        result = LinearCombination(self.modulus)
        terms = dict(self.terms)
        for var, coeff in other.terms.items():
            new_coeff = (terms.get(var, 0) + coeff) % self.modulus
            if new_coeff:
                terms[var] = new_coeff
            else:
                terms.pop(var, None)
        result.terms = terms
        return result

    def __neg__(self) -> LinearCombination:
        return self.scale(-1)

    def __sub__(self, other: LinearCombination) -> LinearCombination:
        return self + (-other)

    def scale(self, factor: int) -> LinearCombination:
        """Multiply every coefficient by `factor`."""
        factor %= self.modulus
        result = LinearCombination(self.modulus)
        if factor:
            result.terms = {
                var: (coeff * factor) % self.modulus for var, coeff in self.terms.items()
            }
        return result

    def evaluate(self, assignment: Callable[[Variable], int]) -> int:
        """Evaluate the combination under a variable assignment."""
        return sum(coeff * assignment(var) for var, coeff in self.terms.items()) % self.modulus

    def __len__(self) -> int:
        return len(self.terms)

    def __repr__(self) -> str:
        body = " + ".join(
            f"{coeff}*{var.kind.value}[{var.index}]" for var, coeff in self.terms.items()
        )
        return f"LinearCombination({body or '0'})"
