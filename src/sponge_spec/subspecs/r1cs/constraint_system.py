"""
A minimal rank-1 constraint system.

A constraint system records constraints of the form `A * B = C`, where A, B
and C are linear combinations of allocated variables, together with the
concrete assignment of every variable. It is always built in
witness-generating mode: every allocation carries its value, so
satisfiability can be checked directly after synthesis.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sponge_spec.types import SynthesisError

from ..fields import PrimeFieldElement
from .linear_combination import ONE, LinearCombination, Variable, VariableKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Constraint:
    """A single rank-1 constraint `a * b = c`."""

    a: LinearCombination
    b: LinearCombination
    c: LinearCombination


class ConstraintSystem:
    """
    Constraint and assignment store for one circuit.

    Attributes:
        field: The prime field the circuit is expressed over.
        instance_assignment: Values of the public variables; index 0 is one.
        witness_assignment: Values of the private variables.
        constraints: Every constraint recorded so far, in order.
    """

    def __init__(self, field: type[PrimeFieldElement]) -> None:
        self.field = field
        self.instance_assignment: list[int] = [1]
        self.witness_assignment: list[int] = []
        self.constraints: list[Constraint] = []

    @property
    def modulus(self) -> int:
        """The modulus every coefficient is reduced by."""
        return self.field.MODULUS

    @property
    def num_instance_variables(self) -> int:
        """Number of public variables, including the constant one."""
        return len(self.instance_assignment)

    @property
    def num_witness_variables(self) -> int:
        """Number of private variables."""
        return len(self.witness_assignment)

    @property
    def num_constraints(self) -> int:
        """Number of recorded constraints."""
        return len(self.constraints)

    def one(self) -> LinearCombination:
        """The linear combination that always evaluates to one."""
        return LinearCombination.from_variable(self.modulus, ONE)

    def _check_value(self, value: PrimeFieldElement) -> int:
        if type(value) is not self.field:
            raise SynthesisError(
                f"Expected a {self.field.__name__} assignment, got {type(value).__name__}"
            )
        return value.value

    def new_input_variable(self, value: PrimeFieldElement) -> Variable:
        """Allocate a public variable assigned to `value`."""
        self.instance_assignment.append(self._check_value(value))
        return Variable(VariableKind.INSTANCE, len(self.instance_assignment) - 1)

    def new_witness_variable(self, value: PrimeFieldElement) -> Variable:
        """Allocate a private variable assigned to `value`."""
        self.witness_assignment.append(self._check_value(value))
        return Variable(VariableKind.WITNESS, len(self.witness_assignment) - 1)

    def enforce_constraint(
        self, a: LinearCombination, b: LinearCombination, c: LinearCombination
    ) -> None:
        """Record the constraint `a * b = c`."""
        self.constraints.append(Constraint(a, b, c))

    def assigned_value(self, var: Variable) -> int:
        """The concrete value currently assigned to `var`."""
        if var.kind is VariableKind.INSTANCE:
            return self.instance_assignment[var.index]
        return self.witness_assignment[var.index]

    def evaluate(self, lc: LinearCombination) -> PrimeFieldElement:
        """Evaluate a linear combination under the current assignment."""
        return self.field(value=lc.evaluate(self.assigned_value))

    def which_is_unsatisfied(self) -> int | None:
        """
        Find the first violated constraint.

        Returns:
            The index of the first constraint whose assignment does not
            satisfy `a * b = c`, or None if all constraints hold.
        """
        for index, constraint in enumerate(self.constraints):
            a = constraint.a.evaluate(self.assigned_value)
            b = constraint.b.evaluate(self.assigned_value)
            c = constraint.c.evaluate(self.assigned_value)
            if (a * b - c) % self.modulus != 0:
                logger.debug("Constraint %d is unsatisfied: %r", index, constraint)
                return index
        return None

    def is_satisfied(self) -> bool:
        """Whether the current assignment satisfies every constraint."""
        return self.which_is_unsatisfied() is None
