"""Tests for the rank-1 constraint system and its linear combinations."""

import pytest

from sponge_spec.subspecs.fields import Fp
from sponge_spec.subspecs.r1cs import (
    ONE,
    ConstraintSystem,
    LinearCombination,
    Variable,
    VariableKind,
)
from sponge_spec.types import SynthesisError
from tests.sponge_spec.helpers import F97


class TestLinearCombination:
    """Sparse linear combinations over F_p."""

    def test_coefficients_are_reduced_and_zeros_dropped(self) -> None:
        """Coefficients live in [0, p) and zero terms disappear."""
        x = Variable(VariableKind.WITNESS, 0)
        lc = LinearCombination(97, {x: 100, ONE: 97})
        assert lc.terms == {x: 3}
        assert len(lc) == 1

    def test_addition_cancels_terms(self) -> None:
        """Opposite terms cancel."""
        x = Variable(VariableKind.WITNESS, 0)
        lc = LinearCombination.from_variable(97, x, 5)
        assert len(lc - lc) == 0
        assert (lc + lc).terms == {x: 10}

    def test_scale(self) -> None:
        """Scaling multiplies every coefficient, and scaling by zero clears."""
        x = Variable(VariableKind.WITNESS, 0)
        lc = LinearCombination(97, {x: 2, ONE: 3})
        assert lc.scale(50).terms == {x: 3, ONE: 53}
        assert len(lc.scale(97)) == 0

    def test_evaluate(self) -> None:
        """Evaluation substitutes the assignment and reduces."""
        x = Variable(VariableKind.WITNESS, 0)
        lc = LinearCombination(97, {x: 2, ONE: 3})
        assignment = {x: 50, ONE: 1}
        assert lc.evaluate(assignment.__getitem__) == (2 * 50 + 3) % 97

    def test_operations_do_not_mutate(self) -> None:
        """Linear combinations behave as values."""
        x = Variable(VariableKind.WITNESS, 0)
        lc = LinearCombination.from_variable(97, x)
        _ = lc + LinearCombination.constant(97, 4)
        _ = lc.scale(3)
        assert lc.terms == {x: 1}


class TestConstraintSystem:
    """Allocation, constraints, and satisfiability."""

    def test_new_system_is_empty(self) -> None:
        """Only the constant one is allocated."""
        cs = ConstraintSystem(Fp)
        assert cs.num_instance_variables == 1
        assert cs.num_witness_variables == 0
        assert cs.num_constraints == 0
        assert cs.is_satisfied()
        assert cs.evaluate(cs.one()) == Fp.one()

    def test_allocation(self) -> None:
        """Inputs and witnesses get increasing indices in their own spaces."""
        cs = ConstraintSystem(F97)
        a = cs.new_input_variable(F97(value=3))
        b = cs.new_witness_variable(F97(value=4))
        c = cs.new_witness_variable(F97(value=12))
        assert a == Variable(VariableKind.INSTANCE, 1)
        assert b == Variable(VariableKind.WITNESS, 0)
        assert c == Variable(VariableKind.WITNESS, 1)
        assert cs.assigned_value(a) == 3
        assert cs.assigned_value(c) == 12

    def test_rejects_foreign_field_values(self) -> None:
        """Assignments must belong to the system's field."""
        cs = ConstraintSystem(F97)
        with pytest.raises(SynthesisError, match="Expected a F97 assignment"):
            cs.new_witness_variable(Fp(value=1))

    def test_satisfied_and_unsatisfied_constraints(self) -> None:
        """A wrong product is reported by index."""
        cs = ConstraintSystem(F97)
        a = LinearCombination.from_variable(97, cs.new_witness_variable(F97(value=3)))
        b = LinearCombination.from_variable(97, cs.new_witness_variable(F97(value=4)))
        good = LinearCombination.from_variable(97, cs.new_witness_variable(F97(value=12)))
        bad = LinearCombination.from_variable(97, cs.new_witness_variable(F97(value=13)))

        cs.enforce_constraint(a, b, good)
        assert cs.is_satisfied()

        cs.enforce_constraint(a, b, bad)
        assert not cs.is_satisfied()
        assert cs.which_is_unsatisfied() == 1

    def test_products_wrap_modulo_p(self) -> None:
        """Constraints hold modulo the field's prime."""
        cs = ConstraintSystem(F97)
        a = LinearCombination.from_variable(97, cs.new_witness_variable(F97(value=10)))
        c = LinearCombination.from_variable(97, cs.new_witness_variable(F97(value=3)))
        # 10 * 10 = 100 = 3 mod 97
        cs.enforce_constraint(a, a, c)
        assert cs.is_satisfied()
