"""A minimal rank-1 constraint system and the circuit variables built on it."""

from .boolean import Boolean
from .constraint_system import Constraint, ConstraintSystem
from .fp_var import FpVar
from .linear_combination import ONE, LinearCombination, Variable, VariableKind
from .uint8 import UInt8Var, UInt8Vec

__all__ = [
    "ConstraintSystem",
    "Constraint",
    "LinearCombination",
    "Variable",
    "VariableKind",
    "ONE",
    "FpVar",
    "Boolean",
    "UInt8Var",
    "UInt8Vec",
]
