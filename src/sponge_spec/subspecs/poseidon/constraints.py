"""
The Poseidon sponge inside a constraint system.

The circuit sponge runs the exact duplex state machine of the native sponge
over `FpVar` state elements. Starting from an all-constant state, absorbing
constants costs nothing; constraints appear from the first S-box that touches
a variable. For identical inputs, the witnesses of everything it squeezes
equal the native outputs.
"""

from __future__ import annotations

import logging
from typing import Any

from sponge_spec.types import SynthesisError

from ..r1cs import ConstraintSystem, FpVar
from ..sponge import CryptographicSpongeVar, to_sponge_field_element_vars
from .parameters import PoseidonParameters
from .sponge import PoseidonDuplex

logger = logging.getLogger(__name__)


class PoseidonSpongeVar(PoseidonDuplex[FpVar], CryptographicSpongeVar):
    """
    A Poseidon sponge whose state is made of circuit variables.

    Args:
        cs: The constraint system receiving the sponge's constraints.
        params: The parameter set, the same one the native sponge uses.
    """

    def __init__(self, cs: ConstraintSystem, params: PoseidonParameters) -> None:
        if cs.field is not params.field:
            raise SynthesisError(
                f"Cannot run a {params.field.__name__} sponge in a {cs.field.__name__} circuit"
            )
        super().__init__(params, [FpVar.constant(params.field.zero())] * params.width)
        self._cs = cs
        logger.debug(
            "Created Poseidon sponge gadget over %s with %d constraints already in the system",
            params.field.__name__,
            cs.num_constraints,
        )

    @property
    def cs(self) -> ConstraintSystem:
        return self._cs

    def absorb(self, value: Any) -> None:
        """
        Absorb the encoding of `value`; native values enter as constants.

        Raises:
            AbsorbError: If `value` has no encoding in the sponge's field.
        """
        self.absorb_field_elements(to_sponge_field_element_vars(value, self.cs, self.field))

    def __repr__(self) -> str:
        return f"PoseidonSpongeVar(field={self.field.__name__}, mode={self.mode})"
