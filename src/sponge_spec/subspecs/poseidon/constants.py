"""
Bundled Poseidon parameter sets.

The sponge consumes round constants and MDS matrices as data. For the bundled
sets they are derived reproducibly from public inputs:

- **Round constants** are read from a SHAKE-256 stream keyed by the field
  modulus and the round structure. Each constant consumes `num_bytes + 16`
  bytes reduced modulo p, which makes the bias of the reduction negligible.
- **The MDS matrix** is the Cauchy matrix `M[i][j] = 1 / (x_i + y_j)` with
  `x_i = i` and `y_j = width + j`. Cauchy matrices with distinct `x_i`,
  distinct `y_j` and non-zero `x_i + y_j` are MDS.

These are nothing-up-my-sleeve constants, not the Grain LFSR constants of
the Poseidon paper; parameter sets produced elsewhere can be supplied
directly to `PoseidonParameters`.
"""

import hashlib
import logging

from typing_extensions import Final

from sponge_spec.config import SPONGE_ENV

from ..fields import Fp, Fr, PrimeFieldElement
from .parameters import PoseidonParameters

logger = logging.getLogger(__name__)

ROUND_CONSTANTS_TAG: Final = b"sponge-spec/poseidon/round-constants"
"""Domain tag of the round constant stream."""


def derive_round_constants(
    field: type[PrimeFieldElement],
    width: int,
    full_rounds: int,
    partial_rounds: int,
    alpha: int,
) -> list[list[PrimeFieldElement]]:
    """
    Derive `(full_rounds + partial_rounds) x width` round constants.

    Args:
        field: The prime field.
        width: The state width.
        full_rounds: Number of full rounds.
        partial_rounds: Number of partial rounds.
        alpha: The S-box exponent.

    Returns:
        The round constants, one row per round.
    """
    num_rounds = full_rounds + partial_rounds
    chunk = field.num_bytes() + 16

    # Bind the stream to every structural choice so distinct shapes never
    # share constants.
    seed = b"".join(
        [
            ROUND_CONSTANTS_TAG,
            field.MODULUS.to_bytes(field.num_bytes(), byteorder="little"),
            width.to_bytes(4, byteorder="little"),
            full_rounds.to_bytes(4, byteorder="little"),
            partial_rounds.to_bytes(4, byteorder="little"),
            alpha.to_bytes(4, byteorder="little"),
        ]
    )
    stream = hashlib.shake_256(seed).digest(num_rounds * width * chunk)

    constants = [
        field(value=int.from_bytes(stream[i : i + chunk], byteorder="little"))
        for i in range(0, len(stream), chunk)
    ]
    return [constants[r * width : (r + 1) * width] for r in range(num_rounds)]


def cauchy_mds(field: type[PrimeFieldElement], width: int) -> list[list[PrimeFieldElement]]:
    """
    The `width x width` Cauchy MDS matrix over `field`.

    Raises:
        ValueError: If the field is too small for the construction.
    """
    if field.MODULUS <= 2 * width:
        raise ValueError(f"{field.__name__} is too small for a {width}x{width} Cauchy matrix")
    return [[field(value=i + width + j).inverse() for j in range(width)] for i in range(width)]


def derive_parameters(
    field: type[PrimeFieldElement],
    *,
    rate: int,
    capacity: int,
    full_rounds: int,
    partial_rounds: int,
    alpha: int,
) -> PoseidonParameters:
    """
    Build a complete parameter set with derived constants.

    Returns:
        A validated, immutable parameter set.
    """
    width = rate + capacity
    logger.debug(
        "Deriving Poseidon parameters over %s: width=%d, R_F=%d, R_P=%d, alpha=%d",
        field.__name__,
        width,
        full_rounds,
        partial_rounds,
        alpha,
    )
    return PoseidonParameters(
        field=field,
        full_rounds=full_rounds,
        partial_rounds=partial_rounds,
        alpha=alpha,
        ark=derive_round_constants(field, width, full_rounds, partial_rounds, alpha),
        mds=cauchy_mds(field, width),
        rate=rate,
        capacity=capacity,
    )


PARAMS_BLS12_381: Final = derive_parameters(
    Fr, rate=2, capacity=1, full_rounds=8, partial_rounds=31, alpha=17
)
"""Width 3 over the BLS12-381 scalar field, the production instance."""

PARAMS_KOALABEAR: Final = derive_parameters(
    Fp, rate=2, capacity=1, full_rounds=8, partial_rounds=20, alpha=3
)
"""Width 3 over KoalaBear, a cheap instance for tests and experiments."""

DEFAULT_PARAMS: Final = PARAMS_KOALABEAR if SPONGE_ENV == "test" else PARAMS_BLS12_381
"""The parameter set selected by the `SPONGE_ENV` environment."""
