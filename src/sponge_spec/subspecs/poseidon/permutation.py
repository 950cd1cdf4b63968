"""
A minimal Python specification for the Poseidon permutation.

The design is based on the paper "Poseidon: A New Hash Function for
Zero-Knowledge Proof Systems" (https://eprint.iacr.org/2019/458).

The round functions only use `+`, `*` and `**` on state elements. The same
code therefore permutes a state of concrete field elements and a state of
circuit variables, which is what keeps the native and in-circuit sponges in
lockstep.
"""

from typing import Any, TypeVar

from sponge_spec.types import SpongeConfigurationError

from .parameters import PoseidonParameters

T = TypeVar("T")
"""A state element: a concrete field element or a circuit variable."""


def apply_ark(state: list[T], round_constants: list[Any]) -> list[T]:
    """
    Adds the round constants to every state element.

    Args:
        state: The current state vector.
        round_constants: The constants of the current round.

    Returns:
        The state after the constant addition.
    """
    return [s + c for s, c in zip(state, round_constants, strict=True)]


def apply_s_box(state: list[T], alpha: int, is_full_round: bool) -> list[T]:
    """
    Applies the S-box `x -> x^alpha`.

    Full rounds raise every element. Partial rounds only raise the last
    element of the state.
    """
    if is_full_round:
        return [s**alpha for s in state]
    return state[:-1] + [state[-1] ** alpha]


def apply_mds(state: list[T], mds: list[list[Any]]) -> list[T]:
    """
    Multiplies the state by the MDS matrix: `new[i] = sum_j mds[i][j] * state[j]`.

    Args:
        state: The current state vector.
        mds: The `width x width` MDS matrix.

    Returns:
        The state after the linear layer.
    """
    new_state = []
    for row in mds:
        # Accumulate from the first product so no typed zero is needed.
        acc = row[0] * state[0]
        for coeff, s in zip(row[1:], state[1:], strict=True):
            acc = acc + coeff * s
        new_state.append(acc)
    return new_state


def permute(state: list[T], params: PoseidonParameters) -> list[T]:
    """
    Performs the full Poseidon permutation on the given state.

    The permutation follows the structure:
    Full Rounds (R_F / 2) -> Partial Rounds (R_P) -> Full Rounds (R_F / 2)

    Every round adds its round constants, applies the S-box layer and then
    the MDS matrix.

    Args:
        state: The state vector, rate segment first.
        params: The object defining the permutation's configuration.

    Returns:
        The new state after applying the permutation.

    Raises:
        SpongeConfigurationError: If the state does not have `width` elements.
    """
    # Ensure the input state has the correct dimensions.
    if len(state) != params.width:
        raise SpongeConfigurationError(
            "state", f"expected {params.width} elements, got {len(state)}"
        )

    # The number of full rounds is split between the beginning and end.
    half_full_rounds = params.full_rounds // 2
    partial_end = half_full_rounds + params.partial_rounds

    state = list(state)
    for r in range(params.num_rounds):
        is_full_round = r < half_full_rounds or r >= partial_end
        state = apply_ark(state, params.ark[r])
        state = apply_s_box(state, params.alpha, is_full_round)
        state = apply_mds(state, params.mds)

    return state
