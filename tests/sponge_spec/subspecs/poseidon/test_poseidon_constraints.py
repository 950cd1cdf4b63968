"""
Tests for the Poseidon sponge gadget.

Every test runs a native sponge and a circuit sponge side by side on the same
transcript and checks that the witnesses of the circuit outputs equal the
native outputs, and that the constraint system stays satisfied.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from sponge_spec.subspecs.fields import Fp, PrimeFieldElement
from sponge_spec.subspecs.poseidon import (
    PARAMS_KOALABEAR,
    PoseidonParameters,
    PoseidonSponge,
    PoseidonSpongeVar,
)
from sponge_spec.subspecs.r1cs import Boolean, ConstraintSystem, FpVar, UInt8Var
from sponge_spec.subspecs.sponge import BitString, CryptographicSpongeVar, FieldElementSize
from sponge_spec.types import SynthesisError
from tests.sponge_spec.helpers import F97, SMALL_KOALABEAR_PARAMS, TOY_PARAMS


def make_pair(params: PoseidonParameters) -> tuple[PoseidonSponge, PoseidonSpongeVar]:
    """A native sponge and a circuit sponge over the same parameters."""
    return PoseidonSponge(params), PoseidonSpongeVar(ConstraintSystem(params.field), params)


def witness_elements(
    cs: ConstraintSystem, values: list[int], field: type[PrimeFieldElement] = Fp
) -> list[FpVar]:
    """Allocate one private field variable per value."""
    return [FpVar.new_witness(cs, field(value=v)) for v in values]


def test_pinned_vector_in_circuit() -> None:
    """The circuit reproduces the hand-checked F97 outputs."""
    cs = ConstraintSystem(F97)
    sponge = PoseidonSpongeVar(cs, TOY_PARAMS)
    sponge.absorb(witness_elements(cs, [1, 2], F97))

    assert [v.value for v in sponge.squeeze_field_elements(3)] == [
        F97(value=4),
        F97(value=93),
        F97(value=84),
    ]
    assert cs.is_satisfied()


def test_constant_transcript_costs_nothing() -> None:
    """Absorbing and squeezing constants never touches the constraint system."""
    cs = ConstraintSystem(F97)
    sponge = PoseidonSpongeVar(cs, TOY_PARAMS)
    sponge.absorb([F97(value=1), F97(value=2)])
    outputs = sponge.squeeze_field_elements(2)

    assert all(v.is_constant for v in outputs)
    assert [v.value for v in outputs] == [F97(value=4), F97(value=93)]
    assert cs.num_constraints == 0


@pytest.mark.parametrize("params", [TOY_PARAMS, PARAMS_KOALABEAR, SMALL_KOALABEAR_PARAMS])
@pytest.mark.parametrize("num_inputs", [1, 2, 3, 7])
def test_multi_block_equivalence(params: PoseidonParameters, num_inputs: int) -> None:
    """Multi-block inputs and outputs agree with the native sponge."""
    native, gadget = make_pair(params)
    values = [params.field(value=3 * i + 1) for i in range(num_inputs)]

    native.absorb(values)
    gadget.absorb([FpVar.new_witness(gadget.cs, v) for v in values])

    expected = native.squeeze_field_elements(5)
    assert [v.value for v in gadget.squeeze_field_elements(5)] == expected
    assert gadget.cs.is_satisfied()


def test_interleaved_phases() -> None:
    """Alternating absorbs and squeezes stay in lockstep."""
    native, gadget = make_pair(SMALL_KOALABEAR_PARAMS)
    cs = gadget.cs
    for round_index in range(3):
        values = [Fp(value=round_index * 10 + j) for j in range(round_index + 2)]
        native.absorb(values)
        gadget.absorb([FpVar.new_witness(cs, v) for v in values])
        assert [v.value for v in gadget.squeeze_field_elements(round_index + 1)] == (
            native.squeeze_field_elements(round_index + 1)
        )
        assert gadget.mode == native.mode
    assert cs.is_satisfied()


def test_bits_and_bytes_equivalence() -> None:
    """Squeezed bits and bytes match, and every bit is constrained."""
    native, gadget = make_pair(PARAMS_KOALABEAR)
    data = b"lean transcript"
    native.absorb(data)
    gadget.absorb(UInt8Var.new_witness_vec(gadget.cs, data))

    bits = gadget.squeeze_bits(45)
    assert [b.value for b in bits] == native.squeeze_bits(45)
    assert not any(b.is_constant for b in bits)

    out_bytes = gadget.squeeze_bytes(5)
    assert bytes(b.value for b in out_bytes) == native.squeeze_bytes(5)
    assert gadget.cs.is_satisfied()


def test_bit_list_absorption() -> None:
    """Bit strings absorb identically in both worlds."""
    native, gadget = make_pair(TOY_PARAMS)
    bits = [True, False, False, True, True, False, True, True, False]
    native.absorb(bits)
    gadget.absorb([Boolean.new_witness(gadget.cs, b) for b in bits])
    assert [v.value for v in gadget.squeeze_field_elements(2)] == (
        native.squeeze_field_elements(2)
    )
    assert gadget.cs.is_satisfied()


def test_empty_byte_string_equivalence() -> None:
    """An empty byte string moves both sponges by its length prefix."""
    native, gadget = make_pair(PARAMS_KOALABEAR)
    for data in (b"", b"ab"):
        native.absorb(data)
        gadget.absorb(UInt8Var.new_witness_vec(gadget.cs, data))
        assert gadget.mode == native.mode

    assert [v.value for v in gadget.squeeze_field_elements(2)] == (
        native.squeeze_field_elements(2)
    )
    assert gadget.cs.is_satisfied()


def test_empty_bit_string_equivalence() -> None:
    """An empty `BitString` is absorbed with its prefix in both worlds."""
    native, gadget = make_pair(TOY_PARAMS)
    native.absorb(BitString(()))
    native.absorb(BitString([True, False, True]))
    gadget.absorb(BitString(()))
    gadget.absorb(BitString([Boolean.new_witness(gadget.cs, b) for b in (True, False, True)]))

    assert gadget.mode == native.mode
    assert [v.value for v in gadget.squeeze_field_elements(2)] == (
        native.squeeze_field_elements(2)
    )
    assert gadget.cs.is_satisfied()


def test_sizes_equivalence() -> None:
    """Sized squeezes agree and cost no constraints beyond the bits."""
    native, gadget = make_pair(PARAMS_KOALABEAR)
    native.absorb(Fp(value=123))
    gadget.absorb(FpVar.new_witness(gadget.cs, Fp(value=123)))

    sizes = [
        FieldElementSize.truncated(7),
        FieldElementSize.full(),
        FieldElementSize.truncated(1),
    ]
    assert [v.value for v in gadget.squeeze_field_elements_with_sizes(sizes)] == (
        native.squeeze_field_elements_with_sizes(sizes)
    )
    full = [FieldElementSize.full()] * 3
    assert [v.value for v in gadget.squeeze_field_elements_with_sizes(full)] == (
        native.squeeze_field_elements_with_sizes(full)
    )
    assert gadget.cs.is_satisfied()


def test_sizes_beyond_capacity() -> None:
    """Truncated sizes wider than the capacity are synthesis errors."""
    _, gadget = make_pair(TOY_PARAMS)
    with pytest.raises(SynthesisError, match="capacity"):
        gadget.squeeze_field_elements_with_sizes([FieldElementSize.truncated(7)])


def test_fork_equivalence() -> None:
    """Forks agree and leave both parents untouched."""
    native, gadget = make_pair(SMALL_KOALABEAR_PARAMS)
    native.absorb([Fp(value=1), Fp(value=2)])
    gadget.absorb(witness_elements(gadget.cs, [1, 2]))

    native_child = native.fork(b"sub")
    gadget_child = gadget.fork(b"sub")
    assert gadget_child.cs is gadget.cs
    assert [v.value for v in gadget_child.squeeze_field_elements(4)] == (
        native_child.squeeze_field_elements(4)
    )

    # The parents continue as if nothing happened.
    assert [v.value for v in gadget.squeeze_field_elements(2)] == (
        native.squeeze_field_elements(2)
    )
    assert gadget.cs.is_satisfied()


def test_tampered_witness_is_detected() -> None:
    """Changing an S-box witness breaks satisfiability."""
    _, gadget = make_pair(TOY_PARAMS)
    gadget.absorb(witness_elements(gadget.cs, [1, 2], F97))
    gadget.squeeze_field_elements(1)
    cs = gadget.cs
    assert cs.num_constraints > 0
    assert cs.is_satisfied()

    # Witnesses 0 and 1 are the inputs; everything after is internal.
    cs.witness_assignment[2] = (cs.witness_assignment[2] + 1) % 97
    assert not cs.is_satisfied()


def test_field_mismatch_is_rejected() -> None:
    """The circuit field must be the parameters' field."""
    with pytest.raises(SynthesisError, match="Cannot run"):
        PoseidonSpongeVar(ConstraintSystem(F97), PARAMS_KOALABEAR)


def test_implements_the_interface() -> None:
    """The gadget is a circuit sponge with independent clones."""
    _, gadget = make_pair(TOY_PARAMS)
    assert isinstance(gadget, CryptographicSpongeVar)
    assert gadget.field is F97

    cloned = gadget.clone()
    cloned.absorb(F97(value=1))
    assert gadget.mode != cloned.mode
    assert "PoseidonSpongeVar" in repr(gadget)


@settings(max_examples=20)
@given(st.lists(st.integers(min_value=0, max_value=96), max_size=6), st.integers(1, 8))
def test_random_transcripts(values: list[int], num_bits: int) -> None:
    """Arbitrary toy transcripts agree in both worlds."""
    native, gadget = make_pair(TOY_PARAMS)
    native.absorb([F97(value=v) for v in values])
    gadget.absorb(witness_elements(gadget.cs, values, F97))
    assert [b.value for b in gadget.squeeze_bits(num_bits)] == native.squeeze_bits(num_bits)
    assert gadget.cs.is_satisfied()
