"""
Tests for the prime field elements consumed by the sponge.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from sponge_spec.subspecs.fields import P, P_BITS, R, R_BITS, Fp, Fr
from tests.sponge_spec.helpers import F97


def test_constants() -> None:
    """Verify field constants."""
    assert P == 2**31 - 2**24 + 1
    assert P.bit_length() == P_BITS
    assert R.bit_length() == R_BITS

    assert Fp.modulus_bits() == 31
    assert Fp.capacity_bits() == 30
    assert Fp.num_bytes() == 4

    assert Fr.modulus_bits() == 255
    assert Fr.capacity_bits() == 254
    assert Fr.num_bytes() == 32

    assert F97.modulus_bits() == 7
    assert F97.capacity_bits() == 6
    assert F97.num_bytes() == 1


def test_base_field_arithmetic() -> None:
    """
    Test basic arithmetic, equality, and error handling
    in the base field Fp.
    """
    a = Fp(value=5)
    b = Fp(value=10)

    # Test operations
    assert a + b == Fp(value=15)
    assert b - a == Fp(value=5)
    assert -a == Fp(value=P - 5)
    assert a * b == Fp(value=50)
    assert a / b == Fp(value=5) * Fp(value=10).inverse()
    assert a**3 == Fp(value=125)
    assert int(b) == 10

    # Test equality against the same and different types
    assert a == Fp(value=5)
    assert a != b
    assert a != 5  # type: ignore[comparison-overlap]
    assert a != Fr(value=5)  # type: ignore[comparison-overlap]

    # Test error on inverting the zero element
    with pytest.raises(ZeroDivisionError, match="Cannot invert the zero element."):
        Fp(value=0).inverse()


def test_construction_reduces_modulo_p() -> None:
    """Out-of-range integers are reduced into the canonical range."""
    assert Fp(value=P) == Fp.zero()
    assert Fp(value=P + 7) == Fp(value=7)
    assert Fp(value=-1) == Fp(value=P - 1)
    assert F97(value=200) == F97(value=6)


def test_elements_are_immutable() -> None:
    """Field elements are frozen once constructed."""
    a = Fp(value=3)
    with pytest.raises(ValidationError):
        a.value = 4  # type: ignore[misc]


def test_fields_never_mix() -> None:
    """Arithmetic between elements of different fields is rejected."""
    with pytest.raises(TypeError):
        Fp(value=1) + Fr(value=1)  # type: ignore[operator]
    with pytest.raises(TypeError):
        Fp(value=1) * F97(value=1)  # type: ignore[operator]


def test_byte_encoding() -> None:
    """The canonical encoding is fixed-width little-endian."""
    element = Fp(value=0x01020304)
    assert bytes(element) == b"\x04\x03\x02\x01"
    assert element.to_bytes_le() == bytes(element)
    assert Fp.from_bytes_le(b"\x04\x03\x02\x01") == element

    assert len(bytes(Fr.one())) == 32
    assert bytes(F97(value=96)) == b"\x60"


def test_from_bytes_rejects_bad_input() -> None:
    """Wrong lengths and non-canonical values are rejected."""
    with pytest.raises(ValueError, match="Expected 4 bytes, got 3"):
        Fp.from_bytes_le(b"\x00\x00\x00")
    with pytest.raises(ValueError, match="exceeds field modulus"):
        Fp.from_bytes_le(P.to_bytes(4, "little"))
    with pytest.raises(ValueError, match="exceeds field modulus"):
        F97.from_bytes_le(b"\x61")


def test_bit_decomposition() -> None:
    """Bits are little-endian and exactly `modulus_bits` long."""
    bits = F97(value=93).to_bits_le()
    # 93 = 0b1011101
    assert bits == [True, False, True, True, True, False, True]
    assert F97.from_bits_le(bits) == F97(value=93)

    assert len(Fr(value=1).to_bits_le()) == 255
    assert Fr(value=1).to_bits_le()[0] is True
    assert not any(Fr(value=1).to_bits_le()[1:])


def test_from_bits_reduces() -> None:
    """Recomposition accepts any length and reduces modulo p."""
    # 2^7 - 1 = 127 = 30 mod 97
    assert F97.from_bits_le([True] * 7) == F97(value=30)
    assert F97.from_bits_le([]) == F97.zero()


@given(st.integers(min_value=0, max_value=P - 1))
def test_fp_bits_and_bytes_agree(value: int) -> None:
    """Both canonical encodings describe the same integer."""
    element = Fp(value=value)
    assert Fp.from_bits_le(element.to_bits_le()) == element
    assert Fp.from_bytes_le(bytes(element)) == element
    assert int.from_bytes(bytes(element), "little") == value


@given(st.integers(min_value=1, max_value=R - 1))
def test_fr_inverse(value: int) -> None:
    """Every non-zero element has a multiplicative inverse."""
    element = Fr(value=value)
    assert element * element.inverse() == Fr.one()
