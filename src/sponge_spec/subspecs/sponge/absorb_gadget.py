"""
Canonical encodings of absorbable circuit values.

The circuit encoding of a value equals the native encoding (`absorb.py`) of
its witness: circuit bytes and bit strings get the same length prefix and
the same little-endian packing. Packing only builds linear combinations, so
absorbing bytes or bits costs no constraints.

| circuit value                    | native counterpart      |
|----------------------------------|-------------------------|
| `FpVar`                          | field element           |
| `Boolean`                        | `bool`                  |
| `UInt8Var`                       | `int` below 256         |
| `UInt8Vec`                       | `bytes`                 |
| `BitString` of `Boolean`s        | `BitString`             |
| non-empty list of `UInt8Var`     | `bytes`                 |
| non-empty list of `Boolean`      | list of `bool`          |
| other list / tuple               | same list / tuple       |
| any native value                 | itself, as constants    |
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import singledispatch
from typing import Any

from sponge_spec.types import AbsorbError

from ..fields import PrimeFieldElement
from ..r1cs import Boolean, ConstraintSystem, FpVar, UInt8Var, UInt8Vec
from .absorb import BitString, to_sponge_field_elements


@singledispatch
def to_sponge_field_element_vars(
    value: Any, cs: ConstraintSystem, field: type[PrimeFieldElement]
) -> list[FpVar]:
    """
    Encode a circuit value as field variables.

    Values without circuit variables are encoded natively and embedded as
    constants. Objects may also provide a `to_sponge_field_element_vars(cs,
    field)` method of their own.

    Raises:
        AbsorbError: If the value has no encoding in `field`.
    """
    method = getattr(value, "to_sponge_field_element_vars", None)
    if method is not None:
        return list(method(cs, field))
    return [FpVar.constant(element) for element in to_sponge_field_elements(value, field)]


@to_sponge_field_element_vars.register
def _(value: FpVar, cs: ConstraintSystem, field: type[PrimeFieldElement]) -> list[FpVar]:
    if value.field is not field:
        raise AbsorbError(
            "FpVar", value, detail=f"expected a variable over {field.__name__}"
        )
    return [value]


@to_sponge_field_element_vars.register
def _(value: Boolean, cs: ConstraintSystem, field: type[PrimeFieldElement]) -> list[FpVar]:
    return [FpVar.from_bits_le([value], field, cs)]


@to_sponge_field_element_vars.register
def _(value: UInt8Var, cs: ConstraintSystem, field: type[PrimeFieldElement]) -> list[FpVar]:
    return [FpVar.from_bits_le(value.bits, field, cs)]


@to_sponge_field_element_vars.register
def _(value: UInt8Vec, cs: ConstraintSystem, field: type[PrimeFieldElement]) -> list[FpVar]:
    bits = [bit for byte in value for bit in byte.bits]
    return pack_bit_vars(bits, len(value), cs, field)


@to_sponge_field_element_vars.register
def _(value: BitString, cs: ConstraintSystem, field: type[PrimeFieldElement]) -> list[FpVar]:
    bits: list[Boolean] = []
    for item in value:
        if isinstance(item, bool):
            item = Boolean.constant(item)
        elif not isinstance(item, Boolean):
            raise AbsorbError(
                type(item).__name__, item, detail="bit strings only hold bool or Boolean items"
            )
        bits.append(item)
    return pack_bit_vars(bits, len(value), cs, field)


@to_sponge_field_element_vars.register(list)
@to_sponge_field_element_vars.register(tuple)
def _(value: Sequence[Any], cs: ConstraintSystem, field: type[PrimeFieldElement]) -> list[FpVar]:
    if value and all(isinstance(item, (bool, Boolean)) for item in value):
        bits = [item if isinstance(item, Boolean) else Boolean.constant(item) for item in value]
        return pack_bit_vars(bits, len(value), cs, field)
    if value and all(isinstance(item, UInt8Var) for item in value):
        bits = [bit for byte in value for bit in byte.bits]
        return pack_bit_vars(bits, len(value), cs, field)

    elements: list[FpVar] = []
    for item in value:
        elements.extend(to_sponge_field_element_vars(item, cs, field))
    return elements


def pack_bit_vars(
    bits: Sequence[Boolean],
    length: int,
    cs: ConstraintSystem,
    field: type[PrimeFieldElement],
) -> list[FpVar]:
    """
    Pack boolean variables into field variables behind a constant length prefix.

    The length is known at synthesis time, so it is a constant; each chunk of
    `capacity_bits` bits is recomposed as a linear combination.
    """
    if not 0 <= length < field.MODULUS:
        raise AbsorbError("int", length, detail="length does not fit in the field")
    usable = field.capacity_bits()
    return [FpVar.constant(field(value=length))] + [
        FpVar.from_bits_le(bits[i : i + usable], field, cs) for i in range(0, len(bits), usable)
    ]
