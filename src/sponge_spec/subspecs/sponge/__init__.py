"""The generic sponge interface and absorb encodings."""

from .absorb import (
    Absorb,
    BitString,
    bits_to_bytes_le,
    bytes_to_bits_le,
    to_sponge_bits,
    to_sponge_field_elements,
)
from .absorb_gadget import to_sponge_field_element_vars
from .constraints import CryptographicSpongeVar
from .interface import CryptographicSponge, FieldElementSize, domain_separator_bytes

__all__ = [
    "Absorb",
    "BitString",
    "to_sponge_field_elements",
    "to_sponge_bits",
    "to_sponge_field_element_vars",
    "bytes_to_bits_le",
    "bits_to_bytes_le",
    "CryptographicSponge",
    "CryptographicSpongeVar",
    "FieldElementSize",
    "domain_separator_bytes",
]
