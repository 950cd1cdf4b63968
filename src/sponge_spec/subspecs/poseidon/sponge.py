"""
The Poseidon duplex sponge.

The sponge keeps a `width`-element state, rate segment first, and a mode:

- **Absorbing(i)**: the next absorbed element is added into rate slot `i`.
- **Squeezing(i)**: the next squeezed element is read from rate slot `i`.

Permutations are lazy. Filling the rate does not permute; the permutation
runs only when more input arrives, when squeezing starts, or when more
output is needed. Switching from squeezing back to absorbing always permutes
first, so absorbed data can never be combined with already revealed output.

`PoseidonDuplex` holds this state machine once. It is generic over the state
element type and drives both the native sponge below and the circuit sponge
in `constraints.py`.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Generic, Self, TypeVar

from ..fields import PrimeFieldElement
from ..sponge import CryptographicSponge, to_sponge_field_elements
from .parameters import PoseidonParameters
from .permutation import permute

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Absorbing:
    """The sponge is accepting input; `next_absorb_index` is in `[0, rate]`."""

    next_absorb_index: int


@dataclass(frozen=True, slots=True)
class Squeezing:
    """The sponge is producing output; `next_squeeze_index` is in `[0, rate]`."""

    next_squeeze_index: int


DuplexSpongeMode = Absorbing | Squeezing
"""The phase of a duplex sponge."""


class PoseidonDuplex(Generic[T]):
    """
    The duplex state machine shared by the native and circuit sponges.

    Attributes:
        params: The shared, immutable parameter set.
        state: The permutation state, rate segment first.
        mode: The current phase and its rate index.
    """

    def __init__(self, params: PoseidonParameters, state: list[T]) -> None:
        self.params = params
        self.state = state
        self.mode: DuplexSpongeMode = Absorbing(0)

    @property
    def field(self) -> type[PrimeFieldElement]:
        return self.params.field

    def permute(self) -> None:
        """Apply the permutation to the state in place."""
        self.state = permute(self.state, self.params)

    # =================================================================
    # Absorbing
    # =================================================================

    def absorb_field_elements(self, elements: list[T]) -> None:
        """
        Absorb already encoded field elements.

        An empty input leaves the sponge untouched.
        """
        if not elements:
            return

        match self.mode:
            case Absorbing(next_absorb_index=index):
                # The rate is full: make room before adding more.
                if index == self.params.rate:
                    self.permute()
                    index = 0
            case Squeezing():
                self.permute()
                index = 0

        self._absorb_internal(index, elements)

    def _absorb_internal(self, rate_start: int, elements: list[T]) -> None:
        rate = self.params.rate
        remaining = elements
        while True:
            # Everything fits: add it and stay lazy.
            if rate_start + len(remaining) <= rate:
                for i, element in enumerate(remaining):
                    self.state[rate_start + i] = self.state[rate_start + i] + element
                self.mode = Absorbing(rate_start + len(remaining))
                return

            # Fill the rest of the rate, then permute for the next block.
            num_absorbed = rate - rate_start
            for i, element in enumerate(remaining[:num_absorbed]):
                self.state[rate_start + i] = self.state[rate_start + i] + element
            self.permute()
            remaining = remaining[num_absorbed:]
            rate_start = 0

    # =================================================================
    # Squeezing
    # =================================================================

    def squeeze_field_elements(self, num_elements: int) -> list[T]:
        """
        Squeeze `num_elements` state elements.

        Requesting zero elements returns an empty list without touching the
        state or the mode.
        """
        if num_elements < 0:
            raise ValueError(f"Cannot squeeze {num_elements} elements")
        if num_elements == 0:
            return []

        match self.mode:
            case Absorbing():
                self.permute()
                index = 0
            case Squeezing(next_squeeze_index=index):
                if index == self.params.rate:
                    self.permute()
                    index = 0

        return self._squeeze_internal(index, num_elements)

    def _squeeze_internal(self, rate_start: int, num_elements: int) -> list[T]:
        rate = self.params.rate
        output: list[T] = []
        while True:
            num_taken = min(num_elements - len(output), rate - rate_start)
            output.extend(self.state[rate_start : rate_start + num_taken])
            rate_start += num_taken
            if len(output) == num_elements:
                self.mode = Squeezing(rate_start)
                return output

            # The rate is exhausted and more output is needed.
            self.permute()
            rate_start = 0

    def squeeze_bits(self, num_bits: int) -> list[Any]:
        """
        Squeeze `num_bits` bits.

        Each squeezed element contributes its low `capacity_bits` bits, least
        significant first; the top bit is dropped because it is biased.
        """
        if num_bits < 0:
            raise ValueError(f"Cannot squeeze {num_bits} bits")
        usable_bits = self.field.capacity_bits()
        num_elements = (num_bits + usable_bits - 1) // usable_bits

        bits: list[Any] = []
        elements: list[Any] = self.squeeze_field_elements(num_elements)
        for element in elements:
            bits.extend(element.to_bits_le()[:usable_bits])
        return bits[:num_bits]

    def clone(self) -> Self:
        """A copy with its own state list; parameters stay shared."""
        cloned = copy.copy(self)
        cloned.state = list(self.state)
        return cloned


class PoseidonSponge(PoseidonDuplex[PrimeFieldElement], CryptographicSponge):
    """
    A Poseidon sponge over concrete field elements.

    Args:
        params: The parameter set. It is shared, never copied.
    """

    def __init__(self, params: PoseidonParameters) -> None:
        super().__init__(params, [params.field.zero()] * params.width)
        logger.debug(
            "Created Poseidon sponge over %s (rate=%d, capacity=%d)",
            params.field.__name__,
            params.rate,
            params.capacity,
        )

    def absorb(self, value: Any) -> None:
        """
        Absorb the canonical field-element encoding of `value`.

        Raises:
            AbsorbError: If `value` has no encoding in the sponge's field.
        """
        self.absorb_field_elements(to_sponge_field_elements(value, self.field))

    def __repr__(self) -> str:
        return f"PoseidonSponge(field={self.field.__name__}, mode={self.mode})"
