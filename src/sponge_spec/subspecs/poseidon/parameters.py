"""
Parameters of a Poseidon sponge.

The parameters are pure data: round constants and the MDS matrix are supplied
by the caller (see `constants.py` for the bundled sets) and only their shape
is checked here. A parameter set is immutable and is shared by reference
between every sponge built from it.
"""

from math import gcd

from pydantic import Field, model_validator

from sponge_spec.types import SpongeConfigurationError, StrictBaseModel

from ..fields import PrimeFieldElement


class PoseidonParameters(StrictBaseModel):
    """Parameters for a specific Poseidon sponge instance."""

    field: type[PrimeFieldElement] = Field(description="The prime field of the state.")
    full_rounds: int = Field(ge=0, description="Total number of full rounds (R_F).")
    partial_rounds: int = Field(ge=0, description="Total number of partial rounds (R_P).")
    alpha: int = Field(description="The S-box exponent.")
    ark: list[list[PrimeFieldElement]] = Field(
        description=(
            "Additive round keys, added before each S-box layer. "
            "Indexed by `ark[round][state_index]`."
        ),
    )
    mds: list[list[PrimeFieldElement]] = Field(
        description="The maximum distance separable matrix of the linear layer.",
    )
    rate: int = Field(description="Number of state elements absorbed or squeezed per permutation.")
    capacity: int = Field(description="Number of state elements never exposed directly.")

    @property
    def width(self) -> int:
        """The size of the state (t = rate + capacity)."""
        return self.rate + self.capacity

    @property
    def num_rounds(self) -> int:
        """The total number of rounds."""
        return self.full_rounds + self.partial_rounds

    @model_validator(mode="after")
    def check_configuration(self) -> "PoseidonParameters":
        """
        Ensures the configuration is consistent.

        Raises:
            SpongeConfigurationError: On the first inconsistency found.
        """
        if self.rate < 1:
            raise SpongeConfigurationError("rate", f"must be positive, got {self.rate}")
        if self.capacity < 1:
            raise SpongeConfigurationError(
                "capacity",
                f"must be positive (rate {self.rate} must be smaller than the state width)",
            )
        if self.full_rounds % 2:
            raise SpongeConfigurationError(
                "full_rounds",
                f"must be even to split around the partial rounds, got {self.full_rounds}",
            )
        if self.num_rounds == 0:
            raise SpongeConfigurationError("rounds", "at least one round is required")

        # x -> x^alpha is a permutation of F_p exactly when gcd(alpha, p - 1) = 1.
        if self.alpha < 2 or gcd(self.alpha, self.field.MODULUS - 1) != 1:
            raise SpongeConfigurationError(
                "alpha", f"x^{self.alpha} is not a permutation of {self.field.__name__}"
            )

        if len(self.ark) != self.num_rounds:
            raise SpongeConfigurationError(
                "ark", f"expected {self.num_rounds} rows of round constants, got {len(self.ark)}"
            )
        for row in self.ark:
            if len(row) != self.width:
                raise SpongeConfigurationError(
                    "ark", f"expected {self.width} constants per round, got {len(row)}"
                )

        if len(self.mds) != self.width or any(len(row) != self.width for row in self.mds):
            raise SpongeConfigurationError("mds", f"expected a {self.width}x{self.width} matrix")

        for table in (self.ark, self.mds):
            for row in table:
                for element in row:
                    if type(element) is not self.field:
                        raise SpongeConfigurationError(
                            "field",
                            f"{type(element).__name__} constant in a "
                            f"{self.field.__name__} parameter set",
                        )

        return self
