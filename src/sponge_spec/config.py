"""
Global configuration for the sponge specification.

This module contains environment-specific settings that apply across all subspecs.
"""

import os

_SUPPORTED_SPONGE_ENVS: list[str] = ["prod", "test"]

SPONGE_ENV = os.environ.get("SPONGE_ENV", "prod").lower()
"""
The environment flag ('prod' or 'test'). Defaults to 'prod'.

It selects the default Poseidon parameter set: the BLS12-381 scalar field
instance in 'prod', the cheaper KoalaBear instance in 'test'.
"""

if SPONGE_ENV not in _SUPPORTED_SPONGE_ENVS:
    raise ValueError(
        f"Invalid SPONGE_ENV environment variable: '{SPONGE_ENV}'. "
        f"Supported values: {_SUPPORTED_SPONGE_ENVS}"
    )
