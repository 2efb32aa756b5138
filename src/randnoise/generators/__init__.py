"""
Random generators.

This module provides the sampling layer:

- Pseudo-random number generators over numpy bit generators
- Probability distributions backed by scipy.stats
- Infinite random and low-discrepancy point sequences

RNGs and distributions share one sampling contract (:class:`RandomSource`):
``sample_int``, ``sample_long``, ``sample_float``, ``sample_double``,
``set_seed`` and ``to_sequence``.
"""

from .rngs import (
    RNG,
    RNG_KINDS,
    RandomSource,
    brand,
    default_rng,
    drand,
    frand,
    grand,
    irand,
    lrand,
    randval,
    rng,
    rngs_list,
    set_default_seed,
)
from .distributions import DISTRIBUTIONS, Distribution, distribution, distributions_list
from .sequences import sequence_generator, sequence_generators_list

__all__ = [
    # RNGs
    "RNG",
    "RNG_KINDS",
    "RandomSource",
    "rng",
    "rngs_list",
    "default_rng",
    "set_default_seed",
    "irand",
    "lrand",
    "frand",
    "drand",
    "grand",
    "brand",
    "randval",
    # Distributions
    "DISTRIBUTIONS",
    "Distribution",
    "distribution",
    "distributions_list",
    # Sequences
    "sequence_generator",
    "sequence_generators_list",
]
