"""
randnoise - Random Generators and Procedural Noise.

A Python package for sampling pseudo-random numbers and probability
distributions through one contract, and for synthesising fractal noise
fields.

Features
--------
- Several bit generators (Mersenne Twister, PCG64, Philox, SFC64)
- 28 probability distributions with sampling and inspection
- Halton, Sobol, sphere and gaussian point sequences
- Value, gradient and simplex noise kernels
- Single, FBM, billow and ridged multifractal blends
- Integer hash noise

Quick Start
-----------
>>> from randnoise import rng, distribution, fbm_noise
>>> r = rng("pcg64", 42)
>>> d = distribution("gamma", shape=2.0, scale=1.0, rng=r)
>>> n = fbm_noise(seed=42, octaves=4)
>>> value = n(0.5, 1.5)

References
----------
Perlin, K., 2002. Improving noise. ACM Transactions on Graphics, 21(3),
pp.681-682. DOI: 10.1145/566654.566636

Author
------
Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux

License
-------
BSD-3-Clause
"""

import logging

__version__ = "0.1.0"
__author__ = "Vladislav Yastrebov"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import InvalidNoiseConfiguration, UnknownGeneratorKind  # noqa: E402

# Random generators
from .generators import (  # noqa: E402
    DISTRIBUTIONS,
    RNG,
    RNG_KINDS,
    Distribution,
    RandomSource,
    brand,
    default_rng,
    distribution,
    distributions_list,
    drand,
    frand,
    grand,
    irand,
    lrand,
    randval,
    rng,
    rngs_list,
    sequence_generator,
    sequence_generators_list,
    set_default_seed,
)

# Noise
from .procedural import (  # noqa: E402
    INTERPOLATIONS,
    NOISE_TYPES,
    NoiseConfig,
    billow,
    billow_noise,
    discrete_noise,
    fbm,
    fbm_noise,
    noise,
    noise_config,
    random_noise_cfg,
    random_noise_fn,
    ridged_multi,
    ridgedmulti_noise,
    simplex,
    single,
    single_noise,
    vnoise,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "UnknownGeneratorKind",
    "InvalidNoiseConfiguration",
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
    # Noise configuration
    "NOISE_TYPES",
    "INTERPOLATIONS",
    "NoiseConfig",
    "noise_config",
    "random_noise_cfg",
    # Noise blends
    "single",
    "fbm",
    "billow",
    "ridged_multi",
    "single_noise",
    "fbm_noise",
    "billow_noise",
    "ridgedmulti_noise",
    "random_noise_fn",
    "noise",
    "vnoise",
    "simplex",
    "discrete_noise",
]
