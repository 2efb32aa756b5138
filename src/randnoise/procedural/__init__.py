"""
Procedural noise.

This module provides coherent and discrete noise:

- Noise configuration (kernel, interpolation, octaves)
- Fractal blends: single, FBM, billow and ridged multifractal
- Ready-made Perlin-like, value and simplex FBM functions
- Integer hash noise
"""

from .config import INTERPOLATIONS, NOISE_TYPES, NoiseConfig, noise_config, random_noise_cfg
from .fractal import (
    billow,
    billow_noise,
    fbm,
    fbm_noise,
    noise,
    random_noise_fn,
    ridged_multi,
    ridgedmulti_noise,
    simplex,
    single,
    single_noise,
    vnoise,
)
from .discrete import discrete_noise

__all__ = [
    # Configuration
    "NOISE_TYPES",
    "INTERPOLATIONS",
    "NoiseConfig",
    "noise_config",
    "random_noise_cfg",
    # Blends
    "single",
    "fbm",
    "billow",
    "ridged_multi",
    "single_noise",
    "fbm_noise",
    "billow_noise",
    "ridgedmulti_noise",
    "random_noise_fn",
    # Presets
    "noise",
    "vnoise",
    "simplex",
    # Discrete
    "discrete_noise",
]
