"""
Noise configuration.

A :class:`NoiseConfig` is an immutable description of a noise field: kernel
seed and type, interpolation, and the octave parameters used by the fractal
blends. It is validated on construction and safe to share between threads.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..errors import InvalidNoiseConfiguration
from ..generators.rngs import RNG, default_rng, irand

NOISE_TYPES = ("value", "gradient", "simplex")
INTERPOLATIONS = ("none", "linear", "hermite", "quintic")


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class NoiseConfig:
    """
    Immutable noise configuration.

    Parameters
    ----------
    seed : int, optional
        Kernel seed. Default is a random integer from the default RNG.
    noise_type : str, optional
        Kernel: ``"value"``, ``"gradient"`` or ``"simplex"``. Default is
        ``"gradient"``.
    interpolation : str, optional
        ``"none"``, ``"linear"``, ``"hermite"`` or ``"quintic"``. Used by the
        value and gradient kernels only. Default is ``"hermite"``.
    octaves : int, optional
        Number of octaves of the fractal blends (>= 1). Default is 6.
    lacunarity : float, optional
        Frequency multiplier between octaves (> 0). Default is 2.0.
    gain : float, optional
        Amplitude multiplier between octaves (> 0). Default is 0.5.
    normalize : bool, optional
        If True, blends are rescaled to [0, 1]. Default is True.

    Raises
    ------
    InvalidNoiseConfiguration
        If any value is outside its domain.
    """

    seed: int = field(default_factory=irand)
    noise_type: str = "gradient"
    interpolation: str = "hermite"
    octaves: int = 6
    lacunarity: float = 2.0
    gain: float = 0.5
    normalize: bool = True

    def __post_init__(self):
        if not isinstance(self.seed, numbers.Integral):
            raise InvalidNoiseConfiguration(f"seed must be an integer, got {self.seed!r}")
        if self.noise_type not in NOISE_TYPES:
            raise InvalidNoiseConfiguration(
                f"noise_type must be one of {', '.join(NOISE_TYPES)}, got {self.noise_type!r}"
            )
        if self.interpolation not in INTERPOLATIONS:
            raise InvalidNoiseConfiguration(
                f"interpolation must be one of {', '.join(INTERPOLATIONS)}, got {self.interpolation!r}"
            )
        if isinstance(self.octaves, bool) or not isinstance(self.octaves, numbers.Integral) or self.octaves < 1:
            raise InvalidNoiseConfiguration(f"octaves must be an integer >= 1, got {self.octaves!r}")
        if not (_is_real(self.lacunarity) and math.isfinite(self.lacunarity) and self.lacunarity > 0):
            raise InvalidNoiseConfiguration(f"lacunarity must be finite and > 0, got {self.lacunarity!r}")
        if not (_is_real(self.gain) and math.isfinite(self.gain) and self.gain > 0):
            raise InvalidNoiseConfiguration(f"gain must be finite and > 0, got {self.gain!r}")

    @property
    def amplitude_sum(self) -> float:
        """Sum of the octave amplitudes, the bound of the fractal sums."""
        if self.gain == 1.0:
            return float(self.octaves)
        return (1.0 - self.gain**self.octaves) / (1.0 - self.gain)


_FIELDS = [f.name for f in dataclasses.fields(NoiseConfig)]


def _option_name(key: str) -> str:
    return str(key).rstrip("?").replace("-", "_")


def noise_config(
    cfg: NoiseConfig | Mapping | None = None,
    verbose: bool = False,
    **kwargs,
) -> NoiseConfig:
    """
    Build a :class:`NoiseConfig` from a mapping and/or keywords.

    Parameters
    ----------
    cfg : NoiseConfig or mapping, optional
        Base configuration. Mapping keys may use dashes and a trailing
        ``?`` (``"noise-type"``, ``"normalize?"``). None values count as
        missing and take the defaults.
    verbose : bool, optional
        If True, print the resulting configuration. Default is False.
    **kwargs
        Fields overriding ``cfg``.

    Returns
    -------
    NoiseConfig

    Raises
    ------
    InvalidNoiseConfiguration
        If a key is unknown or a value is invalid.
    """
    if isinstance(cfg, NoiseConfig):
        base = dataclasses.asdict(cfg)
    else:
        base = dict(cfg or {})
    options = {_option_name(k): v for k, v in {**base, **kwargs}.items() if v is not None}

    unknown = sorted(set(options) - set(_FIELDS))
    if unknown:
        raise InvalidNoiseConfiguration(f"Unknown noise option(s): {', '.join(unknown)}")

    config = NoiseConfig(**options)

    if verbose:
        print("Noise configuration:")
        for name in _FIELDS:
            print(f"    {name} = {getattr(config, name)}")

    return config


def random_noise_cfg(rng: RNG | None = None) -> dict:
    """
    Random noise configuration.

    Draws seed, kernel type, interpolation, octaves in [1, 10), lacunarity in
    [1.5, 2.5) and gain in [0.2, 0.8). The result is always normalised.

    Parameters
    ----------
    rng : RNG, optional
        Random source. Default is the shared default RNG.

    Returns
    -------
    cfg : dict
        Keyword mapping accepted by :func:`noise_config`.
    """
    source = rng if rng is not None else default_rng()
    return {
        "seed": source.sample_int(),
        "noise_type": NOISE_TYPES[source.sample_int(len(NOISE_TYPES))],
        "interpolation": INTERPOLATIONS[source.sample_int(len(INTERPOLATIONS))],
        "octaves": source.sample_int(1, 10),
        "lacunarity": source.sample_double(1.5, 2.5),
        "gain": source.sample_double(0.2, 0.8),
        "normalize": True,
    }
