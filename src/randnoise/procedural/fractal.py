"""
Fractal noise blends.

Each blend drives :func:`~randnoise.procedural.kernel.kernel` over the octaves of a
:class:`~randnoise.procedural.config.NoiseConfig`. Octave ``i`` samples the kernel
at frequency ``lacunarity**i`` with amplitude ``gain**i``; the first octave
is at unit frequency and amplitude, so a one-octave FBM equals
:func:`single`.

Blends
------
- :func:`single`: the kernel itself.
- :func:`fbm`: fractal Brownian motion, the amplitude-weighted octave sum.
- :func:`billow`: FBM of ``2|v| - 1``.
- :func:`ridged_multi`: ridged multifractal, octaves of ``(1 - |v|)**2``
  weighted by the previous octave's signal.

With ``normalize=True`` the results lie in ``[0, 1]``; otherwise the raw
octave sum is returned.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping

import numpy as np

from ..generators.rngs import RNG, default_rng
from .config import NoiseConfig, noise_config, random_noise_cfg
from .kernel import kernel

logger = logging.getLogger(__name__)


def _coords(x, y, z) -> tuple[list, bool]:
    raw = [c for c in (x, y, z) if c is not None]
    scalar = all(np.ndim(c) == 0 for c in raw)
    return [np.asarray(c, dtype=float) for c in raw], scalar


def _result(value: np.ndarray, scalar: bool):
    return float(value) if scalar else value


def _octaves(cfg: NoiseConfig, coords: list):
    """Yield ``(amplitude, kernel value)`` for every octave."""
    freq, amp = 1.0, 1.0
    for _ in range(cfg.octaves):
        yield amp, kernel(cfg.seed, cfg.noise_type, cfg.interpolation, *(c * freq for c in coords))
        freq *= cfg.lacunarity
        amp *= cfg.gain


def _rescale(total, cfg: NoiseConfig):
    return np.clip((total / cfg.amplitude_sum + 1.0) / 2.0, 0.0, 1.0)


def single(
    cfg: NoiseConfig,
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """Kernel noise at unit frequency, in [0, 1] if normalised, else [-1, 1]."""
    coords, scalar = _coords(x, y, z)
    value = kernel(cfg.seed, cfg.noise_type, cfg.interpolation, *coords)
    if cfg.normalize:
        value = np.clip((value + 1.0) / 2.0, 0.0, 1.0)
    return _result(value, scalar)


def fbm(
    cfg: NoiseConfig,
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """
    Fractal Brownian motion.

    Parameters
    ----------
    cfg : NoiseConfig
        Noise configuration.
    x, y, z : float or array_like
        Coordinates; ``y`` and ``z`` are optional. Arrays broadcast together.

    Returns
    -------
    float or ndarray
        ``sum(gain**i * kernel(lacunarity**i * p))``, rescaled to [0, 1] if
        ``cfg.normalize``. A float for scalar coordinates.
    """
    coords, scalar = _coords(x, y, z)
    total = sum(amp * v for amp, v in _octaves(cfg, coords))
    if cfg.normalize:
        total = _rescale(total, cfg)
    return _result(total, scalar)


def billow(
    cfg: NoiseConfig,
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """FBM over ``2|v| - 1``, giving rounded, billowy features."""
    coords, scalar = _coords(x, y, z)
    total = sum(amp * (2.0 * np.abs(v) - 1.0) for amp, v in _octaves(cfg, coords))
    if cfg.normalize:
        total = _rescale(total, cfg)
    return _result(total, scalar)


def ridged_multi(
    cfg: NoiseConfig,
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """
    Ridged multifractal noise.

    Every octave contributes ``signal = (1 - |v|)**2 * weight`` where the
    weight starts at 1 and becomes ``clip(2 * signal, 0, 1)`` for the next
    octave, so ridges sharpen where the coarser octaves already peak. The raw
    sum lies in ``[0, cfg.amplitude_sum]``; normalised output is divided by
    that bound.
    """
    coords, scalar = _coords(x, y, z)
    total = 0.0
    weight = 1.0
    for amp, v in _octaves(cfg, coords):
        signal = (1.0 - np.abs(v)) ** 2 * weight
        weight = np.clip(2.0 * signal, 0.0, 1.0)
        total = total + signal * amp
    if cfg.normalize:
        total = np.clip(total / cfg.amplitude_sum, 0.0, 1.0)
    return _result(total, scalar)


def _noise_fn(blend: Callable, cfg, verbose: bool, kwargs: dict) -> Callable:
    config = noise_config(cfg, verbose=verbose, **kwargs)

    def noise_fn(x, y=None, z=None):
        return blend(config, x, y, z)

    noise_fn.config = config
    noise_fn.__name__ = f"{blend.__name__}_noise"
    noise_fn.__doc__ = f"{blend.__name__} noise over {config}."
    logger.debug("Created %s noise function (seed=%s)", blend.__name__, config.seed)
    return noise_fn


def single_noise(cfg: NoiseConfig | Mapping | None = None, verbose: bool = False, **kwargs) -> Callable:
    """
    Create a single-octave noise function.

    Parameters
    ----------
    cfg : NoiseConfig or mapping, optional
        Configuration, see :func:`~randnoise.procedural.config.noise_config`.
    verbose : bool, optional
        If True, print the configuration. Default is False.
    **kwargs
        Configuration fields overriding ``cfg``.

    Returns
    -------
    noise : callable
        ``noise(x, y=None, z=None)``. The configuration is available as
        ``noise.config``.

    Examples
    --------
    >>> from randnoise import single_noise
    >>> n = single_noise(seed=42, noise_type="value")
    >>> v = n(0.5, 1.25)
    """
    return _noise_fn(single, cfg, verbose, kwargs)


def fbm_noise(cfg: NoiseConfig | Mapping | None = None, verbose: bool = False, **kwargs) -> Callable:
    """Create an FBM noise function, see :func:`single_noise` for arguments."""
    return _noise_fn(fbm, cfg, verbose, kwargs)


def billow_noise(cfg: NoiseConfig | Mapping | None = None, verbose: bool = False, **kwargs) -> Callable:
    """Create a billow noise function, see :func:`single_noise` for arguments."""
    return _noise_fn(billow, cfg, verbose, kwargs)


def ridgedmulti_noise(cfg: NoiseConfig | Mapping | None = None, verbose: bool = False, **kwargs) -> Callable:
    """Create a ridged multifractal noise function, see :func:`single_noise` for arguments."""
    return _noise_fn(ridged_multi, cfg, verbose, kwargs)


_PRESETS = {
    "noise": {"noise_type": "gradient", "interpolation": "quintic"},
    "vnoise": {"noise_type": "value", "interpolation": "hermite"},
    "simplex": {"noise_type": "simplex"},
}


@functools.lru_cache(maxsize=None)
def _preset(name: str) -> Callable:
    logger.debug("Creating %s preset", name)
    return fbm_noise(octaves=6, lacunarity=2.0, gain=0.5, normalize=True, **_PRESETS[name])


def noise(
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """Perlin-like FBM noise in [0, 1] (gradient kernel, quintic fade)."""
    return _preset("noise")(x, y, z)


def vnoise(
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """Value FBM noise in [0, 1] (hermite fade)."""
    return _preset("vnoise")(x, y, z)


def simplex(
    x: float | np.ndarray,
    y: float | np.ndarray | None = None,
    z: float | np.ndarray | None = None,
) -> float | np.ndarray:
    """Simplex FBM noise in [0, 1]."""
    return _preset("simplex")(x, y, z)


_FACTORIES = [single_noise, fbm_noise, billow_noise, ridgedmulti_noise]


def random_noise_fn(cfg: NoiseConfig | Mapping | None = None, rng: RNG | None = None) -> Callable:
    """
    Noise function of a random blend.

    Parameters
    ----------
    cfg : NoiseConfig or mapping, optional
        Configuration. Default is :func:`~randnoise.procedural.config.random_noise_cfg`.
    rng : RNG, optional
        Random source for the blend and the configuration. Default is the
        shared default RNG.

    Returns
    -------
    noise : callable
        One of the :func:`single_noise`, :func:`fbm_noise`,
        :func:`billow_noise` or :func:`ridgedmulti_noise` functions.
    """
    source = rng if rng is not None else default_rng()
    if cfg is None:
        cfg = random_noise_cfg(source)
    factory = _FACTORIES[source.sample_int(len(_FACTORIES))]
    return factory(cfg)
