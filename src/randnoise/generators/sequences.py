"""
Infinite sequences of random or low-discrepancy points.

:func:`sequence_generator` returns a factory; every call of the factory
starts a fresh lazy stream of points in 1 to 4 dimensions. One-dimensional
streams yield floats, higher dimensions yield ``numpy`` vectors of shape
``(dimension,)``.

Generators
----------
- ``halton``, ``sobol``: low-discrepancy sequences in ``[0, 1)^d`` from
  :mod:`scipy.stats.qmc`, restarting at the sequence origin on every call.
- ``sphere``: points uniformly distributed on the unit sphere.
- ``gaussian``: independent N(0, 1) coordinates.
- ``default``: independent uniform ``[0, 1)`` coordinates.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import numpy as np
from scipy.stats import qmc

from ..errors import UnknownGeneratorKind
from .rngs import RNG, default_rng, repeatedly

_QMC_ENGINES = {"halton": qmc.Halton, "sobol": qmc.Sobol}

sequence_generators_list = sorted([*_QMC_ENGINES, "sphere", "gaussian", "default"])


def _qmc_points(engine: qmc.QMCEngine) -> Iterator[np.ndarray]:
    # power-of-two blocks keep Sobol' balance properties (and its warnings) in check
    while True:
        yield from engine.random(max(engine.num_generated, 1))


def _unit_vector(source: RNG, dimension: int) -> np.ndarray:
    while True:
        v = np.array([source.sample_gaussian() for _ in range(dimension)])
        norm = np.linalg.norm(v)
        if norm > 0.0:
            return v / norm


def sequence_generator(
    name: str,
    dimension: int,
    rng: RNG | None = None,
) -> Callable[[], Iterator[float | np.ndarray]]:
    """
    Create a sequence generator.

    Parameters
    ----------
    name : str
        One of :data:`sequence_generators_list`.
    dimension : int
        Number of coordinates per point. Values outside ``[1, 4]`` are
        clamped into that range.
    rng : RNG, optional
        Random source for ``sphere``, ``gaussian`` and ``default``.
        Default is the shared default RNG. Ignored by ``halton`` and ``sobol``.

    Returns
    -------
    factory : callable
        Zero-argument callable returning a new infinite iterator of points.

    Raises
    ------
    UnknownGeneratorKind
        If ``name`` is not a registered generator.

    Examples
    --------
    >>> from itertools import islice
    >>> from randnoise import sequence_generator
    >>> gen = sequence_generator("halton", 2)
    >>> points = list(islice(gen(), 5))
    """
    if name not in sequence_generators_list:
        raise UnknownGeneratorKind(name, sequence_generators_list)

    dim = int(np.clip(dimension, 1, 4))

    if name in _QMC_ENGINES:
        engine = _QMC_ENGINES[name]

        def points():
            return _qmc_points(engine(d=dim, scramble=False))

    else:
        source = rng if rng is not None else default_rng()
        if name == "sphere":

            def draw():
                return _unit_vector(source, dim)

        else:
            sample = source.sample_gaussian if name == "gaussian" else source.sample_double

            def draw():
                return np.array([sample() for _ in range(dim)])

        def points():
            return repeatedly(draw)

    def factory():
        if dim == 1:
            return (float(p[0]) for p in points())
        return points()

    return factory
