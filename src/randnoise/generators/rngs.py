"""
Pseudo-random number generators with a uniform sampling contract.

Every generator created by :func:`rng` is an :class:`RNG` wrapping a
:class:`numpy.random.Generator` over one of numpy's bit generators. The
accessors return typed primitive samples and share one set of range rules:

- no bound: natural range (full signed 32/64-bit range for ints/longs,
  ``[0, 1)`` for floats/doubles);
- one bound ``mx``: ``[0, mx)``;
- two bounds ``(mn, mx)``: ``mn + sample(mx - mn)``, and exactly ``mn`` when
  the range is empty (no draw is consumed).

Gaussian draws are the exception: ``sample_gaussian(mean, std)`` is
``mean + std * N(0, 1)``, the second argument being a spread, not a bound.

A single process-wide Mersenne Twister, created on first use by
:func:`default_rng`, backs the convenience functions :func:`irand`,
:func:`lrand`, :func:`frand`, :func:`drand`, :func:`grand`, :func:`brand`
and :func:`randval`. Use :func:`set_default_seed` to make them reproducible.

Generators are not thread-safe: every draw mutates the bit generator state.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from typing import Any, Protocol, runtime_checkable

import numpy as np

from ..errors import UnknownGeneratorKind

logger = logging.getLogger(__name__)

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

RNG_KINDS = {
    "mersenne": np.random.MT19937,
    "pcg64": np.random.PCG64,
    "pcg64dxsm": np.random.PCG64DXSM,
    "philox": np.random.Philox,
    "sfc64": np.random.SFC64,
}

rngs_list = sorted(RNG_KINDS)


@runtime_checkable
class RandomSource(Protocol):
    """Anything producing primitive random draws (RNG or distribution)."""

    def sample_int(self, *bounds) -> int: ...

    def sample_long(self, *bounds) -> int: ...

    def sample_float(self, *bounds) -> np.float32: ...

    def sample_double(self, *bounds) -> float: ...

    def set_seed(self, seed: int) -> RandomSource: ...

    def to_sequence(self, n: int | None = None) -> Iterator[Any]: ...


def repeatedly(fn: Callable[[], Any], n: int | None = None) -> Iterator[Any]:
    """Lazy stream of ``fn()`` results, infinite or exactly ``n`` long."""
    counter = itertools.count() if n is None else range(n)
    return (fn() for _ in counter)


def _seed_value(seed: int | None) -> int | None:
    # numpy only accepts non-negative seeds
    return None if seed is None else int(seed) % 2**64


def _wrap_int32(value: int) -> int:
    return ((value - INT32_MIN) & 0xFFFFFFFF) + INT32_MIN


def _check_arity(name: str, args: tuple, limit: int = 2) -> None:
    if len(args) > limit:
        raise TypeError(f"{name}() takes at most {limit} range arguments ({len(args)} given)")


def _next_long(generator: np.random.Generator, *bounds) -> int:
    if not bounds:
        return int(generator.integers(INT64_MIN, INT64_MAX, endpoint=True, dtype=np.int64))
    if len(bounds) == 1:
        mx = int(bounds[0])
        if mx == 0:
            return 0
        return _next_long(generator) % mx
    mn, mx = int(bounds[0]), int(bounds[1])
    diff = mx - mn
    if diff == 0:
        return mn
    return mn + _next_long(generator, diff)


def _next_double(generator: np.random.Generator, *bounds) -> float:
    if not bounds:
        return float(generator.random())
    if len(bounds) == 1:
        return float(generator.random()) * bounds[0]
    mn, mx = bounds
    diff = mx - mn
    if diff == 0:
        return float(mn)
    return mn + _next_double(generator, diff)


def _next_gaussian(generator: np.random.Generator, *params) -> float:
    if not params:
        return float(generator.standard_normal())
    if len(params) == 1:
        return float(generator.standard_normal()) * params[0]
    mean, std = params
    if std == 0:
        return float(mean)
    return mean + _next_gaussian(generator, std)


class RNG:
    """
    Stateful pseudo-random generator of a given kind.

    Parameters
    ----------
    kind : str, optional
        Bit generator name, one of :data:`rngs_list`. Default is ``"mersenne"``.
    seed : int, optional
        Initial seed. If None, the generator is seeded from OS entropy.

    Attributes
    ----------
    kind : str
        Bit generator name.
    generator : numpy.random.Generator
        Underlying numpy generator. Its identity never changes, reseeding
        restores the state of its bit generator in place.

    Raises
    ------
    UnknownGeneratorKind
        If ``kind`` is not a registered bit generator.
    """

    def __init__(self, kind: str = "mersenne", seed: int | None = None):
        try:
            self._bit_generator = RNG_KINDS[kind]
        except KeyError:
            raise UnknownGeneratorKind(kind, RNG_KINDS) from None
        self.kind = kind
        self.generator = np.random.Generator(self._bit_generator(_seed_value(seed)))

    def __repr__(self) -> str:
        return f"RNG(kind={self.kind!r})"

    def sample_int(self, *bounds) -> int:
        """Random 32-bit integer: full range, ``[0, mx)`` or ``[mn, mx)``."""
        _check_arity("sample_int", bounds)
        return _wrap_int32(_next_long(self.generator, *bounds))

    def sample_long(self, *bounds) -> int:
        """Random 64-bit integer: full range, ``[0, mx)`` or ``[mn, mx)``."""
        _check_arity("sample_long", bounds)
        return _next_long(self.generator, *bounds)

    def sample_float(self, *bounds) -> np.float32:
        """Random single precision float: ``[0, 1)``, ``[0, mx)`` or ``[mn, mx)``."""
        _check_arity("sample_float", bounds)
        return np.float32(_next_double(self.generator, *bounds))

    def sample_double(self, *bounds) -> float:
        """Random double: ``[0, 1)``, ``[0, mx)`` or ``[mn, mx)``."""
        _check_arity("sample_double", bounds)
        return _next_double(self.generator, *bounds)

    def sample_gaussian(self, *params) -> float:
        """
        Random double from a normal distribution.

        ``sample_gaussian()`` draws from N(0, 1), ``sample_gaussian(std)``
        from N(0, std) and ``sample_gaussian(mean, std)`` returns
        ``mean + sample_gaussian(std)``. A zero ``std`` in the two-argument
        form returns ``mean`` without drawing.
        """
        _check_arity("sample_gaussian", params)
        return _next_gaussian(self.generator, *params)

    def sample_bool(self, threshold: float | None = None) -> bool:
        """Fair coin, or True with probability ``threshold``."""
        if threshold is None:
            return bool(self.generator.integers(2))
        return _next_double(self.generator) < threshold

    def set_seed(self, seed: int) -> RNG:
        """Reseed in place and return the generator itself."""
        self.generator.bit_generator.state = self._bit_generator(_seed_value(seed)).state
        return self

    def to_sequence(self, n: int | None = None) -> Iterator[float]:
        """
        Lazy stream of ``sample_double()`` draws.

        The stream is not buffered: it shares the generator state with any
        other consumer of this RNG. Infinite if ``n`` is None.
        """
        return repeatedly(self.sample_double, n)


def rng(kind: str, seed: int | None = None) -> RNG:
    """
    Create a random number generator.

    Parameters
    ----------
    kind : str
        One of :data:`rngs_list`: ``"mersenne"``, ``"pcg64"``,
        ``"pcg64dxsm"``, ``"philox"`` or ``"sfc64"``.
    seed : int, optional
        Seed. If None, the generator is seeded from OS entropy.

    Returns
    -------
    RNG
        New generator, owned by the caller.

    Examples
    --------
    >>> from randnoise import rng
    >>> r = rng("pcg64", 1337)
    >>> value = r.sample_int(15, 25)
    """
    source = RNG(kind, seed)
    logger.debug("Created %s RNG (seed=%s)", kind, seed)
    return source


_default_rng: RNG | None = None


def default_rng() -> RNG:
    """Process-wide Mersenne Twister shared by the convenience functions."""
    global _default_rng
    if _default_rng is None:
        _default_rng = RNG("mersenne")
        logger.debug("Initialised default RNG")
    return _default_rng


def set_default_seed(seed: int) -> RNG:
    """Reseed the default RNG in place and return it."""
    logger.debug("Reseeding default RNG with %s", seed)
    return default_rng().set_seed(seed)


def irand(*bounds) -> int:
    """Random 32-bit integer from the default RNG."""
    return default_rng().sample_int(*bounds)


def lrand(*bounds) -> int:
    """Random 64-bit integer from the default RNG."""
    return default_rng().sample_long(*bounds)


def frand(*bounds) -> np.float32:
    """Random float from the default RNG."""
    return default_rng().sample_float(*bounds)


def drand(*bounds) -> float:
    """Random double from the default RNG."""
    return default_rng().sample_double(*bounds)


def grand(*params) -> float:
    """Random gaussian double from the default RNG."""
    return default_rng().sample_gaussian(*params)


def brand(threshold: float | None = None) -> bool:
    """Random boolean from the default RNG."""
    return default_rng().sample_bool(threshold)


def randval(v1: Any, v2: Any, prob: float | None = None) -> Any:
    """Return ``v1`` with probability ``prob`` (fair coin by default), else ``v2``."""
    return v1 if brand(prob) else v2
