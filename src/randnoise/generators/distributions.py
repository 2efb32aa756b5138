"""
Probability distributions with the random source sampling contract.

:func:`distribution` builds a :class:`Distribution` from a family name and a
parameter mapping. Every parameter has a documented default, so
``distribution("normal")`` is N(0, 1). The distribution math is delegated to
:mod:`scipy.stats` frozen distributions; the random bits come from an
:class:`~randnoise.generators.rngs.RNG` (the shared default RNG unless ``rng``
is given), so reseeding that RNG makes the samples reproducible.

Real families
-------------
- ``beta``: ``alpha`` (2.0), ``beta`` (5.0)
- ``cauchy``: ``mean`` (0.0), ``scale`` (1.0)
- ``chi-squared``: ``degrees_of_freedom`` (1.0)
- ``empirical``: ``data`` (required), ``bin_count`` (1000)
- ``enumerated-real``: ``data`` (required), ``probabilities`` (equal weights)
- ``exponential``: ``mean`` (1.0)
- ``f``: ``numerator_degrees_of_freedom`` (1.0), ``denominator_degrees_of_freedom`` (1.0)
- ``gamma``: ``shape`` (2.0), ``scale`` (2.0)
- ``gumbel``: ``mu`` (1.0), ``beta`` (2.0)
- ``laplace``: ``mu`` (1.0), ``beta`` (2.0)
- ``levy``: ``mu`` (0.0), ``c`` (1.0)
- ``logistic``: ``mu`` (1.0), ``s`` (2.0)
- ``log-normal``: ``scale`` (1.0), ``shape`` (1.0), mean and sd of the log
- ``nakagami``: ``mu`` (1.0), ``omega`` (1.0)
- ``normal``: ``mu`` (0.0), ``sd`` (1.0)
- ``pareto``: ``scale`` (1.0), ``shape`` (1.0)
- ``t``: ``degrees_of_freedom`` (1.0)
- ``triangular``: ``a`` (-1.0, lower), ``b`` (0.0, mode), ``c`` (1.0, upper)
- ``uniform-real``: ``lower`` (0.0), ``upper`` (1.0)
- ``weibull``: ``alpha`` (2.0, shape), ``beta`` (1.0, scale)

All real families also accept ``inverse_cumulative_accuracy`` (1e-9), the
absolute tolerance of the numerical fallback in :meth:`Distribution.icdf`.

Integer families
----------------
- ``binomial``: ``trials`` (20), ``p`` (0.5)
- ``enumerated-int``: ``data`` (required), ``probabilities`` (equal weights)
- ``geometric``: ``p`` (0.5), failures before the first success
- ``hypergeometric``: ``population_size`` (100), ``number_of_successes`` (50),
  ``sample_size`` (25)
- ``pascal``: ``r`` (5), ``p`` (0.5), failures before the r-th success
- ``poisson``: ``p`` (0.5, the mean), ``epsilon`` (1e-12), ``max_iterations`` (10000000)
- ``uniform-int``: ``lower`` (0), ``upper`` (2147483647), both inclusive
- ``zipf``: ``number_of_elements`` (100), ``exponent`` (3.0)

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

from __future__ import annotations

import inspect
import logging
import math
from collections.abc import Iterable, Iterator, Mapping

import numpy as np
from scipy import optimize, stats

from ..errors import UnknownGeneratorKind
from .rngs import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, RNG, default_rng, repeatedly

logger = logging.getLogger(__name__)

DEFAULT_INVERSE_ACCURACY = 1e-9


def _enumerated(data, probabilities, dtype):
    # repeated values are merged, weights normalised
    values, inverse = np.unique(np.asarray(data, dtype=dtype), return_inverse=True)
    if probabilities is None:
        weights = np.ones(inverse.size)
    else:
        weights = np.asarray(probabilities, dtype=float)
        if weights.shape != inverse.shape:
            raise ValueError("data and probabilities must have the same length")
    masses = np.bincount(inverse.ravel(), weights=weights)
    return stats.rv_discrete(values=(values, masses / masses.sum()))


def _empirical(data, bin_count=1000):
    data = np.asarray(data, dtype=float)
    if data.size == 0:
        raise ValueError("empirical distribution requires non-empty data")
    return stats.rv_histogram(np.histogram(data, bins=bin_count))


# Builder keyword defaults are the documented parameter defaults.
_REAL = {
    "beta": lambda alpha=2.0, beta=5.0: stats.beta(alpha, beta),
    "cauchy": lambda mean=0.0, scale=1.0: stats.cauchy(loc=mean, scale=scale),
    "chi-squared": lambda degrees_of_freedom=1.0: stats.chi2(degrees_of_freedom),
    "empirical": _empirical,
    "enumerated-real": lambda data, probabilities=None: _enumerated(data, probabilities, float),
    "exponential": lambda mean=1.0: stats.expon(scale=mean),
    "f": lambda numerator_degrees_of_freedom=1.0, denominator_degrees_of_freedom=1.0: stats.f(
        numerator_degrees_of_freedom, denominator_degrees_of_freedom
    ),
    "gamma": lambda shape=2.0, scale=2.0: stats.gamma(shape, scale=scale),
    "gumbel": lambda mu=1.0, beta=2.0: stats.gumbel_r(loc=mu, scale=beta),
    "laplace": lambda mu=1.0, beta=2.0: stats.laplace(loc=mu, scale=beta),
    "levy": lambda mu=0.0, c=1.0: stats.levy(loc=mu, scale=c),
    "logistic": lambda mu=1.0, s=2.0: stats.logistic(loc=mu, scale=s),
    "log-normal": lambda scale=1.0, shape=1.0: stats.lognorm(shape, scale=math.exp(scale)),
    "nakagami": lambda mu=1.0, omega=1.0: stats.nakagami(mu, scale=math.sqrt(omega)),
    "normal": lambda mu=0.0, sd=1.0: stats.norm(loc=mu, scale=sd),
    "pareto": lambda scale=1.0, shape=1.0: stats.pareto(shape, scale=scale),
    "t": lambda degrees_of_freedom=1.0: stats.t(degrees_of_freedom),
    "triangular": lambda a=-1.0, b=0.0, c=1.0: stats.triang((b - a) / (c - a), loc=a, scale=c - a),
    "uniform-real": lambda lower=0.0, upper=1.0: stats.uniform(loc=lower, scale=upper - lower),
    "weibull": lambda alpha=2.0, beta=1.0: stats.weibull_min(alpha, scale=beta),
}

_INTEGER = {
    "binomial": lambda trials=20, p=0.5: stats.binom(trials, p),
    "enumerated-int": lambda data, probabilities=None: _enumerated(data, probabilities, np.int64),
    "geometric": lambda p=0.5: stats.geom(p, loc=-1),
    "hypergeometric": lambda population_size=100, number_of_successes=50, sample_size=25: stats.hypergeom(
        population_size, number_of_successes, sample_size
    ),
    "pascal": lambda r=5, p=0.5: stats.nbinom(r, p),
    # scipy evaluates the Poisson CDF in closed form; the series controls are kept in params only
    "poisson": lambda p=0.5, epsilon=1e-12, max_iterations=10_000_000: stats.poisson(p),
    "uniform-int": lambda lower=0, upper=INT32_MAX: stats.randint(lower, upper + 1),
    "zipf": lambda number_of_elements=100, exponent=3.0: stats.zipfian(exponent, number_of_elements),
}

DISTRIBUTIONS = {
    **{name: (builder, False) for name, builder in _REAL.items()},
    **{name: (builder, True) for name, builder in _INTEGER.items()},
}

distributions_list = sorted(DISTRIBUTIONS)

_ALIASES = {"inverse_cumm_accuracy": "inverse_cumulative_accuracy"}


def _param_name(key: str) -> str:
    name = str(key).rstrip("?").replace("-", "_")
    return _ALIASES.get(name, name)


def _saturate(value: float, lower: int, upper: int) -> int:
    if math.isnan(value):
        return 0
    if value >= upper:
        return upper
    if value <= lower:
        return lower
    return int(value)


def _as_output(values):
    values = np.asarray(values, dtype=float)
    return float(values) if values.ndim == 0 else values


class Distribution:
    """
    Probability distribution bound to a random source.

    Samples are drawn with :meth:`sample`; the primitive accessors
    ``sample_int``, ``sample_long``, ``sample_float`` and ``sample_double``
    all cast that one draw. Integer casts truncate toward zero and saturate
    at the type bounds (NaN casts to 0).

    Attributes
    ----------
    name : str
        Family name.
    params : dict
        Resolved parameters, defaults included (``rng`` excluded).
    rng : RNG
        Source of the random bits.
    frozen : scipy.stats distribution
        Frozen scipy distribution (or parameter-free ``rv_histogram`` /
        ``rv_discrete`` instance for data-driven families) holding the math.
    integer : bool
        True for integer-valued families.
    discrete : bool
        True when the family has a probability mass function (integer and
        enumerated families).
    """

    def __init__(self, name: str, frozen, params: dict, rng: RNG, integer: bool):
        self.name = name
        self.frozen = frozen
        self.params = params
        self.rng = rng
        self.integer = integer
        self.discrete = isinstance(getattr(frozen, "dist", frozen), stats.rv_discrete)
        self.accuracy = params.get("inverse_cumulative_accuracy", DEFAULT_INVERSE_ACCURACY)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.items() if k != "data")
        return f"Distribution({self.name!r}, {args})"

    # -- random source contract ------------------------------------------

    def sample(self) -> float | int:
        """Draw one random value."""
        value = self.frozen.rvs(random_state=self.rng.generator)
        return int(value) if self.integer else float(value)

    def sample_int(self) -> int:
        """Sample truncated to a 32-bit integer."""
        return _saturate(float(self.sample()), INT32_MIN, INT32_MAX)

    def sample_long(self) -> int:
        """Sample truncated to a 64-bit integer."""
        value = self.sample()
        if self.integer:
            return max(INT64_MIN, min(INT64_MAX, value))
        return _saturate(value, INT64_MIN, INT64_MAX)

    def sample_float(self) -> np.float32:
        """Sample as a single precision float."""
        return np.float32(self.sample())

    def sample_double(self) -> float:
        """Sample as a double."""
        return float(self.sample())

    def set_seed(self, seed: int) -> Distribution:
        """Reseed the underlying RNG and return the distribution itself."""
        self.rng.set_seed(seed)
        return self

    def to_sequence(self, n: int | None = None) -> Iterator[float | int]:
        """Lazy stream of :meth:`sample` draws, infinite if ``n`` is None."""
        return repeatedly(self.sample, n)

    # -- inspection ------------------------------------------------------

    def cdf(self, v, v2=None):
        """Cumulative probability ``P(X <= v)``, or ``P(v < X <= v2)``."""
        if v2 is None:
            return _as_output(self.frozen.cdf(v))
        return _as_output(self.frozen.cdf(v2) - self.frozen.cdf(v))

    def pdf(self, v):
        """Density, or probability mass for discrete families."""
        if self.discrete:
            return _as_output(self.frozen.pmf(v))
        return _as_output(self.frozen.pdf(v))

    def lpdf(self, v):
        """Log density, or log probability mass for discrete families."""
        if self.discrete:
            return _as_output(self.frozen.logpmf(v))
        return _as_output(self.frozen.logpdf(v))

    def probability(self, v):
        """Probability mass at ``v``; always 0 for continuous families."""
        if self.discrete:
            return _as_output(self.frozen.pmf(v))
        return _as_output(np.zeros_like(np.asarray(v, dtype=float)))

    def icdf(self, p):
        """
        Inverse cumulative probability (quantile function).

        Uses scipy's ``ppf``. For discrete families ``icdf(0)`` is the lower
        bound of the support. For continuous families, quantiles scipy cannot
        evaluate (NaN) are solved from the CDF with Brent's method to an
        absolute tolerance of ``inverse_cumulative_accuracy``.
        """
        p = np.asarray(p, dtype=float)
        x = np.atleast_1d(np.asarray(self.frozen.ppf(p), dtype=float)).copy()
        targets = np.broadcast_to(np.atleast_1d(p), x.shape)
        if self.discrete:
            # scipy puts the zero quantile one step below the support
            x[targets == 0.0] = self.lower_bound()
        else:
            unresolved = np.isnan(x) & (targets >= 0.0) & (targets <= 1.0)
            for idx in zip(*np.nonzero(unresolved)):
                x[idx] = self._solve_icdf(float(targets[idx]))
        return _as_output(x.reshape(p.shape))

    def _solve_icdf(self, q: float) -> float:
        lower, upper = self.frozen.support()
        if q <= 0.0:
            return float(lower)
        if q >= 1.0:
            return float(upper)
        lo = lower if np.isfinite(lower) else -1.0
        hi = upper if np.isfinite(upper) else lo + 1.0
        step = 1.0
        while self.frozen.cdf(lo) > q:
            lo -= step
            step *= 2.0
        while self.frozen.cdf(hi) < q:
            hi += step
            step *= 2.0
        return float(optimize.brentq(lambda v: self.frozen.cdf(v) - q, lo, hi, xtol=self.accuracy))

    def mean(self) -> float:
        return float(self.frozen.mean())

    def variance(self) -> float:
        return float(self.frozen.var())

    def lower_bound(self) -> float:
        return float(self.frozen.support()[0])

    def upper_bound(self) -> float:
        return float(self.frozen.support()[1])

    def log_likelihood(self, values: Iterable[float]) -> float:
        """Sum of :meth:`lpdf` over ``values``."""
        return float(np.sum(self.lpdf(np.asarray(list(values), dtype=float))))

    def likelihood(self, values: Iterable[float]) -> float:
        return math.exp(self.log_likelihood(values))


def distribution(name: str, params: Mapping | None = None, **kwargs) -> Distribution:
    """
    Create a distribution.

    Parameters
    ----------
    name : str
        Family name, one of :data:`distributions_list`.
    params : mapping, optional
        Family parameters. Keys may be snake_case (``degrees_of_freedom``)
        or dashed (``degrees-of-freedom``). Missing keys take the documented
        defaults (see module docstring).
    **kwargs
        Parameters given as keywords; they override ``params``.
        ``rng`` selects the random source (default: the shared default RNG).

    Returns
    -------
    Distribution

    Raises
    ------
    UnknownGeneratorKind
        If ``name`` is not a registered family.
    ValueError
        If a parameter is unknown, required data is missing, or the
        parameter values are outside the family's domain.

    Examples
    --------
    >>> from randnoise import distribution, rng
    >>> d = distribution("gamma", {"shape": 3.0}, rng=rng("mersenne", 42))
    >>> d.mean()
    6.0
    """
    try:
        builder, integer = DISTRIBUTIONS[name]
    except KeyError:
        raise UnknownGeneratorKind(name, DISTRIBUTIONS) from None

    options = {_param_name(k): v for k, v in {**(params or {}), **kwargs}.items()}
    source = options.pop("rng", None)
    if source is None:
        source = default_rng()
    accuracy = None if integer else options.pop("inverse_cumulative_accuracy", DEFAULT_INVERSE_ACCURACY)

    signature = inspect.signature(builder)
    unknown = sorted(set(options) - set(signature.parameters))
    if unknown:
        raise ValueError(f"Unknown parameter(s) for {name} distribution: {', '.join(unknown)}")
    missing = [
        key
        for key, param in signature.parameters.items()
        if param.default is inspect.Parameter.empty and key not in options
    ]
    if missing:
        raise ValueError(f"{name} distribution requires: {', '.join(missing)}")

    bound = signature.bind(**options)
    bound.apply_defaults()
    resolved = dict(bound.arguments)
    if accuracy is not None:
        resolved["inverse_cumulative_accuracy"] = accuracy

    frozen = builder(**bound.arguments)
    lower, upper = frozen.support()
    if np.isnan(lower) or np.isnan(upper):
        raise ValueError(f"Invalid parameters for {name} distribution: {resolved}")

    logger.debug("Created %s distribution (%s)", name, resolved)
    return Distribution(name, frozen, resolved, source, integer)
