"""
Discrete lattice noise.

Integer hash noise with 32-bit wraparound arithmetic: no seed, no state,
bit-reproducible on every platform.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

import numpy as np

_SCALE = 1.0 / 2147483647.0


def discrete_noise(x, y=0):
    """
    Hash noise at integer lattice points.

    Parameters
    ----------
    x : int or array_like of int
        First coordinate.
    y : int or array_like of int, optional
        Second coordinate. Default is 0.

    Returns
    -------
    float or ndarray
        Values in [0, 1]; a float for scalar input.

    Examples
    --------
    >>> from randnoise import discrete_noise
    >>> discrete_noise(123, 444) == discrete_noise(123, 444)
    True
    """
    scalar = np.ndim(x) == 0 and np.ndim(y) == 0
    xs = np.atleast_1d(np.asarray(x, dtype=np.int64)).astype(np.uint32)
    ys = np.atleast_1d(np.asarray(y, dtype=np.int64)).astype(np.uint32)

    n = xs + ys * np.uint32(57)
    n = n ^ (n << np.uint32(13))
    n = np.uint32(1376312589) + n * (np.uint32(789221) + n * (n * np.uint32(15731)))
    value = (n & np.uint32(0x7FFFFFFF)) * _SCALE

    return float(value[0]) if scalar else value
