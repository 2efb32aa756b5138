"""
Coherent noise kernels evaluated at a single frequency.

:func:`kernel` returns value, gradient (improved Perlin) or simplex noise for
1 to 3 coordinates, vectorised over numpy arrays, in ``[-1, 1]``. Lattice
hashing uses a 512-entry permutation table, and value noise a table of 256
lattice values in ``[-1, 1]``, both drawn from ``numpy.random.default_rng``
seeded with the kernel seed and cached per seed.

References
----------
Perlin, K., 2002. Improving noise. ACM Transactions on Graphics, 21(3),
pp.681-682. DOI: 10.1145/566654.566636

Gustavson, S., 2005. Simplex noise demystified. Linköping University.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""

from __future__ import annotations

import functools

import numpy as np

_TABLE_SIZE = 256

_GRAD2 = np.array(
    [[1, 1], [-1, 1], [1, -1], [-1, -1], [1, 0], [-1, 0], [0, 1], [0, -1]],
    dtype=float,
)

_GRAD3 = np.array(
    [
        [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
        [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
        [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    ],
    dtype=float,
)

_F2 = 0.5 * (np.sqrt(3.0) - 1.0)
_G2 = (3.0 - np.sqrt(3.0)) / 6.0
_F3 = 1.0 / 3.0
_G3 = 1.0 / 6.0

FADES = {
    "none": np.zeros_like,
    "linear": lambda t: t,
    "hermite": lambda t: t * t * (3.0 - 2.0 * t),
    "quintic": lambda t: t * t * t * (t * (t * 6.0 - 15.0) + 10.0),
}


@functools.lru_cache(maxsize=64)
def _tables(seed: int) -> tuple[np.ndarray, np.ndarray]:
    """Permutation table (doubled to 512) and value-noise lattice values."""
    rng = np.random.default_rng(seed % 2**64)
    perm = rng.permutation(_TABLE_SIZE)
    perm = np.concatenate([perm, perm])
    values = rng.uniform(-1.0, 1.0, _TABLE_SIZE)
    perm.flags.writeable = False
    values.flags.writeable = False
    return perm, values


def _hash(perm: np.ndarray, *lattice: np.ndarray) -> np.ndarray:
    h = np.zeros_like(lattice[0])
    for c in lattice:
        h = perm[h + (c & 255)]
    return h


def _gradient(h: np.ndarray, deltas: list[np.ndarray]) -> np.ndarray:
    if len(deltas) == 1:
        # gradients +-1, doubled so the 1D range matches [-1, 1]
        return 2.0 * np.where(h & 1, -deltas[0], deltas[0])
    if len(deltas) == 2:
        g = _GRAD2[h & 7]
        return g[..., 0] * deltas[0] + g[..., 1] * deltas[1]
    g = _GRAD3[h % 12]
    return g[..., 0] * deltas[0] + g[..., 1] * deltas[1] + g[..., 2] * deltas[2]


def _lattice_noise(corner, coords: list[np.ndarray], fade) -> np.ndarray:
    """Interpolate ``corner(lattice, deltas)`` over the 2^d cell corners."""
    cells = [np.floor(c) for c in coords]
    frac = [c - f for c, f in zip(coords, cells)]
    ints = [f.astype(np.int64) for f in cells]
    weights = [fade(t) for t in frac]

    def interpolate(offsets: tuple[int, ...]) -> np.ndarray:
        axis = len(offsets)
        if axis == len(coords):
            lattice = [i + o for i, o in zip(ints, offsets)]
            deltas = [t - o for t, o in zip(frac, offsets)]
            return corner(lattice, deltas)
        lo = interpolate(offsets + (0,))
        hi = interpolate(offsets + (1,))
        return lo + weights[axis] * (hi - lo)

    return interpolate(())


def _falloff(t: np.ndarray, dot: np.ndarray) -> np.ndarray:
    t = np.maximum(t, 0.0)
    return t**4 * dot


def _simplex2(perm: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    s = (x + y) * _F2
    i = np.floor(x + s)
    j = np.floor(y + s)
    t = (i + j) * _G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    i1 = (x0 > y0).astype(np.int64)
    j1 = 1 - i1
    ii, jj = i.astype(np.int64), j.astype(np.int64)

    corners = [
        (0, 0, x0, y0),
        (i1, j1, x0 - i1 + _G2, y0 - j1 + _G2),
        (1, 1, x0 - 1.0 + 2.0 * _G2, y0 - 1.0 + 2.0 * _G2),
    ]
    total = np.zeros_like(x)
    for di, dj, dx, dy in corners:
        g = _GRAD3[_hash(perm, ii + di, jj + dj) % 12]
        total += _falloff(0.5 - dx * dx - dy * dy, g[..., 0] * dx + g[..., 1] * dy)
    return 70.0 * total


def _simplex3(perm: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    s = (x + y + z) * _F3
    i = np.floor(x + s)
    j = np.floor(y + s)
    k = np.floor(z + s)
    t = (i + j + k) * _G3
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)

    # simplex traversal order from the ranking of x0, y0, z0
    xy = x0 >= y0
    xz = x0 >= z0
    yz = y0 >= z0
    i1 = (xy & xz).astype(np.int64)
    j1 = (~xy & yz).astype(np.int64)
    k1 = (~xz & ~yz).astype(np.int64)
    i2 = (xy | xz).astype(np.int64)
    j2 = (~xy | yz).astype(np.int64)
    k2 = (~(xz & yz)).astype(np.int64)
    ii, jj, kk = i.astype(np.int64), j.astype(np.int64), k.astype(np.int64)

    corners = [
        (0, 0, 0, x0, y0, z0),
        (i1, j1, k1, x0 - i1 + _G3, y0 - j1 + _G3, z0 - k1 + _G3),
        (i2, j2, k2, x0 - i2 + 2.0 * _G3, y0 - j2 + 2.0 * _G3, z0 - k2 + 2.0 * _G3),
        (1, 1, 1, x0 - 1.0 + 3.0 * _G3, y0 - 1.0 + 3.0 * _G3, z0 - 1.0 + 3.0 * _G3),
    ]
    total = np.zeros_like(x)
    for di, dj, dk, dx, dy, dz in corners:
        g = _GRAD3[_hash(perm, ii + di, jj + dj, kk + dk) % 12]
        dot = g[..., 0] * dx + g[..., 1] * dy + g[..., 2] * dz
        total += _falloff(0.6 - dx * dx - dy * dy - dz * dz, dot)
    return 32.0 * total


def kernel(
    seed: int,
    noise_type: str,
    interpolation: str,
    x,
    y=None,
    z=None,
) -> np.ndarray:
    """
    Evaluate a noise kernel at unit frequency.

    Parameters
    ----------
    seed : int
        Kernel seed (any integer; reduced modulo 2**64).
    noise_type : str
        ``"value"``, ``"gradient"`` or ``"simplex"``.
    interpolation : str
        ``"none"``, ``"linear"``, ``"hermite"`` or ``"quintic"``. Ignored by
        the simplex kernel.
    x, y, z : float or array_like
        Coordinates; ``y`` and ``z`` are optional. Arrays broadcast together.

    Returns
    -------
    ndarray
        Noise values in ``[-1, 1]`` with the broadcast shape of the inputs.

    Raises
    ------
    ValueError
        If ``noise_type`` or ``interpolation`` is unknown.
    """
    raw = [x] if y is None else [x, y] if z is None else [x, y, z]
    shape = np.broadcast_shapes(*(np.shape(c) for c in raw))
    coords = np.broadcast_arrays(*(np.atleast_1d(np.asarray(c, dtype=float)) for c in raw))
    perm, values = _tables(int(seed))

    if noise_type == "simplex":
        if len(coords) == 3:
            result = _simplex3(perm, *coords)
        elif len(coords) == 2:
            result = _simplex2(perm, *coords)
        else:
            result = _simplex2(perm, coords[0], np.zeros_like(coords[0]))
    elif noise_type in ("value", "gradient"):
        if interpolation not in FADES:
            raise ValueError(f"Unknown interpolation {interpolation!r}")
        if noise_type == "value":

            def corner(lattice, deltas):
                return values[_hash(perm, *lattice)]

        else:

            def corner(lattice, deltas):
                return _gradient(_hash(perm, *lattice), deltas)

        result = _lattice_noise(corner, coords, FADES[interpolation])
    else:
        raise ValueError(f"Unknown noise type {noise_type!r}")

    return np.clip(result, -1.0, 1.0).reshape(shape)
