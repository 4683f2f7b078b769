"""
Periodic gradient (Perlin) noise for PyVoxNoise.

Provides a vectorized 4D gradient noise that tiles in every axis and the 3D
seeded primitive built on top of it. The seed cannot change the gradient
lattice itself, so the 3D sample is embedded along the 4th axis at an offset
derived from the seed; the 4th axis is periodic too, with the largest of the
three spatial periods, which keeps the 3D result tileable.

Author: B.G.
"""

import itertools

import numpy as np

from .. import constants as cte
from .hashing import mix32


def _build_gradients_4d() -> np.ndarray:
    """32 gradients: one zero component, the three others +-1."""
    grads = []
    for zero_axis in range(4):
        for signs in itertools.product((-1.0, 1.0), repeat=3):
            g = list(signs)
            g.insert(zero_axis, 0.0)
            grads.append(g)
    return np.array(grads, dtype=cte.FLOAT_TYPE_NP)


GRADIENTS_4D = _build_gradients_4d()

# 16 corners of the 4D unit hypercube
_CORNERS_4D = np.array(list(itertools.product((0, 1), repeat=4)), dtype=np.int64)


def fade(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lattice_period(repeat, ndim: int = 3) -> np.ndarray:
    """
    Convert a (possibly fractional) repeat vector into integer lattice periods.

    Each component is rounded to the nearest integer and is at least 1.
    """
    rep = np.broadcast_to(np.asarray(repeat, dtype=cte.FLOAT_TYPE_NP), (ndim,))
    return np.maximum(np.rint(rep), 1.0).astype(np.int64)


def _corner_hash(corner: np.ndarray) -> np.ndarray:
    """Hash wrapped 4D lattice coordinates of shape (N, 4)."""
    h = mix32(corner[:, 3])
    h = mix32(corner[:, 2] + h.astype(np.int64))
    h = mix32(corner[:, 1] + h.astype(np.int64))
    h = mix32(corner[:, 0] + h.astype(np.int64))
    return h


def periodic_perlin_4d(pos4, period4) -> np.ndarray:
    """
    Evaluate periodic 4D gradient noise.

    Args:
        pos4: Positions, array of shape (..., 4)
        period4: Integer period per axis, shape (4,)

    Returns:
        Noise values of shape (...), approximately in [-1, 1]
    """
    pos4 = np.asarray(pos4, dtype=cte.FLOAT_TYPE_NP)
    out_shape = pos4.shape[:-1]
    p = pos4.reshape(-1, 4)
    period4 = np.asarray(period4, dtype=np.int64)

    cell = np.floor(p)
    frac = p - cell
    cell = cell.astype(np.int64)
    u = fade(frac)

    total = np.zeros(p.shape[0], dtype=cte.FLOAT_TYPE_NP)
    for offset in _CORNERS_4D:
        corner = np.mod(cell + offset, period4)
        grad = GRADIENTS_4D[_corner_hash(corner) & np.uint32(31)]
        dot = np.sum(grad * (frac - offset), axis=-1)
        weight = np.prod(np.where(offset == 1, u, 1.0 - u), axis=-1)
        total += weight * dot

    return total.reshape(out_shape)


def gradient_noise(seed: int, pos, repeat) -> np.ndarray:
    """
    Seeded, tileable 3D gradient noise.

    Args:
        seed: 32-bit seed; only ``seed % 1000`` matters, mapped to a 4th-axis offset
        pos: Positions, array of shape (..., 3)
        repeat: Period per axis (scalar or length-3), rounded to integer lattice periods

    Returns:
        Noise values in [0, 1] of shape (...)
    """
    pos = np.asarray(pos, dtype=cte.FLOAT_TYPE_NP)
    period = lattice_period(repeat)
    period4 = np.append(period, period.max())

    w = cte.SEED_W_MULTIPLIER * (int(seed) % cte.SEED_W_MODULUS)
    pos4 = np.concatenate([pos, np.full(pos.shape[:-1] + (1,), w)], axis=-1)

    noise = periodic_perlin_4d(pos4, period4) * 0.5 + 0.5
    return np.clip(noise, 0.0, 1.0)


def gradient_noise_triplet(seed: int, pos, repeat) -> np.ndarray:
    """
    Three decorrelated gradient noise samples per position.

    Seeds are ``seed``, ``mix32(seed)`` and ``mix32(mix32(seed))``.

    Returns:
        Array of shape (..., 3)
    """
    s0 = int(seed)
    s1 = mix32(s0)
    s2 = mix32(s1)
    return np.stack(
        [gradient_noise(s0, pos, repeat), gradient_noise(s1, pos, repeat), gradient_noise(s2, pos, repeat)],
        axis=-1,
    )
