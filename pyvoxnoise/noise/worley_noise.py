"""
Tileable cellular (Worley) noise for PyVoxNoise.

Space is cut into unit tiles, each holding a single feature point placed by
hashing the tile's wrapped linear index. The noise value is the Euclidean
distance to the nearest feature point among the 3x3x3 tiles around the
sample. Because feature points depend only on the wrapped tile identity,
the noise repeats exactly with period ``repeat``.

Author: B.G.
"""

import itertools

import numpy as np

from .. import constants as cte
from ..errors import DomainError
from .hashing import hash3, hash_to_unit
from .perlin_noise import lattice_period

_NEIGHBOUR_OFFSETS = np.array(
    [(x, y, z) for z, y, x in itertools.product((-1, 0, 1), repeat=3)], dtype=np.int64
)


def wrapped_tile_index(tile, period) -> np.ndarray:
    """
    Linear index of integer tile coordinates after wrapping into [0, period).

    Args:
        tile: Integer tile coordinates, shape (..., 3) ordered (x, y, z)
        period: Integer period per axis, shape (3,)

    Returns:
        Indices ``(z * py + y) * px + x`` as int64, shape (...)
    """
    period = np.asarray(period, dtype=np.int64)
    w = np.mod(tile, period)
    return (w[..., 2] * period[1] + w[..., 1]) * period[0] + w[..., 0]


def feature_points(seed: int, tile, period) -> np.ndarray:
    """Feature point of each tile: tile origin + hashed offset in [0, 1]^3."""
    index = wrapped_tile_index(tile, period)
    hx, hy, hz = hash3(seed, index)
    offset = np.stack([hash_to_unit(hx), hash_to_unit(hy), hash_to_unit(hz)], axis=-1)
    return tile + offset


def cellular_noise(seed: int, pos, repeat) -> np.ndarray:
    """
    Distance to the nearest feature point.

    Args:
        seed: 32-bit seed
        pos: Positions, array of shape (..., 3)
        repeat: Period per axis (scalar or length-3). Must be >= 1 on every axis.

    Returns:
        Unnormalized distances (>= 0) of shape (...)

    Raises:
        DomainError: If any component of ``repeat`` is below 1
    """
    rep = np.broadcast_to(np.asarray(repeat, dtype=cte.FLOAT_TYPE_NP), (3,))
    if np.any(rep < 1.0):
        raise DomainError(f"Cellular noise repeat must be >= 1 on every axis, got {tuple(rep)}")
    period = lattice_period(rep)

    pos = np.asarray(pos, dtype=cte.FLOAT_TYPE_NP)
    tile = np.floor(pos).astype(np.int64)

    distance = np.full(pos.shape[:-1], np.inf, dtype=cte.FLOAT_TYPE_NP)
    for offset in _NEIGHBOUR_OFFSETS:
        point = feature_points(seed, tile + offset, period)
        d = np.sqrt(np.sum((pos - point) ** 2, axis=-1))
        distance = np.minimum(distance, d)

    return distance
