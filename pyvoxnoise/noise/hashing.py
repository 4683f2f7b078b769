"""
Integer hashing for PyVoxNoise.

Provides the "lowbias32" avalanche mixer used everywhere a deterministic
pseudo-random value is needed: octave decorrelation in fBm, feature points of
the cellular noise, gradient selection of the gradient noise, and seed
derivation for channels.

All functions accept Python ints or numpy arrays and wrap modulo 2**32.

Reference: https://nullprogram.com/blog/2018/07/31/

Author: B.G.
"""

import time

import numpy as np

from .. import constants as cte


def mix32(x):
    """
    Mix a 32-bit integer (lowbias32).

    Args:
        x: Python int or integer numpy array. Values are reduced modulo 2**32.

    Returns:
        int if ``x`` is a scalar, otherwise a uint32 array of the same shape.
    """
    scalar = np.ndim(x) == 0
    h = np.array(x, ndmin=1).astype(cte.HASH_TYPE_NP)

    with np.errstate(over="ignore"):
        h ^= h >> np.uint32(16)
        h *= np.uint32(cte.MIX32_MULT_A)
        h ^= h >> np.uint32(15)
        h *= np.uint32(cte.MIX32_MULT_B)
        h ^= h >> np.uint32(16)

    if scalar:
        return int(h[0])
    return h.reshape(np.shape(x))


def hash3(seed, index):
    """
    Derive three chained hashes from a seed and an integer index.

    The first hash mixes ``seed + index`` (mod 2**32), the next two re-mix the
    previous result.

    Args:
        seed: 32-bit seed
        index: Integer (array) identifying the hashed cell

    Returns:
        Tuple of three uint32 arrays (or ints) with the shape of ``index``
    """
    base = (np.asarray(index).astype(np.uint64) + np.uint64(seed & cte.UINT32_MAX)) & np.uint64(cte.UINT32_MAX)
    if np.ndim(index) == 0:
        base = int(base)
    hx = mix32(base)
    hy = mix32(hx)
    hz = mix32(hy)
    return hx, hy, hz


def hash_to_unit(h):
    """Map uint32 hashes to floats in [0, 1]."""
    return np.asarray(h, dtype=cte.FLOAT_TYPE_NP) / float(cte.UINT32_MAX)


class SeedGenerator:
    """
    Explicit reseeding state used while building channel specifications.

    Each call to :meth:`next_seed` advances the state with :func:`mix32` and
    returns it, so consecutive channels never share a seed. The generator is
    only touched while a configuration is loaded, never while sampling.

    Args:
        state: Initial 32-bit state. Defaults to the current Unix time.
               A state of 0 is replaced by SEED_ZERO_STATE.
    """

    def __init__(self, state=None):
        if state is None:
            state = int(time.time())
        state = int(state) & cte.UINT32_MAX
        # mix32(0) == 0: a zero state would repeat forever
        self.state = state if state != 0 else cte.SEED_ZERO_STATE

    def next_seed(self) -> int:
        self.state = mix32(self.state)
        return self.state

    def __repr__(self):
        return f"SeedGenerator(state={self.state:#010x})"
