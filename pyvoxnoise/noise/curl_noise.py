"""
Curl noise for PyVoxNoise.

Divergence-free vector field obtained as the curl of a vector potential made
of three decorrelated gradient noise fields. Derivatives are approximated by
symmetric central differences.

References:
    Bridson et al., "Curl-Noise for Procedural Fluid Flow", SIGGRAPH 2007

Author: B.G.
"""

import numpy as np

from .. import constants as cte
from .perlin_noise import gradient_noise_triplet

_AXES = np.eye(3, dtype=cte.FLOAT_TYPE_NP)


def potential_derivative(seed: int, pos, repeat, axis: int, h: float = cte.CURL_STEP) -> np.ndarray:
    """Central difference of the potential triplet along one axis, shape (..., 3)."""
    step = _AXES[axis] * h
    forward = gradient_noise_triplet(seed, pos + step, repeat)
    backward = gradient_noise_triplet(seed, pos - step, repeat)
    return (forward - backward) / (2.0 * h)


def curl_noise(seed: int, pos, repeat, h: float = cte.CURL_STEP) -> np.ndarray:
    """
    Evaluate curl noise.

    Args:
        seed: 32-bit seed of the potential
        pos: Positions, array of shape (..., 3)
        repeat: Period per axis (scalar or length-3)
        h: Finite difference step, small compared to the noise frequency

    Returns:
        Velocity remapped to roughly [0, 1], array of shape (..., 3)
    """
    pos = np.asarray(pos, dtype=cte.FLOAT_TYPE_NP)

    dFdx = potential_derivative(seed, pos, repeat, 0, h)
    dFdy = potential_derivative(seed, pos, repeat, 1, h)
    dFdz = potential_derivative(seed, pos, repeat, 2, h)

    velocity = np.stack(
        [
            dFdy[..., 2] - dFdz[..., 1],
            dFdz[..., 0] - dFdx[..., 2],
            dFdx[..., 1] - dFdy[..., 0],
        ],
        axis=-1,
    )
    velocity /= np.sqrt(2.0)

    return velocity * 0.5 + 0.5
