"""
Fractal Brownian motion (fBm) for PyVoxNoise.

Generic multi-octave accumulator over any scalar noise primitive with the
signature ``primitive(seed, pos, repeat) -> values``. Octaves are decorrelated
by re-hashing the seed, so the whole sum is deterministic from the initial
seed.

Author: B.G.
"""

import numpy as np

from .. import constants as cte
from .hashing import mix32


def fbm(primitive, seed, pos, repeat, octave_count, frequency, lacunarity, persistence):
    """
    Sum ``octave_count`` octaves of ``primitive``.

    Each octave samples ``primitive(seed, pos * frequency, repeat * frequency)``
    with weight ``amplitude``; then amplitude is multiplied by ``persistence``,
    frequency by ``lacunarity`` and the seed is re-hashed. The sum is divided by
    the sum of weights and clamped to [0, 1].

    Args:
        primitive: Callable ``(seed, pos, repeat) -> array``
        seed: 32-bit seed of the first octave
        pos: Positions, array of shape (..., 3)
        repeat: Base period (scalar or length-3)
        octave_count: Number of octaves; <= 0 yields zeros
        frequency: Frequency of the first octave
        lacunarity: Frequency ratio between octaves
        persistence: Amplitude ratio between octaves

    Returns:
        Values in [0, 1] of shape (...)

    Example:
        value = fbm(gradient_noise, 42, positions, 1.0, 4, 8.0, 2.0, 0.5)
    """
    pos = np.asarray(pos, dtype=cte.FLOAT_TYPE_NP)
    if octave_count <= 0:
        return np.zeros(pos.shape[:-1], dtype=cte.FLOAT_TYPE_NP)

    repeat = np.asarray(repeat, dtype=cte.FLOAT_TYPE_NP)
    amplitude = 1.0
    noise_sum = np.zeros(pos.shape[:-1], dtype=cte.FLOAT_TYPE_NP)
    amplitude_sum = 0.0

    for _ in range(int(octave_count)):
        noise = primitive(seed, pos * frequency, repeat * frequency)

        noise_sum += amplitude * noise
        amplitude_sum += amplitude
        amplitude *= persistence
        frequency *= lacunarity
        seed = mix32(seed)

    # Negative persistence can cancel the weights out
    if amplitude_sum == 0.0:
        return np.zeros_like(noise_sum)
    noise_sum /= amplitude_sum

    return np.clip(noise_sum, 0.0, 1.0)
