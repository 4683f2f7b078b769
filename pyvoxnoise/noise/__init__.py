"""
Noise primitives module for PyVoxNoise.

Provides the vectorized, seeded and tileable noise functions used to fill
volume channels. Every primitive takes ``(seed, pos, repeat)`` where ``pos``
is an array of shape (..., 3), so any scalar primitive can be plugged into the
fBm combinator.

Noise Types:
- Gradient Noise: Periodic Perlin noise, seed embedded along a 4th axis
- Cellular Noise: Worley distance to the nearest hashed feature point
- Curl Noise: Divergence-free vector field from a gradient noise potential

Core Features:
- lowbias32 integer hashing for deterministic seeds and feature points
- Exact tiling at integer periods
- Generic fBm accumulation over any scalar primitive

Usage:
    import numpy as np
    import pyvoxnoise as pvn

    pos = np.random.rand(1000, 3)

    # Four octaves of gradient noise, tiling on the unit cube
    clouds = pvn.noise.fbm(pvn.noise.gradient_noise, 42, pos, 1.0,
                           octave_count=4, frequency=8.0,
                           lacunarity=2.0, persistence=0.5)

    # Worley noise tiling every 4 units
    cells = pvn.noise.cellular_noise(7, pos * 4.0, 4.0)

Author: B.G.
"""

from .hashing import mix32, hash3, hash_to_unit, SeedGenerator
from .perlin_noise import gradient_noise, gradient_noise_triplet, periodic_perlin_4d
from .worley_noise import cellular_noise
from .curl_noise import curl_noise
from .fbm import fbm

__all__ = [
    "mix32", "hash3", "hash_to_unit", "SeedGenerator",
    "gradient_noise", "gradient_noise_triplet", "periodic_perlin_4d",
    "cellular_noise",
    "curl_noise",
    "fbm",
]
