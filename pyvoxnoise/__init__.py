"""
PyVoxNoise: procedural 3D noise volumes.

Synthesizes multi-channel 3D noise textures (lookup volumes for volumetric
clouds and similar effects) from a small text description: per-channel noise
kind, octave parameters and post-processing.

Submodules:
- noise: Hashing, gradient, cellular and curl noise primitives, fBm
- channels: Channel specifications and the channel evaluator
- grid: VolumeGrid voxel buffer, evaluation and quantization
- tiled: Cache of precomputed tileable noise patterns
- io: Description loader and volume file I/O
- generation: End-to-end generation pipeline
- cli: Command line entry points

Usage:
    import pyvoxnoise as pvn

    config = pvn.io.parse_config(open("input/clouds.txt").read(), "clouds",
                                 pvn.noise.SeedGenerator(1234))
    grid = pvn.generate_volume(config, n_jobs=4)
    grid.write_file("output/clouds.dat")
    grid.write_slice("output/cloudsSlice.png", 0)

Author: B.G.
"""

__version__ = "0.0.1"

from . import constants
from . import errors
from . import noise
from . import channels
from . import grid
from . import tiled
from . import io
from .errors import NoiseVolumeError, ConfigError, ResourceError, DomainError
from .generation import generate_volume, generate_noise_texture

__all__ = [
    "constants",
    "errors",
    "noise",
    "channels",
    "grid",
    "tiled",
    "io",
    "NoiseVolumeError",
    "ConfigError",
    "ResourceError",
    "DomainError",
    "generate_volume",
    "generate_noise_texture",
]
