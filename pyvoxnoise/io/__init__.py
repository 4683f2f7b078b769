"""
I/O module for PyVoxNoise.

Reading volume descriptions and writing generated volumes.

Available Functions:
- load_config / parse_config: Text description -> VolumeConfig
- write_raw / read_raw: Raw interleaved .dat blobs
- write_png_slice / write_png_slices: xy slices as PNG

Author: B.G.
"""

from .config_loader import VolumeConfig, load_config, parse_config, build_channel_spec
from .volume_io import read_raw, write_raw, slice_image, write_png_slice, write_png_slices

__all__ = [
    "VolumeConfig",
    "load_config",
    "parse_config",
    "build_channel_spec",
    "read_raw",
    "write_raw",
    "slice_image",
    "write_png_slice",
    "write_png_slices",
]
