"""
Grid module for PyVoxNoise.

The VolumeGrid owns the quantized, channel-interleaved voxel buffer of a
noise texture and evaluates it slice by slice, optionally on several threads.

Author: B.G.
"""

from .volume import VolumeGrid, unorm_to_byte, byte_to_unorm

__all__ = ["VolumeGrid", "unorm_to_byte", "byte_to_unorm"]
