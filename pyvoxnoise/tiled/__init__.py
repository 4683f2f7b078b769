"""
Tiled noise module for PyVoxNoise.

Supplies precomputed tileable noise patterns (blue noise slices) to the
channel evaluator. Patterns are loaded once per cubic resolution and shared
read-only between all channels and worker threads.

Author: B.G.
"""

from .tiled_noise import TiledNoiseCache, load_slice_stack

__all__ = ["TiledNoiseCache", "load_slice_stack"]
