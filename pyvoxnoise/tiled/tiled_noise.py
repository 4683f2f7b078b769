"""
Pre-tiled noise supplier for PyVoxNoise.

Loads precomputed tileable noise patterns (typically blue noise) stored as a
stack of RGBA PNG slices and answers point queries on them. Each cubic
resolution is loaded once and kept for the lifetime of the cache; loading is
serialized by a lock, sampling only reads.

Expected layout (relative to the cache root):

    {res}_{res}_{res}/LDR_RGBA_0.png ... LDR_RGBA_{res-1}.png

Author: B.G.
"""

import logging
import os
import threading

import numpy as np
from PIL import Image

from .. import constants as cte
from ..errors import DomainError, ResourceError

logger = logging.getLogger(__name__)

TILED_CHANNELS = 4


def load_slice_stack(path_template: str, resolution: int, channels: int = TILED_CHANNELS) -> np.ndarray:
    """
    Load ``resolution`` PNG slices into a (z, y, x, channel) uint8 array.

    Args:
        path_template: Path with ``{res}`` and ``{index}`` placeholders
        resolution: Cubic resolution of the pattern
        channels: Channel count to convert the slices to (4 -> RGBA)

    Returns:
        numpy.ndarray of shape (resolution, resolution, resolution, channels)

    Raises:
        ResourceError: If a slice is missing, unreadable or not resolution x resolution
    """
    mode = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}[channels]
    volume = np.empty((resolution, resolution, resolution, channels), dtype=cte.BYTE_TYPE_NP)

    for z in range(resolution):
        path = path_template.format(res=resolution, index=z)
        try:
            with Image.open(path) as img:
                data = np.asarray(img.convert(mode), dtype=cte.BYTE_TYPE_NP)
        except (OSError, ValueError) as e:
            raise ResourceError(f"Failed to load texture slice {path}: {e}") from e

        if data.ndim == 2:
            data = data[..., np.newaxis]
        if data.shape[:2] != (resolution, resolution):
            raise ResourceError(
                f"Texture slice {path} has size {data.shape[1]}x{data.shape[0]}, "
                f"expected {resolution}x{resolution}"
            )
        volume[z] = data

    return volume


class TiledNoiseCache:
    """
    Resolution-keyed cache of pre-tiled noise volumes.

    Args:
        root: Directory containing the ``{res}_{res}_{res}`` folders
        path_template: Slice path relative to ``root``

    Example:
        cache = TiledNoiseCache("input/blueNoiseTextures")
        values = cache.sample(positions, channel=0, resolution=64)  # uint8
    """

    def __init__(self, root: str = cte.TILED_NOISE_DEFAULT_ROOT,
                 path_template: str = cte.TILED_NOISE_PATH_TEMPLATE):
        self.root = root
        self.path_template = path_template
        self._textures = {}
        self._lock = threading.Lock()

    def __contains__(self, resolution) -> bool:
        return int(resolution) in self._textures

    @property
    def resolutions(self):
        return sorted(self._textures)

    def register(self, resolution: int, data) -> None:
        """
        Insert an in-memory pattern instead of loading it from disk.

        Args:
            resolution: Cubic resolution
            data: uint8 array of shape (res, res, res, 4) indexed (z, y, x, channel)
        """
        data = np.array(data, dtype=cte.BYTE_TYPE_NP)
        expected = (resolution, resolution, resolution, TILED_CHANNELS)
        if data.shape != expected:
            raise ResourceError(f"Tiled noise of resolution {resolution} must have shape {expected}, got {data.shape}")
        data.setflags(write=False)
        with self._lock:
            self._textures[int(resolution)] = data

    def get(self, resolution: int) -> np.ndarray:
        """Pattern volume for ``resolution``, loading it on first use."""
        resolution = int(resolution)
        if resolution < 1:
            raise ResourceError(f"Invalid tiled noise resolution {resolution}")

        texture = self._textures.get(resolution)
        if texture is not None:
            return texture

        with self._lock:
            texture = self._textures.get(resolution)
            if texture is None:
                template = os.path.join(self.root, self.path_template)
                logger.info("Loading %d^3 tiled noise from %s", resolution, os.path.dirname(template.format(res=resolution, index=0)))
                texture = load_slice_stack(template, resolution)
                texture.setflags(write=False)
                self._textures[resolution] = texture
        return texture

    def sample(self, pos, channel: int, resolution: int) -> np.ndarray:
        """
        Look up pattern bytes at normalized positions.

        Positions are scaled by ``resolution`` and truncated to voxel indices;
        indices wrap, the patterns being tileable.

        Args:
            pos: Normalized positions, array of shape (..., 3) ordered (x, y, z)
            channel: Pattern channel (0-3)
            resolution: Cubic resolution of the pattern to read

        Returns:
            uint8 array of shape (...)
        """
        if not 0 <= channel < TILED_CHANNELS:
            raise DomainError(f"Tiled noise has {TILED_CHANNELS} channels, got channel {channel}")

        texture = self.get(resolution)
        index = np.floor(np.asarray(pos, dtype=cte.FLOAT_TYPE_NP) * resolution).astype(np.int64)
        index = np.mod(index, resolution)
        return texture[index[..., 2], index[..., 1], index[..., 0], channel]
