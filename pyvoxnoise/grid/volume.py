"""
Volume grid for PyVoxNoise.

Owns the dense, channel-interleaved byte buffer of a 3D noise texture and
drives the evaluation of every voxel and channel. The buffer layout is the
one consumed by volume texture loaders: channel fastest-varying, then x,
then y, then z.

Author: B.G.
"""

import logging

import numpy as np
from joblib import Parallel, delayed
from tqdm import tqdm

from .. import constants as cte
from ..errors import ConfigError, DomainError

logger = logging.getLogger(__name__)


def unorm_to_byte(v):
    """Quantize values to bytes: floor(clamp(v, 0, 1) * 255.99)."""
    v = np.clip(np.asarray(v, dtype=cte.FLOAT_TYPE_NP), 0.0, 1.0)
    return np.floor(v * cte.UNORM_SCALE).astype(cte.BYTE_TYPE_NP)


def byte_to_unorm(b):
    """Map bytes back to [0, 1]: b / 255."""
    return np.asarray(b, dtype=cte.FLOAT_TYPE_NP) / 255.0


class VolumeGrid:
    """
    Dense 3D multi-channel byte volume.

    Args:
        size: (width, height, depth), all >= 1
        channel_count: Number of interleaved channels, 1 to 4
        data: Optional initial buffer of exactly width*height*depth*channel_count bytes

    Attributes:
        size (tuple): (width, height, depth)
        channel_count (int): Channels per voxel, fixed at construction
        data (np.ndarray): Flat uint8 buffer

    Example:
        grid = VolumeGrid((64, 64, 64), 2)
        grid.process(lambda pos, channel: pos[:, channel])
        grid.write_file("output/gradient.dat")
    """

    def __init__(self, size, channel_count: int, data=None):
        size = tuple(int(s) for s in size)
        if len(size) != cte.SPATIAL_DIMS or min(size) < 1:
            raise ConfigError(f"Volume size must be three positive integers, got {size}")
        if not 1 <= channel_count <= cte.MAX_CHANNELS:
            raise ConfigError(f"Invalid number of channels: {channel_count} (expected 1-{cte.MAX_CHANNELS})")

        self._size = size
        self._channel_count = int(channel_count)

        n = self.voxel_count * self._channel_count
        if data is None:
            self.data = np.zeros(n, dtype=cte.BYTE_TYPE_NP)
        else:
            data = np.asarray(data, dtype=cte.BYTE_TYPE_NP).reshape(-1)
            if data.size != n:
                raise ConfigError(f"Buffer has {data.size} bytes, volume needs {n}")
            self.data = data.copy()

    @property
    def size(self):
        return self._size

    @property
    def channel_count(self) -> int:
        return self._channel_count

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    @property
    def depth(self) -> int:
        return self._size[2]

    @property
    def voxel_count(self) -> int:
        return self.width * self.height * self.depth

    @property
    def slice_bytes(self) -> int:
        return self.width * self.height * self._channel_count

    def __len__(self):
        return self.data.size

    def __repr__(self):
        return f"VolumeGrid(size={self._size}, channel_count={self._channel_count})"

    def index(self, x: int, y: int, z: int, channel: int) -> int:
        """Flat buffer offset of (x, y, z, channel)."""
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth):
            raise DomainError(f"Voxel ({x}, {y}, {z}) outside volume of size {self._size}")
        if not 0 <= channel < self._channel_count:
            raise DomainError(f"Channel {channel} outside 0-{self._channel_count - 1}")
        pixel = (z * self.height + y) * self.width + x
        return pixel * self._channel_count + channel

    def __getitem__(self, key) -> int:
        x, y, z, channel = key
        return int(self.data[self.index(x, y, z, channel)])

    def __setitem__(self, key, value):
        x, y, z, channel = key
        self.data[self.index(x, y, z, channel)] = value

    def as_array(self) -> np.ndarray:
        """View of the buffer shaped (depth, height, width, channel_count)."""
        return self.data.reshape(self.depth, self.height, self.width, self._channel_count)

    def get_slice(self, z: int) -> np.ndarray:
        """xy slice ``z`` as a (height, width, channel_count) view."""
        if not 0 <= z < self.depth:
            raise DomainError(f"Slice {z} outside 0-{self.depth - 1}")
        return self.as_array()[z]

    def slice_positions(self, z: int) -> np.ndarray:
        """Normalized positions (x, y, z) / size of slice ``z``, shape (height*width, 3), x fastest."""
        ys, xs = np.meshgrid(np.arange(self.height), np.arange(self.width), indexing="ij")
        pos = np.empty((self.height * self.width, 3), dtype=cte.FLOAT_TYPE_NP)
        pos[:, 0] = xs.ravel() / self.width
        pos[:, 1] = ys.ravel() / self.height
        pos[:, 2] = z / self.depth
        return pos

    def _evaluate_slice(self, eval_fn, z: int) -> np.ndarray:
        pos = self.slice_positions(z)
        n = pos.shape[0]
        out = np.empty((n, self._channel_count), dtype=cte.BYTE_TYPE_NP)
        for channel in range(self._channel_count):
            values = np.broadcast_to(eval_fn(pos, channel), (n,))
            out[:, channel] = unorm_to_byte(values)
        return out.reshape(-1)

    def process(self, eval_fn, n_jobs: int = 1, progress: bool = False) -> "VolumeGrid":
        """
        Fill every voxel and channel from ``eval_fn``.

        ``eval_fn(pos, channel)`` receives the normalized positions of one
        z-slice, shape (height*width, 3) with x fastest, and returns one value
        per position. Values are clamped to [0, 1] and quantized to bytes.

        Slices are independent: with ``n_jobs != 1`` they are evaluated on a
        thread pool, each task writing its own region of the buffer.

        Args:
            eval_fn: Callable ``(pos, channel) -> array``
            n_jobs: Worker threads (joblib semantics, -1 for all cores)
            progress: Show a tqdm progress bar over slices

        Returns:
            self
        """
        n = self.slice_bytes
        slices = tqdm(range(self.depth), desc="Noise Generation", leave=False, disable=not progress)
        logger.debug("Processing %s with n_jobs=%s", self, n_jobs)

        if n_jobs == 1:
            for z in slices:
                self.data[z * n:(z + 1) * n] = self._evaluate_slice(eval_fn, z)
        else:
            results = Parallel(n_jobs=n_jobs, prefer="threads")(
                delayed(self._evaluate_slice)(eval_fn, z) for z in slices
            )
            for z, slice_data in enumerate(results):
                self.data[z * n:(z + 1) * n] = slice_data

        return self

    def write_file(self, path) -> None:
        """Write the raw interleaved buffer to ``path``."""
        from ..io.volume_io import write_raw

        write_raw(self, path)

    def write_slice(self, path, z: int = 0) -> None:
        """Write xy slice ``z`` as a PNG image."""
        from ..io.volume_io import write_png_slice

        write_png_slice(self, path, z)
