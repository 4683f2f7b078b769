"""
Volume file I/O for PyVoxNoise.

Raw blobs hold the interleaved buffer as-is (no header); slices are written
as 8-bit PNG images with a mode matching the channel count.

Author: B.G.
"""

import os

import numpy as np
from PIL import Image

from .. import constants as cte
from ..grid.volume import VolumeGrid


def _ensure_parent(path) -> None:
    parent = os.path.dirname(os.fspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_raw(grid: VolumeGrid, path) -> None:
    """
    Write the raw channel-interleaved buffer of ``grid``.

    Raises:
        OSError: If the file cannot be written
    """
    _ensure_parent(path)
    try:
        with open(path, "wb") as f:
            f.write(grid.data.tobytes())
    except OSError as e:
        raise OSError(f"Failed to write volume to '{path}': {e}") from e


def read_raw(path, size, channel_count: int) -> VolumeGrid:
    """
    Load a raw blob written by :func:`write_raw`.

    Args:
        path: .dat file
        size: (width, height, depth) of the stored volume
        channel_count: Interleaved channels per voxel

    Returns:
        VolumeGrid holding the file contents
    """
    data = np.fromfile(path, dtype=cte.BYTE_TYPE_NP)
    return VolumeGrid(size, channel_count, data=data)


def slice_image(grid: VolumeGrid, z: int) -> Image.Image:
    """PIL image of xy slice ``z``."""
    pixels = grid.get_slice(z)
    if grid.channel_count == 1:
        pixels = pixels[..., 0]
    # PIL infers L, LA, RGB or RGBA from the trailing dimension
    return Image.fromarray(np.ascontiguousarray(pixels))


def write_png_slice(grid: VolumeGrid, path, z: int = 0) -> None:
    """Write xy slice ``z`` of ``grid`` to ``path`` as PNG."""
    _ensure_parent(path)
    slice_image(grid, z).save(path, format="PNG")


def write_png_slices(grid: VolumeGrid, path_template: str) -> list:
    """
    Write every xy slice.

    Args:
        grid: Volume to export
        path_template: Path containing ``{index}``, e.g. ``"out/clouds_{index}.png"``

    Returns:
        List of written paths
    """
    paths = []
    for z in range(grid.depth):
        path = path_template.format(index=z)
        write_png_slice(grid, path, z)
        paths.append(path)
    return paths
