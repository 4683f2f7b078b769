"""
Noise texture generation pipeline for PyVoxNoise.

Ties the pieces together: volume description -> channel evaluator ->
VolumeGrid.process -> raw blob and PNG slice(s).

Author: B.G.
"""

import logging
import os
import time

from .channels import ChannelEvaluator, ChannelKind
from .grid import VolumeGrid
from .io import load_config, write_png_slice, write_png_slices, write_raw
from .tiled import TiledNoiseCache

logger = logging.getLogger(__name__)


def generate_volume(config, tiled_supplier=None, n_jobs: int = 1, progress: bool = False) -> VolumeGrid:
    """
    Evaluate every channel of ``config`` into a new VolumeGrid.

    Args:
        config: VolumeConfig (size and channel specifications)
        tiled_supplier: Tiled noise supplier; a default TiledNoiseCache is
                        created when a tiled noise channel needs one
        n_jobs: Worker threads used by VolumeGrid.process
        progress: Show a progress bar

    Returns:
        The filled VolumeGrid

    Raises:
        ResourceError: If tiled noise data cannot be loaded
        DomainError: If a channel cannot be evaluated
    """
    if tiled_supplier is None and any(c.kind is ChannelKind.TILED_NOISE for c in config.channels):
        tiled_supplier = TiledNoiseCache()

    # Load tiled patterns up front so a missing resource fails before any evaluation
    for spec in config.channels:
        if spec.kind is ChannelKind.TILED_NOISE and hasattr(tiled_supplier, "get"):
            tiled_supplier.get(spec.resolution)

    grid = VolumeGrid(config.size, config.channel_count)
    evaluator = ChannelEvaluator(config.channels, tiled_supplier)

    start = time.perf_counter()
    grid.process(evaluator, n_jobs=n_jobs, progress=progress)
    logger.info(
        "Generated %s: %dx%dx%d, %d channel(s) in %.2fs",
        config.name, *config.size, config.channel_count, time.perf_counter() - start,
    )
    return grid


def generate_noise_texture(
    name: str,
    input_dir: str = "input",
    output_dir: str = "output",
    seed_generator=None,
    tiled_supplier=None,
    n_jobs: int = 1,
    all_slices: bool = False,
    progress: bool = False,
):
    """
    Load ``<input_dir>/<name>.txt``, generate it and write the results.

    Writes ``<output_dir>/<name>.dat`` (raw interleaved bytes) and
    ``<output_dir>/<name>Slice.png`` (first xy slice). With ``all_slices``
    every slice is also written as ``<output_dir>/<name>Slice<z>.png``.

    Nothing is written if loading or evaluation fails.

    Returns:
        Tuple (VolumeGrid, list of written paths)

    Example:
        grid, paths = generate_noise_texture("clouds", seed_generator=SeedGenerator(1))
    """
    config = load_config(name, input_dir, seed_generator)
    grid = generate_volume(config, tiled_supplier=tiled_supplier, n_jobs=n_jobs, progress=progress)

    dat_path = os.path.join(output_dir, name + ".dat")
    png_path = os.path.join(output_dir, name + "Slice.png")
    write_raw(grid, dat_path)
    write_png_slice(grid, png_path, 0)
    paths = [dat_path, png_path]

    if all_slices:
        paths += write_png_slices(grid, os.path.join(output_dir, name + "Slice{index}.png"))

    for path in paths:
        logger.debug("Wrote %s", path)
    return grid, paths
