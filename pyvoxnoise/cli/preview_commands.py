"""
Volume Preview CLI Commands for PyVoxNoise

Renders a grid of xy slices of a raw volume for quick visual inspection.

Author: B.G.
"""

import sys

import click
import numpy as np

from ..errors import DomainError, NoiseVolumeError
from ..io import read_raw
from ..io.config_loader import parse_size


def render_preview(grid, output, channel: int = 0, n_slices: int = 4, cmap: str = "gray"):
    """
    Save a figure with ``n_slices`` evenly spaced z-slices of one channel.

    Args:
        grid: VolumeGrid to render
        output: Output image path
        channel: Channel to display
        n_slices: Number of slices (clamped to the volume depth)
        cmap: Matplotlib colormap

    Raises:
        DomainError: If ``channel`` is not a channel of ``grid``
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    if not 0 <= channel < grid.channel_count:
        raise DomainError(f"Channel {channel} outside 0-{grid.channel_count - 1}")

    n_slices = max(1, min(n_slices, grid.depth))
    zs = np.linspace(0, grid.depth - 1, n_slices).astype(int)
    volume = grid.as_array()

    fig, axes = plt.subplots(1, n_slices, figsize=(3 * n_slices, 3.4), squeeze=False)
    for ax, z in zip(axes[0], zs):
        img = ax.imshow(volume[z, :, :, channel], cmap=cmap, vmin=0, vmax=255)
        ax.set_title(f"z = {z}")
        ax.axis("off")
    fig.colorbar(img, ax=axes[0].tolist(), shrink=0.8, label="Byte value")
    fig.savefig(output, dpi=100)
    plt.close(fig)

    mean = volume[..., channel].mean()
    std = volume[..., channel].std()
    return mean, std


@click.command()
@click.argument("input_dat", type=click.Path(exists=True, dir_okay=False))
@click.option("--size", "-s", required=True, help="Volume size as WIDTHxHEIGHTxDEPTH")
@click.option("--channels", "-c", type=click.IntRange(1, 4), default=1, show_default=True,
              help="Channels per voxel in the file")
@click.option("--channel", type=int, default=0, show_default=True, help="Channel to display")
@click.option("--slices", "-n", type=int, default=4, show_default=True, help="Number of slices to show")
@click.option("--cmap", default="gray", show_default=True, help="Matplotlib colormap")
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Output PNG filename (default: input name with Preview.png suffix)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def preview(input_dat, size, channels, channel, slices, cmap, output, verbose):
    """
    Render evenly spaced z-slices of a raw noise volume.

    INPUT_DAT: Raw volume written by pvn-generate

    Examples:

        # Four slices of a single channel 128^3 volume
        pvn-preview output/clouds.dat --size 128x128x128

        # Alpha channel of an RGBA volume
        pvn-preview output/detail.dat -s 32x32x32 -c 4 --channel 3
    """
    try:
        dims = parse_size(size)
        if verbose:
            click.echo(f"Loading {dims[0]}x{dims[1]}x{dims[2]} volume from '{input_dat}'...")
        grid = read_raw(input_dat, dims, channels)

        if output is None:
            output = input_dat.rsplit(".", 1)[0] + "Preview.png"

        try:
            mean, std = render_preview(grid, output, channel=channel, n_slices=slices, cmap=cmap)
        except DomainError as e:
            raise click.BadParameter(str(e), param_hint="--channel") from e

        if verbose:
            click.echo(f"Channel {channel}: mean {mean:.2f}, std {std:.2f}")
        click.echo(f"Rendered '{input_dat}' -> '{output}'")

    except NoiseVolumeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    preview()
