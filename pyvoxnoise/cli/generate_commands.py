"""
Volume Generation CLI Commands for PyVoxNoise

Command line interface iterating over requested volume descriptions and
writing the generated textures.

Author: B.G.
"""

import sys

import click

from .. import constants as cte
from ..errors import NoiseVolumeError
from ..generation import generate_noise_texture
from ..logger import setup_logger
from ..noise import SeedGenerator
from ..tiled import TiledNoiseCache


@click.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--input-dir", "-i", type=click.Path(file_okay=False), default="input",
              show_default=True, help="Directory containing <name>.txt descriptions")
@click.option("--output-dir", "-o", type=click.Path(file_okay=False), default="output",
              show_default=True, help="Directory receiving <name>.dat and <name>Slice.png")
@click.option("--tiled-dir", type=click.Path(file_okay=False), default=cte.TILED_NOISE_DEFAULT_ROOT,
              show_default=True, help="Root of the pre-tiled noise slices")
@click.option("--seed", type=int, default=None,
              help="Initial seed state (default: current time)")
@click.option("--jobs", "-j", type=int, default=1, show_default=True,
              help="Worker threads (-1 for all cores)")
@click.option("--all-slices", is_flag=True, help="Also write every xy slice as PNG")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None,
              help="Also write the log to this file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def generate(names, input_dir, output_dir, tiled_dir, seed, jobs, all_slices, log_file, verbose):
    """
    Generate 3D noise volumes from text descriptions.

    Each NAME is read from INPUT_DIR/NAME.txt and written to
    OUTPUT_DIR/NAME.dat (raw channel-interleaved bytes) and
    OUTPUT_DIR/NAMESlice.png (first slice). A failing NAME is reported and
    the remaining ones are still generated.

    Examples:

        # Generate two volumes
        pvn-generate clouds detail

        # Reproducible output on 4 threads
        pvn-generate --seed 1234 -j 4 clouds
    """
    setup_logger(verbose=verbose, log_file=log_file)

    # One seed stream for the whole batch
    seed_generator = SeedGenerator(seed)
    tiled_supplier = TiledNoiseCache(tiled_dir)

    failed = []
    for name in names:
        try:
            grid, paths = generate_noise_texture(
                name,
                input_dir=input_dir,
                output_dir=output_dir,
                seed_generator=seed_generator,
                tiled_supplier=tiled_supplier,
                n_jobs=jobs,
                all_slices=all_slices,
                progress=verbose,
            )
        except (NoiseVolumeError, OSError) as e:
            click.echo(f"Failed to generate {name}:", err=True)
            click.echo(f"Error: {e}", err=True)
            failed.append(name)
            continue

        w, h, d = grid.size
        click.echo(f"Generated '{name}' ({w}x{h}x{d}, {grid.channel_count} channel(s)) -> {', '.join(paths[:2])}")

    if failed:
        click.echo(f"{len(failed)} of {len(names)} volume(s) failed: {', '.join(failed)}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    generate()
