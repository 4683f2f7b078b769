"""
Volume description loader for PyVoxNoise.

Parses the plain-text volume description format:

    128x128x64          <- first line: {width}x{height}x{depth}
    ~ 2                 <- channel section, repeated 2 times (digit 2, 3 or 4)
    mode:perlin
    octaveCount:4
    # comment
    ~
    mode:blueNoise
    blueNoiseRes:64

Every channel instantiation (including repeats of the same section) draws a
fresh seed from the SeedGenerator, so repeated channels are never identical.

Author: B.G.
"""

import logging
import os
from dataclasses import dataclass

from .. import constants as cte
from ..channels.specs import (
    BlendSpec,
    CellularSpec,
    ChannelKind,
    FbmParams,
    GradientSpec,
    TiledNoiseSpec,
    VectorFieldSpec,
)
from ..errors import ConfigError
from ..noise.hashing import SeedGenerator

logger = logging.getLogger(__name__)

SECTION_DELIM = "~"
COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class VolumeConfig:
    """
    Parsed volume description.

    Attributes:
        name: Configuration name (file stem)
        size: (width, height, depth)
        channels: Tuple of channel specifications, one per output channel
    """

    name: str
    size: tuple
    channels: tuple

    @property
    def channel_count(self) -> int:
        return len(self.channels)


def _get_int(options: dict, key: str, default: int) -> int:
    if key not in options:
        return default
    try:
        return int(options[key])
    except ValueError:
        raise ConfigError(f"Invalid integer for option {key}: {options[key]!r}") from None


def _get_float(options: dict, key: str, default: float) -> float:
    if key not in options:
        return default
    try:
        return float(options[key])
    except ValueError:
        raise ConfigError(f"Invalid number for option {key}: {options[key]!r}") from None


def _get_bool(options: dict, key: str, default: bool) -> bool:
    if key not in options:
        return default
    return "true" in options[key]


def _get_fbm(options: dict, prefix: str = "") -> FbmParams:
    def key(name):
        return prefix + name[0].upper() + name[1:] if prefix else name

    octave_count = _get_int(options, key("octaveCount"), 1)
    if octave_count < 0:
        raise ConfigError(f"Option {key('octaveCount')} must be >= 0, got {octave_count}")

    return FbmParams(
        octave_count=octave_count,
        frequency=_get_float(options, key("frequency"), 10.0),
        lacunarity=_get_float(options, key("lacunarity"), 2.0),
        persistence=_get_float(options, key("persistence"), 0.5),
    )


def _check_cellular_octaves(params: FbmParams, prefix: str = "") -> None:
    """Cellular noise needs a lattice period of at least 1 in every octave."""
    frequency = params.frequency
    for octave in range(params.octave_count):
        if frequency < 1.0:
            name = prefix + "Frequency" if prefix else "frequency"
            raise ConfigError(
                f"Cellular octave {octave} has frequency {frequency:g} < 1 "
                f"(check {name} and lacunarity)"
            )
        frequency *= params.lacunarity


def parse_size(line: str) -> tuple:
    """Parse ``{width}x{height}x{depth}``."""
    parts = line.strip().split("x")
    if len(parts) != 3:
        raise ConfigError(f"Invalid texture size description: {line!r}")
    try:
        size = tuple(int(p) for p in parts)
    except ValueError:
        raise ConfigError(f"Invalid texture size description: {line!r}") from None
    if min(size) < 1:
        raise ConfigError(f"Texture size must be positive, got {size}")
    return size


def parse_repeat_count(line: str) -> int:
    """Repeat count of a section header: the largest of the digits 2, 3, 4 present, else 1."""
    for digit in "432":
        if digit in line:
            return int(digit)
    return 1


def parse_options(lines) -> dict:
    """Collect ``key:value`` pairs, skipping comments and lines without a colon."""
    options = {}
    for line in lines:
        if line.startswith(COMMENT_PREFIX) or ":" not in line:
            continue
        key, value = line.split(":", 1)
        options[key.strip()] = value.strip()
    return options


def build_channel_spec(options: dict):
    """
    Build the channel specification described by ``options``.

    Only the parameters of the selected mode are read.

    Raises:
        ConfigError: On missing/unknown mode or invalid values
    """
    if "mode" not in options:
        raise ConfigError("Missing option: mode")
    try:
        kind = ChannelKind(options["mode"])
    except ValueError:
        valid = ", ".join(k.value for k in ChannelKind)
        raise ConfigError(f"Unknown mode {options['mode']!r} (expected one of: {valid})") from None

    common = dict(
        inverted=_get_bool(options, "inverted", False),
        power_curve=_get_float(options, "powerCurve", 1.0),
    )

    if kind is ChannelKind.GRADIENT_CELLULAR_BLEND:
        cellular = _get_fbm(options, "worley")
        _check_cellular_octaves(cellular, "worley")
        return BlendSpec(
            worley_weight=_get_float(options, "worleyWeight", 0.3),
            gradient=_get_fbm(options, "perlin"),
            cellular=cellular,
            **common,
        )

    if kind is ChannelKind.TILED_NOISE:
        resolution = _get_int(options, "blueNoiseRes", 32)
        zoom = _get_int(options, "zoom", 1)
        if resolution < 1:
            raise ConfigError(f"Option blueNoiseRes must be >= 1, got {resolution}")
        if zoom < 1:
            raise ConfigError(f"Option zoom must be >= 1, got {zoom}")
        return TiledNoiseSpec(resolution=resolution, zoom=zoom, **common)

    if kind is ChannelKind.VECTOR_FIELD:
        return VectorFieldSpec(frequency=_get_float(options, "frequency", 10.0), **common)

    if kind is ChannelKind.CELLULAR:
        params = _get_fbm(options)
        _check_cellular_octaves(params)
        return CellularSpec(fbm=params, **common)

    return GradientSpec(fbm=_get_fbm(options), **common)


def parse_config(text: str, name: str = "<string>", seed_generator=None) -> VolumeConfig:
    """
    Parse a volume description.

    Args:
        text: Full contents of the description
        name: Name reported in errors and stored in the result
        seed_generator: SeedGenerator used to seed every channel instance.
                        Defaults to a clock-seeded generator.

    Returns:
        VolumeConfig

    Raises:
        ConfigError: On any malformed input or a channel count outside 1-4
    """
    if seed_generator is None:
        seed_generator = SeedGenerator()

    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise ConfigError("File is empty or does not exist")

    size = parse_size(lines[0])

    # Split into sections at every line starting with the delimiter
    sections = []
    for line in lines[1:]:
        if line.startswith(SECTION_DELIM):
            sections.append((parse_repeat_count(line), []))
        elif sections:
            sections[-1][1].append(line)

    channels = []
    for repeat_count, body in sections:
        spec = build_channel_spec(parse_options(body))
        for _ in range(repeat_count):
            channels.append(spec.reseeded(seed_generator))

    if not 1 <= len(channels) <= cte.MAX_CHANNELS:
        raise ConfigError(f"Invalid number of channels: {len(channels)} (expected 1-{cte.MAX_CHANNELS})")

    # Curl channels fill the x, y or z component matching their position
    for index, spec in enumerate(channels):
        if spec.kind is ChannelKind.VECTOR_FIELD and index >= cte.SPATIAL_DIMS:
            raise ConfigError(f"Curl noise cannot fill channel {index}: it only has {cte.SPATIAL_DIMS} components")

    config = VolumeConfig(name=name, size=size, channels=tuple(channels))
    logger.debug(
        "Parsed %s: size %s, channels %s",
        name, size, ", ".join(c.kind.value for c in channels),
    )
    return config


def load_config(name: str, input_dir: str = "input", seed_generator=None) -> VolumeConfig:
    """
    Load ``<input_dir>/<name>.txt``.

    Raises:
        ConfigError: If the file is missing, empty or malformed
    """
    path = os.path.join(input_dir, name + ".txt")
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        raise ConfigError(f"File is empty or does not exist: {path}") from None

    logger.info("Loading configuration %s from %s", name, path)
    return parse_config(text, name=name, seed_generator=seed_generator)
