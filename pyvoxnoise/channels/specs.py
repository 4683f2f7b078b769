"""
Channel specifications for PyVoxNoise.

One immutable record per output channel. Each noise kind has its own
dataclass carrying only the parameters that kind uses, so a Gradient channel
simply has no tiled-noise resolution to read by mistake.

Author: B.G.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class ChannelKind(str, Enum):
    """Noise kinds, valued by their name in configuration files."""

    GRADIENT = "perlin"
    CELLULAR = "worley"
    GRADIENT_CELLULAR_BLEND = "perlinWorley"
    TILED_NOISE = "blueNoise"
    VECTOR_FIELD = "curl"


@dataclass(frozen=True)
class FbmParams:
    """Octave parameters of one fBm signal."""

    octave_count: int = 1
    frequency: float = 10.0
    lacunarity: float = 2.0
    persistence: float = 0.5


@dataclass(frozen=True)
class ChannelSpec:
    """
    Fields shared by all channel kinds.

    Attributes:
        seed: 32-bit seed, normally assigned by :meth:`reseeded`
        inverted: Replace v by 1 - v after evaluation
        power_curve: Exponent applied last (v ** power_curve)
    """

    kind: ClassVar[ChannelKind]

    seed: int = 0
    inverted: bool = False
    power_curve: float = 1.0

    def reseeded(self, seed_generator):
        """Copy of this spec with a fresh seed drawn from ``seed_generator``."""
        return dataclasses.replace(self, seed=seed_generator.next_seed())


@dataclass(frozen=True)
class GradientSpec(ChannelSpec):
    kind: ClassVar[ChannelKind] = ChannelKind.GRADIENT

    fbm: FbmParams = field(default_factory=FbmParams)


@dataclass(frozen=True)
class CellularSpec(ChannelSpec):
    kind: ClassVar[ChannelKind] = ChannelKind.CELLULAR

    fbm: FbmParams = field(default_factory=FbmParams)


@dataclass(frozen=True)
class BlendSpec(ChannelSpec):
    """Gradient fBm thresholded by an inverted cellular fBm."""

    kind: ClassVar[ChannelKind] = ChannelKind.GRADIENT_CELLULAR_BLEND

    worley_weight: float = 0.3
    gradient: FbmParams = field(default_factory=FbmParams)
    cellular: FbmParams = field(default_factory=FbmParams)


@dataclass(frozen=True)
class TiledNoiseSpec(ChannelSpec):
    """Lookup into precomputed tileable patterns of cubic ``resolution``."""

    kind: ClassVar[ChannelKind] = ChannelKind.TILED_NOISE

    resolution: int = 32
    zoom: int = 1


@dataclass(frozen=True)
class VectorFieldSpec(ChannelSpec):
    """One component of curl noise; the channel index picks x, y or z."""

    kind: ClassVar[ChannelKind] = ChannelKind.VECTOR_FIELD

    frequency: float = 10.0


SPEC_TYPES = {
    cls.kind: cls
    for cls in (GradientSpec, CellularSpec, BlendSpec, TiledNoiseSpec, VectorFieldSpec)
}
