"""
Channel module for PyVoxNoise.

Channel specifications (one immutable record per output channel, one type
per noise kind) and the evaluator that turns a specification and normalized
positions into values in [0, 1].

Usage:
    import numpy as np
    import pyvoxnoise as pvn
    from pyvoxnoise.channels import GradientSpec, FbmParams, evaluate_channel

    spec = GradientSpec(seed=42, fbm=FbmParams(octave_count=3, frequency=4.0))
    values = evaluate_channel(spec, np.random.rand(100, 3), channel=0)

Author: B.G.
"""

from .specs import (
    ChannelKind,
    FbmParams,
    ChannelSpec,
    GradientSpec,
    CellularSpec,
    BlendSpec,
    TiledNoiseSpec,
    VectorFieldSpec,
    SPEC_TYPES,
)
from .evaluator import ChannelEvaluator, evaluate_channel, linear_step, post_process

__all__ = [
    "ChannelKind",
    "FbmParams",
    "ChannelSpec",
    "GradientSpec",
    "CellularSpec",
    "BlendSpec",
    "TiledNoiseSpec",
    "VectorFieldSpec",
    "SPEC_TYPES",
    "ChannelEvaluator",
    "evaluate_channel",
    "linear_step",
    "post_process",
]
