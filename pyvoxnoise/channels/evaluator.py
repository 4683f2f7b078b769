"""
Channel evaluation for PyVoxNoise.

Maps one channel specification and a batch of normalized positions to values
in [0, 1]: dispatch to the right primitive or fBm combination, then the
inversion and power-curve post-processing shared by all kinds.

Author: B.G.
"""

import numpy as np

from .. import constants as cte
from ..errors import DomainError, ResourceError
from ..noise import cellular_noise, curl_noise, fbm, gradient_noise
from .specs import ChannelKind

# Gradient, cellular and blend channels tile on the unit cube
UNIT_REPEAT = np.ones(3, dtype=cte.FLOAT_TYPE_NP)


def linear_step(low, high, x):
    """
    Clamped linear ramp from ``low`` (0) to ``high`` (1).

    Where ``low == high`` the ramp degenerates to a step: 1 if ``x >= high``
    else 0.
    """
    low, high, x = np.broadcast_arrays(
        np.asarray(low, dtype=cte.FLOAT_TYPE_NP),
        np.asarray(high, dtype=cte.FLOAT_TYPE_NP),
        np.asarray(x, dtype=cte.FLOAT_TYPE_NP),
    )
    span = high - low
    degenerate = span == 0.0
    safe_span = np.where(degenerate, 1.0, span)
    ramp = np.clip((x - low) / safe_span, 0.0, 1.0)
    return np.where(degenerate, np.where(x >= high, 1.0, 0.0), ramp)


def post_process(values, inverted: bool, power_curve: float) -> np.ndarray:
    """
    Apply inversion then the power curve.

    Values are clamped to [0, 1] and the exponent to at least
    ``POWER_CURVE_EPSILON`` so the result is always finite and in [0, 1].
    """
    v = np.clip(np.asarray(values, dtype=cte.FLOAT_TYPE_NP), 0.0, 1.0)
    if inverted:
        v = 1.0 - v
    exponent = max(float(power_curve), cte.POWER_CURVE_EPSILON)
    return np.power(v, exponent)


def _fbm_of(primitive, seed, pos, params):
    return fbm(
        primitive,
        seed,
        pos,
        UNIT_REPEAT,
        params.octave_count,
        params.frequency,
        params.lacunarity,
        params.persistence,
    )


def _evaluate_gradient(spec, pos, channel, tiled_supplier):
    return _fbm_of(gradient_noise, spec.seed, pos, spec.fbm)


def _evaluate_cellular(spec, pos, channel, tiled_supplier):
    return _fbm_of(cellular_noise, spec.seed, pos, spec.fbm)


def _evaluate_blend(spec, pos, channel, tiled_supplier):
    perlin = _fbm_of(gradient_noise, spec.seed, pos, spec.gradient)
    worley = 1.0 - _fbm_of(cellular_noise, spec.seed, pos, spec.cellular)
    return linear_step((1.0 - worley) * spec.worley_weight, 1.0, perlin)


def _evaluate_tiled(spec, pos, channel, tiled_supplier):
    if tiled_supplier is None:
        raise ResourceError("Tiled noise channel requested but no tiled noise supplier was provided")
    samples = tiled_supplier.sample(pos / float(spec.zoom), channel, spec.resolution)
    return np.asarray(samples, dtype=cte.FLOAT_TYPE_NP) / cte.TILED_NOISE_DIVISOR


def _evaluate_vector_field(spec, pos, channel, tiled_supplier):
    if not 0 <= channel < cte.SPATIAL_DIMS:
        raise DomainError(f"Curl noise has {cte.SPATIAL_DIMS} components, cannot fill channel {channel}")
    velocity = curl_noise(spec.seed, pos * spec.frequency, spec.frequency)
    return velocity[..., channel]


_EVALUATORS = {
    ChannelKind.GRADIENT: _evaluate_gradient,
    ChannelKind.CELLULAR: _evaluate_cellular,
    ChannelKind.GRADIENT_CELLULAR_BLEND: _evaluate_blend,
    ChannelKind.TILED_NOISE: _evaluate_tiled,
    ChannelKind.VECTOR_FIELD: _evaluate_vector_field,
}


def evaluate_channel(spec, pos, channel: int, tiled_supplier=None) -> np.ndarray:
    """
    Evaluate one channel at normalized positions.

    Args:
        spec: Channel specification (any ChannelSpec subclass)
        pos: Normalized positions in [0, 1)^3, array of shape (..., 3)
        channel: Index of the output channel being filled
        tiled_supplier: Object with ``sample(pos, channel, resolution)``,
                        required for tiled noise channels only

    Returns:
        Values in [0, 1] of shape (...)
    """
    pos = np.asarray(pos, dtype=cte.FLOAT_TYPE_NP)
    values = _EVALUATORS[spec.kind](spec, pos, channel, tiled_supplier)
    return post_process(values, spec.inverted, spec.power_curve)


class ChannelEvaluator:
    """
    Per-volume evaluation function.

    Binds the channel specifications of a volume (and the tiled noise
    supplier) into the ``eval_fn(pos, channel)`` callable consumed by
    :meth:`pyvoxnoise.grid.VolumeGrid.process`.

    Args:
        channels: Sequence of ChannelSpec, one per output channel
        tiled_supplier: Optional tiled noise supplier
    """

    def __init__(self, channels, tiled_supplier=None):
        self.channels = tuple(channels)
        self.tiled_supplier = tiled_supplier

    def __len__(self):
        return len(self.channels)

    def __call__(self, pos, channel: int) -> np.ndarray:
        return evaluate_channel(self.channels[channel], pos, channel, self.tiled_supplier)
