"""Unit tests for the fBm combinator."""

import numpy as np
import pytest

from pyvoxnoise.noise import cellular_noise, fbm, gradient_noise, mix32


def constant_primitive(value):
    def primitive(seed, pos, repeat):
        return np.full(np.asarray(pos).shape[:-1], value, dtype=float)
    return primitive


class RecordingPrimitive:
    """Primitive recording the arguments of every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, seed, pos, repeat):
        self.calls.append((seed, np.array(pos, copy=True), np.array(repeat, copy=True)))
        return np.full(np.asarray(pos).shape[:-1], 0.25)


@pytest.mark.unit
@pytest.mark.parametrize("octave_count", [0, -1, -10])
def test_no_octaves_is_zero(octave_count, sample_positions):
    values = fbm(gradient_noise, 42, sample_positions, 1.0, octave_count, 4.0, 2.0, 0.5)
    assert values.shape == (sample_positions.shape[0],)
    assert np.all(values == 0.0)


@pytest.mark.unit
def test_octave_schedule():
    """Frequency, repeat and seed evolve per octave."""
    primitive = RecordingPrimitive()
    pos = np.array([[0.5, 0.25, 0.125]])
    fbm(primitive, 7, pos, 1.0, 3, 4.0, 2.0, 0.5)

    assert [c[0] for c in primitive.calls] == [7, mix32(7), mix32(mix32(7))]
    for call, frequency in zip(primitive.calls, (4.0, 8.0, 16.0)):
        np.testing.assert_allclose(call[1], pos * frequency)
        np.testing.assert_allclose(call[2], frequency)


@pytest.mark.unit
def test_weighted_average_not_octave_average():
    """The sum is normalized by the sum of amplitudes."""
    values = iter([1.0, 0.0])

    def primitive(seed, pos, repeat):
        return np.full(np.asarray(pos).shape[:-1], next(values))

    result = fbm(primitive, 1, np.zeros((1, 3)), 1.0, 2, 1.0, 2.0, 0.25)
    # (1 * 1.0 + 0.25 * 0.0) / 1.25
    np.testing.assert_allclose(result, 0.8)


@pytest.mark.unit
def test_single_octave_equals_primitive(sample_positions):
    expected = gradient_noise(42, sample_positions * 3.0, 3.0)
    result = fbm(gradient_noise, 42, sample_positions, 1.0, 1, 3.0, 2.0, 0.5)
    np.testing.assert_array_equal(result, expected)


@pytest.mark.unit
def test_zero_persistence_keeps_first_octave(sample_positions):
    one = fbm(gradient_noise, 9, sample_positions, 1.0, 1, 4.0, 2.0, 0.0)
    many = fbm(gradient_noise, 9, sample_positions, 1.0, 5, 4.0, 2.0, 0.0)
    np.testing.assert_allclose(one, many)


@pytest.mark.unit
@pytest.mark.parametrize("persistence", [-1.0, -0.5, 0.0, 0.5, 1.0, 3.0, 10.0])
@pytest.mark.parametrize("lacunarity", [1.0, 2.0, 3.0])
def test_output_always_in_unit_range(persistence, lacunarity, sample_positions):
    values = fbm(cellular_noise, 3, sample_positions, 1.0, 3, 2.0, lacunarity, persistence)
    assert np.all(values >= 0.0) and np.all(values <= 1.0)


@pytest.mark.unit
def test_cancelling_weights_give_zero():
    values = fbm(constant_primitive(0.7), 3, np.zeros((4, 3)), 1.0, 2, 1.0, 2.0, -1.0)
    np.testing.assert_array_equal(values, 0.0)


@pytest.mark.unit
def test_clamped_to_one():
    values = fbm(constant_primitive(1.7), 3, np.zeros((4, 3)), 1.0, 2, 1.0, 2.0, 0.5)
    np.testing.assert_array_equal(values, 1.0)


@pytest.mark.unit
def test_deterministic(sample_positions):
    a = fbm(cellular_noise, 123, sample_positions, 1.0, 4, 2.0, 2.0, 0.5)
    b = fbm(cellular_noise, 123, sample_positions, 1.0, 4, 2.0, 2.0, 0.5)
    np.testing.assert_array_equal(a, b)
