"""Unit tests for the lowbias32 hash and seed generation."""

import numpy as np
import pytest

from pyvoxnoise.constants import SEED_ZERO_STATE
from pyvoxnoise.noise.hashing import SeedGenerator, hash3, hash_to_unit, mix32


@pytest.mark.unit
def test_mix32_known_values():
    """Reference values of the lowbias32 mixer."""
    assert mix32(0) == 0
    assert mix32(1) == 1753845952
    assert mix32(42) == 388445122
    assert mix32(0xFFFFFFFF) == 1734902346
    assert mix32(mix32(1)) == 1492470133


@pytest.mark.unit
def test_mix32_scalar_and_array_agree():
    values = np.array([0, 1, 42, 0xFFFFFFFF], dtype=np.uint32)
    hashed = mix32(values)
    assert hashed.dtype == np.uint32
    assert hashed.shape == values.shape
    assert [int(h) for h in hashed] == [mix32(int(v)) for v in values]


@pytest.mark.unit
def test_mix32_wraps_modulo_2_32():
    assert mix32(2**32 + 42) == mix32(42)
    assert mix32(-1) == mix32(0xFFFFFFFF)


@pytest.mark.unit
def test_mix32_is_bijective_on_sample():
    """The mixer is a permutation of 32-bit integers: no collisions."""
    values = np.arange(100000, dtype=np.uint32)
    assert np.unique(mix32(values)).size == values.size


@pytest.mark.unit
def test_mix32_preserves_shape():
    values = np.arange(24).reshape(2, 3, 4)
    assert mix32(values).shape == (2, 3, 4)


@pytest.mark.unit
def test_hash3_chains_mix32():
    hx, hy, hz = hash3(10, 5)
    assert hx == mix32(15)
    assert hy == mix32(hx)
    assert hz == mix32(hy)


@pytest.mark.unit
def test_hash3_wraps_seed_plus_index():
    hx, _, _ = hash3(0xFFFFFFFF, np.array([1, 2]))
    assert int(hx[0]) == mix32(0)
    assert int(hx[1]) == mix32(1)


@pytest.mark.unit
def test_hash_to_unit_range():
    h = np.array([0, 0xFFFFFFFF, 0x80000000], dtype=np.uint32)
    u = hash_to_unit(h)
    assert u[0] == 0.0
    assert u[1] == 1.0
    assert 0.49 < u[2] < 0.51


@pytest.mark.unit
def test_seed_generator_advances_with_mix32():
    gen = SeedGenerator(1)
    assert gen.next_seed() == mix32(1)
    assert gen.next_seed() == mix32(mix32(1))
    assert gen.state == mix32(mix32(1))


@pytest.mark.unit
def test_seed_generator_distinct_seeds():
    gen = SeedGenerator(99)
    seeds = [gen.next_seed() for _ in range(16)]
    assert len(set(seeds)) == 16


@pytest.mark.unit
def test_seed_generator_reproducible():
    a = SeedGenerator(5)
    b = SeedGenerator(5)
    assert [a.next_seed() for _ in range(4)] == [b.next_seed() for _ in range(4)]


@pytest.mark.unit
def test_seed_generator_default_uses_clock():
    gen = SeedGenerator()
    assert 0 <= gen.state <= 0xFFFFFFFF


@pytest.mark.unit
@pytest.mark.parametrize("state", [0, 2**32])
def test_seed_generator_zero_state(state):
    gen = SeedGenerator(state)
    assert gen.state == SEED_ZERO_STATE
    seeds = [gen.next_seed() for _ in range(4)]
    assert len(set(seeds)) == 4
    assert 0 not in seeds
