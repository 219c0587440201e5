import pytest

from blockworld.noise import PerlinNoiseGenerator

SAMPLE_POINTS = [(0.3, 0.7), (12.25, -3.5), (-7.1, -0.4), (100.9, 55.55), (-0.01, 0.01)]


def test_deterministic_for_same_seed():
    first = PerlinNoiseGenerator(38513759)
    second = PerlinNoiseGenerator(38513759)
    assert [first.sample_2d(x, z) for x, z in SAMPLE_POINTS] == [
        second.sample_2d(x, z) for x, z in SAMPLE_POINTS
    ]


@pytest.mark.parametrize("x, z", SAMPLE_POINTS)
def test_values_within_unit_range(x, z):
    value = PerlinNoiseGenerator(1).sample_2d(x, z)
    assert -1.0 <= value <= 1.0


@pytest.mark.parametrize("x, z", [(0.0, 0.0), (2.0, 3.0), (17.0, 41.0)])
def test_zero_on_lattice_points(x, z):
    assert PerlinNoiseGenerator(1).sample_2d(x, z) == 0.0


def test_different_seeds_differ():
    first = [PerlinNoiseGenerator(1).sample_2d(x, z) for x, z in SAMPLE_POINTS]
    second = [PerlinNoiseGenerator(2).sample_2d(x, z) for x, z in SAMPLE_POINTS]
    assert first != second


def test_field_is_not_constant_off_lattice():
    gen = PerlinNoiseGenerator(10)
    values = {gen.sample_2d(x + 0.5, z + 0.5) for x in range(5) for z in range(5)}
    assert len(values) > 1


def test_continuous_across_small_steps():
    gen = PerlinNoiseGenerator(7)
    assert abs(gen.sample_2d(3.4, 2.2) - gen.sample_2d(3.4001, 2.2)) < 0.01