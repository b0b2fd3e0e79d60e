import statistics

import pytest

from livokit.sample import Sample


def test_same_seed_same_sequence():
    a = Sample(7)
    b = Sample(7)
    assert [a.uniform_int(0, 100) for _ in range(20)] == [b.uniform_int(0, 100) for _ in range(20)]
    assert [a.uniform() for _ in range(5)] == [b.uniform() for _ in range(5)]


def test_reseed_restarts_sequence():
    s = Sample()
    s.seed(3)
    first = [s.gaussian(1.0) for _ in range(5)]
    s.seed(3)
    assert [s.gaussian(1.0) for _ in range(5)] == first


def test_uniform_int_inclusive_bounds():
    s = Sample(1)
    values = {s.uniform_int(2, 4) for _ in range(500)}
    assert values == {2, 3, 4}


def test_uniform_int_single_value():
    assert Sample(5).uniform_int(9, 9) == 9


def test_uniform_int_empty_range_raises():
    with pytest.raises(ValueError):
        Sample(0).uniform_int(5, 1)


def test_uniform_in_unit_interval():
    s = Sample(2)
    values = [s.uniform() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_gaussian_statistics():
    s = Sample(11)
    values = [s.gaussian(2.0) for _ in range(5000)]
    assert abs(statistics.fmean(values)) < 0.2
    assert abs(statistics.pstdev(values) - 2.0) < 0.2


def test_gaussian_negative_stddev_raises():
    with pytest.raises(ValueError):
        Sample(0).gaussian(-1.0)


def test_time_based_seed_gives_values_in_range():
    s = Sample()
    s.set_time_based_seed()
    assert 0 <= s.uniform_int(0, 10) <= 10