import numpy as np
import pytest

from livokit.states import DIM_STATE, INIT_COV, PointWithVar, StatesGroup, set_pose6d


def _increment():
    return np.linspace(-0.05, 0.05, DIM_STATE)


def test_default_covariance_layout():
    s = StatesGroup()
    assert s.cov.shape == (DIM_STATE, DIM_STATE)
    assert s.cov[0, 0] == INIT_COV
    assert s.cov[6, 6] == pytest.approx(0.00001)
    assert s.cov[12, 12] == pytest.approx(0.00001)
    assert s.inv_expo_time == 1.0
    assert np.array_equal(s.rot_end, np.eye(3))


def test_add_then_subtract_recovers_increment():
    s = StatesGroup()
    s.pos_end = np.array([1.0, 2.0, 3.0])
    d = _increment()
    assert np.allclose((s + d) - s, d, atol=1e-9)


def test_iadd_matches_add():
    base = StatesGroup()
    d = _increment()
    expected = base + d
    mutated = base.copy()
    mutated += d
    assert np.allclose(mutated - expected, np.zeros(DIM_STATE))


def test_add_leaves_original_and_copies_cov():
    s = StatesGroup()
    before = s.pos_end.copy()
    result = s + _increment()
    assert np.array_equal(s.pos_end, before)
    result.cov[0, 0] = 42.0
    assert s.cov[0, 0] == INIT_COV


def test_add_rejects_wrong_length():
    with pytest.raises(ValueError):
        StatesGroup() + np.zeros(5)


def test_copy_is_independent():
    s = StatesGroup()
    c = s.copy()
    c.vel_end[0] = 5.0
    c.cov[1, 1] = 7.0
    assert s.vel_end[0] == 0.0
    assert s.cov[1, 1] == INIT_COV


def test_reset_pose():
    s = StatesGroup()
    s += _increment()
    s.reset_pose()
    assert np.array_equal(s.rot_end, np.eye(3))
    assert np.array_equal(s.pos_end, np.zeros(3))
    assert np.array_equal(s.vel_end, np.zeros(3))
    assert not np.allclose(s.bias_g, np.zeros(3))


def test_set_pose6d_stores_rotation_row_major():
    rot = np.arange(9.0).reshape(3, 3)
    pose = set_pose6d(0.25, [1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12], rot)
    assert pose.offset_time == 0.25
    assert list(pose.rot) == list(np.arange(9.0))
    assert list(pose.acc) == [1.0, 2.0, 3.0]
    assert list(pose.pos) == [10.0, 11.0, 12.0]


def test_point_with_var_defaults_are_independent():
    a = PointWithVar()
    b = PointWithVar()
    a.point_w[0] = 3.0
    assert b.point_w[0] == 0.0
    assert np.array_equal(b.var, np.zeros((3, 3)))