import numpy as np
import pytest

from livokit.math_utils import (
    frame_jac_xyz2uv,
    get_median,
    norm_max,
    project2d,
    project3d,
    pyr_from_zero_2d,
    pyr_from_zero_d,
    sqew,
    unproject2d,
    unproject3d,
)


def test_sqew_is_cross_product():
    v = np.array([1.0, -2.0, 0.5])
    w = np.array([0.3, 0.7, -1.1])
    assert np.allclose(sqew(v) @ w, np.cross(v, w))


def test_norm_max():
    assert norm_max([-3.0, 2.0, 1.0]) == 3.0
    assert norm_max([]) == -1.0


def test_project2d_example():
    assert np.allclose(project2d([2.0, 4.0, 2.0]), [1.0, 2.0])


def test_project_unproject_round_trips():
    uv = np.array([0.25, -1.5])
    assert np.allclose(project2d(unproject2d(uv)), uv)
    xyz = np.array([1.0, 2.0, -3.0])
    assert np.allclose(project3d(unproject3d(xyz)), xyz)
    assert unproject3d(xyz)[3] == 1.0


def test_projection_invariant_to_scale():
    v = np.array([1.0, 2.0, 4.0])
    assert np.allclose(project2d(v), project2d(3.0 * v))


def test_get_median():
    assert get_median([5, 1, 3]) == 3
    assert get_median([4, 1, 3, 2]) == 3


def test_get_median_empty_raises():
    with pytest.raises(ValueError):
        get_median([])


def test_pyramid_scaling_consistent():
    uv = np.array([64.0, 32.0])
    for level in range(4):
        scaled = pyr_from_zero_2d(uv, level)
        assert scaled[0] == pyr_from_zero_d(uv[0], level)
        assert scaled[1] * (1 << level) == uv[1]


def _numeric_jacobian(fn, x, eps=1e-6):
    cols = []
    for i in range(len(x)):
        dx = np.zeros_like(x)
        dx[i] = eps
        cols.append((fn(x + dx) - fn(x - dx)) / (2 * eps))
    return np.stack(cols, axis=1)


def test_frame_jacobian_matches_numeric_projection_derivative():
    p = np.array([0.4, -0.3, 2.5])
    f = 300.0
    jac = frame_jac_xyz2uv(p, f)
    jp = _numeric_jacobian(project2d, p)
    assert jac.shape == (2, 6)
    assert np.allclose(jac[:, :3], -f * jp, rtol=1e-5)
    assert np.allclose(jac[:, 3:], f * jp @ sqew(p), rtol=1e-5)