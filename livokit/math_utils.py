"""Small geometry helpers for projection and image pyramids."""

from __future__ import annotations

import numpy as np


def sqew(v) -> np.ndarray:
    """Skew-symmetric cross-product matrix of a 3-vector."""
    x, y, z = np.asarray(v, dtype=float).reshape(3)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def norm_max(v) -> float:
    """Largest absolute entry of ``v``; -1 for an empty vector."""
    arr = np.abs(np.asarray(v, dtype=float).reshape(-1))
    return float(arr.max()) if arr.size else -1.0


def project2d(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(3)
    return arr[:2] / arr[2]


def unproject2d(v) -> np.ndarray:
    a, b = np.asarray(v, dtype=float).reshape(2)
    return np.array([a, b, 1.0])


def project3d(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(4)
    return arr[:3] / arr[3]


def unproject3d(v) -> np.ndarray:
    a, b, c = np.asarray(v, dtype=float).reshape(3)
    return np.array([a, b, c, 1.0])


def get_median(data):
    """Element at position len(data)//2 of the sorted data."""
    items = sorted(data)
    if not items:
        raise ValueError("median of empty data")
    return items[len(items) // 2]


def pyr_from_zero_d(x_0, level) -> float:
    """Scale a level-0 coordinate down to pyramid ``level``."""
    return x_0 / (1 << level)


def pyr_from_zero_2d(uv_0, level) -> np.ndarray:
    u, v = np.asarray(uv_0, dtype=float).reshape(2)
    return np.array([pyr_from_zero_d(u, level), pyr_from_zero_d(v, level)])


def frame_jac_xyz2uv(xyz, focal_length) -> np.ndarray:
    """2x6 Jacobian of the pixel projection with respect to a pose increment."""
    x, y, z = np.asarray(xyz, dtype=float).reshape(3)
    f = focal_length
    z_2 = z * z
    return np.array(
        [
            [-1.0 / z * f, 0.0, x / z_2 * f, x * y / z_2 * f, -(1 + x * x / z_2) * f, y / z * f],
            [0.0, -1.0 / z * f, y / z_2 * f, (1 + y * y / z_2) * f, -x * y / z_2 * f, -x / z * f],
        ]
    )