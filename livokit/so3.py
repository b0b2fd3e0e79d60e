"""Rotation helpers on SO(3): skew matrices, exponential and logarithm maps, Euler angles."""

from __future__ import annotations

import math

import numpy as np

_EXP_EPS = 1e-7
_EXP_COMPONENTS_EPS = 1e-5
_LOG_TRACE_EPS = 1e-6
_LOG_SMALL_ANGLE = 1e-3
_EULER_SINGULAR = 1e-6


def _vec3(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {np.shape(v)}")
    return arr


def _mat3(m) -> np.ndarray:
    arr = np.asarray(m, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {arr.shape}")
    return arr


def skew(v) -> np.ndarray:
    """Return the skew-symmetric matrix K with K @ w == cross(v, w)."""
    x, y, z = _vec3(v)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def _rodrigues(axis: np.ndarray, angle: float) -> np.ndarray:
    k = skew(axis)
    return np.eye(3) + math.sin(angle) * k + (1.0 - math.cos(angle)) * (k @ k)


def exp_map(ang, dt=1.0) -> np.ndarray:
    """Rotation matrix for the rotation vector ``ang`` applied over ``dt``."""
    vec = _vec3(ang)
    norm = float(np.linalg.norm(vec))
    if norm > _EXP_EPS:
        return _rodrigues(vec / norm, norm * dt)
    return np.eye(3)


def exp_components(v1, v2, v3) -> np.ndarray:
    """Rotation matrix for the rotation vector given as three scalars."""
    norm = math.sqrt(v1 * v1 + v2 * v2 + v3 * v3)
    if norm > _EXP_COMPONENTS_EPS:
        axis = np.array([v1 / norm, v2 / norm, v3 / norm], dtype=float)
        return _rodrigues(axis, norm)
    return np.eye(3)


def log_map(rot) -> np.ndarray:
    """Rotation vector of a rotation matrix."""
    r = _mat3(rot)
    diag_sum = float(r[0, 0] + r[1, 1] + r[2, 2])
    if diag_sum > 3.0 - _LOG_TRACE_EPS:
        theta = 0.0
    else:
        theta = math.acos(min(1.0, max(-1.0, 0.5 * (diag_sum - 1.0))))
    k = np.array([r[2, 1] - r[1, 2], r[0, 2] - r[2, 0], r[1, 0] - r[0, 1]])
    if abs(theta) < _LOG_SMALL_ANGLE:
        return 0.5 * k
    return 0.5 * theta / math.sin(theta) * k


def rot_to_euler(rot) -> np.ndarray:
    """Roll, pitch, yaw of a rotation matrix (Z-Y-X convention)."""
    r = _mat3(rot)
    sy = math.sqrt(r[0, 0] * r[0, 0] + r[1, 0] * r[1, 0])
    if sy >= _EULER_SINGULAR:
        x = math.atan2(r[2, 1], r[2, 2])
        y = math.atan2(-r[2, 0], sy)
        z = math.atan2(r[1, 0], r[0, 0])
    else:
        x = math.atan2(-r[1, 2], r[1, 1])
        y = math.atan2(-r[2, 0], sy)
        z = 0.0
    return np.array([x, y, z])