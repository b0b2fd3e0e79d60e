"""Filter state, pose records and shared enumerations for lidar-inertial-visual odometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from livokit.so3 import exp_components, log_map

G_M_S2 = 9.81
DIM_STATE = 19
INIT_COV = 0.01
SIZE_LARGE = 500
SIZE_SMALL = 100


class LidarType(IntEnum):
    AVIA = 1
    VELO16 = 2
    OUST64 = 3
    L515 = 4
    XT32 = 5
    PANDAR128 = 6
    ROBOSENSE = 7


class SlamMode(IntEnum):
    ONLY_LO = 0
    ONLY_LIO = 1
    LIVO = 2


class EkfState(IntEnum):
    WAIT = 0
    VIO = 1
    LIO = 2
    LO = 3


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _zeros33() -> np.ndarray:
    return np.zeros((3, 3))


@dataclass(eq=False)
class Pose6D:
    """IMU-propagated pose sample within a lidar frame."""

    offset_time: float = 0.0
    acc: np.ndarray = field(default_factory=_zeros3)
    gyr: np.ndarray = field(default_factory=_zeros3)
    vel: np.ndarray = field(default_factory=_zeros3)
    pos: np.ndarray = field(default_factory=_zeros3)
    rot: np.ndarray = field(default_factory=lambda: np.zeros(9))
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    seq: int = 0


@dataclass(eq=False)
class PointWithVar:
    """A point in body, IMU and world frames with its covariances."""

    point_b: np.ndarray = field(default_factory=_zeros3)
    point_i: np.ndarray = field(default_factory=_zeros3)
    point_w: np.ndarray = field(default_factory=_zeros3)
    var_nostate: np.ndarray = field(default_factory=_zeros33)
    body_var: np.ndarray = field(default_factory=_zeros33)
    var: np.ndarray = field(default_factory=_zeros33)
    point_crossmat: np.ndarray = field(default_factory=_zeros33)
    normal: np.ndarray = field(default_factory=_zeros3)


def _default_cov() -> np.ndarray:
    cov = np.eye(DIM_STATE) * INIT_COV
    cov[6, 6] = 0.00001
    cov[10:19, 10:19] = np.eye(9) * 0.00001
    return cov


def _state_vector(state_add) -> np.ndarray:
    vec = np.asarray(state_add, dtype=float).reshape(-1)
    if vec.shape != (DIM_STATE,):
        raise ValueError(f"state increment must have {DIM_STATE} entries, got {vec.size}")
    return vec


@dataclass(eq=False)
class StatesGroup:
    """The estimated state at the end of a scan, with its covariance."""

    rot_end: np.ndarray = field(default_factory=lambda: np.eye(3))
    pos_end: np.ndarray = field(default_factory=_zeros3)
    vel_end: np.ndarray = field(default_factory=_zeros3)
    inv_expo_time: float = 1.0
    bias_g: np.ndarray = field(default_factory=_zeros3)
    bias_a: np.ndarray = field(default_factory=_zeros3)
    gravity: np.ndarray = field(default_factory=_zeros3)
    cov: np.ndarray = field(default_factory=_default_cov)

    def copy(self) -> "StatesGroup":
        """Return an independent copy of this state."""
        return StatesGroup(
            rot_end=self.rot_end.copy(),
            pos_end=self.pos_end.copy(),
            vel_end=self.vel_end.copy(),
            inv_expo_time=self.inv_expo_time,
            bias_g=self.bias_g.copy(),
            bias_a=self.bias_a.copy(),
            gravity=self.gravity.copy(),
            cov=self.cov.copy(),
        )

    def reset_pose(self) -> None:
        """Reset rotation, position and velocity to the origin at rest."""
        self.rot_end = np.eye(3)
        self.pos_end = np.zeros(3)
        self.vel_end = np.zeros(3)

    def __add__(self, state_add) -> "StatesGroup":
        d = _state_vector(state_add)
        return StatesGroup(
            rot_end=self.rot_end @ exp_components(d[0], d[1], d[2]),
            pos_end=self.pos_end + d[3:6],
            vel_end=self.vel_end + d[7:10],
            inv_expo_time=self.inv_expo_time + d[6],
            bias_g=self.bias_g + d[10:13],
            bias_a=self.bias_a + d[13:16],
            gravity=self.gravity + d[16:19],
            cov=self.cov.copy(),
        )

    def __iadd__(self, state_add) -> "StatesGroup":
        d = _state_vector(state_add)
        self.rot_end = self.rot_end @ exp_components(d[0], d[1], d[2])
        self.pos_end = self.pos_end + d[3:6]
        self.inv_expo_time += d[6]
        self.vel_end = self.vel_end + d[7:10]
        self.bias_g = self.bias_g + d[10:13]
        self.bias_a = self.bias_a + d[13:16]
        self.gravity = self.gravity + d[16:19]
        return self

    def __sub__(self, other: "StatesGroup") -> np.ndarray:
        if not isinstance(other, StatesGroup):
            return NotImplemented
        out = np.zeros(DIM_STATE)
        out[0:3] = log_map(other.rot_end.T @ self.rot_end)
        out[3:6] = self.pos_end - other.pos_end
        out[6] = self.inv_expo_time - other.inv_expo_time
        out[7:10] = self.vel_end - other.vel_end
        out[10:13] = self.bias_g - other.bias_g
        out[13:16] = self.bias_a - other.bias_a
        out[16:19] = self.gravity - other.gravity
        return out


def set_pose6d(t, acc, gyr, vel, pos, rot) -> Pose6D:
    """Build a Pose6D sample; the rotation is stored row-major."""
    return Pose6D(
        offset_time=float(t),
        acc=np.asarray(acc, dtype=float).reshape(3).copy(),
        gyr=np.asarray(gyr, dtype=float).reshape(3).copy(),
        vel=np.asarray(vel, dtype=float).reshape(3).copy(),
        pos=np.asarray(pos, dtype=float).reshape(3).copy(),
        rot=np.asarray(rot, dtype=float).reshape(3, 3).reshape(9).copy(),
    )