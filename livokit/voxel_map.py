"""Voxel map data structures: configuration, planes, voxel keys and the octree of points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from livokit.states import PointWithVar

VOXELMAP_HASH_P = 116101
VOXELMAP_MAX_N = 10000000000

_INT64_MASK = (1 << 64) - 1


def _wrap_int64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value >= (1 << 63) else value


def _cmod(a: int, n: int) -> int:
    """Remainder that truncates toward zero, as signed integer division does."""
    r = abs(a) % n
    return -r if a < 0 else r


@dataclass
class VoxelMapConfig:
    """Parameters of the voxel map and of its local sliding window."""

    max_voxel_size: float = 0.0
    max_layer: int = 0
    max_iterations: int = 0
    layer_init_num: list[int] = field(default_factory=list)
    max_points_num: int = 0
    planner_threshold: float = 0.0
    beam_err: float = 0.0
    dept_err: float = 0.0
    sigma_num: float = 0.0
    is_pub_plane_map: bool = False
    sliding_thresh: float = 0.0
    map_sliding_en: bool = False
    half_map_size: int = 0


@dataclass(eq=False)
class PointToPlane:
    """A point-to-plane residual between a scan point and a map plane."""

    point_b: np.ndarray = field(default_factory=lambda: np.zeros(3))
    point_w: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    center: np.ndarray = field(default_factory=lambda: np.zeros(3))
    plane_var: np.ndarray = field(default_factory=lambda: np.zeros((6, 6)))
    body_cov: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    layer: int = 0
    d: float = 0.0
    eigen_value: float = 0.0
    is_valid: bool = False
    dis_to_plane: float = 0.0


@dataclass(eq=False)
class VoxelPlane:
    """A plane fitted to the points of one voxel."""

    center: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    y_normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    x_normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    covariance: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    plane_var: np.ndarray = field(default_factory=lambda: np.zeros((6, 6)))
    radius: float = 0.0
    min_eigen_value: float = 1.0
    mid_eigen_value: float = 1.0
    max_eigen_value: float = 1.0
    d: float = 0.0
    points_size: int = 0
    is_plane: bool = False
    is_init: bool = False
    id: int = 0
    is_update: bool = False


@dataclass(frozen=True)
class VoxelLocation:
    """Integer coordinates of a voxel, usable as a dictionary key."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __hash__(self) -> int:
        p, n = VOXELMAP_HASH_P, VOXELMAP_MAX_N
        inner = _cmod(_wrap_int64(self.z * p), n) + self.y
        outer = _cmod(_wrap_int64(_wrap_int64(inner) * p), n) + self.x
        return hash(_wrap_int64(outer) & _INT64_MASK)


@dataclass
class DsPoint:
    """Accumulator for a downsampled point."""

    xyz: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    intensity: float = 0.0
    count: int = 0


class VoxelOctoTree:
    """A node of the octree that subdivides a voxel; state 0 is a leaf, 1 an internal node."""

    def __init__(
        self,
        max_layer: int = 0,
        layer: int = 0,
        points_size_threshold: int = 0,
        max_points_num: int = 0,
        planer_threshold: float = 0.0,
    ):
        self.temp_points: list[PointWithVar] = []
        self.plane: VoxelPlane | None = VoxelPlane()
        self.layer = layer
        self.octo_state = 0
        self.leaves: list[VoxelOctoTree | None] = [None] * 8
        self.voxel_center = [0.0, 0.0, 0.0]
        self.layer_init_num: list[int] = []
        self.quater_length = 0.0
        self.planer_threshold = planer_threshold
        self.points_size_threshold = points_size_threshold
        self.update_size_threshold = 5
        self.max_points_num = max_points_num
        self.max_layer = max_layer
        self.new_points = 0
        self.init_octo = False
        self.update_enable = True

    def _iter_points(self) -> Iterator[PointWithVar]:
        if self.octo_state == 0:
            yield from self.temp_points
        else:
            for leaf in self.leaves:
                if leaf is not None:
                    yield from leaf._iter_points()

    def collect_points(self) -> list[PointWithVar]:
        """All points held by the leaves below this node, in leaf order."""
        return list(self._iter_points())