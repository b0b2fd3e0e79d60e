"""Visualisation markers and transforms for poses, points, lines and vehicle shapes.

Markers are handed to a ``publish`` callable and transforms to a
``broadcaster`` callable. Each call receives its own copy, so the functions
can keep changing a marker after it has been sent. The published copies are
also returned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Callable

import numpy as np

WORLD_FRAME = "/world"
ACTION_ADD = 0

Vec3 = tuple[float, float, float]
Quat = tuple[float, float, float, float]


class MarkerType(IntEnum):
    """Shape of a marker, numbered as in the usual visualisation message."""

    ARROW = 0
    CUBE = 1
    SPHERE = 2
    CYLINDER = 3
    LINE_STRIP = 4


@dataclass
class Marker:
    """A shape to be drawn; an unset orientation is all zeros, as in the message."""

    frame_id: str = ""
    stamp: float = 0.0
    ns: str = ""
    id: int = 0
    type: MarkerType = MarkerType.ARROW
    action: int = ACTION_ADD
    position: Vec3 = (0.0, 0.0, 0.0)
    orientation: Quat = (0.0, 0.0, 0.0, 0.0)
    scale: Vec3 = (0.0, 0.0, 0.0)
    color: Quat = (0.0, 0.0, 0.0, 0.0)
    points: list[Vec3] = field(default_factory=list)
    lifetime: float = 0.0

    def copy(self) -> "Marker":
        return replace(self, points=list(self.points))


@dataclass(frozen=True)
class TransformStamped:
    """A rigid transform from ``frame_id`` to ``child_frame_id``; rotation as (x, y, z, w)."""

    translation: Vec3
    rotation: Quat
    stamp: float
    frame_id: str
    child_frame_id: str


Publish = Callable[[Marker], object]


def _vec3(v) -> Vec3:
    a, b, c = (float(x) for x in np.asarray(v, dtype=float).reshape(3))
    return (a, b, c)


def _rgba(color, alpha: float) -> Quat:
    r, g, b = _vec3(color)
    return (r, g, b, float(alpha))


def _emit(publish: Publish, marker: Marker) -> Marker:
    sent = marker.copy()
    publish(sent)
    return sent


def _f32(value: float) -> float:
    return float(np.float32(value))


def _matrix_to_quaternion(rot) -> Quat:
    m = np.asarray(rot, dtype=float)
    if m.shape != (3, 3):
        raise ValueError(f"expected a 3x3 rotation matrix, got shape {m.shape}")
    diag_sum = float(m[0, 0] + m[1, 1] + m[2, 2])
    if diag_sum > 0.0:
        t = math.sqrt(diag_sum + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return (
            (m[2, 1] - m[1, 2]) * t,
            (m[0, 2] - m[2, 0]) * t,
            (m[1, 0] - m[0, 1]) * t,
            w,
        )
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    q = [0.0, 0.0, 0.0]
    q[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    q[j] = (m[j, i] + m[i, j]) * t
    q[k] = (m[k, i] + m[i, k]) * t
    return (float(q[0]), float(q[1]), float(q[2]), float(w))


def publish_tf_transform(rotation, translation, stamp, frame_id, child_frame_id, broadcaster) -> TransformStamped:
    """Send the pose given by a rotation matrix and translation as a transform."""
    transform = TransformStamped(
        translation=_vec3(translation),
        rotation=tuple(float(c) for c in _matrix_to_quaternion(rotation)),
        stamp=stamp,
        frame_id=frame_id,
        child_frame_id=child_frame_id,
    )
    broadcaster(transform)
    return transform


def publish_point_marker(publish, pos, ns, timestamp, marker_id, action, marker_scale, color, lifetime=0.0) -> Marker:
    """Publish a cube of side ``marker_scale`` at ``pos`` in the world frame."""
    marker = Marker(
        frame_id=WORLD_FRAME,
        stamp=timestamp,
        ns=ns,
        id=marker_id,
        type=MarkerType.CUBE,
        action=action,
        scale=(marker_scale, marker_scale, marker_scale),
        color=_rgba(color, 1.0),
        lifetime=lifetime,
        position=_vec3(pos),
    )
    return _emit(publish, marker)


def publish_line_marker(publish, start, end, ns, timestamp, marker_id, action, marker_scale, color, lifetime=0.0) -> Marker:
    """Publish a line from ``start`` to ``end`` of width ``marker_scale``."""
    marker = Marker(
        frame_id=WORLD_FRAME,
        stamp=timestamp,
        ns=ns,
        id=marker_id,
        type=MarkerType.LINE_STRIP,
        action=action,
        scale=(marker_scale, 0.0, 0.0),
        color=_rgba(color, 1.0),
        points=[_vec3(start), _vec3(end)],
        lifetime=lifetime,
    )
    return _emit(publish, marker)


def publish_arrow_marker(publish, pos, direction, scale, ns, timestamp, marker_id, action, marker_scale, color) -> Marker:
    """Publish an arrow from ``pos`` to ``pos + scale * direction``."""
    p = np.asarray(_vec3(pos))
    d = np.asarray(_vec3(direction))
    marker = Marker(
        frame_id=WORLD_FRAME,
        stamp=timestamp,
        ns=ns,
        id=marker_id,
        type=MarkerType.ARROW,
        action=action,
        scale=(marker_scale, marker_scale * 0.35, 0.0),
        color=_rgba(color, 1.0),
        points=[_vec3(p), _vec3(p + scale * d)],
    )
    return _emit(publish, marker)


def publish_hexacopter_marker(publish, frame_id, ns, timestamp, marker_id, action, marker_scale, color) -> list[Marker]:
    """Publish six rotors and three arms of a hexacopter, with ids counting down from ``marker_id - 1``.

    The markers are always added; ``action`` is accepted for symmetry with the other functions.
    """
    sqrt2_2 = math.sqrt(2) / 2
    marker = Marker(
        frame_id=frame_id,
        stamp=timestamp,
        ns=ns,
        action=ACTION_ADD,
        id=marker_id,
        type=MarkerType.CYLINDER,
        scale=(0.2 * marker_scale, 0.2 * marker_scale, 0.01 * marker_scale),
        color=(0.4, 0.4, 0.4, 0.8),
    )
    sent: list[Marker] = []

    rotor_xy = [
        (0.19, 0.11),
        (0.19, -0.11),
        (0.0, 0.22),
        (0.0, -0.22),
        (-0.19, 0.11),
        (-0.19, -0.11),
    ]
    for x, y in rotor_xy:
        marker.position = (x * marker_scale, y * marker_scale, 0.0)
        marker.id -= 1
        sent.append(_emit(publish, marker))

    marker.type = MarkerType.CUBE
    marker.scale = (0.44 * marker_scale, 0.02 * marker_scale, 0.01 * marker_scale)
    marker.color = _rgba(color, 1.0)
    marker.position = (0.0, 0.0, -0.015 * marker_scale)

    for z, w in [(sqrt2_2, sqrt2_2), (0.2588, 0.9659), (-0.2588, 0.9659)]:
        marker.orientation = (0.0, 0.0, z, w)
        marker.id -= 1
        sent.append(_emit(publish, marker))
    return sent


def publish_camera_marker(publish, frame_id, ns, timestamp, marker_id, marker_scale, color) -> list[Marker]:
    """Publish a pyramid outline of a camera, with ids counting down from ``marker_id - 1``."""
    sqrt2_2 = math.sqrt(2) / 2
    r_w = 1.0
    z_plane = (r_w / 2.0) * marker_scale

    marker = Marker(
        frame_id=frame_id,
        stamp=timestamp,
        ns=ns,
        action=ACTION_ADD,
        id=marker_id,
        type=MarkerType.CUBE,
        position=(0.0, (r_w / 4.0) * marker_scale, z_plane),
        scale=(r_w * marker_scale, 0.04 * marker_scale, 0.04 * marker_scale),
        color=_rgba(color, 1.0),
        orientation=(0.0, 0.0, 0.0, 1.0),
    )
    sent: list[Marker] = []

    def emit() -> None:
        marker.id -= 1
        sent.append(_emit(publish, marker))

    emit()
    marker.position = (0.0, -(r_w / 4.0) * marker_scale, z_plane)
    emit()

    _, sy, sz = marker.scale
    marker.scale = ((r_w / 2.0) * marker_scale, sy, sz)
    marker.orientation = (0.0, 0.0, sqrt2_2, sqrt2_2)
    marker.position = ((r_w / 2.0) * marker_scale, 0.0, z_plane)
    emit()
    marker.position = (-(r_w / 2.0) * marker_scale, 0.0, z_plane)
    emit()

    _, sy, sz = marker.scale
    marker.scale = ((3.0 * r_w / 4.0) * marker_scale, sy, sz)
    edge_z = 0.5 * z_plane
    edges = [
        ((r_w / 4.0), (r_w / 8.0), (0.08198092, -0.34727674, 0.21462883, 0.9091823)),
        (-(r_w / 4.0), (r_w / 8.0), (0.08198092, 0.34727674, -0.21462883, 0.9091823)),
        (-(r_w / 4.0), -(r_w / 8.0), (-0.08198092, 0.34727674, 0.21462883, 0.9091823)),
        ((r_w / 4.0), -(r_w / 8.0), (-0.08198092, -0.34727674, -0.21462883, 0.9091823)),
    ]
    for x, y, quat in edges:
        marker.position = (x * marker_scale, y * marker_scale, edge_z)
        marker.orientation = quat
        emit()
    return sent


def publish_frame_marker(publish, rot, pos, ns, timestamp, marker_id, action, marker_scale, lifetime=0.0) -> list[Marker]:
    """Publish the z, x and y axes of a frame as blue, red and green arrows with consecutive ids."""
    r = np.asarray(rot, dtype=float)
    if r.shape != (3, 3):
        raise ValueError(f"expected a 3x3 rotation matrix, got shape {r.shape}")
    p = np.asarray(_vec3(pos))
    origin = (_f32(p[0]), _f32(p[1]), _f32(p[2]))

    marker = Marker(
        frame_id=WORLD_FRAME,
        stamp=timestamp,
        ns=ns,
        type=MarkerType.ARROW,
        action=action,
        scale=(0.5 * marker_scale, 0.5 * marker_scale, 0.0),
        lifetime=lifetime,
    )
    sent: list[Marker] = []

    for offset, (column, rgb) in enumerate([(2, (0.0, 0.0, 1.0)), (0, (1.0, 0.0, 0.0)), (1, (0.0, 1.0, 0.0))]):
        tip = tuple(_f32(p[i] + marker_scale * r[i, column]) for i in range(3))
        marker.id = marker_id + offset
        marker.points = [origin, tip]
        marker.color = (*rgb, 1.0)
        sent.append(_emit(publish, marker))
    return sent