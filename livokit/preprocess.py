"""Point classification types used when extracting features from lidar scans."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class LidarFeature(IntEnum):
    NOR = 0
    POSS_PLANE = 1
    REAL_PLANE = 2
    EDGE_JUMP = 3
    EDGE_PLANE = 4
    WIRE = 5
    ZERO_POINT = 6


class Surround(IntEnum):
    PREV = 0
    NEXT = 1


class EJump(IntEnum):
    NR_NOR = 0
    NR_ZERO = 1
    NR_180 = 2
    NR_INF = 3
    NR_BLIND = 4


def is_valid(a) -> bool:
    """True if the magnitude of ``a`` exceeds 1e8."""
    return abs(a) > 1e8


@dataclass
class OrgType:
    """Per-point geometric attributes gathered while classifying a scan line."""

    range: float = 0.0
    dista: float = 0.0
    angle: list[float] = field(default_factory=lambda: [0.0, 0.0])
    intersect: float = 2.0
    edj: list[EJump] = field(default_factory=lambda: [EJump.NR_NOR, EJump.NR_NOR])
    ftype: LidarFeature = LidarFeature.NOR