"""Whitespace-separated record formats for IMU and pose logs, and a reader for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

import numpy as np


def _take(tokens: Iterator[str], count: int) -> list[str]:
    out = []
    for _ in range(count):
        try:
            out.append(next(tokens))
        except StopIteration:
            raise ValueError("incomplete entry") from None
    return out


def _floats(tokens: Iterator[str], count: int) -> list[float]:
    return [float(tok) for tok in _take(tokens, count)]


def _quaternion(qx, qy, qz, qw) -> np.ndarray:
    q = np.array([qx, qy, qz, qw], dtype=float)
    norm = float(np.linalg.norm(q))
    return q / norm if norm > 0 else q


def _fmt(values: Iterable[float]) -> str:
    return " ".join(format(float(v), "g") for v in values)


@dataclass(eq=False)
class ImuRotvelLinacc:
    """IMU sample: angular velocity ``w`` and linear acceleration ``a``."""

    timestamp: float = 0.0
    w: np.ndarray = field(default_factory=lambda: np.zeros(3))
    a: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @classmethod
    def parse(cls, tokens) -> "ImuRotvelLinacc":
        it = iter(tokens)
        ts, wx, wy, wz, ax, ay, az = _floats(it, 7)
        return cls(ts, np.array([wx, wy, wz]), np.array([ax, ay, az]))

    def __str__(self) -> str:
        return _fmt([self.timestamp, *self.w, *self.a]) + "\n"


@dataclass(eq=False)
class PoseStamped:
    """Timestamped position ``t`` and unit quaternion ``q`` stored as (x, y, z, w)."""

    timestamp: float = 0.0
    t: np.ndarray = field(default_factory=lambda: np.zeros(3))
    q: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))

    @classmethod
    def parse(cls, tokens) -> "PoseStamped":
        it = iter(tokens)
        ts, tx, ty, tz, qx, qy, qz, qw = _floats(it, 8)
        return cls(ts, np.array([tx, ty, tz]), _quaternion(qx, qy, qz, qw))

    def __str__(self) -> str:
        return _fmt([self.timestamp, *self.t, *self.q]) + " \n"


@dataclass(eq=False)
class ImageNameAndPose:
    """Image file name with the timestamped pose of the camera."""

    timestamp: float = 0.0
    image_name: str = ""
    t: np.ndarray = field(default_factory=lambda: np.zeros(3))
    q: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))

    @classmethod
    def parse(cls, tokens) -> "ImageNameAndPose":
        it = iter(tokens)
        ts = _floats(it, 1)[0]
        name = _take(it, 1)[0]
        tx, ty, tz, qx, qy, qz, qw = _floats(it, 7)
        return cls(ts, name, np.array([tx, ty, tz]), _quaternion(qx, qy, qz, qw))

    def __str__(self) -> str:
        return (
            f"{format(float(self.timestamp), 'g')} {self.image_name} "
            + _fmt([*self.t, *self.q])
            + " \n"
        )


class FileReader:
    """Reads entries of ``entry_type`` one after another from a text file."""

    def __init__(self, path, entry_type):
        self.path = path
        self.entry_type = entry_type
        self.entry = None
        self.has_entry = False
        self._file = open(path, "r", encoding="utf-8")
        self._rest = ""

    def __enter__(self) -> "FileReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __iter__(self):
        while self.next():
            yield self.entry

    def close(self) -> None:
        self._file.close()

    def _peek(self) -> str:
        if self._rest:
            return self._rest[0]
        pos = self._file.tell()
        ch = self._file.read(1)
        self._file.seek(pos)
        return ch

    def _skip_line(self) -> None:
        if self._rest:
            self._rest = ""
        else:
            self._file.readline()

    def _next_token(self) -> str | None:
        while True:
            if not self._rest:
                line = self._file.readline()
                if not line:
                    return None
                self._rest = line
            stripped = self._rest.lstrip()
            if not stripped:
                self._rest = ""
                continue
            token = stripped.split(None, 1)[0]
            self._rest = stripped[len(token):]
            return token

    def _tokens(self, first: str) -> Iterator[str]:
        yield first
        while (token := self._next_token()) is not None:
            yield token

    def skip(self, num_lines: int) -> None:
        """Skip the rest of the current line and ``num_lines - 1`` further lines."""
        for _ in range(num_lines):
            self._skip_line()

    def skip_comments(self) -> None:
        """Skip lines that start with '#'."""
        while self._peek() == "#":
            self._skip_line()

    def next(self) -> bool:
        """Read the next entry; return False when the file holds no more."""
        first = self._next_token()
        if first is None:
            return False
        self.entry = self.entry_type.parse(self._tokens(first))
        self.has_entry = True
        return True

    def read_all_entries(self) -> list:
        """Return the current entry, if any, and all entries that follow it."""
        if not self.has_entry and not self.next():
            return []
        entries = [self.entry]
        while self.next():
            entries.append(self.entry)
        return entries