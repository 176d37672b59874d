from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

Point = tuple[int, int, int]


def as_point_array(points: Iterable[Point] | np.ndarray) -> np.ndarray:
    """Stack points into an (N,3) int64 array (an empty input gives shape (0,3))."""
    if isinstance(points, np.ndarray):
        arr = points
    else:
        arr = np.array(list(points), dtype=np.int64)
    arr = np.asarray(arr, dtype=np.int64)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"points must be (N,3), got {arr.shape}")
    return arr


def to_points(arr: np.ndarray) -> list[Point]:
    return [(int(x), int(y), int(z)) for x, y, z in np.asarray(arr).reshape(-1, 3)]


def manhattan_distance(a: Point, b: Point) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) + abs(a[2] - b[2])


@dataclass(frozen=True, eq=False)
class RigidTransform:
    """
    Integer rigid transform X' = R X + t.

    `rotation` is a (3,3) signed permutation matrix and `translation` a (3,)
    vector, both int64 and read-only. `a.compose(b)` applies `b` first.
    """

    rotation: np.ndarray  # (3,3)
    translation: np.ndarray  # (3,)

    def __post_init__(self) -> None:
        rotation = np.array(self.rotation, dtype=np.int64)
        translation = np.array(self.translation, dtype=np.int64)
        if rotation.shape != (3, 3):
            raise ValueError(f"rotation must be (3,3), got {rotation.shape}")
        translation = translation.reshape(-1)
        if translation.shape != (3,):
            raise ValueError(f"translation must have 3 entries, got {translation.shape}")
        rotation.setflags(write=False)
        translation.setflags(write=False)
        object.__setattr__(self, "rotation", rotation)
        object.__setattr__(self, "translation", translation)

    @classmethod
    def identity(cls) -> "RigidTransform":
        return cls(np.eye(3, dtype=np.int64), np.zeros((3,), dtype=np.int64))

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "RigidTransform":
        """Build from a 4x4 homogeneous matrix with last row (0,0,0,1)."""
        m = np.asarray(matrix, dtype=np.int64)
        if m.shape != (4, 4) or not np.array_equal(m[3], [0, 0, 0, 1]):
            raise ValueError("expected a 4x4 homogeneous matrix with last row (0,0,0,1)")
        return cls(m[:3, :3], m[:3, 3])

    def as_matrix(self) -> np.ndarray:
        m = np.eye(4, dtype=np.int64)
        m[:3, :3] = self.rotation
        m[:3, 3] = self.translation
        return m

    @property
    def origin(self) -> Point:
        """Image of the local origin (0,0,0)."""
        return to_points(self.translation)[0]

    def apply(self, points: np.ndarray) -> np.ndarray:
        pts = as_point_array(points)
        return pts @ self.rotation.T + self.translation

    def apply_point(self, point: Point) -> Point:
        return to_points(self.rotation @ np.asarray(point, dtype=np.int64) + self.translation)[0]

    def compose(self, other: "RigidTransform") -> "RigidTransform":
        return RigidTransform(
            self.rotation @ other.rotation,
            self.rotation @ other.translation + self.translation,
        )

    def inverse(self) -> "RigidTransform":
        # Signed permutations are orthogonal: R^-1 = R^T.
        r_inv = self.rotation.T
        return RigidTransform(r_inv, -(r_inv @ self.translation))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RigidTransform):
            return NotImplemented
        return bool(
            np.array_equal(self.rotation, other.rotation) and np.array_equal(self.translation, other.translation)
        )

    def __repr__(self) -> str:
        return f"RigidTransform(rotation={self.rotation.tolist()}, translation={self.translation.tolist()})"
