"""
The 24 orientation-preserving symmetries of the cube, as integer matrices.

A scanner may face along any of the six signed axes and be rolled by any of
four quarter turns around that axis, hence 6 * 4 = 24 orientations.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

IDENTITY = np.eye(3, dtype=np.int64)
X_90 = np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]], dtype=np.int64)
Y_90 = np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]], dtype=np.int64)
Z_90 = np.array([[0, -1, 0], [1, 0, 0], [0, 0, 1]], dtype=np.int64)


def is_proper_rotation(m: np.ndarray) -> bool:
    """True for 3x3 signed permutation matrices with determinant +1."""
    m = np.asarray(m)
    if m.shape != (3, 3) or not np.all(np.isin(m, (-1, 0, 1))):
        return False
    if not (np.all(np.abs(m).sum(axis=0) == 1) and np.all(np.abs(m).sum(axis=1) == 1)):
        return False
    return int(round(np.linalg.det(m))) == 1


def _powers(m: np.ndarray, n: int) -> list[np.ndarray]:
    out = [IDENTITY]
    for _ in range(n - 1):
        out.append(m @ out[-1])
    return out


@lru_cache(maxsize=1)
def rotation_catalog() -> tuple[np.ndarray, ...]:
    """
    Return the 24 rotations in a fixed order.

    Quarter turns about x are composed with the six "facing" matrices
    (identity, three turns about y, and +/-90 degrees about z), x-turn outer.
    """
    x_turns = _powers(X_90, 4)
    y_turns = _powers(Y_90, 4)
    facings = [*y_turns, Z_90, Z_90 @ Z_90 @ Z_90]

    out: list[np.ndarray] = []
    for x_turn in x_turns:
        for facing in facings:
            r = facing @ x_turn
            r.setflags(write=False)
            out.append(r)

    keys = {r.tobytes() for r in out}
    if len(keys) != 24 or not all(is_proper_rotation(r) for r in out):
        raise AssertionError("rotation catalog must hold 24 distinct proper rotations")
    return tuple(out)


def rotation_index(m: np.ndarray) -> int:
    """Position of `m` in `rotation_catalog()`; raises ValueError if absent."""
    m = np.asarray(m, dtype=np.int64)
    for i, r in enumerate(rotation_catalog()):
        if np.array_equal(r, m):
            return i
    raise ValueError("matrix is not one of the 24 axis rotations")
