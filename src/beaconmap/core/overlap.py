from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from beaconmap.core.geometry import Point, RigidTransform
from beaconmap.core.rotations import rotation_catalog

if TYPE_CHECKING:
    from beaconmap.scans import Scanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapCriteria:
    """
    When two scanners count as aligned.

    - `min_overlap`: beacons that must coincide under the transform
    - `sensor_range`: half-width of the cube a scanner observes; points mapped
      outside it cannot be confirmed or refuted by the other scanner
    """

    min_overlap: int = 12
    sensor_range: int = 1000

    def __post_init__(self) -> None:
        if self.min_overlap < 1:
            raise ValueError("min_overlap must be >= 1")
        if self.sensor_range <= 0:
            raise ValueError("sensor_range must be > 0")


DEFAULT_CRITERIA = OverlapCriteria()


def _count_confirmed(
    transform: RigidTransform,
    source: np.ndarray,
    target: frozenset[Point],
    sensor_range: int,
) -> int | None:
    """
    Map `source` through `transform` and check it against `target`.

    Returns the number of in-range points found in `target`, or None as soon
    as one in-range point is missing (the target scanner would have seen it).
    """
    mapped = transform.apply(source)
    in_range = np.all(np.abs(mapped) <= sensor_range, axis=1)
    count = 0
    for x, y, z in mapped[in_range].tolist():
        if (x, y, z) not in target:
            return None
        count += 1
    return count


def _candidate_translations(rotated: np.ndarray, candidate: np.ndarray, min_votes: int) -> np.ndarray:
    """
    Translations b - R a over all anchor pairs (a-major order), keeping only
    those produced by at least `min_votes` pairs, in order of first occurrence.
    """
    offsets = (candidate[None, :, :] - rotated[:, None, :]).reshape(-1, 3)
    uniq, first, counts = np.unique(offsets, axis=0, return_index=True, return_counts=True)
    keep = counts >= min_votes
    order = np.argsort(first[keep], kind="stable")
    return uniq[keep][order]


def find_overlap(
    reference: Scanner,
    candidate: Scanner,
    criteria: OverlapCriteria = DEFAULT_CRITERIA,
) -> RigidTransform | None:
    """
    Find the transform taking `reference`'s local coordinates into
    `candidate`'s frame, or None if the two scanners do not overlap.

    Each (rotation, reference beacon, candidate beacon) triple fixes a
    translation hypothesis. A hypothesis is accepted when at least
    `criteria.min_overlap` reference beacons land on candidate beacons, no
    in-range reference beacon lands on empty space, and the inverse transform
    maps the candidate's in-range beacons back onto reference beacons.
    Rotations are tried in catalog order, anchors in sorted beacon order; the
    first accepted hypothesis wins.
    """
    ref = reference.beacon_array
    cand = candidate.beacon_array
    if ref.shape[0] < criteria.min_overlap or cand.shape[0] < criteria.min_overlap:
        return None

    for rot_idx, rotation in enumerate(rotation_catalog()):
        rotated = ref @ rotation.T
        # A translation supported by fewer anchor pairs cannot reach min_overlap.
        for translation in _candidate_translations(rotated, cand, criteria.min_overlap):
            transform = RigidTransform(rotation, translation)
            count = _count_confirmed(transform, ref, candidate.beacons, criteria.sensor_range)
            if count is None or count < criteria.min_overlap:
                continue
            if _count_confirmed(transform.inverse(), cand, reference.beacons, criteria.sensor_range) is None:
                continue
            logger.debug(
                "scanner %s -> %s: rotation #%d, translation %s, %d shared beacons",
                reference.scanner_id,
                candidate.scanner_id,
                rot_idx,
                translation.tolist(),
                count,
            )
            return transform
    return None
