from __future__ import annotations

from itertools import combinations
from typing import Sequence

from beaconmap.core.geometry import Point, manhattan_distance, to_points
from beaconmap.core.network import resolve
from beaconmap.core.overlap import DEFAULT_CRITERIA, OverlapCriteria
from beaconmap.scans import Scanner


def _require_placed(scanners: Sequence[Scanner]) -> None:
    missing = [s.scanner_id for s in scanners if s.transform is None]
    if missing:
        raise ValueError(f"scanners not placed: {missing}")


def unique_beacons(scanners: Sequence[Scanner]) -> set[Point]:
    """All beacons in the global frame, deduplicated by exact coordinates."""
    _require_placed(scanners)
    out: set[Point] = set()
    for s in scanners:
        out.update(to_points(s.transform.apply(s.beacon_array)))  # type: ignore[union-attr]
    return out


def scanner_origins(scanners: Sequence[Scanner]) -> list[Point]:
    _require_placed(scanners)
    return [s.transform.origin for s in scanners]  # type: ignore[union-attr]


def max_origin_distance(scanners: Sequence[Scanner]) -> int:
    """Largest Manhattan distance between two scanner origins (0 for fewer than two)."""
    origins = scanner_origins(scanners)
    return max((manhattan_distance(a, b) for a, b in combinations(origins, 2)), default=0)


def _ensure_resolved(scanners: Sequence[Scanner], criteria: OverlapCriteria) -> Sequence[Scanner]:
    if all(s.transform is not None for s in scanners):
        return scanners
    return resolve(scanners, criteria)


def part_one(scanners: Sequence[Scanner], criteria: OverlapCriteria = DEFAULT_CRITERIA) -> int:
    """Number of distinct beacons across the whole network."""
    return len(unique_beacons(_ensure_resolved(scanners, criteria)))


def part_two(scanners: Sequence[Scanner], criteria: OverlapCriteria = DEFAULT_CRITERIA) -> int:
    """Largest Manhattan distance between any two scanners."""
    return max_origin_distance(_ensure_resolved(scanners, criteria))
