from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Sequence

from beaconmap.core.geometry import RigidTransform
from beaconmap.core.overlap import DEFAULT_CRITERIA, OverlapCriteria, find_overlap

if TYPE_CHECKING:
    from beaconmap.scans import Scanner

logger = logging.getLogger(__name__)


class DisconnectedNetworkError(RuntimeError):
    """Some scanners share no chain of overlaps with the anchor scanner."""

    def __init__(self, unplaced_ids: Sequence[int]):
        self.unplaced_ids = tuple(unplaced_ids)
        super().__init__(f"could not place scanners {list(self.unplaced_ids)} relative to the anchor scanner")


def resolve(scanners: Sequence[Scanner], criteria: OverlapCriteria = DEFAULT_CRITERIA) -> list[Scanner]:
    """
    Place every scanner in the frame of the first one (the anchor).

    Scanners move between three groups:
    - unplaced: transform unknown
    - frontier: transform known, not yet used as a base for matching
    - resolved: transform known and already used as a base

    Scanners that already carry a transform keep it and start in the frontier.
    Returns the scanners in input order, all placed; raises
    DisconnectedNetworkError if some cannot be reached from the anchor.
    """
    scanners = list(scanners)
    if not scanners:
        return []

    anchor = scanners[0]
    if anchor.transform is None:
        anchor.place(RigidTransform.identity())

    frontier: deque[Scanner] = deque(s for s in scanners if s.transform is not None)
    unplaced: list[Scanner] = [s for s in scanners if s.transform is None]
    resolved: list[Scanner] = []

    while frontier:
        base = frontier.popleft()
        base_transform = base.transform
        assert base_transform is not None

        still_unplaced: list[Scanner] = []
        for scanner in unplaced:
            match = find_overlap(scanner, base, criteria)
            if match is None:
                still_unplaced.append(scanner)
                continue
            placed = base_transform.compose(match)
            scanner.place(placed)
            frontier.append(scanner)
            logger.info("placed scanner %s via scanner %s at %s", scanner.scanner_id, base.scanner_id, placed.origin)
        unplaced = still_unplaced
        resolved.append(base)

    if unplaced:
        ids = [s.scanner_id for s in unplaced]
        logger.error("network is disconnected: %d scanner(s) unplaced %s", len(ids), ids)
        raise DisconnectedNetworkError(ids)

    logger.info("resolved %d scanners", len(resolved))
    return scanners
