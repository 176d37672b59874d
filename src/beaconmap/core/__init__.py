"""
Geometry and matching core: integer rigid transforms, the cube rotation group,
pairwise overlap search and network resolution.
"""

from beaconmap.core.geometry import Point, RigidTransform, manhattan_distance
from beaconmap.core.network import DisconnectedNetworkError, resolve
from beaconmap.core.overlap import DEFAULT_CRITERIA, OverlapCriteria, find_overlap
from beaconmap.core.rotations import rotation_catalog

__all__ = [
    "Point",
    "RigidTransform",
    "manhattan_distance",
    "rotation_catalog",
    "OverlapCriteria",
    "DEFAULT_CRITERIA",
    "find_overlap",
    "DisconnectedNetworkError",
    "resolve",
]
