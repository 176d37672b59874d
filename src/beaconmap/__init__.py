from beaconmap import scans
from beaconmap.api import load_resolution, max_origin_distance, part_one, part_two, save_resolution, unique_beacons
from beaconmap.core import DisconnectedNetworkError, OverlapCriteria, RigidTransform, find_overlap, resolve, rotation_catalog
from beaconmap.scans import Scanner, ScanParseError, load_scanner_report, parse_scanner_report

__all__ = [
    "scans",
    "Scanner",
    "ScanParseError",
    "parse_scanner_report",
    "load_scanner_report",
    "RigidTransform",
    "rotation_catalog",
    "OverlapCriteria",
    "find_overlap",
    "resolve",
    "DisconnectedNetworkError",
    "part_one",
    "part_two",
    "unique_beacons",
    "max_origin_distance",
    "save_resolution",
    "load_resolution",
]
