from beaconmap.api.aggregate import max_origin_distance, part_one, part_two, scanner_origins, unique_beacons
from beaconmap.api.model_io import load_resolution, save_resolution

__all__ = [
    "part_one",
    "part_two",
    "unique_beacons",
    "scanner_origins",
    "max_origin_distance",
    "load_resolution",
    "save_resolution",
]
