from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from beaconmap.api.aggregate import max_origin_distance, unique_beacons
from beaconmap.api.model_io import save_resolution
from beaconmap.core.network import DisconnectedNetworkError, resolve
from beaconmap.core.overlap import OverlapCriteria
from beaconmap.logging_config import setup_logging
from beaconmap.scans import ScanParseError, load_scanner_report


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", type=Path, help="Scanner report (--- scanner N --- blocks of x,y,z lines).")
    p.add_argument("--min-overlap", type=int, default=12, help="Beacons two scanners must share to be aligned.")
    p.add_argument("--sensor-range", type=int, default=1000, help="Half-width of the cube each scanner observes.")
    p.add_argument("--verbose", "-v", action="store_true", help="Log resolver progress to stderr.")
    p.add_argument("--debug", action="store_true", help="Also log every accepted pairwise match.")
    p.add_argument("--log-file", type=Path, default=None)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="beaconmap")
    sub = parser.add_subparsers(dest="cmd", required=True)

    count = sub.add_parser("count-beacons", help="Resolve the network and print the number of distinct beacons.")
    _add_common(count)

    dist = sub.add_parser("max-distance", help="Resolve the network and print the largest scanner-to-scanner distance.")
    _add_common(dist)

    res = sub.add_parser("resolve", help="Resolve the network and print each scanner's position in the global frame.")
    _add_common(res)
    res.add_argument("--out-json", type=Path, default=None, help="Also write rotations/translations to this file.")

    args = parser.parse_args(argv)

    level = logging.INFO if args.verbose else logging.WARNING
    setup_logging(level, args.log_file, debug=args.debug)

    criteria = OverlapCriteria(min_overlap=args.min_overlap, sensor_range=args.sensor_range)
    try:
        scanners = resolve(load_scanner_report(args.input), criteria)
    except (ScanParseError, DisconnectedNetworkError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.cmd == "count-beacons":
        print(len(unique_beacons(scanners)))
        return 0

    if args.cmd == "max-distance":
        print(max_origin_distance(scanners))
        return 0

    if args.cmd == "resolve":
        for s in scanners:
            x, y, z = s.transform.origin  # type: ignore[union-attr]
            print(f"scanner {s.scanner_id}: {x},{y},{z}")
        if args.out_json:
            save_resolution(args.out_json, scanners)
            print(f"Wrote {args.out_json}")
        return 0

    raise AssertionError(f"Unhandled cmd: {args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())
