import numpy as np
import pytest

from beaconmap.core.geometry import RigidTransform
from beaconmap.scans import ScanParseError, Scanner, format_scanner_report, parse_scanner_report


def test_parse_scanner_report_ok():
    scanners = parse_scanner_report(
        "--- scanner 0 ---\n"
        "0,2,0\n"
        "4,1,0\n"
        "3,3,0\n"
        "\n"
        "--- scanner 1 ---\n"
        "-1,-1,0\n"
        "-5,0,0\n"
        "-5,0,0\n"
    )
    assert [s.scanner_id for s in scanners] == [0, 1]
    assert scanners[0].beacons == frozenset({(0, 2, 0), (4, 1, 0), (3, 3, 0)})
    # duplicates collapse
    assert len(scanners[1]) == 2
    assert all(s.transform is None for s in scanners)


def test_beacon_array_is_sorted():
    s = Scanner(3, frozenset({(5, 0, 0), (-1, 2, 3), (-1, 0, 9)}))
    assert s.beacon_array.tolist() == [[-1, 0, 9], [-1, 2, 3], [5, 0, 0]]
    assert s.beacon_array.dtype == np.int64


@pytest.mark.parametrize(
    "text",
    [
        "1,2,3\n",
        "--- scanner 0 ---\n1,2\n",
        "--- scanner 0 ---\n1,2,x\n",
        "--- scanner 0 ---\n1,2,3\n\n--- scanner 0 ---\n4,5,6\n",
        "--- scanner 0 ---\n1,2,3\n\n4,5,6\n",
    ],
)
def test_parse_scanner_report_rejects_malformed_input(text):
    with pytest.raises(ScanParseError):
        parse_scanner_report(text)


def test_format_and_parse_agree():
    scanners = [Scanner(0, frozenset({(1, 2, 3), (-4, 5, -6)})), Scanner(7, frozenset({(0, 0, 0)}))]
    back = parse_scanner_report(format_scanner_report(scanners))
    assert [(s.scanner_id, s.beacons) for s in back] == [(s.scanner_id, s.beacons) for s in scanners]


def test_place_is_write_once():
    s = Scanner.from_points(0, [(1, 1, 1)])
    s.place(RigidTransform.identity())
    assert s.is_placed
    with pytest.raises(ValueError):
        s.place(RigidTransform.identity())
