import numpy as np
import pytest

from beaconmap.core.geometry import RigidTransform
from beaconmap.core.overlap import OverlapCriteria, find_overlap
from beaconmap.core.rotations import rotation_catalog
from beaconmap.scans import Scanner
from synthetic import EXAMPLE_ORIGINS, chain_network, load_example, unique_points


def test_find_overlap_recovers_known_transform():
    scanners, truths = chain_network([12])
    match = find_overlap(scanners[1], scanners[0])
    assert match == truths[1]


def test_find_overlap_direction():
    # The result maps the first argument's frame into the second's.
    scanners, truths = chain_network([14], rotation_ids=[4, 21])
    forward = find_overlap(scanners[1], scanners[0])
    backward = find_overlap(scanners[0], scanners[1])
    expected = truths[0].inverse().compose(truths[1])
    assert forward == expected
    assert backward == expected.inverse()


@pytest.mark.parametrize("rot_id", range(24))
def test_find_overlap_every_rotation_full_overlap(rot_id):
    rng = np.random.default_rng(rot_id)
    pts = unique_points(rng, 15, (-800, -800, -800), (800, 800, 800))
    truth = RigidTransform(rotation_catalog()[rot_id], (31, -47, 5))
    a = Scanner.from_points(0, pts)
    b = Scanner.from_points(1, truth.inverse().apply(pts))
    assert find_overlap(b, a) == truth


def test_example_pair_zero_one():
    scanners = load_example()
    match = find_overlap(scanners[1], scanners[0])
    assert match is not None
    assert match.origin == EXAMPLE_ORIGINS[1]
    assert np.array_equal(match.rotation, np.diag([-1, 1, -1]))


def test_too_few_beacons_is_not_an_error():
    pts = [(i, 2 * i, 3 * i) for i in range(11)]
    a = Scanner.from_points(0, pts)
    b = Scanner.from_points(1, pts)
    assert find_overlap(a, b) is None
    assert find_overlap(a, b, OverlapCriteria(min_overlap=11)) == RigidTransform.identity()


def test_unrelated_scanners_do_not_overlap():
    rng = np.random.default_rng(7)
    a = Scanner.from_points(0, unique_points(rng, 25, (-1000, -1000, -1000), (1000, 1000, 1000)))
    b = Scanner.from_points(1, unique_points(rng, 25, (-1000, -1000, -1000), (1000, 1000, 1000)))
    assert find_overlap(a, b) is None


def test_in_range_beacon_missing_from_candidate_rejects_match():
    scanners, truths = chain_network([12])
    # A beacon scanner 0 would have to see, but does not report.
    extra = truths[1].inverse().apply_point((0, 0, 0))
    tampered = Scanner(1, scanners[1].beacons | {extra})
    assert find_overlap(tampered, scanners[0]) is None
    # Same beacon outside scanner 0's cube cannot be checked, so the match stands.
    far = truths[1].inverse().apply_point((-1500, 0, 0))
    assert find_overlap(Scanner(1, scanners[1].beacons | {far}), scanners[0]) == truths[1]


def test_candidate_beacon_missing_from_reference_rejects_match():
    scanners, truths = chain_network([12])
    # Lies at scanner 1's origin: outside scanner 0's cube, so only the
    # mapping back into scanner 1's frame can refute it.
    extra = truths[1].apply_point((0, 0, 0))
    tampered = Scanner(0, scanners[0].beacons | {extra})
    assert find_overlap(scanners[1], tampered) is None
    assert find_overlap(scanners[1], scanners[0]) == truths[1]


def test_criteria_validation():
    with pytest.raises(ValueError):
        OverlapCriteria(min_overlap=0)
    with pytest.raises(ValueError):
        OverlapCriteria(sensor_range=0)
