import numpy as np

from beaconmap.core.rotations import IDENTITY, X_90, Y_90, Z_90, is_proper_rotation, rotation_catalog, rotation_index


def test_catalog_has_24_distinct_proper_rotations():
    rots = rotation_catalog()
    assert len(rots) == 24
    assert len({r.tobytes() for r in rots}) == 24
    assert all(is_proper_rotation(r) for r in rots)
    assert rotation_index(IDENTITY) == 0


def test_transpose_is_inverse():
    for r in rotation_catalog():
        assert np.array_equal(r.T @ r, IDENTITY)
        assert np.array_equal(r @ r.T, IDENTITY)


def test_catalog_is_closed_under_composition():
    keys = {r.tobytes() for r in rotation_catalog()}
    for a in rotation_catalog():
        for b in rotation_catalog():
            assert (a @ b).tobytes() in keys


def test_quarter_turns_have_order_four():
    for g in (X_90, Y_90, Z_90):
        assert not np.array_equal(g @ g, IDENTITY)
        assert np.array_equal(g @ g @ g @ g, IDENTITY)


def test_is_proper_rotation_rejects_reflections_and_scaling():
    assert not is_proper_rotation(np.diag([-1, 1, 1]))
    assert not is_proper_rotation(np.diag([2, 1, 1]))
    assert not is_proper_rotation(np.ones((3, 3), dtype=np.int64))
    assert not is_proper_rotation(np.eye(4, dtype=np.int64))
    assert is_proper_rotation(np.diag([-1, -1, 1]))


def test_catalog_is_cached_and_read_only():
    assert rotation_catalog() is rotation_catalog()
    assert not rotation_catalog()[5].flags.writeable
