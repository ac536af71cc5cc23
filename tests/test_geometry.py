import numpy as np

from roomgrid.geometry import (
    TileRect,
    masks_overlap,
    normalize_rect,
    rect_contains,
    room_rect,
    union_rect,
)


def test_room_rect():
    rect = room_rect((3, 4), 2, 5)
    assert (rect.left, rect.top, rect.right, rect.bottom) == (3, 4, 5, 9)
    assert rect.contains_tile(4, 8)
    assert not rect.contains_tile(5, 8)


def test_normalize_rect_any_direction():
    expected = TileRect(1, 2, 4, 3)
    assert normalize_rect((1, 2), (5, 5)) == expected
    assert normalize_rect((5, 5), (1, 2)) == expected
    assert normalize_rect((1, 5), (5, 2)) == expected


def test_union_rect():
    assert union_rect([]) is None
    rect = union_rect([TileRect(0, 0, 2, 2), TileRect(5, 3, 1, 4)])
    assert rect == TileRect(0, 0, 6, 7)


def test_rect_contains_exact_and_partial():
    room = TileRect(2, 2, 2, 2)
    assert rect_contains(TileRect(2, 2, 2, 2), room)
    assert rect_contains(TileRect(0, 0, 10, 10), room)
    assert not rect_contains(TileRect(3, 2, 2, 2), room)
    assert not rect_contains(TileRect(4, 2, 2, 2), room)  # touching only


def test_rect_contains_degenerate_outer():
    assert not rect_contains(TileRect(2, 2, 0, 0), TileRect(2, 2, 1, 1))


def test_masks_overlap_uses_tiles_not_bounds():
    # L-shaped room, its empty corner at local (1, 0)
    l_shape = np.array([[1, 0], [1, 1]], dtype=bool)
    block = np.ones((1, 1), dtype=bool)
    assert not masks_overlap(l_shape, (0, 0), block, (1, 0))
    assert masks_overlap(l_shape, (0, 0), block, (1, 1))


def test_masks_touching_do_not_overlap():
    a = np.ones((2, 2), dtype=bool)
    assert not masks_overlap(a, (0, 0), a, (2, 0))
    assert masks_overlap(a, (0, 0), a, (1, 1))
