# src/roomgrid/geometry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
from shapely.geometry import Polygon, box as shapely_box
from shapely.ops import unary_union


@dataclass(frozen=True)
class TileRect:
    """Axis-aligned rectangle in grid tiles; right/bottom are exclusive."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def top_left(self) -> tuple[int, int]:
        return (self.left, self.top)

    def contains_tile(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def to_polygon(self) -> Polygon:
        return shapely_box(self.left, self.top, self.right, self.bottom)


def room_rect(origin: tuple[int, int], width: int, height: int) -> TileRect:
    """Create the rectangle covered by a room placed at ``origin``."""
    return TileRect(origin[0], origin[1], width, height)


def normalize_rect(anchor: tuple[int, int], release: tuple[int, int]) -> TileRect:
    """Rectangle spanned by two corners, whichever way the pointer moved."""
    left = min(anchor[0], release[0])
    top = min(anchor[1], release[1])
    return TileRect(left, top, abs(release[0] - anchor[0]), abs(release[1] - anchor[1]))


def union_rect(rects: Iterable[TileRect]) -> Optional[TileRect]:
    """Minimal rectangle covering all ``rects``; None when there are none."""
    polys = [r.to_polygon() for r in rects]
    if not polys:
        return None
    minx, miny, maxx, maxy = unary_union(polys).bounds
    return TileRect(int(minx), int(miny), int(maxx - minx), int(maxy - miny))


def rect_contains(outer: TileRect, inner: TileRect) -> bool:
    """Check if ``inner`` lies entirely inside ``outer``.

    Partial overlap does not count; a degenerate ``outer`` contains nothing.
    """
    outer_poly = outer.to_polygon()
    inner_poly = inner.to_polygon()
    if outer_poly.is_empty or not outer_poly.intersects(inner_poly):
        return False
    inter = outer_poly.intersection(inner_poly)
    return inter.area > 0 and inter.equals(inner_poly)


def masks_overlap(
    mask_a: np.ndarray,
    origin_a: tuple[int, int],
    mask_b: np.ndarray,
    origin_b: tuple[int, int],
) -> bool:
    """Check if two placed tile masks claim the same grid tile.

    Masks are boolean arrays of shape (height, width); touching rooms and
    empty mask tiles inside the bounding boxes do not overlap.
    """
    ax, ay = origin_a
    bx, by = origin_b
    ha, wa = mask_a.shape
    hb, wb = mask_b.shape

    left, right = max(ax, bx), min(ax + wa, bx + wb)
    top, bottom = max(ay, by), min(ay + ha, by + hb)
    if left >= right or top >= bottom:
        return False

    sub_a = mask_a[top - ay:bottom - ay, left - ax:right - ax]
    sub_b = mask_b[top - by:bottom - by, left - bx:right - bx]
    return bool(np.logical_and(sub_a, sub_b).any())
