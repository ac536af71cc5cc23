"""Reasons a map cannot be exported yet."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from roomgrid.catalog import RoomCatalog
from roomgrid.geometry import TileRect


class IssueKind(str, Enum):
    DOOR_DISCONNECTED = "door_disconnected"
    ROOM_MISSING = "room_missing"
    ROOM_OVERLAP = "room_overlap"
    MAP_BOUNDS = "map_bounds"


@dataclass(frozen=True)
class MapIssue:
    kind: IssueKind
    rooms: tuple[int, ...] = ()
    door: Optional[int] = None
    bounds: Optional[TileRect] = None

    def message(self, catalog: RoomCatalog, map_max_size: int) -> str:
        names = [catalog.room(idx).name for idx in self.rooms]
        if self.kind == IssueKind.DOOR_DISCONNECTED:
            return f"Door {self.door} of {names[0]} is not connected"
        if self.kind == IssueKind.ROOM_MISSING:
            return f"Room is missing from map: {names[0]}"
        if self.kind == IssueKind.ROOM_OVERLAP:
            return f"Rooms are overlapping: {names[0]} x {names[1]}"
        w, h = self.bounds.width, self.bounds.height
        return (
            f"Map exceeds maximum size: Currently ({w}, {h}), "
            f"Maximum: ({map_max_size}, {map_max_size})"
        )


def door_disconnected(room_idx: int, door_idx: int) -> MapIssue:
    return MapIssue(IssueKind.DOOR_DISCONNECTED, rooms=(room_idx,), door=door_idx)


def room_missing(room_idx: int) -> MapIssue:
    return MapIssue(IssueKind.ROOM_MISSING, rooms=(room_idx,))


def room_overlap(room_a: int, room_b: int) -> MapIssue:
    return MapIssue(IssueKind.ROOM_OVERLAP, rooms=(min(room_a, room_b), max(room_a, room_b)))


def map_bounds(bounds: TileRect) -> MapIssue:
    return MapIssue(IssueKind.MAP_BOUNDS, bounds=bounds)
