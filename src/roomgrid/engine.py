# src/roomgrid/engine.py
"""Door connectivity engine.

Keeps the set of invalid (orphaned) doors consistent with the room layout.
Every placed door is always in exactly one of two states: linked by a
connection to a matching neighbor, or listed in ``invalid_doors``. Doors of
missing rooms are in neither.

Moving a room only writes its origin. Connections are recomputed by
``snap_room``, which touches the moved room's doors and the doors they were
linked to, never the whole board.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from roomgrid import issues
from roomgrid.catalog import RoomCatalog
from roomgrid.config import EditorConfig
from roomgrid.errors import InternalConsistencyError, LayoutError
from roomgrid.geometry import TileRect, masks_overlap, room_rect, union_rect
from roomgrid.issues import MapIssue
from roomgrid.models import Connection, DoorPtrPair, MapLayout

logger = logging.getLogger(__name__)

DoorRef = tuple[int, int]


class MapEditor:
    """Owns the layout and the derived door validity sets."""

    def __init__(
        self,
        catalog: RoomCatalog,
        layout: Optional[MapLayout] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or EditorConfig()

        self.invalid_doors: set[DoorRef] = set()
        self.missing_rooms: set[int] = set()
        self.room_overlaps: set[tuple[int, int]] = set()

        self._rooms: list[tuple[int, int]] = []
        # Ordered set of connections plus a lookup from either end
        self._doors: dict[Connection, None] = {}
        self._links: dict[DoorPtrPair, Connection] = {}

        if layout is None:
            layout = MapLayout(rooms=[(0, 0)] * catalog.room_count)
        self.load_layout(layout)

    # ------------------------------------------------------------------ #
    # Loading / snapshots
    # ------------------------------------------------------------------ #

    def load_layout(self, layout: MapLayout) -> None:
        """Replace the whole editor state with ``layout``.

        Missing rooms are erased, then every unconnected door of a placed
        room is validated against the board.
        """
        n = self.catalog.room_count
        if len(layout.rooms) != n:
            raise LayoutError(
                f"layout places {len(layout.rooms)} rooms, catalog has {n}"
            )
        for room_idx in layout.missing_rooms:
            if not 0 <= room_idx < n:
                raise LayoutError(f"missing room index {room_idx} out of range")

        # Check every saved connection before touching the current state
        seen: set[DoorPtrPair] = set()
        for conn in layout.doors:
            for pair in (conn.src, conn.dst):
                if not self.catalog.has_door(pair):
                    raise LayoutError(f"connection references unknown door {pair}")
                if pair in seen:
                    raise LayoutError(f"door {pair} has more than one connection")
                seen.add(pair)
            src = self.catalog.door(*self.catalog.locate_door(conn.src))
            dst = self.catalog.door(*self.catalog.locate_door(conn.dst))
            if src.direction.opposite() != dst.direction:
                raise LayoutError(
                    f"connection {conn.src} <-> {conn.dst} joins "
                    f"{src.direction.value} and {dst.direction.value} doors"
                )

        self.invalid_doors.clear()
        self.missing_rooms.clear()
        self.room_overlaps.clear()
        self._doors.clear()
        self._links.clear()
        self._rooms = list(layout.rooms)

        for conn in layout.doors:
            self._link(conn)

        for room_idx in layout.missing_rooms:
            self.erase_room(room_idx)

        orphaned: set[DoorRef] = set()
        for room_idx, room in enumerate(self.catalog.rooms):
            if room_idx in self.missing_rooms:
                continue
            self._update_overlaps(room_idx)
            for door_idx, door in enumerate(room.doors):
                if door.ptr_pair not in self._links:
                    orphaned.add((room_idx, door_idx))
        self.invalid_doors.update(orphaned)
        self._resolve_orphans(orphaned)

        logger.info(
            "Loaded layout: %d rooms, %d connections, %d invalid doors, %d missing rooms",
            n, len(self._doors), len(self.invalid_doors), len(self.missing_rooms),
        )

    def snapshot(self) -> MapLayout:
        return MapLayout(
            rooms=list(self._rooms),
            doors=list(self._doors),
            missing_rooms=sorted(self.missing_rooms),
        )

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def rooms(self) -> tuple[tuple[int, int], ...]:
        return tuple(self._rooms)

    @property
    def connections(self) -> list[Connection]:
        return list(self._doors)

    def room_origin(self, room_idx: int) -> tuple[int, int]:
        self.catalog.room(room_idx)
        return self._rooms[room_idx]

    def room_bounds(self, room_idx: int) -> TileRect:
        room = self.catalog.room(room_idx)
        return room_rect(self._rooms[room_idx], room.width, room.height)

    def bbox_of(self, room_indices: Iterable[int]) -> Optional[TileRect]:
        """Minimal rectangle covering the given rooms, None for no rooms."""
        return union_rect(self.room_bounds(idx) for idx in room_indices)

    def get_room_at(self, x: int, y: int) -> Optional[int]:
        """First placed room whose rectangle covers tile (x, y)."""
        for room_idx in range(self.catalog.room_count):
            if room_idx in self.missing_rooms:
                continue
            if self.room_bounds(room_idx).contains_tile(x, y):
                return room_idx
        return None

    def door_connection(self, room_idx: int, door_idx: int) -> Optional[Connection]:
        return self._links.get(self.catalog.door(room_idx, door_idx).ptr_pair)

    def connected_door(self, room_idx: int, door_idx: int) -> Optional[DoorRef]:
        pair = self.catalog.door(room_idx, door_idx).ptr_pair
        conn = self._links.get(pair)
        if conn is None:
            return None
        return self.catalog.locate_door(conn.other_end(pair))

    def is_valid(self) -> bool:
        """True when every door is connected and no room is missing."""
        return not self.invalid_doors and not self.missing_rooms

    def issues(self) -> list[MapIssue]:
        """Everything that blocks exporting the map, in a stable order."""
        found = [issues.door_disconnected(r, d) for r, d in sorted(self.invalid_doors)]
        found += [issues.room_missing(r) for r in sorted(self.missing_rooms)]
        found += [issues.room_overlap(a, b) for a, b in sorted(self.room_overlaps)]

        placed = [idx for idx in range(self.catalog.room_count) if idx not in self.missing_rooms]
        bounds = self.bbox_of(placed)
        limit = self.config.map_max_size
        if bounds is not None and (bounds.width > limit or bounds.height > limit):
            found.append(issues.map_bounds(bounds))
        return found

    def is_exportable(self) -> bool:
        return not self.issues()

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def move_room(self, room_idx: int, x: int, y: int) -> None:
        """Set a room's origin. Call ``snap_room`` once the position is final."""
        self.catalog.room(room_idx)
        if x < 0 or y < 0:
            raise InternalConsistencyError(f"room {room_idx} moved to negative origin ({x}, {y})")
        self._rooms[room_idx] = (x, y)

    def snap_room(self, room_idx: int) -> None:
        """Recompute every connection affected by ``room_idx``'s position."""
        room = self.catalog.room(room_idx)
        if room_idx in self.missing_rooms:
            logger.debug("Skipping snap of missing room %d", room_idx)
            return

        self._update_overlaps(room_idx)

        orphaned: set[DoorRef] = set()
        for door_idx, door in enumerate(room.doors):
            conn = self._links.get(door.ptr_pair)
            if conn is not None:
                self._unlink(conn)
                other = self.catalog.locate_door(conn.other_end(door.ptr_pair))
                orphaned.add(other)
                self.invalid_doors.add(other)
            orphaned.add((room_idx, door_idx))
            self.invalid_doors.add((room_idx, door_idx))

        self._resolve_orphans(orphaned)

    def validate_door(self, room_idx: int, door_idx: int) -> Optional[DoorRef]:
        """Try to connect a door to an invalid door facing it.

        Returns the matched ``(room_idx, door_idx)``, or None when the door
        stays invalid. The first match in sorted order wins.
        """
        door = self.catalog.door(room_idx, door_idx)
        if room_idx in self.missing_rooms:
            return None
        if door.ptr_pair in self._links:
            return self.connected_door(room_idx, door_idx)

        dx, dy = door.direction.unit_vector()
        room_x, room_y = self._rooms[room_idx]
        target = (room_x + door.x + dx, room_y + door.y + dy)
        grid = self.config.grid_size
        if not (0 <= target[0] < grid and 0 <= target[1] < grid):
            self.invalid_doors.add((room_idx, door_idx))
            return None

        wanted = door.direction.opposite()
        for other_room, other_door_idx in sorted(self.invalid_doors):
            other_door = self.catalog.door(other_room, other_door_idx)
            if other_door.direction != wanted:
                continue
            other_x, other_y = self._rooms[other_room]
            if (other_x + other_door.x, other_y + other_door.y) != target:
                continue

            self.invalid_doors.discard((room_idx, door_idx))
            self.invalid_doors.discard((other_room, other_door_idx))
            self._link(Connection(
                src=door.ptr_pair,
                dst=other_door.ptr_pair,
                bidirectional=not (door.is_one_way or other_door.is_one_way),
            ))
            return (other_room, other_door_idx)

        self.invalid_doors.add((room_idx, door_idx))
        return None

    def erase_room(self, room_idx: int) -> None:
        """Remove a room from play, orphaning whatever it was connected to."""
        room = self.catalog.room(room_idx)
        if room_idx in self.missing_rooms:
            return
        self.missing_rooms.add(room_idx)

        for door_idx, door in enumerate(room.doors):
            self.invalid_doors.discard((room_idx, door_idx))
            conn = self._links.get(door.ptr_pair)
            if conn is not None:
                self._unlink(conn)
                self.invalid_doors.add(
                    self.catalog.locate_door(conn.other_end(door.ptr_pair))
                )
        self._update_overlaps(room_idx)
        logger.info("Erased room %d (%s)", room_idx, room.name)

    def spawn_room(self, room_idx: int) -> None:
        """Bring a missing room back and connect it where it stands."""
        self.catalog.room(room_idx)
        self.missing_rooms.discard(room_idx)
        self.snap_room(room_idx)
        logger.info("Spawned room %d at %s", room_idx, self._rooms[room_idx])

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _resolve_orphans(self, orphaned: set[DoorRef]) -> None:
        while orphaned:
            entry = min(orphaned)
            match = self.validate_door(*entry)
            if match is not None:
                orphaned.discard(match)
            orphaned.discard(entry)

    def _link(self, conn: Connection) -> None:
        self._doors[conn] = None
        self._links[conn.src] = conn
        self._links[conn.dst] = conn
        logger.debug("Connected %s <-> %s (bidirectional=%s)", conn.src, conn.dst, conn.bidirectional)

    def _unlink(self, conn: Connection) -> None:
        del self._doors[conn]
        del self._links[conn.src]
        del self._links[conn.dst]
        logger.debug("Disconnected %s <-> %s", conn.src, conn.dst)

    def _update_overlaps(self, room_idx: int) -> None:
        self.room_overlaps = {
            pair for pair in self.room_overlaps if room_idx not in pair
        }
        if room_idx in self.missing_rooms:
            return

        mask = self.catalog.mask(room_idx)
        origin = self._rooms[room_idx]
        for other_idx in range(self.catalog.room_count):
            if other_idx == room_idx or other_idx in self.missing_rooms:
                continue
            if masks_overlap(mask, origin, self.catalog.mask(other_idx), self._rooms[other_idx]):
                self.room_overlaps.add((min(room_idx, other_idx), max(room_idx, other_idx)))
