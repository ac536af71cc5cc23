# src/roomgrid/catalog.py
"""Read-only room catalog with the reverse door-id-pair index."""
from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from roomgrid.errors import CatalogError, InternalConsistencyError
from roomgrid.models import Door, DoorPtrPair, RoomCatalogData, RoomGeometry

logger = logging.getLogger(__name__)


class RoomCatalog:
    """Fixed room geometry, indexed by room index.

    The reverse index from door-id-pair to ``(room_idx, door_idx)`` is built
    once here and never changes.
    """

    def __init__(self, rooms: list[RoomGeometry]) -> None:
        self.rooms: tuple[RoomGeometry, ...] = tuple(rooms)
        self._door_index: dict[DoorPtrPair, tuple[int, int]] = {}
        self._masks: list[np.ndarray] = []

        for room_idx, room in enumerate(self.rooms):
            for door_idx, door in enumerate(room.doors):
                pair = door.ptr_pair
                if pair in self._door_index:
                    other_room, other_door = self._door_index[pair]
                    raise CatalogError(
                        f"door id pair {pair} used by room {other_room} door "
                        f"{other_door} and room {room_idx} door {door_idx}"
                    )
                self._door_index[pair] = (room_idx, door_idx)
            self._masks.append(np.asarray(room.map, dtype=bool))

        logger.debug(
            "Catalog built: %d rooms, %d doors", len(self.rooms), len(self._door_index)
        )

    @classmethod
    def from_json(cls, text: str) -> RoomCatalog:
        try:
            data = RoomCatalogData.model_validate_json(text)
        except ValidationError as e:
            raise CatalogError(f"invalid room catalog: {e}") from e
        return cls(data.rooms)

    @classmethod
    def load(cls, path: str | Path) -> RoomCatalog:
        return cls.from_json(Path(path).read_text())

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    def __len__(self) -> int:
        return len(self.rooms)

    def room(self, room_idx: int) -> RoomGeometry:
        if not 0 <= room_idx < len(self.rooms):
            raise InternalConsistencyError(f"room index {room_idx} out of range")
        return self.rooms[room_idx]

    def door(self, room_idx: int, door_idx: int) -> Door:
        doors = self.room(room_idx).doors
        if not 0 <= door_idx < len(doors):
            raise InternalConsistencyError(
                f"door index {door_idx} out of range for room {room_idx}"
            )
        return doors[door_idx]

    def mask(self, room_idx: int) -> np.ndarray:
        """Boolean tile mask of shape (height, width)."""
        self.room(room_idx)
        return self._masks[room_idx]

    def has_door(self, pair: DoorPtrPair) -> bool:
        return pair in self._door_index

    def locate_door(self, pair: DoorPtrPair) -> tuple[int, int]:
        """Resolve a door-id-pair to its owning ``(room_idx, door_idx)``."""
        try:
            return self._door_index[pair]
        except KeyError:
            raise InternalConsistencyError(
                f"door id pair {pair} is not in the room catalog"
            ) from None
