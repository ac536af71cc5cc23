# src/roomgrid/models.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_serializer, model_validator


DoorPtrPair = tuple[int, int]


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def unit_vector(self) -> tuple[int, int]:
        """Tile step towards the neighbor this direction faces (y grows down)."""
        return _UNIT_VECTORS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_UNIT_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class DoorSubtype(str, Enum):
    NORMAL = "normal"
    SAND = "sand"


class Door(BaseModel):
    model_config = {"frozen": True}

    x: int = Field(ge=0, description="Tile offset from the room origin")
    y: int = Field(ge=0, description="Tile offset from the room origin")
    direction: Direction
    subtype: DoorSubtype = DoorSubtype.NORMAL
    exit_ptr: int
    entrance_ptr: int

    @field_validator("subtype", mode="before")
    @classmethod
    def collapse_subtype(cls, v):
        # Only sand doors restrict traversal; elevators, gray doors etc. are normal
        if v is None or (isinstance(v, str) and v != DoorSubtype.SAND.value):
            return DoorSubtype.NORMAL
        return v

    @property
    def ptr_pair(self) -> DoorPtrPair:
        return (self.exit_ptr, self.entrance_ptr)

    @property
    def is_one_way(self) -> bool:
        return self.subtype == DoorSubtype.SAND


class RoomGeometry(BaseModel):
    model_config = {"frozen": True}

    name: str
    map: list[list[int]] = Field(min_length=1, description="Tile mask, one row per tile row")
    doors: list[Door] = Field(default_factory=list)

    @field_validator("map")
    @classmethod
    def validate_mask(cls, v: list[list[int]]) -> list[list[int]]:
        width = len(v[0])
        if width == 0:
            raise ValueError("tile mask rows must not be empty")
        for row in v:
            if len(row) != width:
                raise ValueError("tile mask must be rectangular")
            if any(tile not in (0, 1) for tile in row):
                raise ValueError("tile mask may only contain 0 and 1")
        return v

    @model_validator(mode="after")
    def doors_inside_mask(self) -> RoomGeometry:
        for door in self.doors:
            if door.x >= self.width or door.y >= self.height:
                raise ValueError(
                    f"door at ({door.x}, {door.y}) lies outside room {self.name!r}"
                )
        return self

    @property
    def width(self) -> int:
        return len(self.map[0])

    @property
    def height(self) -> int:
        return len(self.map)


class Connection(BaseModel):
    """Established link between two door-id-pairs.

    Stored on disk as ``[src, dst, bidirectional]``.
    """
    model_config = {"frozen": True}

    src: DoorPtrPair
    dst: DoorPtrPair
    bidirectional: bool = True

    @model_validator(mode="before")
    @classmethod
    def from_triple(cls, data):
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError("connection must be [src, dst, bidirectional]")
            return {"src": data[0], "dst": data[1], "bidirectional": data[2]}
        return data

    @model_validator(mode="after")
    def not_self_linked(self) -> Connection:
        if self.src == self.dst:
            raise ValueError(f"door {self.src} cannot connect to itself")
        return self

    @model_serializer
    def as_triple(self) -> list:
        return [list(self.src), list(self.dst), self.bidirectional]

    def involves(self, pair: DoorPtrPair) -> bool:
        return self.src == pair or self.dst == pair

    def other_end(self, pair: DoorPtrPair) -> DoorPtrPair:
        return self.dst if self.src == pair else self.src


class MapLayout(BaseModel):
    rooms: list[tuple[int, int]] = Field(description="Grid origin per room index")
    doors: list[Connection] = Field(default_factory=list)
    missing_rooms: list[int] = Field(default_factory=list)

    @field_validator("rooms")
    @classmethod
    def non_negative_origins(cls, v: list[tuple[int, int]]) -> list[tuple[int, int]]:
        for x, y in v:
            if x < 0 or y < 0:
                raise ValueError(f"room origin ({x}, {y}) must not be negative")
        return v


class RoomCatalogData(BaseModel):
    rooms: list[RoomGeometry]
    description: Optional[str] = None
