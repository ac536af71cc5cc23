from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EditorConfig:
    """Configuration for the map editor."""

    grid_size: int = 72
    map_max_size: int = 72

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError("grid_size must be positive")
        if self.map_max_size <= 0:
            raise ValueError("map_max_size must be positive")
