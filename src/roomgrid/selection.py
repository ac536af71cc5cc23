"""Pointer gestures on the tile grid: group dragging and rectangle selection."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from roomgrid.engine import MapEditor
from roomgrid.geometry import TileRect, normalize_rect, rect_contains

logger = logging.getLogger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    SELECTING = "selecting"


class SelectionController:
    """Turns pointer down/move/up events (in tile coordinates) into edits.

    ``modifier`` is the multi-select key (Ctrl in the desktop editor).
    """

    def __init__(self, editor: MapEditor) -> None:
        self.editor = editor
        self.selected: list[int] = []
        self.dragged: list[int] = []
        self.drag_offset: tuple[int, int] = (0, 0)
        self.selection_start: Optional[tuple[int, int]] = None

    @property
    def state(self) -> DragState:
        if self.dragged:
            return DragState.DRAGGING
        if self.selection_start is not None:
            return DragState.SELECTING
        return DragState.IDLE

    def reset(self) -> None:
        self.selected.clear()
        self.dragged.clear()
        self.drag_offset = (0, 0)
        self.selection_start = None

    # ------------------------------------------------------------------ #
    # Gesture handling
    # ------------------------------------------------------------------ #

    def start_drag(
        self, room_idx: Optional[int], tile_x: int, tile_y: int, modifier: bool = False
    ) -> None:
        """Pointer pressed at (tile_x, tile_y) over ``room_idx`` (None for empty space).

        Ignored while a gesture is already in progress.
        """
        if self.state != DragState.IDLE:
            return
        if room_idx is not None and room_idx not in self.editor.missing_rooms:
            if room_idx in self.selected:
                # Grab the whole selection
                bbox = self.selected_bbox()
                self.dragged.extend(self.selected)
                self.selected.clear()
            else:
                self.dragged.append(room_idx)
                if modifier:
                    self.dragged.extend(self.selected)
                self.selected.clear()
                bbox = self.dragged_bbox()
            self.drag_offset = (tile_x - bbox.left, tile_y - bbox.top)
            logger.debug("Dragging rooms %s, offset %s", self.dragged, self.drag_offset)
        else:
            if not modifier:
                self.selected.clear()
            self.selection_start = (tile_x, tile_y)

    def move_dragged_rooms(self, tile_x: int, tile_y: int) -> bool:
        """Follow the pointer with the dragged group.

        Returns False when nothing moved. Connections are not recomputed
        until the drop.
        """
        bbox = self.dragged_bbox()
        if bbox is None:
            return False

        left = max(tile_x - self.drag_offset[0], 0)
        top = max(tile_y - self.drag_offset[1], 0)
        if (left, top) == bbox.top_left:
            return False

        for room_idx in self.dragged:
            room_x, room_y = self.editor.room_origin(room_idx)
            self.editor.move_room(
                room_idx, left + room_x - bbox.left, top + room_y - bbox.top
            )
        return True

    def stop_drag(self, tile_x: int, tile_y: int, modifier: bool = False) -> None:
        """Pointer released: drop the dragged rooms or finish a selection."""
        if self.dragged:
            for room_idx in self.dragged:
                self.editor.snap_room(room_idx)
            self._merge_selection(self.dragged)
            self.dragged.clear()
            return

        if self.selection_start is None:
            return
        # An empty re-drag must not throw away an existing selection
        if self.selected and not modifier:
            self.selection_start = None
            return

        rect = normalize_rect(self.selection_start, (tile_x, tile_y))
        self._merge_selection(self._rooms_inside(rect))
        self.selection_start = None

    # ------------------------------------------------------------------ #
    # Selection helpers
    # ------------------------------------------------------------------ #

    def select_only(self, room_idx: int) -> None:
        self.selected = [room_idx]

    def erase_selected(self) -> None:
        for room_idx in self.selected:
            self.editor.erase_room(room_idx)
        self.selected.clear()

    def selection_rect(self, tile_x: int, tile_y: int) -> Optional[TileRect]:
        """Rectangle being swept by the pointer, for the overlay."""
        if self.selection_start is None or self.dragged:
            return None
        return normalize_rect(self.selection_start, (tile_x, tile_y))

    def selected_bbox(self) -> Optional[TileRect]:
        return self.editor.bbox_of(self.selected)

    def dragged_bbox(self) -> Optional[TileRect]:
        return self.editor.bbox_of(self.dragged)

    def _rooms_inside(self, rect: TileRect) -> list[int]:
        return [
            room_idx
            for room_idx in range(self.editor.catalog.room_count)
            if room_idx not in self.editor.missing_rooms
            and rect_contains(rect, self.editor.room_bounds(room_idx))
        ]

    def _merge_selection(self, room_indices: list[int]) -> None:
        self.selected = sorted(set(self.selected) | set(room_indices))
