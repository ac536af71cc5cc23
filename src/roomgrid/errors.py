"""Exception types raised by the room grid editor."""
from __future__ import annotations


class RoomGridError(Exception):
    """Base class for all roomgrid errors."""


class CatalogError(RoomGridError, ValueError):
    """The room catalog is malformed (bad geometry, duplicate door ids)."""


class LayoutError(RoomGridError, ValueError):
    """A map layout does not fit the catalog it is loaded against."""


class InternalConsistencyError(RoomGridError, RuntimeError):
    """Catalog and layout have desynchronized; the editor state is unusable."""
