import json

import pytest

from roomgrid.catalog import RoomCatalog
from roomgrid.config import EditorConfig
from roomgrid.engine import MapEditor
from roomgrid.models import MapLayout


def _door(x, y, direction, exit_ptr, entrance_ptr, subtype="door"):
    return {
        "x": x, "y": y, "direction": direction, "subtype": subtype,
        "exit_ptr": exit_ptr, "entrance_ptr": entrance_ptr,
    }


@pytest.fixture
def catalog_data():
    """Four rooms: two 2x2 rooms facing each other, a shaft and a sand pit."""
    return {
        "rooms": [
            {"name": "Room A", "map": [[1, 1], [1, 1]],
             "doors": [_door(1, 0, "right", 1, 2)]},
            {"name": "Room B", "map": [[1, 1], [1, 1]],
             "doors": [_door(0, 0, "left", 3, 4)]},
            {"name": "Shaft", "map": [[1], [1], [1]],
             "doors": [_door(0, 2, "down", 5, 6)]},
            {"name": "Sand Pit", "map": [[1]],
             "doors": [_door(0, 0, "up", 7, 8, subtype="sand")]},
        ]
    }


@pytest.fixture
def catalog(catalog_data):
    return RoomCatalog.from_json(json.dumps(catalog_data))


@pytest.fixture
def config():
    return EditorConfig(grid_size=10, map_max_size=10)


@pytest.fixture
def connected_layout():
    return MapLayout(rooms=[(0, 0), (2, 0), (6, 0), (6, 3)])


@pytest.fixture
def editor(catalog, connected_layout, config):
    return MapEditor(catalog, connected_layout, config)
