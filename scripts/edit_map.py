# scripts/edit_map.py
"""CLI for scripted room moves, erases and spawns on a map layout."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from roomgrid.catalog import RoomCatalog
from roomgrid.config import EditorConfig
from roomgrid.engine import MapEditor
from roomgrid.models import MapLayout


@click.command()
@click.option("--catalog", "catalog_path", type=click.Path(exists=True), required=True)
@click.option("--map", "map_path", type=click.Path(exists=True), required=True)
@click.option("--output", type=click.Path(), required=True, help="Where to write the edited map")
@click.option("--move", type=(int, int, int), multiple=True, help="ROOM X Y, snapped after moving")
@click.option("--erase", type=int, multiple=True, help="Room index to remove from the map")
@click.option("--spawn", type=int, multiple=True, help="Missing room index to place back")
@click.option("--grid-size", type=int, default=72)
@click.option("--verbose", "-v", is_flag=True)
def cli(catalog_path, map_path, output, move, erase, spawn, grid_size, verbose):
    """Apply edits in order: erase, spawn, then move."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    catalog = RoomCatalog.load(catalog_path)
    layout = MapLayout.model_validate_json(Path(map_path).read_text())
    editor = MapEditor(catalog, layout, EditorConfig(grid_size=grid_size))

    for room_idx in erase:
        editor.erase_room(room_idx)
    for room_idx in spawn:
        editor.spawn_room(room_idx)
    for room_idx, x, y in move:
        editor.move_room(room_idx, x, y)
        editor.snap_room(room_idx)

    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(editor.snapshot().model_dump_json(indent=2))

    click.echo(
        f"Wrote {out}: {len(editor.connections)} connections, "
        f"{len(editor.invalid_doors)} invalid doors, "
        f"{len(editor.missing_rooms)} missing rooms"
    )


if __name__ == "__main__":
    cli()
