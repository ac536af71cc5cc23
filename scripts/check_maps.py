# scripts/check_maps.py
"""CLI for validating map layouts against a room catalog."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from roomgrid.catalog import RoomCatalog
from roomgrid.config import EditorConfig
from roomgrid.engine import MapEditor
from roomgrid.errors import LayoutError
from roomgrid.models import MapLayout

logger = logging.getLogger("check_maps")


def check_single(map_path: Path, catalog: RoomCatalog, config: EditorConfig) -> list[str]:
    """Load one map file and return its issue messages."""
    try:
        layout = MapLayout.model_validate_json(map_path.read_text())
        editor = MapEditor(catalog, layout, config)
    except (ValidationError, LayoutError) as e:
        return [f"Unreadable map: {e}"]
    return [
        issue.message(catalog, config.map_max_size) for issue in editor.issues()
    ]


@click.command()
@click.option("--catalog", "catalog_path", type=click.Path(exists=True), required=True,
              help="Room catalog JSON")
@click.option("--map", "map_path", type=click.Path(exists=True), default=None,
              help="Single map JSON to check")
@click.option("--input-dir", type=click.Path(exists=True), default=None,
              help="Directory of map JSON files")
@click.option("--grid-size", type=int, default=72)
@click.option("--map-max-size", type=int, default=72)
@click.option("--strict", is_flag=True, help="Exit with status 1 if any map has issues")
@click.option("--verbose", "-v", is_flag=True)
def cli(catalog_path, map_path, input_dir, grid_size, map_max_size, strict, verbose):
    """Report disconnected doors, missing and overlapping rooms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if (map_path is None) == (input_dir is None):
        raise click.UsageError("pass exactly one of --map or --input-dir")

    catalog = RoomCatalog.load(catalog_path)
    config = EditorConfig(grid_size=grid_size, map_max_size=map_max_size)

    if map_path is not None:
        paths = [Path(map_path)]
    else:
        paths = sorted(Path(input_dir).glob("*.json"))

    failed = 0
    for path in tqdm(paths, desc="Checking maps", disable=len(paths) < 2):
        messages = check_single(path, catalog, config)
        if messages:
            failed += 1
            for msg in messages:
                logger.warning("%s: %s", path.name, msg)
                click.echo(f"{path.name}: {msg}")
        else:
            click.echo(f"{path.name}: OK")

    click.echo(f"Checked {len(paths)} maps, {failed} with issues")
    if strict and failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
