# Tile constants centralized for modular imports.
#
# Coordinates are (x, y) tuples everywhere in the engine: x is the column, y the
# row. Grids are row-major, so the cell at (x, y) lives at grid[y][x].
from typing import List, Tuple

WALL = "W"
FLOOR = "F"
UNASSIGNED = -1  # region map value before the first Voronoi assignment

Coordinate = Tuple[int, int]
Grid = List[List[str]]
FrozenGrid = Tuple[Tuple[str, ...], ...]  # read-only rows handed to callers
RegionMap = List[List[int]]

CARDINALS: Tuple[Coordinate, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

__all__ = ["WALL", "FLOOR", "UNASSIGNED", "Coordinate", "Grid", "FrozenGrid", "RegionMap", "CARDINALS"]
