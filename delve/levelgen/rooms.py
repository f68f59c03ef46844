import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .grid import carve_organic, carve_rectangle
from .tiles import FLOOR, Coordinate, Grid


@dataclass
class RoomSpec:
    """A region to carve: rectangular (width/height) or organic (radius > 0)."""

    x: int
    y: int
    width: int = 0
    height: int = 0
    radius: int = 0

    @property
    def center(self) -> Coordinate:
        return (self.x, self.y)

    def carve(self, grid: Grid, rng: Optional[random.Random] = None) -> Optional[Coordinate]:
        if self.radius:
            return carve_organic(grid, self.x, self.y, self.radius, rng)
        return carve_rectangle(grid, self.x, self.y, self.width, self.height)


def propose_room(grid: Grid, size_range: Tuple[int, int], tries: int, rng: random.Random) -> Optional[RoomSpec]:
    """Find a random rectangle that keeps a 1-cell buffer from every existing floor cell.

    Returns None after ``tries`` unsuccessful draws.
    """
    rows, cols = len(grid), len(grid[0])
    lo, hi = size_range
    for _ in range(tries):
        w = rng.randint(lo, hi)
        h = rng.randint(lo, hi)
        if cols - 1 - w < 1 or rows - 1 - h < 1:
            continue
        x0 = rng.randint(1, cols - 1 - w)
        y0 = rng.randint(1, rows - 1 - h)
        if _touches_floor(grid, x0 - 1, y0 - 1, x0 + w, y0 + h):
            continue
        return RoomSpec(x0 + w // 2, y0 + h // 2, width=w, height=h)
    return None


def _touches_floor(grid: Grid, x0: int, y0: int, x1: int, y1: int) -> bool:
    rows, cols = len(grid), len(grid[0])
    for yy in range(max(0, y0), min(rows - 1, y1) + 1):
        row = grid[yy]
        for xx in range(max(0, x0), min(cols - 1, x1) + 1):
            if row[xx] == FLOOR:
                return True
    return False
