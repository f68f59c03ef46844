"""Grid primitives shared by every generator: allocation and region carving."""
from __future__ import annotations

import math
import random
from typing import Iterator, Optional

from .tiles import FLOOR, WALL, Coordinate, Grid

ORGANIC_JITTER = 0.5  # radial wobble of organic clearings (+/- 25% of the radius)


def allocate(fill_value, dimension: int) -> list:
    """Return a dimension x dimension matrix filled with ``fill_value``.

    Each row is its own list so mutating one row never leaks into another.
    """
    return [[fill_value for _ in range(dimension)] for _ in range(dimension)]


def in_interior(grid: Grid, x: int, y: int) -> bool:
    """True when (x, y) lies strictly inside the outer wall ring."""
    return 0 < x < len(grid[0]) - 1 and 0 < y < len(grid) - 1


def carve_rectangle(grid: Grid, center_x: int, center_y: int, width: int, height: int) -> Optional[Coordinate]:
    """Carve a FLOOR rectangle centered on (center_x, center_y).

    The rectangle is clamped so it stays at least one cell inside the border.
    Returns the (possibly shifted) center of the carved area, or None when the
    clamped rectangle is narrower than 2 cells on either axis.
    """
    cols, rows = len(grid[0]), len(grid)
    x0 = max(1, center_x - width // 2)
    x1 = min(cols - 2, center_x - width // 2 + width - 1)
    y0 = max(1, center_y - height // 2)
    y1 = min(rows - 2, center_y - height // 2 + height - 1)
    if x1 <= x0 or y1 <= y0:
        return None
    for yy in range(y0, y1 + 1):
        row = grid[yy]
        for xx in range(x0, x1 + 1):
            row[xx] = FLOOR
    return ((x0 + x1) // 2, (y0 + y1) // 2)


def carve_organic(
    grid: Grid, center_x: int, center_y: int, base_radius: int, rng: Optional[random.Random] = None
) -> Optional[Coordinate]:
    """Carve a blob with a noisy silhouette around (center_x, center_y).

    Every cell of the bounding square draws its own jittered edge radius, so the
    outline wobbles instead of tracing a clean circle. Cells on the outer ring
    are never touched. Returns the center if anything was carved.
    """
    if rng is None:
        rng = random.Random()
    carved = False
    for dy in range(-base_radius, base_radius + 1):
        for dx in range(-base_radius, base_radius + 1):
            nx, ny = center_x + dx, center_y + dy
            if not in_interior(grid, nx, ny):
                continue
            dist = math.sqrt(dx * dx + dy * dy)
            edge = base_radius + (rng.random() - 0.5) * (base_radius * ORGANIC_JITTER)
            if dist < edge:
                grid[ny][nx] = FLOOR
                carved = True
    return (center_x, center_y) if carved else None


def iter_floor(grid: Grid) -> Iterator[Coordinate]:
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell == FLOOR:
                yield x, y


def count_floor(grid: Grid) -> int:
    return sum(row.count(FLOOR) for row in grid)


def border_is_sealed(grid: Grid) -> bool:
    """True when every cell of the outer ring is WALL."""
    last = len(grid) - 1
    if any(c != WALL for c in grid[0]) or any(c != WALL for c in grid[last]):
        return False
    return all(row[0] == WALL and row[-1] == WALL for row in grid)


def render_ascii(grid: Grid, start: Optional[Coordinate] = None, exit: Optional[Coordinate] = None) -> str:
    """Debug rendering: '#' wall, '.' floor, 'S' start, 'E' exit."""
    lines = []
    for y, row in enumerate(grid):
        chars = []
        for x, cell in enumerate(row):
            if (x, y) == start:
                chars.append("S")
            elif (x, y) == exit:
                chars.append("E")
            else:
                chars.append("#" if cell == WALL else ".")
        lines.append("".join(chars))
    return "\n".join(lines)


__all__ = [
    "ORGANIC_JITTER",
    "allocate",
    "in_interior",
    "carve_rectangle",
    "carve_organic",
    "iter_floor",
    "count_floor",
    "border_is_sealed",
    "render_ascii",
]
