"""Connectivity checks over 4-connected FLOOR cells.

Flood fill and early-exit BFS used to gate acceptance of a generated grid.
"""
from __future__ import annotations

from collections import deque
from typing import Set

from .tiles import CARDINALS, FLOOR, Coordinate, Grid


def _is_floor(grid: Grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[0]) and grid[y][x] == FLOOR


def flood_reachable(grid: Grid, start: Coordinate) -> Set[Coordinate]:
    """Return the set of floor cells connected to ``start`` (empty if start is not floor)."""
    sx, sy = start
    if not _is_floor(grid, sx, sy):
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cx, cy = q.popleft()
        for dx, dy in CARDINALS:
            nxt = (cx + dx, cy + dy)
            if nxt not in visited and _is_floor(grid, nxt[0], nxt[1]):
                visited.add(nxt)
                q.append(nxt)
    return visited


def count_reachable(grid: Grid, start: Coordinate) -> int:
    return len(flood_reachable(grid, start))


def is_reachable(grid: Grid, start: Coordinate, exit: Coordinate) -> bool:
    """BFS from ``start``; True the moment ``exit`` is dequeued.

    Walls and out-of-bounds cells are impassable, and a start that is not
    itself floor reaches nothing.
    """
    sx, sy = start
    if not _is_floor(grid, sx, sy):
        return False
    visited = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == exit:
            return True
        cx, cy = cur
        for dx, dy in CARDINALS:
            nxt = (cx + dx, cy + dy)
            if nxt not in visited and _is_floor(grid, nxt[0], nxt[1]):
                visited.add(nxt)
                q.append(nxt)
    return False


__all__ = ["flood_reachable", "count_reachable", "is_reachable"]
