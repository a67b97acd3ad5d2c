
"""Occupancy grid: a cached boolean surface of every resting piece"""
from typing import Iterable, List, Optional

from tetfall_config import COLS, ROWS
from tetfall_piece import Piece

Grid = List[List[bool]]


def empty_grid() -> Grid:
    return [[False] * COLS for _ in range(ROWS)]


def paint(grid: Grid, piece: Piece) -> None:
    for r, c in piece.cells():
        if 0 <= r < ROWS and 0 <= c < COLS:
            grid[r][c] = True


class OccupancyGrid:
    """Invalidate-on-write cache of the landed surface.

    The plain grid (active piece left out) is cached until ``invalidate``.
    Asking for a grid that also leaves out another piece always rebuilds,
    and the result is not kept, since it belongs to that one query.
    """

    def __init__(self):
        self._cells: Grid = empty_grid()
        self.dirty = True

    def invalidate(self) -> None:
        self.dirty = True

    def build(self, pieces: Iterable[Piece], active_id: Optional[int],
              excluding: Optional[Piece] = None) -> Grid:
        if excluding is not None:
            grid = empty_grid()
            for p in pieces:
                if p.id == active_id or p.id == excluding.id:
                    continue
                paint(grid, p)
            return grid
        if self.dirty:
            grid = empty_grid()
            for p in pieces:
                if p.id == active_id:
                    continue
                paint(grid, p)
            self._cells = grid
            self.dirty = False
        return self._cells


def full_rows(grid: Grid, start_row: int = 0) -> List[int]:
    return [r for r in range(max(start_row, 0), ROWS) if all(grid[r])]
