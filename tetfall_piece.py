
"""Piece model, spawn and pivot-kick rotation"""
from dataclasses import dataclass
from typing import Optional

from tetfall_config import COLS, ROWS
from tetfall_shapes import (FRAGMENT, Outline, PIECES, Shape, classify, pivot_max,
                            shape_for)

SPAWN_ROW, SPAWN_COL = 0, 4


@dataclass
class Piece:
    t: str
    shape: Shape
    state: int
    row: int
    col: int
    pivot: int = 0
    pivot_max: int = 0
    id: int = 0

    @staticmethod
    def spawn(t: str, state: int = 0) -> "Piece":
        if t not in PIECES:
            raise ValueError(f"unknown piece kind {t!r}")
        return Piece(t, shape_for(t, state), state % 4, SPAWN_ROW, SPAWN_COL,
                     0, pivot_max(t))

    @staticmethod
    def fragment(shape: Shape, row: int, col: int) -> "Piece":
        return Piece(FRAGMENT, shape, 0, row, col, 0, 0)

    @property
    def is_fragment(self) -> bool:
        return self.t == FRAGMENT

    @property
    def outline(self) -> Outline:
        return classify(self.shape)

    def next_shape(self) -> Shape:
        return shape_for(self.t, (self.state + 1) % 4)

    def cells(self, row: Optional[int] = None, col: Optional[int] = None):
        """Yield the board cells the piece covers, at its anchor or at (row, col)."""
        row = self.row if row is None else row
        col = self.col if col is None else col
        for r, line in enumerate(self.shape):
            for c, v in enumerate(line):
                if v:
                    yield row + r, col + c

    def bottom_row(self) -> int:
        return self.row + len(self.shape) - 1


def rotation_fits(grid, shape: Shape, row: int, col: int) -> bool:
    for r, line in enumerate(shape):
        for c, v in enumerate(line):
            if not v:
                continue
            br, bc = row + r, col + c
            if bc < 0 or bc >= COLS or br >= ROWS:
                return False
            if br >= 0 and grid[br][bc]:
                return False
    return True


def try_rotate(grid, piece: Piece) -> bool:
    """Rotate ``piece`` clockwise in place; return False and leave it untouched if blocked.

    The candidate shape is tested at the current anchor. On success the
    accumulated pivot credit shifts the piece right and is spent.
    """
    if piece.is_fragment or piece.pivot_max == 0:
        return False
    new_state = (piece.state + 1) % 4
    new_shape = shape_for(piece.t, new_state)
    if not rotation_fits(grid, new_shape, piece.row, piece.col):
        return False
    piece.col += piece.pivot
    piece.pivot = 0
    piece.state = new_state
    piece.shape = new_shape
    return True


def pivot_preview(grid, piece: Piece) -> Optional[Outline]:
    """Outline of the next rotation at ``col + pivot``, or None when it would not fit."""
    if piece.is_fragment or piece.pivot_max == 0:
        return None
    new_shape = piece.next_shape()
    if not rotation_fits(grid, new_shape, piece.row, piece.col + piece.pivot):
        return None
    return classify(new_shape)
