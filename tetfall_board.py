
"""Collision helpers: bottom, side (with pivot credit) and landing row"""
from tetfall_config import COLS, ROWS
from tetfall_piece import Piece


def collides_bottom(grid, piece: Piece, row: int, col: int) -> bool:
    for r, line in enumerate(piece.shape):
        for c, v in enumerate(line):
            if not v:
                continue
            br, bc = row + r, col + c
            if br >= ROWS:
                return True
            if br >= 0 and 0 <= bc < COLS and grid[br][bc]:
                return True
    return False


def _earn_pivot(piece: Piece) -> None:
    if piece.pivot < piece.pivot_max and piece.state % 2 == 0:
        piece.pivot += 1


def collides_side(grid, piece: Piece, row: int, col: int, testing_right: bool = False) -> bool:
    """Return True if the piece cannot sit at (row, col).

    Pushing past the right wall always earns pivot credit. Running into
    landed cells earns it only when ``testing_right`` is set.
    """
    # TODO: decide whether landed-cell credit should drop the testing_right
    # gate so it matches the wall path.
    for r, line in enumerate(piece.shape):
        for c, v in enumerate(line):
            if not v:
                continue
            br, bc = row + r, col + c
            if bc < 0:
                return True
            if bc >= COLS:
                _earn_pivot(piece)
                return True
            if 0 <= br < ROWS and grid[br][bc]:
                if testing_right:
                    _earn_pivot(piece)
                return True
    return False


def landing_row(grid, piece: Piece) -> int:
    """Row the piece would come to rest at if dropped straight down."""
    row = piece.row
    while not collides_bottom(grid, piece, row + 1, piece.col):
        row += 1
    return row
