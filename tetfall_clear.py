
"""Row clearing and fragmentation of the pieces a clear slices through.

A clear zeroes the cleared rows inside every piece that spans them, then
splits each such piece into its vertically contiguous non-empty runs of
rows. The first run stays with the original piece; every further run
becomes a new fragment piece. Rows are never removed here, gravity is
left to the settling pass.
"""
import logging
from typing import List, Sequence, Tuple

from tetfall_grid import full_rows
from tetfall_piece import Piece
from tetfall_shapes import FRAGMENT, Shape

log = logging.getLogger(__name__)

Fragment = Tuple[int, int, Shape]


def line_score(rows: int) -> float:
    """Points for clearing ``rows`` rows at once; grows faster than linearly."""
    if rows <= 0:
        return 0
    return rows ** (1 + (rows - 1) * 0.1) * 10000


def clip_rows(piece: Piece, rows: Sequence[int]) -> bool:
    """Zero every cell of ``piece`` lying in one of ``rows``; True if any row hit."""
    hit = False
    for board_row in rows:
        r = board_row - piece.row
        if r < 0 or r >= len(piece.shape):
            continue
        piece.shape[r] = [0] * len(piece.shape[r])
        hit = True
    return hit


def split_runs(piece: Piece) -> List[Fragment]:
    """Break a clipped shape at its all-zero rows.

    Returns ``(row, col, shape)`` per run, top to bottom, with the piece's
    own column; trimming happens separately.
    """
    runs: List[Fragment] = []
    current: Shape = []
    top = piece.row
    for r, line in enumerate(piece.shape):
        if any(line):
            if not current:
                top = piece.row + r
            current.append(list(line))
        elif current:
            runs.append((top, piece.col, current))
            current = []
    if current:
        runs.append((top, piece.col, current))
    return runs


def trim(fragment: Fragment) -> Fragment:
    """Strip leading empty columns (shifting the anchor) and trailing zeros per row."""
    row, col, shape = fragment
    while shape and not any(line and line[0] for line in shape):
        shape = [line[1:] for line in shape]
        col += 1
    trimmed = []
    for line in shape:
        end = len(line)
        while end > 0 and line[end - 1] == 0:
            end -= 1
        trimmed.append(line[:end])
    return row, col, trimmed


def fragment_piece(piece: Piece) -> List[Fragment]:
    return [trim(run) for run in split_runs(piece)]


def clear_rows(session, start_row: int = 0) -> int:
    """Clear every full row from ``start_row`` down; return how many were cleared.

    Pieces emptied by the clear are marked and dropped from the arena after
    the pass, new fragments are adopted at the end of the live order.
    """
    grid = session.grid()
    rows = full_rows(grid, start_row)
    if not rows:
        return 0
    gained = line_score(len(rows))
    session.score += gained
    log.debug("cleared rows %s for %.0f points", rows, gained)

    first, last = rows[0], rows[-1]
    doomed = []
    for piece in list(session.pieces.values()):
        if piece.id == session.active:
            continue
        if piece.row > last or piece.bottom_row() < first:
            continue
        if not clip_rows(piece, rows):
            continue
        fragments = fragment_piece(piece)
        if not fragments:
            doomed.append(piece.id)
            continue
        piece.row, piece.col, piece.shape = fragments[0]
        piece.t, piece.state, piece.pivot, piece.pivot_max = FRAGMENT, 0, 0, 0
        for row, col, shape in fragments[1:]:
            extra = session.adopt(Piece.fragment(shape, row, col))
            log.debug("piece %d split off fragment %d at (%d, %d)", piece.id, extra.id, row, col)
    for pid in doomed:
        del session.pieces[pid]
    session.invalidate()
    return len(rows)
