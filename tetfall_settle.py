
"""Gravity after a clear, in rounds, and the clear/settle cascade"""
import logging
from typing import Iterator

from tetfall_board import collides_bottom
from tetfall_clear import clear_rows

log = logging.getLogger(__name__)


def settle_round(session) -> int:
    """Drop every resting piece by at most one row; return how many moved.

    Moves land immediately, so within one round a piece blocked by another
    gets a second chance once that one has dropped.
    """
    moved = set()
    progress = True
    while progress:
        progress = False
        for piece in list(session.pieces.values()):
            if piece.id in moved or piece.id == session.active:
                continue
            grid = session.grid(excluding=piece)
            if not collides_bottom(grid, piece, piece.row + 1, piece.col):
                piece.row += 1
                moved.add(piece.id)
                progress = True
                session.invalidate()
    return len(moved)


def iter_settle(session) -> Iterator[int]:
    """Yield the number of pieces moved per round until a round moves none."""
    while True:
        moved = settle_round(session)
        if not moved:
            return
        log.debug("settle round moved %d pieces", moved)
        yield moved


def settle(session) -> int:
    """Run rounds to the fixed point; return how many rounds moved something."""
    return sum(1 for _ in iter_settle(session))


def iter_cascade(session, start_row: int = 0) -> Iterator[int]:
    """Clear, settle and clear again until a settle brings no new full row.

    Yields after every settle round so a caller can redraw between them.
    The first pass scans from ``start_row``; later passes scan the board.
    """
    cleared = clear_rows(session, start_row)
    while cleared:
        session.lines += cleared
        yield from iter_settle(session)
        cleared = clear_rows(session, 0)
        if cleared:
            log.debug("cascade cleared %d more rows", cleared)


def cascade(session, start_row: int = 0) -> int:
    """Run the whole cascade synchronously; return the total rows cleared."""
    before = session.lines
    for _ in iter_cascade(session, start_row):
        pass
    return session.lines - before
