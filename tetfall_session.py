
"""
Game session: the live pieces, the active piece and everything the
timer and the player can do to them.

Pieces live in an arena keyed by id, in the order they joined the game.
The active piece belongs to the arena like any other but is left out of
the occupancy grid while it is under player control. A failed downward
move lands it; the clear/settle cascade then runs to completion before
the call returns, so callers only ever see settled boards.
"""
import logging
from typing import Dict, List, Optional

from tetfall_board import collides_bottom, collides_side, landing_row
from tetfall_config import CONFIG
from tetfall_grid import Grid, OccupancyGrid
from tetfall_piece import Piece, pivot_preview, try_rotate
from tetfall_rng import PieceRandom
from tetfall_scores import ScoreStore, insert_score
from tetfall_settle import cascade
from tetfall_shapes import Outline, Shape

log = logging.getLogger(__name__)

LEFT, RIGHT, DOWN = "left", "right", "down"


class Session:
    def __init__(self, seed: Optional[int] = None, avoid_sz_first: Optional[bool] = None,
                 paused: bool = False, dev_mode: Optional[bool] = None):
        if avoid_sz_first is None:
            avoid_sz_first = CONFIG["FIRST_PIECE_AVOID_SZ"]
        self.rng = PieceRandom(seed, avoid_sz_first)
        self.pieces: Dict[int, Piece] = {}
        self.active: Optional[int] = None
        self.next_piece: Optional[Piece] = None
        self.score: float = 0
        self.lines = 0
        self.game_over = False
        self.paused = paused
        self.dev_mode = CONFIG["DEV_MODE"] if dev_mode is None else dev_mode
        self.update_score = True
        self._grid = OccupancyGrid()
        self._next_id = 1

    # ---------- arena ----------
    def adopt(self, piece: Piece) -> Piece:
        piece.id = self._next_id
        self._next_id += 1
        self.pieces[piece.id] = piece
        self.invalidate()
        return piece

    def add_resting(self, shape: Shape, row: int, col: int) -> Piece:
        """Place a resting fragment directly, for scripted boards."""
        return self.adopt(Piece.fragment([list(r) for r in shape], row, col))

    @property
    def live_pieces(self) -> List[Piece]:
        return list(self.pieces.values())

    @property
    def active_piece(self) -> Optional[Piece]:
        if self.active is None:
            return None
        return self.pieces.get(self.active)

    # ---------- grid ----------
    def invalidate(self) -> None:
        self._grid.invalidate()

    def grid(self, excluding: Optional[Piece] = None) -> Grid:
        return self._grid.build(self.pieces.values(), self.active, excluding)

    def current_grid(self, excluding: Optional[Piece] = None) -> Grid:
        """Copy of the occupancy grid, safe to hand to a renderer."""
        return [list(r) for r in self.grid(excluding)]

    # ---------- lifecycle ----------
    def _draw(self, forced: Optional[str] = None) -> Piece:
        return Piece.spawn(forced or self.rng.next_piece())

    def spawn(self, forced_kind: Optional[str] = None) -> Optional[Piece]:
        """Bring the next piece into play.

        Returns the new active piece, or None when the game is over. If the
        incoming piece already collides at its spawn anchor the game ends and
        the piece stays on as ``next_piece`` for display.
        """
        if self.game_over:
            return None
        if self.active is not None:
            return self.active_piece
        if self.next_piece is None:
            self.next_piece = self._draw()
        if forced_kind is not None:
            current = self._draw(forced_kind)
        else:
            current = self.next_piece
            self.next_piece = self._draw()
        if collides_bottom(self.grid(), current, current.row, current.col):
            self.next_piece = current
            self.game_over = True
            log.info("game over at %.0f points", self.score)
            return None
        self.adopt(current)
        self.active = current.id
        return current

    def tick(self) -> None:
        """One timer step: spawn when nothing is falling, else drop one row."""
        if self.game_over or self.paused:
            return
        if self.active is None:
            self.spawn()
        else:
            self.move_active(DOWN)

    def reset(self) -> Optional[Piece]:
        self.pieces.clear()
        self.active = None
        self.next_piece = None
        self.score = 0
        self.lines = 0
        self.game_over = False
        self.paused = CONFIG["START_PAUSED"]
        self.update_score = True
        self.rng.reset_first()
        self.invalidate()
        log.info("session reset")
        return self.spawn()

    def toggle_pause(self) -> bool:
        if not self.game_over:
            self.paused = not self.paused
        return self.paused

    def can_move(self) -> bool:
        if self.game_over:
            return False
        return (self.active is not None and not self.paused) or self.dev_mode

    # ---------- player moves ----------
    def move_active(self, direction: str) -> bool:
        """Try to shift the active piece one cell; True if it moved.

        A blocked downward move lands the piece and runs the clear/settle
        cascade before returning False.
        """
        if direction not in (LEFT, RIGHT, DOWN):
            raise ValueError(f"unknown direction {direction!r}")
        piece = self.active_piece
        if piece is None or not self.can_move():
            return False
        grid = self.grid()
        if direction == LEFT:
            piece.pivot = 0
            if collides_side(grid, piece, piece.row, piece.col - 1):
                return False
            piece.col -= 1
            return True
        if direction == RIGHT:
            if collides_side(grid, piece, piece.row, piece.col + 1, testing_right=True):
                return False
            piece.col += 1
            return True
        if not collides_bottom(grid, piece, piece.row + 1, piece.col):
            piece.row += 1
            return True
        self._land(piece)
        return False

    def rotate_active(self) -> bool:
        piece = self.active_piece
        if piece is None or not self.can_move():
            return False
        return try_rotate(self.grid(), piece)

    def hard_drop(self) -> int:
        """Drop the active piece until it lands; return the rows it fell."""
        piece = self.active_piece
        if piece is None or not self.can_move():
            return 0
        fell = 0
        while self.move_active(DOWN):
            fell += 1
        return fell

    def nudge_active_up(self) -> bool:
        piece = self.active_piece
        if not self.dev_mode or piece is None or piece.row <= 0:
            return False
        piece.row -= 1
        return True

    def _land(self, piece: Piece) -> None:
        log.debug("piece %d (%s) landed at (%d, %d)", piece.id, piece.t, piece.row, piece.col)
        self.active = None
        self.invalidate()
        cleared = cascade(self, piece.row)
        if cleared:
            log.debug("landing cleared %d rows, score %.0f", cleared, self.score)

    # ---------- queries for renderers ----------
    def ghost_row(self) -> Optional[int]:
        piece = self.active_piece
        if piece is None:
            return None
        return landing_row(self.grid(), piece)

    def pivot_preview(self) -> Optional[Outline]:
        piece = self.active_piece
        if piece is None or piece.pivot == 0:
            return None
        return pivot_preview(self.grid(excluding=piece), piece)

    def record_high_score(self, store: ScoreStore) -> List[float]:
        """Merge the final score into ``store`` once per game; return the list."""
        scores = store.get_scores()
        if self.game_over and self.update_score:
            scores = insert_score(scores, self.score)
            store.set_scores(scores)
            self.update_score = False
        return scores
