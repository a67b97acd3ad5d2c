
"""
Rendering helpers for the pygame shell.

Pieces with a known outline are drawn as one filled polygon with a dark
border, like the classic canvas version; anything the catalog does not
know falls back to per-cell squares. Only reads session state.
"""
from __future__ import annotations
import math
import pygame
from typing import Dict, List, Optional, Sequence, Tuple
from tetfall_layout import Dims
from tetfall_piece import Piece
from tetfall_session import Session
from tetfall_shapes import MARKERS, PIECES, classify

# Colors per tetromino type
COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (51,204,204),
    "J": (0,170,255),
    "L": (255,153,0),
    "O": (238,238,0),
    "S": (0,204,0),
    "T": (204,0,204),
    "Z": (204,0,0),
}
INK = (0,0,0)
SHADOW = (238,238,238)
SHADOW_EDGE = (221,221,221)


def group_number(number: float) -> str:
    """Whole part of ``number`` with thousands commas; exponent form past 15 digits."""
    n = math.floor(number)
    if n > 999999999999999:
        return f"{n:.10e}"
    return f"{n:,}"


def marker_color(marker: int) -> Tuple[int,int,int]:
    if 1 <= marker <= len(PIECES):
        return COLORS[PIECES[marker - 1]]
    return (128,128,128)


def piece_color(p: Piece) -> Tuple[int,int,int]:
    if p.t in MARKERS:
        return COLORS[p.t]
    for line in p.shape:
        for v in line:
            if v:
                return marker_color(v)
    return (128,128,128)


class Renderer:
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font

    def _poly(self, perimeter: Sequence[Sequence[int]], row: float, col: float,
              top: int) -> List[Tuple[float,float]]:
        c = self.dims.cell
        return [((col + x) * c, (row + y) * c + top) for x, y in perimeter]

    def draw_shape(self, screen: pygame.Surface, shape, row: float, col: float, color,
                   edge=INK, top: Optional[int] = None):
        top = self.dims.board_y if top is None else top
        outline = classify(shape)
        if outline:
            pts = self._poly(outline.perimeter, row, col, top)
            pygame.draw.polygon(screen, color, pts)
            pygame.draw.polygon(screen, edge, pts, 2)
            return
        c = self.dims.cell
        for r, line in enumerate(shape):
            for x, v in enumerate(line):
                if v:
                    rect = pygame.Rect((col + x) * c, (row + r) * c + top, c, c)
                    pygame.draw.rect(screen, color, rect)
                    pygame.draw.rect(screen, edge, rect, 2)

    def draw(self, screen: pygame.Surface, session: Session, best: Optional[float] = None):
        d = self.dims
        screen.fill((255,255,255))
        self._draw_panel(screen, session)

        active = session.active_piece
        if active is not None:
            gy = session.ghost_row()
            self.draw_shape(screen, active.shape, gy, active.col, SHADOW, SHADOW_EDGE)
            preview = session.pivot_preview()
            if preview:
                ghost = pygame.Surface((d.total_w, d.total_h), pygame.SRCALPHA)
                pts = self._poly(preview.perimeter, active.row, active.col + active.pivot, d.board_y)
                pygame.draw.polygon(ghost, SHADOW + (128,), pts)
                pygame.draw.polygon(ghost, SHADOW_EDGE + (128,), pts, 2)
                screen.blit(ghost, (0, 0))

        for p in session.live_pieces:
            self.draw_shape(screen, p.shape, p.row, p.col, piece_color(p))

        if session.game_over:
            self._draw_game_over(screen, session, best)

    def _draw_panel(self, screen: pygame.Surface, session: Session):
        d = self.dims
        screen.blit(self.font.render(f"Score: {group_number(session.score)}", True, INK), (4, 4))
        screen.blit(self.font.render("Next:", True, INK), (d.cell * 2 - 5, d.cell + 6))
        nxt = session.next_piece
        if nxt is not None:
            self.draw_shape(screen, nxt.shape, 0, nxt.col, piece_color(nxt), top=d.cell * 2 - 3)
        if session.paused:
            screen.blit(self.font.render("PAUSED", True, (255,0,0)), (5, d.panel_h - 22))
        if session.dev_mode:
            screen.blit(self.font.render("DEV", True, (0,170,0)), (d.total_w - 34, d.panel_h - 22))
        pygame.draw.line(screen, INK, (0, d.panel_h), (d.total_w, d.panel_h), 2)

    def _draw_game_over(self, screen: pygame.Surface, session: Session, best: Optional[float]):
        d = self.dims
        tint = pygame.Surface((d.total_w, d.total_h), pygame.SRCALPHA)
        tint.fill((51,51,51,204))
        screen.blit(tint, (0, 0))
        msg = self.big_font.render("GAME OVER", True, (255,0,0))
        screen.blit(msg, msg.get_rect(center=(d.total_w // 2, d.total_h * 9 // 20)))
        y = d.total_h * 11 // 20
        for label, value in (("Your Score:", session.score), ("Personal Highest Score:", best)):
            if value is None:
                continue
            screen.blit(self.font.render(label, True, (255,255,255)), (5, y))
            screen.blit(self.font.render(group_number(value), True, (255,0,0)), (14, y + 20))
            y += 50
