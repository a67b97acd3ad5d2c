
"""Piece randomizer: uniform LCG draw with a first-piece S/Z rule"""
from typing import Optional

import pygame

from tetfall_shapes import PIECES


class PieceRandom:
    """Uniform draw over the seven kinds.

    The very first draw of a game never yields S or Z: S turns into O and
    Z into T, one index back in ``PIECES``.
    """

    def __init__(self, seed: Optional[int] = None, avoid_sz_first: bool = True):
        if seed is None:
            seed = pygame.time.get_ticks() & 0xFFFFFFFF
        self.state = seed & 0xFFFFFFFF
        self.avoid_sz_first = avoid_sz_first
        self.first = True

    def _lcg_next(self) -> int:
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self) -> int:
        return (self._lcg_next() >> 16) & 0x7FFF

    def reset_first(self) -> None:
        self.first = True

    def next_piece(self) -> str:
        index = self._rand() % len(PIECES)
        if self.first and self.avoid_sz_first and PIECES[index] in ("S", "Z"):
            index -= 1
        self.first = False
        return PIECES[index]
