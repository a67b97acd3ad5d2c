# tetfall_layout.py
from dataclasses import dataclass

from tetfall_config import CONFIG, COLS, ROWS


@dataclass
class Dims:
    cell: int
    panel_h: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int


def compute_dims() -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    board_w = COLS * cell
    board_h = ROWS * cell
    # The panel takes whatever is left of a 1:2 window above the board.
    panel_h = 2 * board_w - board_h
    return Dims(
        cell=cell, panel_h=panel_h,
        board_w=board_w, board_h=board_h,
        total_w=board_w, total_h=panel_h + board_h,
        board_x=0, board_y=panel_h,
    )
