
import os

COLS, ROWS = 10, 16

CONFIG = {
    "DROP_INTERVAL_MS": 750,
    "CELL_SIZE": 20,
    "FIRST_PIECE_AVOID_SZ": True,
    "SEED": None,
    "HIGH_SCORE_PATH": os.path.join(os.path.expanduser("~"), ".tetfall", "highscores.json"),
    "HIGH_SCORE_COUNT": 10,
    "START_PAUSED": True,
    "DEV_MODE": False,
}
