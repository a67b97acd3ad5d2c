
"""Key bindings and command dispatch"""
import logging
from typing import Optional

import pygame

from tetfall_session import DOWN, LEFT, RIGHT, Session

log = logging.getLogger(__name__)

KEYMAP = {
    pygame.K_SPACE: "drop",
    pygame.K_UP: "rotate",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_p: "pause",
    pygame.K_s: "pause",
    pygame.K_r: "reset",
    pygame.K_END: "up",
    pygame.K_h: "clear_scores",
    pygame.K_BACKQUOTE: "dev",
}

PLAY_COMMANDS = ("drop", "rotate", "left", "right", "down")


def command_for(key: int) -> Optional[str]:
    cmd = KEYMAP.get(key)
    if cmd is None:
        log.warning("unrecognized key: %s", key)
    return cmd


def dispatch(session: Session, cmd: str) -> bool:
    """Apply one command to the session; True when the board may have changed.

    ``clear_scores`` is handled by the caller, which owns the score store.
    """
    if cmd in PLAY_COMMANDS and not session.can_move():
        return False
    if cmd == "drop":
        session.hard_drop()
        return True
    if cmd == "rotate":
        return session.rotate_active()
    if cmd in ("left", "right", "down"):
        session.move_active({"left": LEFT, "right": RIGHT, "down": DOWN}[cmd])
        return True
    if cmd == "pause":
        session.toggle_pause()
        return True
    if cmd == "reset":
        session.reset()
        return True
    if cmd == "up":
        return session.nudge_active_up()
    if cmd == "dev":
        session.dev_mode = not session.dev_mode
        return True
    if cmd == "clear_scores":
        return False
    log.warning("unrecognized command: %s", cmd)
    return False
