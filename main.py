
import logging
import os
import sys

import pygame
from tetfall_config import CONFIG
from tetfall_input import command_for, dispatch
from tetfall_layout import compute_dims
from tetfall_render import Renderer
from tetfall_scores import JsonScoreStore, default_scores
from tetfall_session import Session


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=os.environ.get("TETFALL_LOG", "WARNING").upper())
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.WINDOWFOCUSLOST,
                              pygame.WINDOWFOCUSGAINED])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetfall")
    font = pygame.font.SysFont("arial", 16)
    big_font = pygame.font.SysFont("arial", 32, bold=True)
    render = Renderer(dims, font, big_font)
    clock = pygame.time.Clock()

    store = JsonScoreStore()
    session = Session(seed=CONFIG["SEED"], paused=CONFIG["START_PAUSED"])
    session.spawn()

    acc = 0
    paused_before_blur = session.paused
    best = None

    while True:
        dt = clock.tick(60)
        acc += dt

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.WINDOWFOCUSLOST and not session.game_over:
                paused_before_blur = session.paused
                session.paused = True
            if e.type == pygame.WINDOWFOCUSGAINED and not session.game_over:
                session.paused = paused_before_blur
            if e.type == pygame.KEYDOWN:
                cmd = command_for(e.key)
                if cmd is None:
                    continue
                if cmd == "clear_scores":
                    if session.dev_mode:
                        store.set_scores(default_scores(0))
                    continue
                if cmd in ("down", "drop", "reset"):
                    acc = 0
                if cmd == "reset":
                    best = None
                dispatch(session, cmd)

        while acc >= CONFIG["DROP_INTERVAL_MS"]:
            acc -= CONFIG["DROP_INTERVAL_MS"]
            session.tick()

        if session.game_over and best is None:
            try:
                best = session.record_high_score(store)[0]
            except OSError as err:
                logging.getLogger(__name__).error("could not save high scores: %s", err)
                best = session.score

        render.draw(screen, session, best)
        pygame.display.flip()


if __name__ == '__main__':
    main()
