#!/usr/bin/env python3
"""Tests for the game session: spawning, player moves, landing and scoring."""

import random
import unittest

from tetfall_config import CONFIG, COLS, ROWS
from tetfall_scores import MemoryScoreStore
from tetfall_session import DOWN, LEFT, RIGHT, Session
from tetfall_shapes import shape_for


def occupied_cells(session):
    cells = []
    for p in session.live_pieces:
        cells.extend(p.cells())
    return cells


class TestSpawn(unittest.TestCase):

    def test_forced_spawn(self):
        s = Session(seed=1)
        p = s.spawn("T")
        self.assertEqual(p.t, "T")
        self.assertEqual((p.row, p.col), (0, 4))
        self.assertIs(s.active_piece, p)
        self.assertIn(p, s.live_pieces)
        self.assertIsNotNone(s.next_piece)

    def test_active_piece_not_in_grid(self):
        s = Session(seed=1)
        s.spawn("O")
        self.assertFalse(any(any(row) for row in s.current_grid()))

    def test_spawn_while_active_is_noop(self):
        s = Session(seed=1)
        p = s.spawn("L")
        self.assertIs(s.spawn(), p)
        self.assertEqual(len(s.pieces), 1)

    def test_next_piece_becomes_current(self):
        s = Session(seed=11)
        first = s.spawn()
        queued = s.next_piece
        s.hard_drop()
        second = s.spawn()
        self.assertIsNot(first, second)
        self.assertIs(second, queued)

    def test_first_piece_never_s_or_z(self):
        for seed in range(60):
            p = Session(seed=seed).spawn()
            self.assertNotIn(p.t, ("S", "Z"), f"seed {seed}")

    def test_game_over_on_blocked_spawn(self):
        s = Session(seed=1)
        s.add_resting([[1] * 10], 0, 0)
        self.assertIsNone(s.spawn("T"))
        self.assertTrue(s.game_over)
        self.assertEqual(s.next_piece.t, "T")
        self.assertEqual(len(s.pieces), 1)
        self.assertIsNone(s.active)
        self.assertIsNone(s.spawn())
        self.assertFalse(s.can_move())


class TestMoves(unittest.TestCase):

    def setUp(self):
        self.s = Session(seed=2)

    def test_left_at_wall_always_fails(self):
        p = self.s.spawn("O")
        while self.s.move_active(LEFT):
            pass
        self.assertEqual(p.col, 0)
        for _ in range(5):
            self.assertFalse(self.s.move_active(LEFT))
            self.assertEqual(p.col, 0)

    def test_right_wall_earns_pivot(self):
        p = self.s.spawn("I")
        self.assertTrue(self.s.move_active(RIGHT))
        self.assertTrue(self.s.move_active(RIGHT))
        self.assertEqual(p.col, 6)
        for expected in (1, 2, 3, 3):
            self.assertFalse(self.s.move_active(RIGHT))
            self.assertEqual(p.pivot, expected)
        self.assertEqual(p.col, 6)

    def test_left_move_drops_pivot(self):
        p = self.s.spawn("I")
        self.s.move_active(RIGHT)
        self.s.move_active(RIGHT)
        self.s.move_active(RIGHT)
        self.assertEqual(p.pivot, 1)
        self.assertTrue(self.s.move_active(LEFT))
        self.assertEqual(p.pivot, 0)

    def test_rotation_spends_pivot(self):
        p = self.s.spawn("I")
        self.s.move_active(DOWN)
        for _ in range(3):
            self.s.move_active(RIGHT)
        self.assertEqual((p.col, p.pivot), (6, 1))
        self.assertEqual(self.s.pivot_preview().name, "I1")
        self.assertTrue(self.s.rotate_active())
        self.assertEqual((p.col, p.pivot, p.state), (7, 0, 1))
        self.assertEqual(p.shape, shape_for("I", 1))
        self.assertIsNone(self.s.pivot_preview())

    def test_o_never_rotates_or_kicks(self):
        p = self.s.spawn("O")
        for _ in range(8):
            self.s.move_active(RIGHT)
            self.assertFalse(self.s.rotate_active())
        self.assertEqual((p.state, p.pivot), (0, 0))

    def test_down_and_ghost(self):
        p = self.s.spawn("T")
        self.assertEqual(self.s.ghost_row(), 14)
        self.assertTrue(self.s.move_active(DOWN))
        self.assertEqual(p.row, 1)

    def test_bad_direction(self):
        self.s.spawn("T")
        with self.assertRaises(ValueError):
            self.s.move_active("up")

    def test_paused_blocks_moves(self):
        s = Session(seed=2, paused=True)
        p = s.spawn("T")
        self.assertFalse(s.move_active(LEFT))
        self.assertFalse(s.rotate_active())
        s.tick()
        self.assertEqual((p.row, p.col), (0, 4))
        s.toggle_pause()
        s.tick()
        self.assertEqual(p.row, 1)

    def test_nudge_up_needs_dev_mode(self):
        p = self.s.spawn("T")
        self.s.move_active(DOWN)
        self.assertFalse(self.s.nudge_active_up())
        self.s.dev_mode = True
        self.assertTrue(self.s.nudge_active_up())
        self.assertEqual(p.row, 0)
        self.assertFalse(self.s.nudge_active_up())


class TestLanding(unittest.TestCase):

    def test_landing_hands_back_control(self):
        s = Session(seed=4)
        p = s.spawn("O")
        self.assertEqual(s.hard_drop(), 14)
        self.assertIsNone(s.active)
        self.assertEqual((p.row, p.col), (14, 4))
        self.assertTrue(s.current_grid()[15][4])
        self.assertEqual(s.score, 0)

    def test_tick_spawns_after_landing(self):
        s = Session(seed=4)
        s.spawn("O")
        s.hard_drop()
        s.tick()
        self.assertIsNotNone(s.active)

    def test_i_piece_completes_bottom_row(self):
        """A flat I filling columns 6-9 of a row holding 0-5 clears it and vanishes."""
        s = Session(seed=4)
        s.add_resting([[1] * 6], 15, 0)
        p = s.spawn("I")
        s.move_active(RIGHT)
        s.move_active(RIGHT)
        self.assertEqual(p.col, 6)
        self.assertEqual(s.hard_drop(), 15)
        self.assertEqual(s.score, 10000)
        self.assertEqual(s.lines, 1)
        self.assertEqual(s.pieces, {})
        self.assertIsNone(s.active)

    def test_landing_splits_and_settles(self):
        s = Session(seed=4)
        s.add_resting([[1, 1, 1]], 14, 0)
        s.add_resting([[1] * 6], 14, 4)
        p = s.spawn("I")
        s.move_active(LEFT)
        self.assertTrue(s.rotate_active())
        self.assertEqual((p.col, p.state), (3, 1))
        s.hard_drop()
        self.assertEqual(s.score, 10000)
        rows = sorted((q.row, q.col, tuple(map(tuple, q.shape))) for q in s.live_pieces)
        self.assertEqual(rows, [(13, 3, ((1,), (1,))), (15, 3, ((1,),))])

    def test_no_overlap_through_random_play(self):
        s = Session(seed=9)
        rnd = random.Random(9)
        actions = [LEFT, RIGHT, DOWN, "tick", "drop"]
        for _ in range(600):
            if s.game_over:
                break
            action = rnd.choice(actions)
            if action == "tick":
                s.tick()
            elif action == "drop":
                s.hard_drop()
            else:
                s.move_active(action)
            cells = occupied_cells(s)
            self.assertEqual(len(cells), len(set(cells)))
            for r, c in cells:
                self.assertTrue(0 <= r < ROWS and 0 <= c < COLS)


class TestSessionState(unittest.TestCase):

    def test_reset(self):
        s = Session(seed=6)
        s.spawn("I")
        s.hard_drop()
        s.score = 12345
        s.game_over = True
        p = s.reset()
        self.assertEqual(s.score, 0)
        self.assertFalse(s.game_over)
        self.assertEqual(s.paused, CONFIG["START_PAUSED"])
        self.assertEqual(s.live_pieces, [p])
        self.assertNotIn(p.t, ("S", "Z"))

    def test_pause_ignored_after_game_over(self):
        s = Session(seed=6)
        s.game_over = True
        self.assertFalse(s.toggle_pause())

    def test_high_score_recorded_once(self):
        s = Session(seed=6)
        store = MemoryScoreStore([30000, 20000] + [0] * 8)
        self.assertEqual(s.record_high_score(store)[:2], [30000, 20000])
        s.score = 25000
        s.game_over = True
        scores = s.record_high_score(store)
        self.assertEqual(scores[:4], [30000, 25000, 20000, 0])
        self.assertEqual(len(scores), 10)
        s.record_high_score(store)
        self.assertEqual(store.get_scores().count(25000), 1)

    def test_current_grid_is_a_copy(self):
        s = Session(seed=6)
        s.add_resting([[1]], 15, 0)
        snap = s.current_grid()
        snap[15][0] = False
        self.assertTrue(s.grid()[15][0])


if __name__ == "__main__":
    unittest.main()
