"""pygame front end, run against SDL's dummy video driver."""

import os
import unittest

import numpy as np
import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from meowchip.config import Config  # noqa: E402
from meowchip.frontend import PygameClock, PygameInput, PygamePresenter  # noqa: E402

FG = (255, 0, 0)
BG = (0, 0, 32)


def rgb(color):
    return tuple(color)[:3]


class TestPygamePresenter(unittest.TestCase):
    def setUp(self):
        self.config = Config(scale=4, foreground=FG, background=BG)
        self.presenter = PygamePresenter(self.config)
        self.grid = np.zeros((32, 64), dtype=bool)
        self.grid[2, 3] = True

    def tearDown(self):
        self.presenter.close()

    def test_window_size(self):
        self.assertEqual(self.presenter.screen.get_size(), (256, 128))

    def test_lit_and_unlit_cells(self):
        self.presenter.present(self.grid, self.config)
        screen = self.presenter.screen
        self.assertEqual(rgb(screen.get_at((3 * 4 + 1, 2 * 4 + 1))), FG)
        self.assertEqual(rgb(screen.get_at((0, 0))), BG)
        # outline drawn in the background color
        self.assertEqual(rgb(screen.get_at((3 * 4, 2 * 4))), BG)

    def test_without_outlines(self):
        config = Config(scale=4, foreground=FG, background=BG, outlines=False)
        self.presenter.present(self.grid, config)
        self.assertEqual(rgb(self.presenter.screen.get_at((3 * 4, 2 * 4))), FG)

    def test_close_twice(self):
        self.presenter.close()
        self.presenter.close()


class TestPygameInput(unittest.TestCase):
    def setUp(self):
        self.presenter = PygamePresenter(Config(scale=1))
        self.input = PygameInput()
        pygame.event.clear()

    def tearDown(self):
        self.presenter.close()

    def post_key(self, key):
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))

    def test_no_events(self):
        signals = self.input.poll()
        self.assertFalse(signals.quit)
        self.assertFalse(signals.toggle_pause)

    def test_space_toggles_pause(self):
        self.post_key(pygame.K_SPACE)
        self.assertTrue(self.input.poll().toggle_pause)

    def test_double_toggle_cancels(self):
        self.post_key(pygame.K_SPACE)
        self.post_key(pygame.K_p)
        self.assertFalse(self.input.poll().toggle_pause)

    def test_escape_quits(self):
        self.post_key(pygame.K_ESCAPE)
        self.assertTrue(self.input.poll().quit)

    def test_window_close_quits(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        self.assertTrue(self.input.poll().quit)

    def test_clock(self):
        clock = PygameClock()
        self.assertGreaterEqual(clock(1000), 0)


if __name__ == "__main__":
    unittest.main()
