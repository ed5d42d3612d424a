"""pygame window front end."""

import logging

import numpy as np
import pygame

from .config import Config
from .interpreter import InputSignals, InputSource, Presenter

logger = logging.getLogger(__name__)

CAPTION = "CHIP-8 Emulator"

QUIT_KEYS = (pygame.K_ESCAPE,)
PAUSE_KEYS = (pygame.K_SPACE, pygame.K_p)


class PygamePresenter(Presenter):
    """Draws each lit cell as a ``scale`` x ``scale`` rectangle."""

    def __init__(self, config: Config, caption: str = CAPTION):
        pygame.init()
        pygame.display.set_caption(caption)
        self.screen = pygame.display.set_mode(config.window_size)
        self.screen.fill(config.background)
        pygame.display.flip()
        self._open = True
        logger.debug("Opened %dx%d window", *config.window_size)

    def present(self, display: np.ndarray, config: Config) -> None:
        scale = config.scale
        self.screen.fill(config.background)

        rect = pygame.Rect(0, 0, scale, scale)
        for row, col in np.argwhere(display):
            rect.topleft = (int(col) * scale, int(row) * scale)
            pygame.draw.rect(self.screen, config.foreground, rect)
            if config.outlines:
                pygame.draw.rect(self.screen, config.background, rect, 1)

        pygame.display.flip()

    def close(self) -> None:
        if self._open:
            self._open = False
            pygame.quit()


class PygameInput(InputSource):
    """Window close / ESC quit, SPACE or P toggle pause."""

    def poll(self) -> InputSignals:
        quit_requested = False
        toggles = 0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key in QUIT_KEYS:
                    quit_requested = True
                elif event.key in PAUSE_KEYS:
                    toggles += 1
        # two presses in one frame cancel out
        return InputSignals(quit=quit_requested, toggle_pause=toggles % 2 == 1)


class PygameClock:
    """Frame pacing through ``pygame.time.Clock``."""

    def __init__(self):
        self._clock = pygame.time.Clock()

    def __call__(self, fps: int) -> int:
        return self._clock.tick(fps)

