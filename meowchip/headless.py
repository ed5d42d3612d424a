"""Windowless front end: text framebuffer output and scripted input."""

import sys
from typing import Dict, Iterable, Optional, TextIO

import numpy as np

from .config import Config
from .interpreter import InputSignals, InputSource, Presenter

LIT = '█'
UNLIT = '.'


def render_text(display: np.ndarray, lit: str = LIT, unlit: str = UNLIT) -> str:
    """Render the framebuffer as one text line per row."""
    return '\n'.join(
        ''.join(lit if pixel else unlit for pixel in row) for row in display)


class TerminalPresenter(Presenter):
    """Writes the framebuffer to a text stream.

    With ``every`` > 1 only every n-th frame is written; ``final_only``
    writes only the last frame, on ``close()``.
    """

    def __init__(self, stream: Optional[TextIO] = None, every: int = 1,
                 final_only: bool = False):
        self.stream = stream or sys.stdout
        self.every = max(1, every)
        self.final_only = final_only
        self.frames = 0
        self._last: Optional[np.ndarray] = None

    def present(self, display: np.ndarray, config: Config) -> None:
        self.frames += 1
        self._last = display.copy()
        if not self.final_only and self.frames % self.every == 0:
            self._write(self._last)

    def _write(self, display: np.ndarray):
        self.stream.write(f"SCREEN (frame {self.frames}):\n")
        self.stream.write(render_text(display) + '\n')
        self.stream.flush()

    def close(self) -> None:
        if self.final_only and self._last is not None:
            self._write(self._last)
            self._last = None


class NullPresenter(Presenter):
    """Keeps the last presented frame and draws nothing."""

    def __init__(self):
        self.frames = 0
        self.last: Optional[np.ndarray] = None

    def present(self, display: np.ndarray, config: Config) -> None:
        self.frames += 1
        self.last = display.copy()


class ScriptedInput(InputSource):
    """Replays scripted signals and requests quit after ``max_frames`` polls.

    ``script`` maps a poll number (0-based) to the signals returned on that
    poll; every other poll returns no signal.
    """

    def __init__(self, max_frames: Optional[int] = None,
                 script: Optional[Dict[int, InputSignals]] = None):
        self.max_frames = max_frames
        self.script = dict(script or {})
        self.polls = 0

    @classmethod
    def pause_toggles_at(cls, polls: Iterable[int], max_frames: Optional[int] = None):
        return cls(max_frames, {p: InputSignals(toggle_pause=True) for p in polls})

    def poll(self) -> InputSignals:
        n = self.polls
        self.polls += 1
        if self.max_frames is not None and n >= self.max_frames:
            return InputSignals(quit=True)
        return self.script.get(n, InputSignals())
