"""The interpreter loop and the capability interfaces it drives.

The loop polls an ``InputSource`` for quit/pause signals, runs a fixed
budget of instructions per frame on the ``Machine`` and hands the display
to a ``Presenter``. Front ends implement the two interfaces.
"""

import abc
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .config import Config
from .machine import Machine, RunState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputSignals:
    quit: bool = False
    toggle_pause: bool = False


class Presenter(abc.ABC):
    """Renders the 64x32 framebuffer."""

    @abc.abstractmethod
    def present(self, display: np.ndarray, config: Config) -> None:
        ...

    def close(self) -> None:
        pass


class InputSource(abc.ABC):
    """Supplies quit and pause/resume requests once per frame."""

    @abc.abstractmethod
    def poll(self) -> InputSignals:
        ...

    def close(self) -> None:
        pass


def _no_clock(fps: int) -> None:
    return None


class Interpreter:
    """Drives a ``Machine`` at ``config.clock_hz`` instructions per second.

    Each frame executes ``config.instructions_per_frame`` instructions and
    presents once. While paused no instruction is executed and nothing is
    presented; input is still polled so the machine can be resumed or quit.
    """

    def __init__(self, machine: Machine, presenter: Presenter,
                 input_source: InputSource, config: Optional[Config] = None,
                 clock: Optional[Callable[[int], object]] = None):
        self.machine = machine
        self.presenter = presenter
        self.input_source = input_source
        self.config = config or Config()
        self.clock = clock or _no_clock
        self.frames = 0

    def handle_input(self):
        signals = self.input_source.poll()
        if signals.quit:
            self.machine.quit()
        elif signals.toggle_pause:
            self.machine.toggle_pause()

    def run_frame(self):
        """Execute one frame's instruction budget, then present it."""
        for _ in range(self.config.instructions_per_frame):
            self.machine.step()
        self.presenter.present(self.machine.display, self.config)
        self.frames += 1

    def tick(self) -> bool:
        """One loop iteration. Returns False once the machine has quit."""
        self.handle_input()
        state = self.machine.run_state
        if state is RunState.QUIT:
            return False
        if state is RunState.RUNNING:
            self.run_frame()
        self.clock(self.config.fps)
        return True

    def run(self) -> int:
        """Loop until quit. Returns the number of frames presented."""
        logger.info("Running at %d Hz (%d instructions/frame)",
                    self.config.clock_hz, self.config.instructions_per_frame)
        try:
            while self.tick():
                pass
        finally:
            self.presenter.close()
            self.input_source.close()
        logger.info("Stopped after %d frames, %d instructions",
                    self.frames, self.machine.cycles)
        return self.frames
