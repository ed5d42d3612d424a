"""Front end configuration."""

import re
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    COLORS, DEFAULT_CLOCK_HZ, DEFAULT_SCALE, DISPLAY_H, DISPLAY_W, FRAME_HZ,
)

Color = Tuple[int, int, int]

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def parse_color(text: str) -> Color:
    """Parse a palette name (``red``) or a ``#RRGGBB`` string into RGB."""
    key = text.strip().lower()
    if key in COLORS:
        return COLORS[key]
    m = _HEX_COLOR.match(key)
    if not m:
        names = ", ".join(sorted(COLORS))
        raise ValueError(f"unknown color {text!r} (use #RRGGBB or one of: {names})")
    value = int(m.group(1), 16)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


@dataclass(frozen=True)
class Config:
    """Immutable settings shared by the interpreter loop and the presenter."""
    scale: int = DEFAULT_SCALE
    foreground: Color = COLORS['white']
    background: Color = COLORS['black']
    outlines: bool = True
    clock_hz: int = DEFAULT_CLOCK_HZ
    fps: int = FRAME_HZ
    strict: bool = False

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError(f"scale must be at least 1, got {self.scale}")
        if self.fps < 1:
            raise ValueError(f"fps must be at least 1, got {self.fps}")
        if self.clock_hz < self.fps:
            raise ValueError(
                f"clock rate {self.clock_hz} Hz is below the frame rate {self.fps} Hz")
        for name in ('foreground', 'background'):
            color = getattr(self, name)
            if len(color) != 3 or not all(0 <= c <= 255 for c in color):
                raise ValueError(f"{name} must be an RGB triple, got {color!r}")

    @property
    def instructions_per_frame(self) -> int:
        return self.clock_hz // self.fps

    @property
    def window_size(self) -> Tuple[int, int]:
        return DISPLAY_W * self.scale, DISPLAY_H * self.scale
