"""Command line entry point: ``meowchip ROM [options]``."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import Config, parse_color
from .constants import (
    DEFAULT_CLOCK_HZ, DEFAULT_SCALE, EXIT_OK, EXIT_ROM_ERROR,
    EXIT_RUNTIME_ERROR,
)
from .decoder import disassemble_rom
from .errors import ExecutionError, RomError
from .headless import ScriptedInput, TerminalPresenter
from .interpreter import Interpreter
from .machine import Machine
from .rom import read_rom

logger = logging.getLogger("meowchip")

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

CONTROLS = """\
Controls:
  SPACE / P = Pause/Resume
  ESC       = Exit
"""


def _color(text: str):
    try:
        return parse_color(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _positive_int(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meowchip",
        description="Run a CHIP-8 program.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("rom", nargs="?", help="path to the CHIP-8 ROM (.ch8)")
    parser.add_argument("--scale", type=_positive_int, default=DEFAULT_SCALE,
                        help="window pixels per CHIP-8 pixel")
    parser.add_argument("--fg", type=_color, default="white", dest="foreground",
                        help="foreground color (name or #RRGGBB)")
    parser.add_argument("--bg", type=_color, default="black", dest="background",
                        help="background color (name or #RRGGBB)")
    parser.add_argument("--no-outlines", action="store_false", dest="outlines",
                        help="do not outline lit pixels")
    parser.add_argument("--clock", type=_positive_int, default=DEFAULT_CLOCK_HZ,
                        dest="clock_hz", metavar="HZ",
                        help="instructions executed per second")
    parser.add_argument("--strict", action="store_true",
                        help="stop on opcodes this machine does not execute")
    parser.add_argument("--headless", action="store_true",
                        help="run without a window and print the final frame")
    parser.add_argument("--frames", type=_positive_int, default=60,
                        help="frames to run in headless mode")
    parser.add_argument("--disassemble", action="store_true",
                        help="print a listing of the ROM and exit")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging (-vv traces every instruction)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="only log errors")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: int = 0, quiet: bool = False):
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("meowchip").setLevel(level)


def print_listing(data: bytes, stream=None):
    stream = stream or sys.stdout
    for addr, word, text in disassemble_rom(data):
        width = 2 if text.startswith("DB") else 4
        stream.write(f"${addr:03X}: {word:0{width}X}  {text}\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if not args.rom:
        logger.critical("USAGE: %s <path to rom>", parser.prog)
        return EXIT_ROM_ERROR

    try:
        data = read_rom(args.rom)
    except RomError as e:
        logger.critical("%s", e)
        return EXIT_ROM_ERROR

    if args.disassemble:
        print_listing(data)
        return EXIT_OK

    try:
        config = Config(
            scale=args.scale,
            foreground=args.foreground,
            background=args.background,
            outlines=args.outlines,
            clock_hz=args.clock_hz,
            strict=args.strict,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        machine = Machine.from_rom(data, strict=config.strict)
    except RomError as e:
        logger.critical("Failed to create CHIP-8 instance: %s", e)
        return EXIT_ROM_ERROR

    if args.headless:
        presenter = TerminalPresenter(final_only=True)
        input_source = ScriptedInput(max_frames=args.frames)
        clock = None
    else:
        from .frontend import PygameClock, PygameInput, PygamePresenter
        print(CONTROLS)
        presenter = PygamePresenter(config)
        input_source = PygameInput()
        clock = PygameClock()

    interpreter = Interpreter(machine, presenter, input_source, config, clock)
    try:
        interpreter.run()
    except ExecutionError as e:
        logger.critical("Emulation stopped: %s", e)
        return EXIT_RUNTIME_ERROR

    if machine.unimplemented:
        logger.warning("%d distinct unimplemented opcodes were skipped",
                       len(machine.unimplemented))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
