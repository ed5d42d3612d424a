"""Meow Machine: a CHIP-8 virtual machine."""

__version__ = "0.2.0"

from .config import Config
from .decoder import Instruction, Op, decode, disassemble
from .errors import (
    CallStackOverflow, CallStackUnderflow, Chip8Error, ExecutionError,
    MachineHalted, ProgramCounterOutOfBounds, RomError, RomNotFound,
    RomTooLarge, RomUnreadable, UnimplementedOpcode,
)
from .interpreter import InputSignals, InputSource, Interpreter, Presenter
from .machine import CallStack, Machine, RunState
from .rom import read_rom
