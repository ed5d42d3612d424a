"""Exceptions raised by the CHIP-8 machine and its ROM loader.

``RomError`` subclasses are startup failures: the machine is never built.
``ExecutionError`` subclasses stop a running program.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for every error raised by this package."""


# ─── Startup ───

class RomError(Chip8Error):
    """The ROM image could not be obtained or does not fit in memory."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class RomNotFound(RomError):
    pass


class RomUnreadable(RomError):
    pass


class RomTooLarge(RomError):
    def __init__(self, size: int, limit: int, path: Optional[str] = None):
        where = f"ROM file {path}" if path else "ROM image"
        super().__init__(f"{where} is too big: {size} > {limit} bytes", path)
        self.size = size
        self.limit = limit


# ─── Execution ───

class ExecutionError(Chip8Error):
    """A fatal condition hit while executing an instruction."""

    def __init__(self, message: str, pc: Optional[int] = None,
                 opcode: Optional[int] = None):
        if pc is not None:
            message = f"{message} (at ${pc:03X}"
            if opcode is not None:
                message += f", opcode ${opcode:04X}"
            message += ")"
        super().__init__(message)
        self.pc = pc
        self.opcode = opcode


class CallStackOverflow(ExecutionError):
    pass


class CallStackUnderflow(ExecutionError):
    pass


class ProgramCounterOutOfBounds(ExecutionError):
    pass


class MachineHalted(ExecutionError):
    """``step()`` was called while the machine was paused or quit."""


class UnimplementedOpcode(ExecutionError):
    """Raised for non-executable opcodes when the machine runs in strict mode."""
