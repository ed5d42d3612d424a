"""CHIP-8 machine state and the fetch-decode-execute engine."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .constants import (
    DISPLAY_H, DISPLAY_W, FONT_START, FONTSET, MAX_ROM_SIZE, MEMORY_SIZE,
    NUM_KEYS, NUM_REGISTERS, PROGRAM_START, SPRITE_WIDTH, STACK_SIZE,
)
from .decoder import Instruction, Op, decode, disassemble
from .errors import (
    CallStackOverflow, CallStackUnderflow, MachineHalted,
    ProgramCounterOutOfBounds, RomTooLarge, UnimplementedOpcode,
)

logger = logging.getLogger(__name__)


class RunState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    QUIT = "quit"


class CallStack:
    """Bounded stack of 16-bit return addresses."""

    def __init__(self, capacity: int = STACK_SIZE):
        self.capacity = capacity
        self._slots = [0] * capacity
        self._depth = 0

    def __len__(self) -> int:
        return self._depth

    def __iter__(self):
        return iter(self._slots[:self._depth])

    @property
    def full(self) -> bool:
        return self._depth >= self.capacity

    def push(self, address: int):
        if self.full:
            raise CallStackOverflow(
                f"call stack overflow: more than {self.capacity} nested calls")
        self._slots[self._depth] = address & 0xFFFF
        self._depth += 1

    def pop(self) -> int:
        if self._depth == 0:
            raise CallStackUnderflow("return with an empty call stack")
        self._depth -= 1
        return self._slots[self._depth]

    def peek(self) -> Optional[int]:
        return self._slots[self._depth - 1] if self._depth else None

    def clear(self):
        self._slots = [0] * self.capacity
        self._depth = 0


@dataclass
class MachineState:
    """CHIP-8 machine state container"""
    # Memory
    memory: bytearray = field(default_factory=lambda: bytearray(MEMORY_SIZE))

    # Registers
    V: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)  # V0-VF
    I: int = 0
    PC: int = PROGRAM_START

    stack: CallStack = field(default_factory=CallStack)

    # Timers (not driven by this machine)
    delay_timer: int = 0
    sound_timer: int = 0

    # Display (64x32), indexed [row, col]
    display: np.ndarray = field(
        default_factory=lambda: np.zeros((DISPLAY_H, DISPLAY_W), dtype=np.bool_))

    # Keypad state (not read by the executed subset)
    keys: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)


class Machine:
    """The CHIP-8 virtual machine.

    State is only mutated by ``reset``, ``load``, ``step`` and the run-state
    transitions. Opcodes outside the executed subset are reported through
    logging and counted in ``unimplemented``; with ``strict=True`` they
    raise ``UnimplementedOpcode`` instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.state = MachineState()
        self.run_state = RunState.RUNNING
        self.cycles = 0
        self.unimplemented: Counter = Counter()
        self._handlers: Dict[Op, Callable[[Instruction], None]] = {
            Op.CLS: self._op_cls,
            Op.RET: self._op_ret,
            Op.JP: self._op_jp,
            Op.CALL: self._op_call,
            Op.LD_BYTE: self._op_ld_byte,
            Op.ADD_BYTE: self._op_add_byte,
            Op.LD_I: self._op_ld_i,
            Op.DRW: self._op_drw,
        }
        self.reset()

    @classmethod
    def from_rom(cls, data: bytes, **kwargs) -> "Machine":
        machine = cls(**kwargs)
        machine.load(data)
        return machine

    # ─── Lifecycle ───

    def reset(self):
        """Zero all state, load the font and point PC at the program area."""
        self.state = MachineState()
        self._load_fontset()
        self.run_state = RunState.RUNNING
        self.cycles = 0
        self.unimplemented.clear()

    def _load_fontset(self):
        self.state.memory[FONT_START:FONT_START + len(FONTSET)] = FONTSET

    def load(self, data: bytes):
        """Reset the machine and copy a ROM image into memory at 0x200.

        Raises ``RomTooLarge`` without touching any state if the image does
        not fit between 0x200 and the end of memory.
        """
        size = len(data)
        if size > MAX_ROM_SIZE:
            raise RomTooLarge(size, MAX_ROM_SIZE)
        self.reset()
        self.state.memory[PROGRAM_START:PROGRAM_START + size] = data
        logger.info("Loaded %d byte ROM at $%03X", size, PROGRAM_START)

    load_rom = load

    # ─── Read-only views ───

    @property
    def display(self) -> np.ndarray:
        view = self.state.display.view()
        view.flags.writeable = False
        return view

    @property
    def pc(self) -> int:
        return self.state.PC

    @property
    def index(self) -> int:
        return self.state.I

    @property
    def registers(self) -> Tuple[int, ...]:
        return tuple(self.state.V)

    @property
    def stack_depth(self) -> int:
        return len(self.state.stack)

    @property
    def running(self) -> bool:
        return self.run_state is RunState.RUNNING

    # ─── Run state ───

    def toggle_pause(self):
        if self.run_state is RunState.RUNNING:
            self.run_state = RunState.PAUSED
            logger.info("===== Paused =====")
        elif self.run_state is RunState.PAUSED:
            self.run_state = RunState.RUNNING
            logger.info("===== Running =====")

    def quit(self):
        if self.run_state is not RunState.QUIT:
            self.run_state = RunState.QUIT
            logger.info("===== Quit =====")

    # ─── Fetch / decode / execute ───

    def fetch(self) -> int:
        """Fetch next 16-bit opcode and advance PC"""
        pc = self.state.PC
        if pc > MEMORY_SIZE - 2:
            raise ProgramCounterOutOfBounds(
                "program counter outside memory", pc=pc)
        hi = self.state.memory[pc]
        lo = self.state.memory[pc + 1]
        self.state.PC = pc + 2
        return (hi << 8) | lo

    def step(self) -> Instruction:
        """Execute one instruction and return it."""
        if self.run_state is not RunState.RUNNING:
            raise MachineHalted(
                f"step() while {self.run_state.value}", pc=self.state.PC)

        address = self.state.PC
        inst = decode(self.fetch())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[ADDR]: $%04X [OPCODE]: $%04X [EXEC]: %s",
                         address, inst.opcode, disassemble(inst))

        handler = self._handlers.get(inst.kind)
        try:
            if handler is None:
                self._report_unimplemented(address, inst)
            else:
                handler(inst)
        except (CallStackOverflow, CallStackUnderflow) as e:
            # re-raise with the faulting location attached
            raise type(e)(str(e), pc=address, opcode=inst.opcode) from None

        self.cycles += 1
        return inst

    def _report_unimplemented(self, address: int, inst: Instruction):
        if self.strict:
            raise UnimplementedOpcode(
                f"unimplemented instruction {disassemble(inst)}",
                pc=address, opcode=inst.opcode)
        seen = inst.opcode in self.unimplemented
        self.unimplemented[inst.opcode] += 1
        if seen:
            logger.debug("Skipping unimplemented opcode $%04X at $%03X",
                         inst.opcode, address)
        else:
            logger.warning("Unimplemented opcode $%04X (%s) at $%03X, skipped",
                           inst.opcode, disassemble(inst), address)

    # ─── 0x0XXX ───

    def _op_cls(self, inst: Instruction):
        # 00E0: CLS - Clear display
        self.state.display.fill(False)

    def _op_ret(self, inst: Instruction):
        # 00EE: RET - Return from subroutine
        self.state.PC = self.state.stack.pop()

    # ─── 1NNN: JP addr ───

    def _op_jp(self, inst: Instruction):
        self.state.PC = inst.nnn

    # ─── 2NNN: CALL addr ───

    def _op_call(self, inst: Instruction):
        self.state.stack.push(self.state.PC)
        self.state.PC = inst.nnn

    # ─── 6XNN: LD Vx, byte ───

    def _op_ld_byte(self, inst: Instruction):
        self.state.V[inst.x] = inst.nn

    # ─── 7XNN: ADD Vx, byte (no carry) ───

    def _op_add_byte(self, inst: Instruction):
        V = self.state.V
        V[inst.x] = (V[inst.x] + inst.nn) & 0xFF

    # ─── ANNN: LD I, addr ───

    def _op_ld_i(self, inst: Instruction):
        self.state.I = inst.nnn

    # ─── DXYN: DRW Vx, Vy, nibble ───

    def _op_drw(self, inst: Instruction):
        V = self.state.V
        self._draw_sprite(V[inst.x], V[inst.y], inst.n)

    def _draw_sprite(self, x: int, y: int, height: int):
        """XOR a sprite onto the display, clipping at the screen edges.

        VF is set to 1 if any lit pixel gets switched off.
        """
        V = self.state.V
        memory = self.state.memory
        display = self.state.display
        V[0xF] = 0  # Reset collision flag

        x = x % DISPLAY_W
        y = y % DISPLAY_H

        for row in range(height):
            py = y + row
            if py >= DISPLAY_H:
                break

            sprite_byte = memory[(self.state.I + row) & 0xFFF]

            for col in range(SPRITE_WIDTH):
                px = x + col
                if px >= DISPLAY_W:
                    break

                if sprite_byte & (0x80 >> col):
                    if display[py, px]:
                        V[0xF] = 1  # Collision!
                    display[py, px] ^= True
