"""Opcode decoding and disassembly.

Every 16-bit word decodes to an ``Instruction`` tagged with an ``Op``.
Words that match no entry of the CHIP-8 table decode to ``Op.UNKNOWN``.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Tuple

from .constants import PROGRAM_START


class Op(Enum):
    SYS = auto()
    CLS = auto()
    RET = auto()
    JP = auto()
    CALL = auto()
    SE_BYTE = auto()
    SNE_BYTE = auto()
    SE_REG = auto()
    LD_BYTE = auto()
    ADD_BYTE = auto()
    LD_REG = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_REG = auto()
    SUB = auto()
    SHR = auto()
    SUBN = auto()
    SHL = auto()
    SNE_REG = auto()
    LD_I = auto()
    JP_V0 = auto()
    RND = auto()
    DRW = auto()
    SKP = auto()
    SKNP = auto()
    LD_VX_DT = auto()
    LD_VX_K = auto()
    LD_DT_VX = auto()
    LD_ST_VX = auto()
    ADD_I = auto()
    LD_F = auto()
    LD_B = auto()
    LD_MEM = auto()
    LD_REGS = auto()
    UNKNOWN = auto()


MNEMONICS = {
    Op.SYS: "SYS", Op.CLS: "CLS", Op.RET: "RET", Op.JP: "JP", Op.CALL: "CALL",
    Op.SE_BYTE: "SE", Op.SNE_BYTE: "SNE", Op.SE_REG: "SE",
    Op.LD_BYTE: "LD", Op.ADD_BYTE: "ADD", Op.LD_REG: "LD",
    Op.OR: "OR", Op.AND: "AND", Op.XOR: "XOR", Op.ADD_REG: "ADD",
    Op.SUB: "SUB", Op.SHR: "SHR", Op.SUBN: "SUBN", Op.SHL: "SHL",
    Op.SNE_REG: "SNE", Op.LD_I: "LD", Op.JP_V0: "JP", Op.RND: "RND",
    Op.DRW: "DRW", Op.SKP: "SKP", Op.SKNP: "SKNP",
    Op.LD_VX_DT: "LD", Op.LD_VX_K: "LD", Op.LD_DT_VX: "LD", Op.LD_ST_VX: "LD",
    Op.ADD_I: "ADD", Op.LD_F: "LD", Op.LD_B: "LD", Op.LD_MEM: "LD",
    Op.LD_REGS: "LD", Op.UNKNOWN: "???",
}


@dataclass(frozen=True)
class Instruction:
    """A decoded opcode and its fixed nibble fields."""
    opcode: int
    kind: Op
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    @property
    def op_class(self) -> int:
        return (self.opcode >> 12) & 0xF

    def __str__(self) -> str:
        return disassemble(self)


# 8XYN, EXNN and FXNN sub-tables
_ALU_OPS = {
    0x0: Op.LD_REG, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR, 0x4: Op.ADD_REG,
    0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBN, 0xE: Op.SHL,
}
_KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}
_MISC_OPS = {
    0x07: Op.LD_VX_DT, 0x0A: Op.LD_VX_K, 0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX, 0x1E: Op.ADD_I, 0x29: Op.LD_F, 0x33: Op.LD_B,
    0x55: Op.LD_MEM, 0x65: Op.LD_REGS,
}
# Top nibbles whose instruction is fully determined by the nibble itself
_SIMPLE_OPS = {
    0x1: Op.JP, 0x2: Op.CALL, 0x3: Op.SE_BYTE, 0x4: Op.SNE_BYTE,
    0x6: Op.LD_BYTE, 0x7: Op.ADD_BYTE, 0xA: Op.LD_I, 0xB: Op.JP_V0,
    0xC: Op.RND, 0xD: Op.DRW,
}


def _classify(opcode: int) -> Op:
    op = (opcode >> 12) & 0xF
    nn = opcode & 0x00FF
    n = opcode & 0x000F

    if op == 0x0:
        if nn == 0xE0:
            return Op.CLS
        if nn == 0xEE:
            return Op.RET
        return Op.SYS
    if op in _SIMPLE_OPS:
        return _SIMPLE_OPS[op]
    if op == 0x5:
        return Op.SE_REG if n == 0 else Op.UNKNOWN
    if op == 0x9:
        return Op.SNE_REG if n == 0 else Op.UNKNOWN
    if op == 0x8:
        return _ALU_OPS.get(n, Op.UNKNOWN)
    if op == 0xE:
        return _KEY_OPS.get(nn, Op.UNKNOWN)
    # 0xF
    return _MISC_OPS.get(nn, Op.UNKNOWN)


def decode(opcode: int) -> Instruction:
    """Split a 16-bit word into its nibble fields and tag it."""
    opcode &= 0xFFFF
    return Instruction(
        opcode=opcode,
        kind=_classify(opcode),
        x=(opcode >> 8) & 0x0F,     # 4-bit register index
        y=(opcode >> 4) & 0x0F,     # 4-bit register index
        n=opcode & 0x000F,          # 4-bit constant
        nn=opcode & 0x00FF,         # 8-bit constant
        nnn=opcode & 0x0FFF,        # 12-bit address
    )


def disassemble(inst) -> str:
    """Disassemble an opcode (or decoded ``Instruction``) to assembly text."""
    if not isinstance(inst, Instruction):
        inst = decode(inst)

    kind, x, y = inst.kind, inst.x, inst.y
    name = MNEMONICS[kind]

    if kind in (Op.CLS, Op.RET):
        return name
    if kind in (Op.SYS, Op.JP, Op.CALL):
        return f"{name} ${inst.nnn:03X}"
    if kind in (Op.SE_BYTE, Op.SNE_BYTE, Op.LD_BYTE, Op.ADD_BYTE, Op.RND):
        return f"{name} V{x:X}, ${inst.nn:02X}"
    if kind in (Op.SE_REG, Op.SNE_REG, Op.LD_REG, Op.OR, Op.AND, Op.XOR,
                Op.ADD_REG, Op.SUB, Op.SUBN):
        return f"{name} V{x:X}, V{y:X}"
    if kind in (Op.SHR, Op.SHL):
        return f"{name} V{x:X} {{, V{y:X}}}"
    if kind is Op.LD_I:
        return f"LD I, ${inst.nnn:03X}"
    if kind is Op.JP_V0:
        return f"JP V0, ${inst.nnn:03X}"
    if kind is Op.DRW:
        return f"DRW V{x:X}, V{y:X}, {inst.n}"
    if kind in (Op.SKP, Op.SKNP):
        return f"{name} V{x:X}"

    misc = {
        Op.LD_VX_DT: "LD V{x}, DT", Op.LD_VX_K: "LD V{x}, K",
        Op.LD_DT_VX: "LD DT, V{x}", Op.LD_ST_VX: "LD ST, V{x}",
        Op.ADD_I: "ADD I, V{x}", Op.LD_F: "LD F, V{x}",
        Op.LD_B: "LD B, V{x}", Op.LD_MEM: "LD [I], V{x}",
        Op.LD_REGS: "LD V{x}, [I]",
    }
    if kind in misc:
        return misc[kind].format(x=f"{x:X}")

    return f"??? ${inst.opcode:04X}"


def disassemble_rom(data: bytes, start: int = PROGRAM_START
                    ) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(address, word, text)`` for each instruction slot in a ROM.

    A trailing odd byte is reported as a ``DB`` line.
    """
    addr = start
    i = 0
    while i + 1 < len(data):
        word = (data[i] << 8) | data[i + 1]
        yield addr, word, disassemble(word)
        addr += 2
        i += 2
    if i < len(data):
        yield addr, data[i], f"DB ${data[i]:02X}"
