"""Closed set of CHIP-8 instructions and word-to-instruction identification."""

from enum import Enum

from chipax.decode import DecodedInstruction
from chipax.errors import InvalidOpcodeError


class Op(Enum):
    """One member per instruction, valued by its conventional pattern."""
    CLS = "00E0"
    RET = "00EE"
    JP = "1NNN"
    CALL = "2NNN"
    SE_BYTE = "3XNN"
    SNE_BYTE = "4XNN"
    SE_REG = "5XY0"
    LD_BYTE = "6XNN"
    ADD_BYTE = "7XNN"
    LD_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_REG = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I_VX = "FX1E"
    LD_F_VX = "FX29"
    LD_B_VX = "FX33"
    LD_MEM_VX = "FX55"
    LD_VX_MEM = "FX65"


# Families fully selected by the leading nibble
_FAMILIES = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_BYTE,
    0x4: Op.SNE_BYTE,
    0x6: Op.LD_BYTE,
    0x7: Op.ADD_BYTE,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_SYSTEM = {0x00E0: Op.CLS, 0x00EE: Op.RET}

# 5XY0 and 9XY0 only decode with a zero low nibble
_REGISTER_COMPARE = {0x5: Op.SE_REG, 0x9: Op.SNE_REG}

_ALU = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY = {0x9E: Op.SKP, 0xA1: Op.SKNP}

_MISC = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


def identify(instruction: DecodedInstruction) -> Op:
    """Return the Op a decoded word encodes, or raise InvalidOpcodeError."""
    family = instruction.opcode
    op = None
    if family in _FAMILIES:
        op = _FAMILIES[family]
    elif family == 0x0:
        op = _SYSTEM.get(instruction.raw)
    elif family in _REGISTER_COMPARE:
        if instruction.n == 0:
            op = _REGISTER_COMPARE[family]
    elif family == 0x8:
        op = _ALU.get(instruction.n)
    elif family == 0xE:
        op = _KEY.get(instruction.nn)
    elif family == 0xF:
        op = _MISC.get(instruction.nn)

    if op is None:
        raise InvalidOpcodeError(instruction.raw)
    return op
