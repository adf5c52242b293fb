"""
CHIP-8 instruction decoder
Turns a raw 16-bit opcode into an Instruction: one member of the closed Op
enumeration plus its operand fields. Anything that is not one of the 35
documented opcodes raises IllegalInstruction here, before execution.
"""

from enum import Enum
from typing import NamedTuple

from errors import IllegalInstruction


class Op(Enum):
    SYS = "0NNN"  # Machine code routine, ignored
    CLS = "00E0"  # Clear screen
    RET = "00EE"  # Return from subroutine
    JP = "1NNN"  # Jump
    CALL = "2NNN"  # Call subroutine
    SE_VX_NN = "3XNN"  # Skip if VX == NN
    SNE_VX_NN = "4XNN"  # Skip if VX != NN
    SE_VX_VY = "5XY0"  # Skip if VX == VY
    LD_VX_NN = "6XNN"  # VX = NN
    ADD_VX_NN = "7XNN"  # VX += NN, no carry
    LD_VX_VY = "8XY0"  # VX = VY
    OR = "8XY1"  # VX |= VY
    AND = "8XY2"  # VX &= VY
    XOR = "8XY3"  # VX ^= VY
    ADD_VX_VY = "8XY4"  # VX += VY, VF = carry
    SUB = "8XY5"  # VX = VX - VY, VF = not borrow
    SHR = "8XY6"  # VX = VY >> 1, VF = shifted out bit
    SUBN = "8XY7"  # VX = VY - VX, VF = not borrow
    SHL = "8XYE"  # VX = VY << 1, VF = shifted out bit
    SNE_VX_VY = "9XY0"  # Skip if VX != VY
    LD_I = "ANNN"  # I = NNN
    JP_V0 = "BNNN"  # Jump to NNN + V0
    RND = "CXNN"  # VX = random & NN
    DRW = "DXYN"  # Draw N-row sprite from I at (VX, VY), VF = collision
    SKP = "EX9E"  # Skip if key VX pressed
    SKNP = "EXA1"  # Skip if key VX not pressed
    LD_VX_DT = "FX07"  # VX = delay timer
    LD_VX_K = "FX0A"  # Wait for a key press, VX = key
    LD_DT_VX = "FX15"  # Delay timer = VX
    LD_ST_VX = "FX18"  # Sound timer = VX
    ADD_I_VX = "FX1E"  # I += VX
    LD_F_VX = "FX29"  # I = font glyph for digit VX
    LD_B_VX = "FX33"  # BCD of VX to I, I+1, I+2
    LD_I_VX = "FX55"  # Store V0..VX at I, I += X + 1
    LD_VX_I = "FX65"  # Load V0..VX from I, I += X + 1


class Instruction(NamedTuple):
    op: Op
    opcode: int
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

    def __str__(self):
        return f"{self.opcode:04X} {self.op.name}"


# Opcodes fully identified by their leading nibble
_BY_NIBBLE = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_VX_NN,
    0x4: Op.SNE_VX_NN,
    0x6: Op.LD_VX_NN,
    0x7: Op.ADD_VX_NN,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

# 0x8XY? arithmetic group, keyed by the low nibble
_ALU = {
    0x0: Op.LD_VX_VY,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_VX_VY,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

# 0xEX?? and 0xFX?? groups, keyed by the low byte
_KEYS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}


def decode(opcode, address=None):
    """Decode a 16-bit opcode.

    Args:
        opcode (int): big-endian instruction word
        address (int): where it was fetched from, only used in error messages

    Returns:
        Instruction

    Raises:
        IllegalInstruction: for any word outside the documented instruction set
    """
    opcode &= 0xFFFF
    nibble = opcode >> 12
    low = opcode & 0xF

    if nibble == 0x0:
        if opcode == 0x00E0:
            op = Op.CLS
        elif opcode == 0x00EE:
            op = Op.RET
        else:
            op = Op.SYS
    elif nibble in _BY_NIBBLE:
        op = _BY_NIBBLE[nibble]
    elif nibble == 0x5:
        op = Op.SE_VX_VY if low == 0 else None
    elif nibble == 0x9:
        op = Op.SNE_VX_VY if low == 0 else None
    elif nibble == 0x8:
        op = _ALU.get(low)
    elif nibble == 0xE:
        op = _KEYS.get(opcode & 0xFF)
    else:
        op = _MISC.get(opcode & 0xFF)

    if op is None:
        raise IllegalInstruction(opcode, address)

    return Instruction(
        op=op,
        opcode=opcode,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=low,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )
