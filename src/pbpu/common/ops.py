from enum import IntEnum
from typing import Tuple


class Op(IntEnum):
    NOP = 0x0   # -
    ADD = 0x1   # Z = X + Y (+ C)
    SUB = 0x2   # Z = X - (Y + C)
    WT1 = 0x3   # LC.hi = I
    WT2 = 0x4   # LC.lo = I
    WTX = 0x5   # X = I
    WTY = 0x6   # Y = I
    WTZ = 0x7   # Z = I
    ZTR = 0x8   # M[LC] = Z
    RTZ = 0x9   # Z = M[LC]
    PC1 = 0xA   # TMP.lo = I
    PC2 = 0xB   # TMP.hi = I
    JMP = 0xC   # TMP--; PC = TMP
    RTX = 0xD   # X = M[LC]
    RTY = 0xE   # Y = M[LC]
    USC = 0xF   # toggle carry use


# Opcodes that mark the register view dirty
TOUCHES_REGISTERS = frozenset([
    Op.ADD, Op.SUB,
    Op.WT1, Op.WT2,
    Op.WTX, Op.WTY, Op.WTZ,
    Op.RTZ, Op.RTX, Op.RTY,
    Op.PC1, Op.PC2
])


def decode(byte: int) -> Tuple[Op, int]:
    ''' Splits an instruction byte into opcode and immediate '''
    return Op((byte >> 4) & 0xF), byte & 0xF


def encode(op: Op, imm: int = 0) -> int:
    return (int(op) << 4) | (imm & 0xF)
