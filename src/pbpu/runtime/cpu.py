import logging as lg
from dataclasses import dataclass

from pbpu.common.ops import Op, decode, TOUCHES_REGISTERS
from pbpu.common.hwconf import REG_MASK, ADDR_MASK, DISPLAY_NIBBLES
from pbpu.runtime.memory import Memory


@dataclass
class Changes:
    ''' State groups touched since the consumer last looked '''
    registers: bool = False
    memory: bool = False
    display: bool = False

    def merge(self, other: 'Changes'):
        self.registers |= other.registers
        self.memory |= other.memory
        self.display |= other.display

    def clear(self):
        self.registers = False
        self.memory = False
        self.display = False

    def any(self) -> bool:
        return self.registers or self.memory or self.display


class CPU():
    x: int          # ALU operand
    y: int          # ALU operand
    z: int          # ALU result
    loc: int        # Location register (RAM nibble address)
    pc: int         # Program counter
    tmp_pc: int     # Jump target staging register
    carry: bool
    use_carry: bool
    changes: Changes

    def __init__(self, memory: Memory):
        self.memory = memory    # Ref. to memory

        self.x = 0
        self.y = 0
        self.z = 0
        self.loc = 0
        self.pc = 0
        self.tmp_pc = 0
        self.carry = False
        self.use_carry = False

        self.changes = Changes()
        self.step_changes = Changes()

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'X': self.x,
            'Y': self.y,
            'Z': self.z,
            'PC': self.pc,
            'LC': self.loc,
            'TMP': self.tmp_pc,
            'C': int(self.carry),
            'UC': int(self.use_carry)
        }.items()]

        lg.debug(' '.join(state))

    def carry_term(self) -> int:
        return int(self.carry) if self.use_carry else 0

    def limit_regs(self):
        self.x &= REG_MASK
        self.y &= REG_MASK
        self.z &= REG_MASK

    def take_changes(self) -> Changes:
        taken = Changes(**vars(self.changes))
        self.changes.clear()
        return taken

    # - Operations - #

    def nop(self, imm: int):
        pass

    def add(self, imm: int):
        total = self.x + self.y + self.carry_term()
        self.z = total
        self.carry = bool((total >> 4) & 0x1)

    # Approximation of the reference circuit's subtractor
    def sub(self, imm: int):
        subtrahend = self.y + self.carry_term()
        self.z = (self.x - subtrahend) & 0xFF
        self.carry = self.x >= subtrahend

    def wt1(self, imm: int):
        self.loc = (self.loc & 0x0F) | (imm << 4)

    def wt2(self, imm: int):
        self.loc = (self.loc & 0xF0) | imm

    def wtx(self, imm: int):
        self.x = imm

    def wty(self, imm: int):
        self.y = imm

    def wtz(self, imm: int):
        self.z = imm

    def ztr(self, imm: int):
        self.memory.write_nibble(self.loc, self.z)
        self.step_changes.memory = True

        if self.loc < DISPLAY_NIBBLES:
            self.step_changes.display = True

    def rtz(self, imm: int):
        self.z = self.memory.read_nibble(self.loc)

    def pc1(self, imm: int):
        self.tmp_pc = (self.tmp_pc & 0xF0) | imm

    def pc2(self, imm: int):
        self.tmp_pc = (self.tmp_pc & 0x0F) | (imm << 4)

    # Hardware quirk: the staging register stays decremented
    def jmp(self, imm: int):
        self.tmp_pc = (self.tmp_pc - 1) & ADDR_MASK
        self.pc = self.tmp_pc

    def rtx(self, imm: int):
        self.x = self.memory.read_nibble(self.loc)

    def rty(self, imm: int):
        self.y = self.memory.read_nibble(self.loc)

    def usc(self, imm: int):
        self.use_carry = not self.use_carry

    HANDLERS = {
        Op.NOP: nop,
        Op.ADD: add,
        Op.SUB: sub,
        Op.WT1: wt1,
        Op.WT2: wt2,
        Op.WTX: wtx,
        Op.WTY: wty,
        Op.WTZ: wtz,
        Op.ZTR: ztr,
        Op.RTZ: rtz,
        Op.PC1: pc1,
        Op.PC2: pc2,
        Op.JMP: jmp,
        Op.RTX: rtx,
        Op.RTY: rty,
        Op.USC: usc
    }

    # -- Implementation -- #

    def fetch(self):
        return decode(self.memory.read_rom(self.pc))

    def exec_next(self) -> Changes:
        op, imm = self.fetch()

        self.step_changes = Changes(registers=op in TOUCHES_REGISTERS)
        handler = self.HANDLERS[op]
        handler(self, imm)

        self.limit_regs()
        self.pc = (self.pc + 1) & ADDR_MASK

        self.changes.merge(self.step_changes)
        return self.step_changes

    def run(self, cycles: int):
        for _ in range(cycles):
            self.exec_next()
