import logging as lg
from typing import List

from pbpu.common.hwconf import ROM_SIZE, RAM_SIZE, NIBBLE_COUNT, PROGRAM_LIMIT, DISPLAY_NIBBLES


class OutOfRange(Exception):
    pass


class EmptyProgram(Exception):
    pass


class Memory:
    ''' Program ROM and nibble-addressed working RAM '''
    rom: bytes
    ram: bytearray

    def __init__(self):
        self.rom = bytes(ROM_SIZE)
        self.ram = bytearray(RAM_SIZE)

    # - ROM - #

    def load_program(self, data: bytes) -> int:
        program = bytes(data[:PROGRAM_LIMIT])

        if len(program) == 0:
            raise EmptyProgram('Program is empty')

        if len(data) > PROGRAM_LIMIT:
            lg.debug(f'Ignoring {len(data) - PROGRAM_LIMIT} trailing bytes')

        self.rom = program + bytes(ROM_SIZE - len(program))
        return len(program)

    def read_rom(self, addr: int) -> int:
        if not 0 <= addr < ROM_SIZE:
            raise OutOfRange(f'ROM address {addr} out of range')

        return self.rom[addr]

    # - RAM - #

    @staticmethod
    def check_nibble(addr: int):
        if not 0 <= addr < NIBBLE_COUNT:
            raise OutOfRange(f'RAM nibble address {addr} out of range')

    def read_nibble(self, addr: int) -> int:
        self.check_nibble(addr)
        byte = self.ram[addr // 2]

        if addr % 2 == 0:
            return byte & 0x0F

        return (byte >> 4) & 0x0F

    def write_nibble(self, addr: int, value: int):
        self.check_nibble(addr)
        i = addr // 2

        if addr % 2 == 0:
            self.ram[i] = (self.ram[i] & 0xF0) | (value & 0x0F)
        else:
            self.ram[i] = (self.ram[i] & 0x0F) | ((value & 0x0F) << 4)

    def display_rows(self) -> List[int]:
        return [self.read_nibble(a) for a in range(DISPLAY_NIBBLES)]
