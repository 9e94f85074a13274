from pathlib import Path
from typing import List, Tuple

import click

from pbpu.common.ops import decode
from pbpu.common.hwconf import ROM_SIZE


def disassemble_at(rom: bytes, addr: int) -> str:
    op, imm = decode(rom[addr])
    return f'{addr:02X}:  {op.name} {imm:01X}'


def window(rom: bytes, pc: int, half: int) -> List[Tuple[int, str]]:
    ''' Lines around pc as (offset, text); addresses outside ROM are skipped '''
    lines = []

    for offset in range(-half, half + 1):
        addr = pc + offset

        if addr < 0 or addr >= min(len(rom), ROM_SIZE):
            continue

        lines.append((offset, disassemble_at(rom, addr)))

    return lines


def listing(rom: bytes, count: int | None = None) -> List[str]:
    if count is None:
        count = len(rom)

    return [disassemble_at(rom, addr) for addr in range(min(count, len(rom)))]


@click.command()
@click.option('-a', '--all', 'show_all', is_flag=True, help='Include trailing zero bytes')
@click.argument('binary', type=Path)
def dump(show_all: bool, binary: Path):
    rom = binary.read_bytes()[:ROM_SIZE]
    count = len(rom) if show_all else len(rom.rstrip(b'\x00'))

    for line in listing(rom, count):
        click.echo(line)


if __name__ == '__main__':
    dump()
