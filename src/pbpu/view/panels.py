''' Text renditions of the machine state, one list of lines per panel '''

from typing import List

from pbpu.common.hwconf import DISPLAY_SIZE, MEMORY_ROW_NIBBLES, NIBBLE_COUNT, VERSION
from pbpu.runtime.cpu import CPU
from pbpu.runtime.memory import Memory
import pbpu.tools.disasm as disasm


PIXEL_ON = '####'
PIXEL_OFF = '    '


def registers_panel(cpu: CPU) -> List[str]:
    return [
        f'  X: {cpu.x:01X} Y: {cpu.y:01X} Z: {cpu.z:01X}',
        f' PC: {cpu.pc:02X}    LC: {cpu.loc:02X}'
    ]


def display_panel(memory: Memory) -> List[str]:
    lines = []

    # Text cells are twice as tall as wide, so each pixel row takes two lines
    for row in memory.display_rows():
        pixels = ''.join(
            PIXEL_ON if (row >> (DISPLAY_SIZE - 1 - col)) & 0x1 else PIXEL_OFF
            for col in range(DISPLAY_SIZE)
        )
        lines.extend([pixels, pixels])

    return lines


def memory_header() -> str:
    return '    ' + ''.join(f'{i:01X} ' for i in range(MEMORY_ROW_NIBBLES))


def memory_row(memory: Memory, addr: int) -> str:
    cells = ''.join(
        f'{memory.read_nibble(a):01X} '
        for a in range(addr, addr + MEMORY_ROW_NIBBLES)
    )
    return f'{addr:02X}: {cells}'


def memory_panel(memory: Memory) -> List[str]:
    lines = [memory_header()]
    lines.extend(
        memory_row(memory, addr)
        for addr in range(0, NIBBLE_COUNT, MEMORY_ROW_NIBBLES)
    )
    return lines


def disassembly_panel(cpu: CPU, half: int) -> List[str]:
    lines = []

    for offset, text in disasm.window(cpu.memory.rom, cpu.pc, half):
        if offset == 0:
            lines.append(f'> {text}')
        else:
            lines.append(f' {text}')

    return lines


def info_panel() -> List[str]:
    return [
        f'  PBPU-Emu {VERSION}',
        '  by  PixelBrush'
    ]


def boxed(title: str, lines: List[str]) -> List[str]:
    width = max([len(title) + 2] + [len(line) for line in lines])
    top = '+-' + title + '-' * (width - len(title)) + '+'
    bottom = '+' + '-' * (width + 1) + '+'
    return [top] + [f'|{line.ljust(width)} |' for line in lines] + [bottom]


def render_frame(cpu: CPU, disasm_half: int = 8) -> str:
    ''' All panels stacked vertically, for non-interactive output '''
    sections = [
        boxed('[Registers]', registers_panel(cpu)),
        boxed('[Screen]', display_panel(cpu.memory)),
        boxed('[Memory]', memory_panel(cpu.memory)),
        boxed('[Disassembly]', disassembly_panel(cpu, disasm_half)),
        boxed('[Info]', info_panel())
    ]

    return '\n'.join('\n'.join(section) for section in sections) + '\n'
