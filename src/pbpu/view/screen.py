import curses
from typing import List

from pbpu.common.hwconf import DISASM_WIDTH, DISPLAY_SIZE, MEMORY_ROW_NIBBLES
from pbpu.runtime.cpu import CPU, Changes
import pbpu.view.panels as panels


REGS_HEIGHT, REGS_WIDTH = 4, 20
MEMORY_WIDTH = (MEMORY_ROW_NIBBLES - 1) * 2 + 8
INFO_HEIGHT = 4


class Screen:
    ''' Curses front-end laid out like the hardware panel '''

    def __init__(self, stdscr, cpu: CPU, step_mode: bool):
        self.stdscr = stdscr
        self.cpu = cpu

        height, _ = stdscr.getmaxyx()

        self.regs = curses.newwin(REGS_HEIGHT, REGS_WIDTH, 0, 0)
        self.display = curses.newwin(DISPLAY_SIZE * 2 + 2, DISPLAY_SIZE * 4 + 2, REGS_HEIGHT, 1)
        self.memory = curses.newwin(height, MEMORY_WIDTH, 0, REGS_WIDTH)
        self.disasm = curses.newwin(height, DISASM_WIDTH, 0, REGS_WIDTH + MEMORY_WIDTH)
        self.info = curses.newwin(INFO_HEIGHT, REGS_WIDTH, height - INFO_HEIGHT, 0)

        curses.noecho()
        curses.cbreak()
        stdscr.nodelay(not step_mode)
        stdscr.keypad(True)
        curses.curs_set(0)

    @staticmethod
    def put_lines(win, lines: List[str], top: int = 1, left: int = 1):
        height, width = win.getmaxyx()

        for i, line in enumerate(lines):
            row = top + i

            if row >= height - 1:
                break

            win.addnstr(row, left, line, width - left - 1)

    @staticmethod
    def frame(win, title: str):
        win.box(0, 0)
        win.addstr(0, 1, title)

    def draw_registers(self):
        self.frame(self.regs, '[Registers]')
        self.put_lines(self.regs, panels.registers_panel(self.cpu))
        self.regs.noutrefresh()

    def draw_display(self):
        self.frame(self.display, '[Screen]')
        self.put_lines(self.display, panels.display_panel(self.cpu.memory))
        self.display.noutrefresh()

    def draw_memory(self):
        self.frame(self.memory, '[Memory]')
        self.put_lines(self.memory, panels.memory_panel(self.cpu.memory))
        self.memory.noutrefresh()

    def draw_disassembly(self):
        height, _ = self.disasm.getmaxyx()
        cursor_row = height // 2
        half = (height - 2) // 2

        self.disasm.erase()
        self.frame(self.disasm, '[Disassembly]')
        lines = panels.disassembly_panel(self.cpu, half)
        first = cursor_row - min(half, self.cpu.pc)
        self.put_lines(self.disasm, lines, top=first)
        self.disasm.noutrefresh()

    def draw_info(self):
        self.info.box(0, 0)
        self.put_lines(self.info, panels.info_panel())
        self.info.noutrefresh()

    def draw_all(self):
        self.draw_registers()
        self.draw_display()
        self.draw_memory()
        self.draw_disassembly()
        self.draw_info()
        curses.doupdate()

    def update(self, changes: Changes):
        self.draw_disassembly()

        if changes.registers:
            self.draw_registers()

        if changes.display:
            self.draw_display()

        if changes.memory:
            self.draw_memory()

        curses.doupdate()

    def wait_key(self):
        return self.stdscr.getch()
