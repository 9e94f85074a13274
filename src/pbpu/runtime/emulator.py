import sys
from pathlib import Path
import logging as lg
import traceback
import curses
from typing import Callable

import click

from pbpu.common.hwconf import DEFAULT_DELAY_US, HEADLESS_CYCLES
from pbpu.runtime.memory import Memory, EmptyProgram
from pbpu.runtime.loader import ProgramNotFound, load_file
from pbpu.runtime.pacing import Pacer, DelayPacer, StepPacer, InvalidDelay, parse_delay
from pbpu.view.screen import Screen
import pbpu.view.panels as panels
import pbpu.runtime.cpu as cpu


EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def create_machine(program: Path) -> cpu.CPU:
    memory = Memory()
    load_file(memory, program)
    return cpu.CPU(memory)


def execute(
    proc: cpu.CPU,
    pacer: Pacer,
    on_step: Callable[[cpu.Changes], None] | None = None,
    cycles: int | None = None,
    verbose: bool = False
):
    ''' Steps the machine until cycles run out, or forever if none given '''
    count = 0

    while cycles is None or count < cycles:
        pacer.wait()
        proc.exec_next()
        count += 1

        if verbose:
            proc.debug_dump()

        if on_step is not None:
            on_step(proc.take_changes())


def run_headless(proc: cpu.CPU, cycles: int, verbose: bool):
    execute(proc, Pacer(), cycles=cycles, verbose=verbose)
    click.echo(panels.render_frame(proc), nl=False)


def run_screen(proc: cpu.CPU, step: bool, delay: int, cycles: int | None, verbose: bool):
    def main(stdscr):
        screen = Screen(stdscr, proc, step)
        screen.draw_all()

        pacer = StepPacer(screen.wait_key) if step else DelayPacer(delay)
        execute(proc, pacer, screen.update, cycles, verbose)

    curses.wrapper(main)


@click.command()
@click.option('--step', is_flag=True, help='Single step mode, advance on key press')
@click.option('--delay', default=str(DEFAULT_DELAY_US), help='Delay between steps in microseconds')
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--log-file', type=click.Path(path_type=Path), help='Write log to a file')
@click.option('--headless', is_flag=True, help='Run without the terminal view and print the final state')
@click.option('--cycles', type=click.IntRange(min=0), help='Stop after this many steps')
@click.argument('program', type=Path, required=False)
def run(
    step: bool,
    delay: str,
    verbose: bool,
    log_file: Path | None,
    headless: bool,
    cycles: int | None,
    program: Path | None
):
    lg.basicConfig(
        level=lg.DEBUG if verbose else lg.INFO,
        filename=log_file,
        force=True
    )
    lg.info('PBPU-Emu')

    if program is None:
        lg.error('No program passed in')
        sys.exit(EXIT_LOAD_ERROR)

    # Per-step dumps on stderr would tear the curses view
    dump = verbose and (headless or log_file is not None)

    if verbose and not dump:
        lg.warning('Register dumps need --log-file when the terminal view is on')

    try:
        delay_us = parse_delay(delay)
        proc = create_machine(program)

    except (InvalidDelay, ProgramNotFound, EmptyProgram) as e:
        lg.error(e)
        sys.exit(EXIT_LOAD_ERROR)

    try:
        if headless:
            if step:
                lg.warning('Step mode is ignored when running headless')

            run_headless(proc, HEADLESS_CYCLES if cycles is None else cycles, dump)
        else:
            run_screen(proc, step, delay_us, cycles, dump)

        sys.exit(EXIT_OK)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
