import logging as lg
from pathlib import Path

from pbpu.common.hwconf import PROGRAM_LIMIT
from pbpu.runtime.memory import Memory, EmptyProgram


class ProgramNotFound(Exception):
    pass


def read_program(path: str | Path) -> bytes:
    if isinstance(path, str):
        path = Path(path)

    try:
        with path.open('rb') as f:
            data = f.read(PROGRAM_LIMIT)

    except OSError as e:
        raise ProgramNotFound(f'Program not found: {path}') from e

    lg.info(f'Read {len(data)} bytes.')

    if len(data) == 0:
        raise EmptyProgram(f'Program is empty: {path}')

    return data


def load_file(memory: Memory, path: str | Path) -> int:
    return memory.load_program(read_program(path))
