import logging as lg
from pathlib import Path

import click
import pyparsing as pp

from pbpu.common.hwconf import PROGRAM_LIMIT
from pbpu.pasm.fpp import FPP, AsmError
import pbpu.pasm.grammar as grammar


def compile_source(contents: str) -> bytes:
    # First pass
    first_pass = FPP()

    try:
        actions = grammar.program.parse_string(contents, parse_all=True)
    except pp.ParseBaseException as e:
        raise AsmError(f'Syntax error at line {e.lineno}: {e.line.strip()}') from e

    for (func, arg) in actions:  # type: ignore
        func(first_pass, arg)

    # Second pass
    bytestr = bytearray()

    for (t, d) in first_pass.cmd_list:
        if t == 'byte':
            bytestr.append(d)  # type: ignore

        if t == 'ref':
            (op, labelname) = d  # type: ignore
            bytestr.append(first_pass.resolve(op, labelname))

    if len(bytestr) > PROGRAM_LIMIT:
        raise AsmError(f'Program is {len(bytestr)} bytes, at most {PROGRAM_LIMIT} fit in ROM')

    return bytes(bytestr)


def compile_file(filepath: str | Path) -> bytes:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Compiling file {filepath}')
    return compile_source(filepath.read_text())


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, source: Path, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("PBPU ASM")

    try:
        bytestr = compile_file(source)
    except AsmError as e:
        raise click.ClickException(str(e))

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == "__main__":
    compile()
