# type: ignore
import pytest

import pbpu.pasm.asm as asm

import unit_utils


@pytest.fixture
def diamond_binary(tmp_path):
    binary = asm.compile_file(unit_utils.find_file('testdata/programs/diamond.pasm'))
    path = tmp_path / 'diamond.bin'
    path.write_bytes(binary)
    yield path


@pytest.fixture
def empty_binary(tmp_path):
    path = tmp_path / 'empty.bin'
    path.write_bytes(b'')
    yield path
