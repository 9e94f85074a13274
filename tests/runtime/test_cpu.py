import random

import pytest

from pbpu.common.ops import Op, encode
from pbpu.runtime.cpu import CPU, Changes

from unit_utils import program, machine


def run(proc: CPU, steps: int) -> CPU:
    proc.run(steps)
    return proc


def test_initial_state():
    proc = machine(program(Op.NOP))

    assert (proc.x, proc.y, proc.z) == (0, 0, 0)
    assert (proc.pc, proc.tmp_pc, proc.loc) == (0, 0, 0)
    assert not proc.carry
    assert not proc.use_carry
    assert not proc.changes.any()


def test_add_sets_carry_from_bit_four():
    proc = run(machine(program((Op.WTX, 9), (Op.WTY, 9), Op.ADD)), 3)

    assert proc.z == 2
    assert proc.carry


def test_add_without_overflow():
    proc = run(machine(program((Op.WTX, 3), (Op.WTY, 4), Op.ADD)), 3)

    assert proc.z == 7
    assert not proc.carry


def test_add_ignores_carry_unless_enabled():
    proc = run(machine(program((Op.WTX, 15), (Op.WTY, 15), Op.ADD, Op.ADD)), 4)

    assert proc.z == 14
    assert proc.carry


def test_add_with_carry_enabled():
    proc = run(machine(program(Op.USC, (Op.WTX, 15), (Op.WTY, 15), Op.ADD, Op.ADD)), 5)

    assert proc.use_carry
    assert proc.z == 15     # 15 + 15 + 1
    assert proc.carry


def test_sub():
    proc = run(machine(program((Op.WTX, 5), (Op.WTY, 3), Op.SUB)), 3)

    assert proc.z == 2
    assert proc.carry


def test_sub_borrow_wraps():
    proc = run(machine(program((Op.WTX, 3), (Op.WTY, 5), Op.SUB)), 3)

    assert proc.z == 0xE    # (3 - 5) mod 256 clamped to 4 bits
    assert not proc.carry


def test_sub_with_carry_enabled():
    proc = run(machine(program((Op.WTX, 5), (Op.WTY, 3), Op.SUB, Op.USC, Op.SUB)), 5)

    assert proc.z == 1      # 5 - (3 + 1)
    assert proc.carry


def test_sub_equal_operands_keep_carry():
    proc = run(machine(program(Op.USC, (Op.WTX, 4), (Op.WTY, 4), Op.SUB)), 4)

    assert proc.z == 0
    assert proc.carry


def test_location_halves():
    proc = machine(program((Op.WT1, 0xA), (Op.WT2, 0x5), (Op.WT1, 0x3)))

    proc.exec_next()
    assert proc.loc == 0xA0

    proc.exec_next()
    assert proc.loc == 0xA5

    proc.exec_next()
    assert proc.loc == 0x35


def test_staging_register_halves():
    proc = run(machine(program((Op.PC1, 0x4), (Op.PC2, 0xC))), 2)

    assert proc.tmp_pc == 0xC4
    assert proc.pc == 2


def test_ztr_rtz_roundtrip():
    proc = machine(program((Op.WTZ, 7), Op.ZTR, (Op.WTZ, 0), Op.RTZ))

    proc.run(2)
    assert proc.memory.read_nibble(0) == 7
    assert proc.changes.display
    assert proc.changes.memory

    proc.run(2)
    assert proc.z == 7


def test_ztr_writes_z_not_x():
    proc = run(machine(program((Op.WTX, 7), Op.ZTR)), 2)

    assert proc.memory.read_nibble(0) == 0


def test_rtx_rty_read_memory():
    proc = machine(program((Op.WT2, 9), Op.RTX, Op.RTY))
    proc.memory.write_nibble(9, 0xB)

    proc.run(3)

    assert proc.x == 0xB
    assert proc.y == 0xB
    assert proc.memory.read_nibble(9) == 0xB


def test_display_flag_only_for_screen_region():
    proc = machine(program((Op.WT2, 3), Op.ZTR, (Op.WT2, 4), Op.ZTR))

    proc.exec_next()
    changes = proc.exec_next()
    assert changes == Changes(registers=False, memory=True, display=True)

    proc.exec_next()
    changes = proc.exec_next()
    assert changes == Changes(registers=False, memory=True, display=False)


def test_flags_accumulate_until_taken():
    proc = machine(program((Op.WT2, 0), Op.ZTR, (Op.WT2, 5), Op.ZTR))
    proc.run(4)

    taken = proc.take_changes()
    assert taken == Changes(registers=True, memory=True, display=True)
    assert not proc.changes.any()


@pytest.mark.parametrize('op', [Op.NOP, Op.JMP, Op.USC])
def test_silent_opcodes(op):
    proc = machine(program(op))

    assert not proc.exec_next().any()


def test_jmp_lands_on_staging_value():
    proc = run(machine(program((Op.PC1, 0x5), (Op.PC2, 0x1), Op.JMP)), 3)

    assert proc.pc == 0x15
    assert proc.tmp_pc == 0x14


def test_consecutive_jumps_drift():
    code = bytearray(program((Op.PC1, 0x5), (Op.PC2, 0x1), Op.JMP))
    code.extend(bytes(0x15 - len(code)))
    code.append(encode(Op.JMP))
    code.extend(bytes(2))
    proc = machine(bytes(code))

    proc.run(3)
    assert proc.pc == 0x15

    proc.exec_next()
    assert proc.pc == 0x14
    assert proc.tmp_pc == 0x13


def test_jmp_from_zero_staging_wraps():
    proc = run(machine(program(Op.JMP)), 1)

    assert proc.tmp_pc == 0xFF
    assert proc.pc == 0x00


def test_pc_wraps():
    proc = machine(program(Op.NOP))
    proc.pc = 0xFF

    proc.exec_next()

    assert proc.pc == 0


def test_step_invariants():
    rnd = random.Random(1234)

    for byte in range(256):
        for _ in range(8):
            proc = machine(bytes([byte]))
            proc.x, proc.y, proc.z = rnd.randrange(16), rnd.randrange(16), rnd.randrange(16)
            proc.tmp_pc = rnd.randrange(256)
            proc.loc = rnd.randrange(256)
            proc.carry = rnd.random() < 0.5
            proc.use_carry = rnd.random() < 0.5
            tmp_before = proc.tmp_pc

            proc.exec_next()

            assert 0 <= proc.x <= 15
            assert 0 <= proc.y <= 15
            assert 0 <= proc.z <= 15

            if byte >> 4 == Op.JMP:
                assert proc.pc == tmp_before
                assert proc.tmp_pc == (tmp_before - 1) % 256
            else:
                assert proc.pc == 1


def test_determinism():
    code = bytes(random.Random(99).randrange(256) for _ in range(255))
    first = machine(code)
    second = machine(code)

    for _ in range(500):
        assert first.exec_next() == second.exec_next()

    assert (first.x, first.y, first.z, first.pc, first.tmp_pc, first.loc, first.carry) \
        == (second.x, second.y, second.z, second.pc, second.tmp_pc, second.loc, second.carry)
    assert first.memory.ram == second.memory.ram
