"""Tests for system instructions and the dispatch table (0xxx, decoding)."""

import pytest
from chip8vm import (
    AddressOutOfRange, NEXT, SKIP, UnknownOpcode, WAIT, decode, dispatch, execute, fetch, cycle, jump, lookup,
)
from chip8vm.cpu import OPCODE_TABLE
from chip8vm.directive import Flow
from conftest import set_registers


def test_decode_fields():
    decoded = decode(0xD12F)
    assert decoded.nibbles == (0xD, 0x1, 0x2, 0xF)
    assert decoded.family == 0xD
    assert (decoded.x, decoded.y, decoded.n) == (0x1, 0x2, 0xF)
    assert decoded.nn == 0x2F
    assert decoded.nnn == 0x12F


def test_decode_truncates_to_16_bits():
    assert decode(0x1D12F).raw == 0xD12F


def test_opcode_table_size():
    """35 documented opcodes, counting the ALU and FXNN sub-tables."""
    from chip8vm.instructions.alu import ALU_OPERATIONS
    from chip8vm.instructions.misc import MISC_INSTRUCTIONS

    top_level = sum(len(entries) for entries in OPCODE_TABLE.values())
    assert top_level - 2 + len(ALU_OPERATIONS) + len(MISC_INSTRUCTIONS) == 35


def test_no_op(fresh_state):
    cpu, bus, directive = dispatch(*fresh_state, 0x0000)
    assert directive == NEXT


@pytest.mark.parametrize("instruction", [0x0123, 0x00E1, 0x00FF, 0xF0FF, 0xF001])
def test_unknown_opcode(fresh_state, instruction):
    with pytest.raises(UnknownOpcode) as excinfo:
        execute(*fresh_state, instruction)
    assert excinfo.value.opcode == instruction


def test_unknown_opcode_nibbles():
    assert UnknownOpcode(0x5AB3).nibbles == (0x5, 0xA, 0xB, 0x3)


def test_lookup_family():
    handler = lookup(decode(0x8AB4))
    assert handler.__name__ == "execute_alu_operation"


class TestDirectives:

    @pytest.mark.parametrize("directive,expected", [
        (WAIT, 0x300),
        (NEXT, 0x302),
        (SKIP, 0x304),
        (jump(0x456), 0x456),
    ])
    def test_apply(self, directive, expected):
        assert directive.apply(0x300) == expected

    def test_jump_flow(self):
        assert jump(0x222).flow is Flow.JUMP


class TestCycle:

    def test_fetch_big_endian(self, fresh_state):
        cpu, bus = fresh_state
        bus = bus.replace(memory=bus.memory.write_block(0x200, [0x12, 0x34]))
        assert fetch(cpu, bus) == 0x1234

    def test_cycle_runs_program(self, fresh_state):
        cpu, bus = fresh_state
        bus = bus.replace(memory=bus.memory.write_block(0x200, [0x60, 0x05, 0x70, 0x03]))

        cpu, bus = cycle(cpu, bus)
        cpu, bus = cycle(cpu, bus)

        assert cpu.V[0] == 8
        assert cpu.pc == 0x204

    def test_fetch_past_memory(self, fresh_state):
        cpu, bus = fresh_state
        cpu = cpu.replace(pc=0xFFF)
        with pytest.raises(AddressOutOfRange) as excinfo:
            cycle(cpu, bus)
        assert excinfo.value.address == 0x1000

    def test_failed_instruction_commits_nothing(self, fresh_state):
        """A failing instruction leaves the caller's state untouched."""
        cpu, bus = fresh_state
        cpu = set_registers(cpu, {3: 0x20}).replace(I=0xFFE)
        with pytest.raises(AddressOutOfRange):
            execute(cpu, bus, 0xF333)  # BCD needs I..I+2
        assert bus.memory.read(0xFFE) == 0
        assert cpu.pc == 0x200
