"""Tests for RAM and register/index operations."""

import pytest
from chip8vm import AddressOutOfRange, MEMORY_SIZE, create_memory, execute
from conftest import set_registers


class TestRam:
    """Test bounds-checked memory access."""

    @pytest.mark.parametrize("address", [0x000, 0x200, 0x7FF, 0xFFF])
    def test_write_then_read(self, address):
        memory = create_memory().write(address, 0xA5)
        assert memory.read(address) == 0xA5

    def test_zero_initialized(self):
        memory = create_memory()
        assert memory.size == MEMORY_SIZE
        assert all(memory.read(a) == 0 for a in (0, 0x200, 0xFFF))

    @pytest.mark.parametrize("address", [0x1000, 0x1001, 0xFFFF])
    def test_out_of_range(self, address):
        memory = create_memory()
        with pytest.raises(AddressOutOfRange) as excinfo:
            memory.read(address)
        assert excinfo.value.address == address
        with pytest.raises(AddressOutOfRange):
            memory.write(address, 1)

    def test_write_is_persistent_value(self):
        """Writes return a new memory and leave the original alone."""
        memory = create_memory()
        updated = memory.write(0x300, 7)
        assert memory.read(0x300) == 0
        assert updated.read(0x300) == 7

    def test_write_masks_to_byte(self):
        assert create_memory().write(0x10, 0x1FF).read(0x10) == 0xFF

    def test_write_block(self):
        memory = create_memory().write_block(0xFFD, [1, 2, 3])
        assert [memory.read(a) for a in (0xFFD, 0xFFE, 0xFFF)] == [1, 2, 3]

    def test_write_block_past_end_reports_first_bad_address(self):
        memory = create_memory()
        with pytest.raises(AddressOutOfRange) as excinfo:
            memory.write_block(0xFFE, [1, 2, 3])
        assert excinfo.value.address == 0x1000

    def test_read_block_past_end(self):
        with pytest.raises(AddressOutOfRange):
            create_memory().read_block(0xFFF, 2)

    def test_read_block_is_read_only(self):
        memory = create_memory().write_block(0x200, [1, 2])
        block = memory.read_block(0x200, 2)
        with pytest.raises(ValueError):
            block[0] = 9
        assert memory.read(0x200) == 1

    def test_empty_block(self):
        memory = create_memory()
        assert memory.write_block(0x1000, []) is memory
        assert memory.read_block(0x200, 0).shape == (0,)


class TestBasicRegisters:
    """Test register load operations."""

    def test_set_basic(self, fresh_state):
        """6XNN - Set VX = NN."""
        cpu, bus = execute(*fresh_state, 0x600A)  # V0 = 0xA
        assert cpu.V[0] == 0xA
        assert cpu.pc == 0x202

    def test_add_basic(self, fresh_state):
        """7XNN - Add NN to VX."""
        cpu, bus = fresh_state
        cpu = set_registers(cpu, {1: 0x10})
        cpu, bus = execute(cpu, bus, 0x7105)  # V1 += 5
        assert cpu.V[1] == 0x15

    def test_add_wraps_without_carry(self, fresh_state):
        """7XNN - Wraps and leaves VF untouched."""
        cpu, bus = fresh_state
        cpu = set_registers(cpu, {2: 0xFF, 0xF: 0x55})
        cpu, bus = execute(cpu, bus, 0x7202)
        assert cpu.V[2] == 0x01
        assert cpu.V[15] == 0x55


class TestIndexRegister:
    """Test I register operations."""

    def test_set_index_basic(self, fresh_state):
        """ANNN - Set I register to NNN."""
        cpu, bus = execute(*fresh_state, 0xA123)
        assert cpu.I == 0x123

    def test_set_index_maximum(self, fresh_state):
        """ANNN - Set I register to maximum 12-bit value."""
        cpu, bus = execute(*fresh_state, 0xAFFF)
        assert cpu.I == 0xFFF

    def test_set_index_common_values(self, fresh_state):
        """ANNN - Test common memory addresses."""
        for value in [0x200, 0x300, 0x500, 0xA00, 0xEA0]:
            cpu, bus = execute(*fresh_state, 0xA000 | value)
            assert cpu.I == value, f"Failed to set I to 0x{value:03X}"


class TestRandom:
    """Test CXNN."""

    def test_random_masked(self, fresh_state):
        cpu, bus = execute(*fresh_state, 0xC30F)
        assert int(cpu.V[3]) & 0xF0 == 0

    def test_random_zero_mask(self, fresh_state):
        cpu, bus = execute(*fresh_state, 0xC300)
        assert cpu.V[3] == 0

    def test_random_advances_generator(self, fresh_state):
        cpu, bus = fresh_state
        _, expected = bus.rng.get_byte()
        cpu, new_bus = execute(cpu, bus, 0xC5FF)
        assert cpu.V[5] == expected
        assert new_bus.rng != bus.rng
