"""Test configuration and fixtures for CHIP-8 virtual machine tests."""

import pytest
from chip8vm import PixelScreen, create_bus, create_memory, create_rng, init_cpu
from chip8vm.constants import FONT_BASE, FONT_DATA, NUM_KEYS
from chip8vm.cpu import execute


@pytest.fixture
def screen():
    """Provide a blank 64x32 screen."""
    return PixelScreen()


@pytest.fixture
def fresh_state(screen):
    """Provide fresh (cpu, bus) with fonts loaded and a seeded RNG."""
    memory = create_memory().write_block(FONT_BASE, FONT_DATA)
    bus = create_bus(memory=memory, rng=create_rng(0xBEEF), screen=screen)
    return init_cpu(), bus


def set_registers(cpu, values):
    """Helper to set several V registers at once."""
    for index, value in values.items():
        cpu = cpu.set_register(index, value)
    return cpu


def setup_sprite_in_memory(bus, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return bus.replace(memory=bus.memory.write_block(address, sprite_bytes))


def press(bus, *keys):
    """Helper to hold down the given keys (all others released)."""
    return bus.replace(keys=tuple(k in keys for k in range(NUM_KEYS)))


def run(cpu, bus, *instructions):
    """Execute instructions one after another."""
    for instruction in instructions:
        cpu, bus = execute(cpu, bus, instruction)
    return cpu, bus
