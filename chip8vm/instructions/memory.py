"""CHIP-8 register and index operations."""

from chip8vm.state import CpuState, Bus
from chip8vm.decode import DecodedInstruction
from chip8vm.directive import Directive, NEXT


def execute_set(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """6XNN - Set VX = NN."""
    return cpu.set_register(instruction.x, instruction.nn), bus, NEXT


def execute_add(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """7XNN - Add NN to VX (no carry)."""
    return cpu.set_register(instruction.x, cpu.register(instruction.x) + instruction.nn), bus, NEXT


def execute_set_index(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """ANNN - Set I = NNN."""
    return cpu.replace(I=instruction.nnn), bus, NEXT


def execute_random(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """CXNN - Set VX = random & NN."""
    rng, random_value = bus.rng.get_byte()
    return cpu.set_register(instruction.x, random_value & instruction.nn), bus.replace(rng=rng), NEXT
