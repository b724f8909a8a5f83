"""CHIP-8 fetch/decode/execute engine."""

from typing import Callable

from chip8vm.state import CpuState, Bus
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.directive import Directive
from chip8vm.errors import UnknownOpcode
from chip8vm.instructions.system import no_op, execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction

Handler = Callable[[CpuState, Bus, DecodedInstruction], tuple[CpuState, Bus, Directive]]

# First nibble -> (mask, pattern, handler) candidates, tried in order
OPCODE_TABLE: dict[int, tuple[tuple[int, int, Handler], ...]] = {
    0x0: (
        (0xFFFF, 0x0000, no_op),
        (0xFFFF, 0x00E0, execute_clear_screen),
        (0xFFFF, 0x00EE, execute_return),
    ),
    0x1: ((0xF000, 0x1000, execute_jump),),
    0x2: ((0xF000, 0x2000, execute_call),),
    0x3: ((0xF000, 0x3000, execute_skip_if_equal_immediate),),
    0x4: ((0xF000, 0x4000, execute_skip_if_not_equal_immediate),),
    0x5: ((0xF00F, 0x5000, execute_skip_if_equal_register),),
    0x6: ((0xF000, 0x6000, execute_set),),
    0x7: ((0xF000, 0x7000, execute_add),),
    0x8: ((0xF000, 0x8000, execute_alu_operation),),
    0x9: ((0xF00F, 0x9000, execute_skip_if_not_equal_register),),
    0xA: ((0xF000, 0xA000, execute_set_index),),
    0xB: ((0xF000, 0xB000, execute_jump_with_offset),),
    0xC: ((0xF000, 0xC000, execute_random),),
    0xD: ((0xF000, 0xD000, execute_display),),
    0xE: (
        (0xF0FF, 0xE09E, execute_skip_if_key),
        (0xF0FF, 0xE0A1, execute_skip_if_not_key),
    ),
    0xF: ((0xF000, 0xF000, execute_misc_instruction),),
}


def lookup(instruction: DecodedInstruction) -> Handler:
    """Find the handler for a decoded instruction."""
    for mask, pattern, handler in OPCODE_TABLE[instruction.family]:
        if instruction.raw & mask == pattern:
            return handler
    raise UnknownOpcode(instruction.raw)


def dispatch(cpu: CpuState, bus: Bus, instruction: int) -> tuple[CpuState, Bus, Directive]:
    """Run the handler for `instruction` without moving the program counter."""
    decoded_instruction = decode(instruction)
    return lookup(decoded_instruction)(cpu, bus, decoded_instruction)


def execute(cpu: CpuState, bus: Bus, instruction: int) -> tuple[CpuState, Bus]:
    """Execute single CHIP-8 instruction as if it sat at the program counter."""
    cpu, bus, directive = dispatch(cpu, bus, instruction)
    return cpu.replace(pc=directive.apply(cpu.pc)), bus


def fetch(cpu: CpuState, bus: Bus) -> int:
    """Fetch the instruction at the program counter."""
    high = bus.memory.read(cpu.pc)
    low = bus.memory.read(cpu.pc + 1)
    return (high << 8) | low


def cycle(cpu: CpuState, bus: Bus) -> tuple[CpuState, Bus]:
    """One fetch/decode/execute step."""
    return execute(cpu, bus, fetch(cpu, bus))
