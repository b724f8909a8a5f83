"""CHIP-8 control flow instructions."""

from chip8vm.state import CpuState, Bus
from chip8vm.decode import DecodedInstruction
from chip8vm.directive import Directive, jump, skip_if
from chip8vm.constants import NUM_KEYS, OPCODE_SIZE
from chip8vm.errors import KeyIndexOutOfRange
from chip8vm.stack import push


def execute_jump(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """1NNN - Jump to address NNN."""
    return cpu, bus, jump(instruction.nnn)


def execute_call(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """2NNN - Call subroutine at NNN."""
    stack = push(cpu.stack, cpu.pc + OPCODE_SIZE)
    return cpu.replace(stack=stack), bus, jump(instruction.nnn)


def execute_jump_with_offset(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """BNNN - Jump to address NNN + V0."""
    return cpu, bus, jump(instruction.nnn + cpu.register(0))


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
        return cpu, bus, skip_if(condition_fn(cpu, instruction))
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda cpu, inst: cpu.register(inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda cpu, inst: cpu.register(inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda cpu, inst: cpu.register(inst.x) == cpu.register(inst.y)
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda cpu, inst: cpu.register(inst.x) != cpu.register(inst.y)
)


def key_index(cpu: CpuState, register: int) -> int:
    """Key number held in a register, validated against the 16-key pad."""
    value = cpu.register(register)
    if value >= NUM_KEYS:
        raise KeyIndexOutOfRange(value)
    return value


def execute_skip_if_key(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """EX9E - Skip if key VX is pressed."""
    return cpu, bus, skip_if(bus.keys[key_index(cpu, instruction.x)])


def execute_skip_if_not_key(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """EXA1 - Skip if key VX is not pressed."""
    return cpu, bus, skip_if(not bus.keys[key_index(cpu, instruction.x)])
