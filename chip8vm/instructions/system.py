"""CHIP-8 system instructions (0x0xxx)."""

from chip8vm.state import CpuState, Bus
from chip8vm.decode import DecodedInstruction
from chip8vm.directive import Directive, NEXT, jump
from chip8vm.stack import pop


def no_op(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """0000 - No operation."""
    return cpu, bus, NEXT


def execute_clear_screen(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """00E0 - Clear display."""
    bus.screen.clear()
    return cpu, bus, NEXT


def execute_return(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """00EE - Return from subroutine."""
    stack, address = pop(cpu.stack)
    return cpu.replace(stack=stack), bus, jump(address)
