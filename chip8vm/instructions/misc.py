"""CHIP-8 miscellaneous instructions (Fxxx)."""

from chip8vm.state import CpuState, Bus
from chip8vm.decode import DecodedInstruction
from chip8vm.directive import Directive, NEXT, WAIT
from chip8vm.constants import FONT_SPRITE_SIZE
from chip8vm.errors import UnknownOpcode


def execute_get_delay_timer(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX07 - Set VX to delay timer value."""
    return cpu.set_register(instruction.x, bus.delay_timer.get()), bus, NEXT


def execute_wait_for_key(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX0A - Wait for key press, store the lowest pressed key in VX."""
    for key, pressed in enumerate(bus.keys):
        if pressed:
            return cpu.set_register(instruction.x, key), bus, NEXT
    return cpu, bus, WAIT


def execute_set_delay_timer(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX15 - Set delay timer to VX."""
    return cpu, bus.replace(delay_timer=bus.delay_timer.set(cpu.register(instruction.x))), NEXT


def execute_set_sound_timer(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX18 - Set sound timer to VX."""
    return cpu, bus.replace(sound_timer=bus.sound_timer.set(cpu.register(instruction.x))), NEXT


def execute_add_to_index(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX1E - Add VX to I register."""
    return cpu.replace(I=(cpu.I + cpu.register(instruction.x)) & 0xFFFF), bus, NEXT


def execute_font_character(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = cpu.register(instruction.x) & 0xF
    return cpu.replace(I=cpu.font_base + digit * FONT_SPRITE_SIZE), bus, NEXT


def execute_bcd_conversion(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = cpu.register(instruction.x)
    digits = [value // 100, (value // 10) % 10, value % 10]
    return cpu, bus.replace(memory=bus.memory.write_block(cpu.I, digits)), NEXT


def execute_store_registers(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX55 - Store V0 through VX in memory starting at I."""
    values = [int(v) for v in cpu.V[:instruction.x + 1]]
    return cpu, bus.replace(memory=bus.memory.write_block(cpu.I, values)), NEXT


def execute_load_registers(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """FX65 - Load V0 through VX from memory starting at I."""
    V = cpu.V.copy()
    V[:instruction.x + 1] = bus.memory.read_block(cpu.I, instruction.x + 1)
    return cpu.replace(V=V), bus, NEXT


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """Dispatch FXNN instructions on NN."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(cpu, bus, instruction)
