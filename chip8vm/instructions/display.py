"""CHIP-8 display operations."""

from chip8vm.state import CpuState, Bus
from chip8vm.decode import DecodedInstruction
from chip8vm.directive import Directive, NEXT
from chip8vm.constants import FLAG_REGISTER


def execute_display(cpu: CpuState, bus: Bus, instruction: DecodedInstruction) -> tuple[CpuState, Bus, Directive]:
    """DXYN - Draw the N-byte sprite at I to (VX, VY); VF = any pixel erased."""
    sprite_x = cpu.register(instruction.x)
    sprite_y = cpu.register(instruction.y)

    # Read every row before touching the screen so a bad I leaves it intact
    rows = [int(byte) for byte in bus.memory.read_block(cpu.I, instruction.n)]

    collided = False
    for offset, row in enumerate(rows):
        collided |= bus.screen.draw(sprite_x, sprite_y + offset, row)

    return cpu.set_register(FLAG_REGISTER, int(collided)), bus, NEXT
