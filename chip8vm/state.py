"""CHIP-8 processor and bus state structures."""

from typing import Optional

import numpy as np
from flax.struct import PyTreeNode, field

from chip8vm.constants import FONT_BASE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START, STACK_SIZE
from chip8vm.memory import Memory, create_memory
from chip8vm.rng import RandomGenerator
from chip8vm.screen import Screen
from chip8vm.timer import Timer


class StackState(PyTreeNode):
    """Return addresses for subroutine calls."""
    data: np.ndarray
    pointer: int = 0


class CpuState(PyTreeNode):
    """Register file, program counter and call stack."""
    V: np.ndarray
    stack: StackState
    I: int = 0
    pc: int = PROGRAM_START
    font_base: int = FONT_BASE

    def register(self, index: int) -> int:
        return int(self.V[index])

    def set_register(self, index: int, value: int) -> "CpuState":
        V = self.V.copy()
        V[index] = value & 0xFF
        return self.replace(V=V)


class Bus(PyTreeNode):
    """Everything the CPU touches besides its own registers.

    The screen and key vector belong to the host and are handed in per clock.
    """
    memory: Memory
    rng: RandomGenerator
    delay_timer: Timer
    sound_timer: Timer
    screen: Optional[Screen] = field(pytree_node=False, default=None)
    keys: tuple = field(pytree_node=False, default=(False,) * NUM_KEYS)


def init_cpu(pc: int = PROGRAM_START, font_base: int = FONT_BASE) -> CpuState:
    """Create processor state with cleared registers and stack."""
    return CpuState(
        V=np.zeros(NUM_REGISTERS, dtype=np.uint8),
        stack=StackState(data=np.zeros(STACK_SIZE, dtype=np.uint16)),
        I=0,
        pc=pc,
        font_base=font_base,
    )


def create_bus(
    memory: Optional[Memory] = None,
    rng: Optional[RandomGenerator] = None,
    screen: Optional[Screen] = None,
    keys: tuple = (False,) * NUM_KEYS,
) -> Bus:
    return Bus(
        memory=memory if memory is not None else create_memory(),
        rng=rng if rng is not None else RandomGenerator(),
        delay_timer=Timer(),
        sound_timer=Timer(),
        screen=screen,
        keys=tuple(bool(k) for k in keys),
    )
