"""CHIP-8 virtual machine package."""

from chip8vm.chip8 import Chip8, HostIO, key_for_label
from chip8vm.clock import PeriodicScheduler, catch_up
from chip8vm.constants import *
from chip8vm.cpu import cycle, dispatch, execute, fetch, lookup
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.directive import Directive, Flow, NEXT, SKIP, WAIT, jump
from chip8vm.errors import (
    Chip8Error, AddressOutOfRange, UnknownOpcode, KeyIndexOutOfRange,
    StackError, StackOverflow, StackUnderflow, ZeroSeed,
    InvalidDisplayDimensions, InvalidKeyVectorLength,
)
from chip8vm.memory import Memory, create_memory
from chip8vm.rng import RandomGenerator, create_rng
from chip8vm.screen import Screen, PixelScreen
from chip8vm.state import Bus, CpuState, StackState, create_bus, init_cpu
from chip8vm.timer import Timer

__all__ = [
    "Chip8",
    "HostIO",
    "key_for_label",
    "PeriodicScheduler",
    "catch_up",
    "cycle",
    "dispatch",
    "execute",
    "fetch",
    "lookup",
    "DecodedInstruction",
    "decode",
    "Directive",
    "Flow",
    "NEXT",
    "SKIP",
    "WAIT",
    "jump",
    "Chip8Error",
    "AddressOutOfRange",
    "UnknownOpcode",
    "KeyIndexOutOfRange",
    "StackError",
    "StackOverflow",
    "StackUnderflow",
    "ZeroSeed",
    "InvalidDisplayDimensions",
    "InvalidKeyVectorLength",
    "Memory",
    "create_memory",
    "RandomGenerator",
    "create_rng",
    "Screen",
    "PixelScreen",
    "Bus",
    "CpuState",
    "StackState",
    "create_bus",
    "init_cpu",
    "Timer",
    "PROGRAM_START",
    "FONT_BASE",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
