"""Exceptions raised by the CHIP-8 virtual machine.

Every error carries the value that caused it so the host can report it or
decide to reset the machine. Nothing is retried inside the VM.
"""


class Chip8Error(Exception):
    """Base class for all virtual machine errors."""


class AddressOutOfRange(Chip8Error, IndexError):
    """Memory access outside of the 4 KiB address space."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"RAM address 0x{address:04x} is invalid")


class UnknownOpcode(Chip8Error):
    """Instruction whose nibble pattern is not in the opcode table."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unknown opcode 0x{opcode:04X}")

    @property
    def nibbles(self) -> tuple[int, int, int, int]:
        return (
            (self.opcode >> 12) & 0xF,
            (self.opcode >> 8) & 0xF,
            (self.opcode >> 4) & 0xF,
            self.opcode & 0xF,
        )


class KeyIndexOutOfRange(Chip8Error, IndexError):
    """Register value used as a key index is not a valid key."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Pad address 0x{value:02x} is invalid")


class StackError(Chip8Error):
    """Call stack misuse."""


class StackOverflow(StackError):
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"CPU stack overflow while calling from 0x{address:04x}")


class StackUnderflow(StackError):
    def __init__(self):
        super().__init__("CPU stack underflow: return with an empty stack")


class ZeroSeed(Chip8Error, ValueError):
    """A zero seed would lock the LFSR in its fixed point."""

    def __init__(self):
        super().__init__("RNG seed must be non-zero")


class InvalidDisplayDimensions(Chip8Error, ValueError):
    def __init__(self, expected: tuple[int, int], actual: tuple[int, int]):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Screen size is {actual}, only size {expected} is supported")


class InvalidKeyVectorLength(Chip8Error, ValueError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Pad size is {actual}, only size {expected} is supported")
