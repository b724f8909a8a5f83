"""Operand fields of a 16-bit CHIP-8 instruction word.

    FXYN
    |||+- n   (low nibble)
    ||+-- y   (register)
    |+--- x   (register)
    +---- family, selects the row of the opcode table
    nn = YN, nnn = XYN
"""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    raw: int

    @property
    def family(self) -> int:
        return self.raw >> 12

    @property
    def x(self) -> int:
        return (self.raw >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.raw >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.raw & 0xF

    @property
    def nn(self) -> int:
        return self.raw & 0xFF

    @property
    def nnn(self) -> int:
        return self.raw & 0xFFF

    @property
    def nibbles(self) -> tuple[int, int, int, int]:
        return self.family, self.x, self.y, self.n


def decode(word: int) -> DecodedInstruction:
    """View `word` (truncated to 16 bits) as an instruction."""
    return DecodedInstruction(raw=word & 0xFFFF)
