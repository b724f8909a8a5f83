"""Program counter directives returned by instruction handlers."""

import enum

from chex import dataclass

from chip8vm.constants import OPCODE_SIZE


class Flow(enum.Enum):
    WAIT = "wait"  # stay on this instruction
    NEXT = "next"
    SKIP = "skip"
    JUMP = "jump"


@dataclass(frozen=True)
class Directive:
    flow: Flow
    address: int = 0

    def apply(self, pc: int) -> int:
        """Program counter after the instruction at `pc`."""
        if self.flow is Flow.WAIT:
            return pc
        if self.flow is Flow.NEXT:
            return (pc + OPCODE_SIZE) & 0xFFFF
        if self.flow is Flow.SKIP:
            return (pc + 2 * OPCODE_SIZE) & 0xFFFF
        return self.address & 0xFFFF


WAIT = Directive(flow=Flow.WAIT)
NEXT = Directive(flow=Flow.NEXT)
SKIP = Directive(flow=Flow.SKIP)


def jump(address: int) -> Directive:
    return Directive(flow=Flow.JUMP, address=address)


def skip_if(condition: bool) -> Directive:
    return SKIP if condition else NEXT
