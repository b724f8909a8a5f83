"""8-bit down-counting timers (delay and sound)."""

from flax.struct import PyTreeNode


class Timer(PyTreeNode):
    value: int = 0

    def tick(self) -> "Timer":
        """Decrement by one, saturating at zero."""
        return self.replace(value=max(self.value - 1, 0))

    def get(self) -> int:
        return self.value

    def set(self, value: int) -> "Timer":
        return self.replace(value=value & 0xFF)
