"""Bounds-checked CHIP-8 RAM."""

from typing import Sequence

import numpy as np
from flax.struct import PyTreeNode

from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import AddressOutOfRange


class Memory(PyTreeNode):
    """Flat byte-addressable memory. Writes return a new Memory and never touch `data`."""
    data: np.ndarray

    @property
    def size(self) -> int:
        return self.data.shape[0]

    def _check(self, address: int) -> None:
        if address < 0 or address >= self.size:
            raise AddressOutOfRange(address)

    def _check_range(self, address: int, length: int) -> None:
        """Validate [address, address + length), reporting the first bad address."""
        if length <= 0:
            return
        self._check(address)
        if address + length > self.size:
            raise AddressOutOfRange(self.size)

    def read(self, address: int) -> int:
        """Read a single byte."""
        self._check(address)
        return int(self.data[address])

    def write(self, address: int, byte: int) -> "Memory":
        """Write a single byte."""
        self._check(address)
        data = self.data.copy()
        data[address] = byte & 0xFF
        return self.replace(data=data)

    def read_block(self, address: int, length: int) -> np.ndarray:
        """Read `length` consecutive bytes (a read-only view)."""
        self._check_range(address, length)
        block = self.data[address:address + length]
        block.flags.writeable = False
        return block

    def write_block(self, address: int, values: Sequence[int]) -> "Memory":
        """Write consecutive bytes; nothing is written if any address is invalid."""
        values = np.asarray([v & 0xFF for v in values], dtype=np.uint8)
        if values.shape[0] == 0:
            return self
        self._check_range(address, values.shape[0])
        data = self.data.copy()
        data[address:address + values.shape[0]] = values
        return self.replace(data=data)


def create_memory(size: int = MEMORY_SIZE) -> Memory:
    """Create zeroed memory."""
    return Memory(data=np.zeros(size, dtype=np.uint8))
