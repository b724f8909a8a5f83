"""CRC-16/CCITT-FALSE checksum, used to derive the default RNG seed from a ROM."""

import binascii
from typing import Iterable

INITIAL = 0xFFFF


class Crc16:
    """Incremental CRC-16/CCITT-FALSE (poly 0x1021, init 0xFFFF, no reflection).

    `binascii.crc_hqx` computes the unreflected 0x1021 CRC; starting it from
    0xFFFF gives the CCITT-FALSE variant.
    """

    def __init__(self):
        self.value = INITIAL

    def update(self, data: Iterable[int]) -> "Crc16":
        self.value = binascii.crc_hqx(bytes(data), self.value)
        return self

    def digest(self) -> int:
        return self.value

    @classmethod
    def at_once(cls, data: Iterable[int]) -> int:
        return cls().update(data).digest()
