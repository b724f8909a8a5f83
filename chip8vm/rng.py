"""16-bit LFSR pseudo-random byte source.

P(X) = X^16 + X^15 + X^13 + X^4 + 1. The generator is a value: every call
returns the advanced generator alongside its output, so two generators seeded
with the same value always produce the same bytes.
"""

from flax.struct import PyTreeNode

from chip8vm.errors import ZeroSeed

# Bits discarded after seeding so the first output byte does not expose the seed
_WARMUP_BITS = 16


class RandomGenerator(PyTreeNode):
    state: int = 0

    def seed(self, value: int) -> "RandomGenerator":
        """Seed the generator; zero is the LFSR fixed point and is rejected."""
        value &= 0xFFFF
        if value == 0:
            raise ZeroSeed()
        generator = self.replace(state=value)
        for _ in range(_WARMUP_BITS):
            generator, _ = generator.next_bit()
        return generator

    def next_bit(self) -> tuple["RandomGenerator", int]:
        s = self.state
        bit = (s ^ (s >> 1) ^ (s >> 3) ^ (s >> 12)) & 1
        return self.replace(state=((s >> 1) | (bit << 15)) & 0xFFFF), bit

    def get_byte(self) -> tuple["RandomGenerator", int]:
        """Eight bits, most significant first."""
        generator, acc = self, 0
        for _ in range(8):
            generator, bit = generator.next_bit()
            acc = (acc << 1) | bit
        return generator, acc


def create_rng(seed: int) -> RandomGenerator:
    """Create a seeded generator."""
    return RandomGenerator().seed(seed)
