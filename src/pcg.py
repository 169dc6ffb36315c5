"""Permuted congruential generator (PCG-XSH-RR, 64-bit state, 32-bit output).

See M. E. O'Neill, "PCG: A Family of Simple Fast Space-Efficient
Statistically Good Algorithms for Random Number Generation" (2014).
"""

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF
_MULTIPLIER = 6364136223846793005


class Pcg:
    def __init__(self, init_state: int = 42, init_seq: int = 54):
        self.state: int = 0
        self.inc: int = ((init_seq << 1) | 1) & _MASK64

        self.random()
        self.state = (self.state + init_state) & _MASK64
        self.random()

    @classmethod
    def for_stream(cls, base_seed: int, stream: int, base_seq: int = 0) -> "Pcg":
        """Independent generator for one unit of work (e.g. an image row).

        The sequence identifier packs `base_seq` in the high bits and `stream`
        in the low 32 bits, so distinct (base_seq, stream) pairs get distinct
        increments and the same triple always gives the same numbers.
        """
        return cls(init_state=base_seed, init_seq=(base_seq << 32) | (stream & _MASK32))

    def random(self) -> int:
        """Returns the next pseudo-random 32-bit unsigned integer."""
        oldstate = self.state
        self.state = (oldstate * _MULTIPLIER + self.inc) & _MASK64

        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & _MASK32
        rot = oldstate >> 59

        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32

    def random_float(self) -> float:
        """Uniform deviate in [0, 1]."""
        return self.random() / _MASK32
