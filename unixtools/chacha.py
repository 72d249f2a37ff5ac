"""
Seeded random choice compatible with the StdRng generator of Rust's rand 0.8.

A u64 seed is expanded to a 256-bit key with PCG32, the key drives a
ChaCha12 keystream (64-bit block counter, zero stream id), and indexes are
drawn with widening-multiply rejection sampling, so a seed selects the same
element as `SliceRandom::choose` on a seeded StdRng.
"""

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

PCG_MULTIPLIER = 6364136223846793005
PCG_INCREMENT = 11634580027462260723

# "expand 32-byte k"
SIGMA = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)
DOUBLE_ROUNDS = 6

COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def rotl32(value, count):
    return ((value << count) | (value >> (32 - count))) & MASK32


def rotr32(value, count):
    count %= 32
    return ((value >> count) | (value << (32 - count))) & MASK32


def expand_seed(seed):
    """Turns a u64 seed into eight 32-bit key words using PCG32 output."""
    state = seed & MASK64
    key = []
    for _ in range(8):
        state = (state * PCG_MULTIPLIER + PCG_INCREMENT) & MASK64
        xorshifted = (((state >> 18) ^ state) >> 27) & MASK32
        key.append(rotr32(xorshifted, state >> 59))
    return key


def quarter_round(x, a, b, c, d):
    x[a] = (x[a] + x[b]) & MASK32
    x[d] = rotl32(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & MASK32
    x[b] = rotl32(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & MASK32
    x[d] = rotl32(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & MASK32
    x[b] = rotl32(x[b] ^ x[c], 7)


def chacha_block(key, counter, double_rounds=DOUBLE_ROUNDS):
    """Returns the sixteen output words of one keystream block."""
    state = list(SIGMA) + list(key) + [counter & MASK32, (counter >> 32) & MASK32, 0, 0]
    x = list(state)
    for _ in range(double_rounds):
        for indexes in COLUMNS:
            quarter_round(x, *indexes)
        for indexes in DIAGONALS:
            quarter_round(x, *indexes)
    return [(word + initial) & MASK32 for word, initial in zip(x, state)]


class ChaChaRng:
    """ChaCha12 generator reading keystream words in order."""

    def __init__(self, key):
        self.key = key
        self.counter = 0
        self.words = []

    @classmethod
    def seed_from_u64(cls, seed):
        return cls(expand_seed(seed))

    def next_u32(self):
        if not self.words:
            self.words = chacha_block(self.key, self.counter)
            self.counter += 1
        return self.words.pop(0)

    def randbelow(self, bound):
        """Uniform integer in [0, bound), for 0 < bound <= 2**32 - 1."""
        if not 0 < bound <= MASK32:
            raise ValueError(f"bound out of range: {bound}")
        zone = ((bound << (32 - bound.bit_length())) - 1) & MASK32
        while True:
            product = self.next_u32() * bound
            if product & MASK32 <= zone:
                return product >> 32

    def choice(self, seq):
        return seq[self.randbelow(len(seq))]
