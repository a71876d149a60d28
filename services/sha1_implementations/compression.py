"""
SHA-1 compression function.

Maps one 512-bit block and the 160-bit running state to the next state.
"""

from typing import List, Sequence, Tuple

MASK_32 = 0xFFFFFFFF

# Initial hash value H(0)
INITIAL_STATE: Tuple[int, int, int, int, int] = (
    0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0,
)

# K_t for t in [0, 80)
ROUND_CONSTANTS: Tuple[int, ...] = tuple(
    [0x5A827999] * 20 + [0x6ED9EBA1] * 20 + [0x8F1BBCDC] * 20 + [0xCA62C1D6] * 20
)

SCHEDULE_LENGTH = 80
BLOCK_WORDS = 16
STATE_WORDS = 5


def rotl32(x: int, n: int) -> int:
    """32-bit rotate left."""
    n = n & 31
    return ((x << n) & MASK_32) | ((x & MASK_32) >> (32 - n))


def ch(x: int, y: int, z: int) -> int:
    return (x & y) ^ (~x & z)


def parity(x: int, y: int, z: int) -> int:
    return x ^ y ^ z


def maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def round_function(t: int, x: int, y: int, z: int) -> int:
    """Logical function f_t for round t."""
    if t < 20:
        return ch(x, y, z)
    if t < 40:
        return parity(x, y, z)
    if t < 60:
        return maj(x, y, z)
    return parity(x, y, z)


def expand_schedule(block_words: Sequence[int]) -> List[int]:
    """Expand sixteen block words into the 80-word message schedule."""
    W = list(block_words)
    for t in range(BLOCK_WORDS, SCHEDULE_LENGTH):
        W.append(rotl32(W[t - 3] ^ W[t - 8] ^ W[t - 14] ^ W[t - 16], 1))
    return W


def compress(block_words: Sequence[int], state: Sequence[int]) -> Tuple[int, int, int, int, int]:
    """
    Apply the 80-round SHA-1 compression to one block.

    Args:
        block_words: Sixteen 32-bit big-endian words of the block.
        state: Five 32-bit words of the running hash state.

    Returns:
        Tuple[int, int, int, int, int]: The updated state.

    Raises:
        ValueError: If the block or state has the wrong number of words.
    """
    if len(block_words) != BLOCK_WORDS:
        raise ValueError(f"Block must contain {BLOCK_WORDS} words, got {len(block_words)}")
    if len(state) != STATE_WORDS:
        raise ValueError(f"State must contain {STATE_WORDS} words, got {len(state)}")

    W = expand_schedule(block_words)
    a, b, c, d, e = state

    for t in range(SCHEDULE_LENGTH):
        T = (rotl32(a, 5) + round_function(t, b, c, d) + e + ROUND_CONSTANTS[t] + W[t]) & MASK_32
        e = d
        d = c
        c = rotl32(b, 30)
        b = a
        a = T

    return (
        (state[0] + a) & MASK_32,
        (state[1] + b) & MASK_32,
        (state[2] + c) & MASK_32,
        (state[3] + d) & MASK_32,
        (state[4] + e) & MASK_32,
    )
