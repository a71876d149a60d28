"""
Message padding for 64-byte block hashes.

The pad is a pure function of the pre-pad message length: a 0x80 delimiter,
a run of zero bytes, and the 64-bit big-endian bit length of the message.
"""

import logging
from typing import Tuple

logger = logging.getLogger(__name__)

BLOCK_SIZE = 64
WORD_SIZE = 4
DELIMITER = 0x80
LENGTH_FIELD_SIZE = 8

# Delimiter + length field is 9 bytes; at most BLOCK_SIZE - 1 zeros precede it.
MIN_PAD_SIZE = 1 + LENGTH_FIELD_SIZE
MAX_PAD_SIZE = BLOCK_SIZE + MIN_PAD_SIZE

_BIT_LENGTH_MASK = (1 << 64) - 1


def pad_byte_size(pre_pad_byte_length: int) -> int:
    """Return the number of pad bytes needed for a message of the given length."""
    if pre_pad_byte_length < 0:
        raise ValueError(f"Message length cannot be negative: {pre_pad_byte_length}")
    nr_of_zeros = (BLOCK_SIZE - (pre_pad_byte_length + MIN_PAD_SIZE) % BLOCK_SIZE) % BLOCK_SIZE
    return MIN_PAD_SIZE + nr_of_zeros


def build_pad(pre_pad_byte_length: int) -> Tuple[bytes, int]:
    """
    Build the trailer appended to a message before hashing.

    Args:
        pre_pad_byte_length (int): Length of the message in bytes.

    Returns:
        Tuple[bytes, int]: The pad bytes and the total padded length, which is
        always a multiple of BLOCK_SIZE.

    Raises:
        ValueError: If the length is negative.
    """
    size = pad_byte_size(pre_pad_byte_length)

    pad = bytearray(MAX_PAD_SIZE)
    pad[0] = DELIMITER
    bit_length = (8 * pre_pad_byte_length) & _BIT_LENGTH_MASK
    pad[size - LENGTH_FIELD_SIZE:size] = bit_length.to_bytes(LENGTH_FIELD_SIZE, byteorder="big")

    total_byte_size = pre_pad_byte_length + size
    logger.debug(f"Pad of {size} bytes for {pre_pad_byte_length} byte message ({total_byte_size // BLOCK_SIZE} blocks)")
    return bytes(pad[:size]), total_byte_size
