"""
HMAC-SHA1 keyed digest built on a virtual-concatenation hash.
"""

import logging
from typing import Callable, Sequence

from models.digest import Digest
from services.sha1_implementations.padding import BLOCK_SIZE

logger = logging.getLogger(__name__)

IPAD = 0x36
OPAD = 0x5C

HashConcat = Callable[[Sequence[bytes]], Digest]


def derive_block_key(key: bytes, hash_concat: HashConcat) -> bytearray:
    """
    Derive the block-sized key K0.

    Keys longer than the block are hashed first; the result is zero padded to
    BLOCK_SIZE bytes. Lengths are measured in bytes, so keys such as
    array("H") count their full item width.
    """
    key = memoryview(key).tobytes()
    key0 = bytearray(BLOCK_SIZE)
    if len(key) > BLOCK_SIZE:
        logger.debug(f"Key of {len(key)} bytes exceeds block size, hashing it")
        key_digest = hash_concat([key]).digest()
        key0[:len(key_digest)] = key_digest
    else:
        key0[:len(key)] = key
    return key0


def xor_pad(key0: bytes, mask: int) -> bytes:
    return bytes(b ^ mask for b in key0)


def hmac_sha1(key: bytes, message: bytes, hash_concat: HashConcat) -> Digest:
    """
    Compute HMAC-SHA1(key, message).

    Args:
        key (bytes): Secret key of any length.
        message (bytes): Message to authenticate.
        hash_concat: Callable hashing an ordered sequence of segments.

    Returns:
        Digest: The 160-bit keyed digest.
    """
    key0 = derive_block_key(key, hash_concat)

    inner = hash_concat([xor_pad(key0, IPAD), message])
    return hash_concat([xor_pad(key0, OPAD), inner.digest()])
