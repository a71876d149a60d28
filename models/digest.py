"""
Digest model for ConcatSHA1, representing a 160-bit SHA-1 or HMAC-SHA1 result.
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


WORD_MASK = 0xFFFFFFFF
DIGEST_WORDS = 5
DIGEST_SIZE = DIGEST_WORDS * 4


class Digest(BaseModel):
    """
    Represents a 160-bit digest as five 32-bit words.

    Attributes:
        words (Tuple[int, int, int, int, int]): Final hash state, most significant word first.

    Methods:
        digest(): 20 raw big-endian bytes.
        hexdigest(): 40 lowercase hex characters.
        from_bytes(): Construct from 20 raw bytes.
        from_hex(): Construct from 40 hex characters.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    words: Tuple[int, int, int, int, int] = Field(..., description="Five 32-bit digest words")

    @field_validator('words')
    @classmethod
    def validate_words(cls, v):
        """Ensure every word fits in 32 bits."""
        for word in v:
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f"digest word out of 32-bit range: {word:#x}")
        return v

    @classmethod
    def from_words(cls, words) -> "Digest":
        return cls(words=tuple(words))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Digest":
        """
        Construct a Digest from its 20-byte big-endian encoding.

        Raises:
            ValueError: If raw is not exactly 20 bytes.
        """
        if len(raw) != DIGEST_SIZE:
            raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
        return cls(words=tuple(int.from_bytes(raw[i:i + 4], byteorder="big") for i in range(0, DIGEST_SIZE, 4)))

    @classmethod
    def from_hex(cls, hex_digest: str) -> "Digest":
        """Construct a Digest from 40 hex characters; whitespace between words is ignored."""
        compact = "".join(hex_digest.split())
        if len(compact) != DIGEST_SIZE * 2:
            raise ValueError(f"hex digest must be {DIGEST_SIZE * 2} characters, got {len(compact)}")
        return cls.from_bytes(bytes.fromhex(compact))

    def digest(self) -> bytes:
        return b"".join(word.to_bytes(4, byteorder="big") for word in self.words)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def word_strings(self) -> Tuple[str, ...]:
        """Each word as eight lowercase hex characters."""
        return tuple(f"{word:08x}" for word in self.words)

    def __bytes__(self) -> bytes:
        return self.digest()

    def __str__(self) -> str:
        return self.hexdigest()
