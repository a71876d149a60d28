"""
HashingService: SHA-1 and HMAC-SHA1 over virtual concatenations and streamed files.

Defaults to a 1 MiB read buffer for large file efficiency.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Sequence

from models.digest import Digest
from services.byte_source_factory import create_byte_source, segments_byte_size, validate_segments
from services.sha1_implementations.byte_source import ByteSource
from services.sha1_implementations.compression import INITIAL_STATE, compress
from services.sha1_implementations.hmac_sha1 import hmac_sha1 as _hmac_sha1
from services.sha1_implementations.padding import BLOCK_SIZE, build_pad
from utils.concat_sha1_config import get_config_value

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1_048_576


class FileHashError(OSError):
    """Raised when a file cannot be opened or its size cannot be determined."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class HashingService:
    """
    Provides SHA-1 and HMAC-SHA1 digests without materializing the message.

    - All entry points return a models.digest.Digest
    - calculate_sha1 returns a lowercase hex string
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE, fast_path: bool = True) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.fast_path = fast_path

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Dict[str, Any]]]) -> "HashingService":
        """
        Build a service from the [hashing] configuration section.

        Args:
            config: Normalized configuration dict, or None for defaults.

        Returns:
            HashingService: Configured service.
        """
        chunk_size = get_config_value(config, "hashing", "chunk_size", fallback=DEFAULT_CHUNK_SIZE, value_type=int)
        fast_path = get_config_value(config, "hashing", "fast_path", fallback=True, value_type=bool)
        logger.debug(f"HashingService configured: chunk_size={chunk_size}, fast_path={fast_path}")
        return cls(chunk_size=chunk_size, fast_path=fast_path)

    def _digest_source(self, source: ByteSource) -> Digest:
        state = INITIAL_STATE
        nr_of_blocks = source.total_byte_size // BLOCK_SIZE
        for _ in range(nr_of_blocks):
            state = compress(source.next_block(), state)
        return Digest(words=state)

    def hash_concat(self, segments: Sequence[bytes]) -> Digest:
        """
        Hash the virtual concatenation of segments.

        Args:
            segments: Ordered bytes-like segments; empty segments are allowed.

        Returns:
            Digest: SHA-1 of the concatenated content.
        """
        segments = validate_segments(segments)
        concat_byte_size = segments_byte_size(segments)
        pad, tot_byte_size = build_pad(concat_byte_size)
        logger.debug(f"Hashing {len(segments)} segments, {concat_byte_size} bytes, {tot_byte_size // BLOCK_SIZE} blocks")

        with create_byte_source(pad, segments=segments, fast_path=self.fast_path) as source:
            return self._digest_source(source)

    def hash_bytes(self, data: bytes) -> Digest:
        return self.hash_concat([data])

    def hash_file(self, path: str) -> Digest:
        """
        Hash a file by streaming it block by block.

        Args:
            path (str): Path to the file.

        Returns:
            Digest: SHA-1 of the file content.

        Raises:
            FileHashError: If the file cannot be opened or sized.
        """
        try:
            f = open(path, "rb", buffering=self.chunk_size)
        except OSError as e:
            logger.error(f"Cannot open file for hashing: {path}: {e}")
            raise FileHashError(f"Cannot open {path}: {e.strerror or e}", path=str(path)) from e

        with f:
            try:
                file_byte_size = f.seek(0, os.SEEK_END)
                f.seek(0, os.SEEK_SET)
            except OSError as e:
                logger.error(f"Cannot determine size of {path}: {e}")
                raise FileHashError(f"Cannot determine size of {path}: {e.strerror or e}", path=str(path)) from e

            pad, tot_byte_size = build_pad(file_byte_size)
            logger.debug(f"Hashing file {path}: {file_byte_size} bytes, {tot_byte_size // BLOCK_SIZE} blocks")

            with create_byte_source(pad, file_obj=f, file_byte_size=file_byte_size, fast_path=self.fast_path) as source:
                return self._digest_source(source)

    def hmac_sha1(self, key: bytes, message: bytes) -> Digest:
        return _hmac_sha1(key, message, self.hash_concat)

    def calculate_sha1(self, file_path: str) -> str:
        return self.hash_file(file_path).hexdigest()
