"""
Functional hashing helpers over a default HashingService.

Each helper builds a HashingService with a 1 MiB read buffer and delegates to it.
"""

from __future__ import annotations

import os
import sys
from typing import Sequence

from models.digest import Digest
from services.hashing_service import DEFAULT_CHUNK_SIZE, FileHashError, HashingService


def hash_bytes(data: bytes) -> Digest:
    return HashingService().hash_bytes(data)


def hash_concat(segments: Sequence[bytes]) -> Digest:
    return HashingService().hash_concat(segments)


def hash_file(path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Digest:
    return HashingService(chunk_size=chunk_size).hash_file(path)


def hmac_sha1(key: bytes, message: bytes) -> Digest:
    return HashingService().hmac_sha1(key, message)


def sha1sum(file_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    return HashingService(chunk_size=chunk_size).calculate_sha1(file_path)


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python hashing.py <file_path>")
        sys.exit(1)

    file_path = sys.argv[1]
    if not os.path.isfile(file_path):
        print(f"❌ File not found: {file_path}")
        sys.exit(1)

    try:
        print(f"{sha1sum(file_path)}  {file_path}")
    except FileHashError as e:
        print(f"❌ {e}")
        sys.exit(1)
