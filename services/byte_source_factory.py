"""
This module provides a factory for creating byte sources from exactly one kind of input.
"""
from typing import BinaryIO, List, Optional, Sequence

from services.sha1_implementations.byte_source import ByteSource, BufferByteSource, FileByteSource


def validate_segments(segments: Sequence) -> List:
    """
    Check that segments form an ordered sequence of bytes-like objects.

    Args:
        segments (Sequence): Candidate segments of a virtual concatenation.

    Returns:
        List: The segments as a list, so one-shot iterables can be walked twice.

    Raises:
        TypeError: If segments is a single buffer or contains a non bytes-like item.
    """
    if isinstance(segments, (bytes, bytearray, memoryview, str)):
        raise TypeError("segments must be a sequence of bytes-like objects, not a single buffer")
    segments = list(segments)
    for index, segment in enumerate(segments):
        if isinstance(segment, str):
            raise TypeError(f"Segment {index} is str; encode it to bytes first")
        try:
            memoryview(segment)
        except TypeError as e:
            raise TypeError(f"Segment {index} is not bytes-like: {type(segment).__name__}") from e
    return segments


def segments_byte_size(segments: Sequence) -> int:
    """Total byte length of the virtual concatenation."""
    total = 0
    for segment in segments:
        with memoryview(segment) as view:
            total += view.nbytes
    return total


def create_byte_source(
    pad: bytes,
    segments: Optional[Sequence] = None,
    file_obj: Optional[BinaryIO] = None,
    file_byte_size: Optional[int] = None,
    fast_path: bool = True,
) -> ByteSource:
    """
    Create and return the byte source matching the supplied input.

    Args:
        pad (bytes): Pad appended after the message.
        segments (Sequence, optional): Ordered bytes-like segments of a virtual concatenation.
        file_obj (BinaryIO, optional): Open binary file positioned at its start.
        file_byte_size (int, optional): Declared length of file_obj; required with file_obj.
        fast_path (bool): Allow whole-block reads away from boundaries.

    Returns:
        ByteSource: A buffer or file byte source.

    Raises:
        ValueError: If both or neither input kinds are given, or the file size is missing.
        TypeError: If a segment is not bytes-like.
    """
    if (segments is None) == (file_obj is None):
        raise ValueError("Exactly one of segments or file_obj must be provided")

    if file_obj is not None:
        if file_byte_size is None:
            raise ValueError("file_byte_size is required for a file byte source")
        return FileByteSource(file_obj, file_byte_size, pad, fast_path=fast_path)

    return BufferByteSource(validate_segments(segments), pad, fast_path=fast_path)
