"""
Byte sources feeding the compression function one 64-byte block at a time.

A byte source presents the message followed by its pad as one seamless
stream. Two kinds exist: a virtual concatenation of in-memory buffers and an
open binary file of known length.
"""

import logging
import struct
from abc import ABC, abstractmethod
from typing import BinaryIO, List, NoReturn, Optional, Sequence, Tuple

from services.sha1_implementations.padding import BLOCK_SIZE, WORD_SIZE

logger = logging.getLogger(__name__)

_BLOCK_FORMAT = struct.Struct(f">{BLOCK_SIZE // WORD_SIZE}I")


class ByteSourceConsistencyError(RuntimeError):
    """
    Raised when a byte source is asked for more bytes than it was built with.

    This signals that the declared lengths disagree with the real buffers or
    file, which is a defect in the caller and never a property of the data.
    """


class ByteSource(ABC):
    """
    Abstract cursor over message bytes followed by the pad.

    Subclasses supply the message bytes; this class handles the pad, block
    accounting and the byte-wise fallback used near any boundary.

    Attributes:
        pad (bytes): Trailer appended after the message.
        pad_position (int): Cursor into the pad.
        is_in_pad (bool): Whether the cursor has crossed into the pad.
        total_byte_size (int): Message plus pad length, a multiple of BLOCK_SIZE.
        position (int): Bytes handed out so far.
        fast_path (bool): Whether whole blocks may be read directly.
    """

    def __init__(self, pad: bytes, data_byte_size: int, fast_path: bool = True) -> None:
        total_byte_size = data_byte_size + len(pad)
        if total_byte_size % BLOCK_SIZE:
            raise ValueError(
                f"Message of {data_byte_size} bytes with a {len(pad)} byte pad "
                f"is not a whole number of {BLOCK_SIZE} byte blocks"
            )
        self.pad = pad
        self.pad_position = 0
        self.is_in_pad = False
        self.data_byte_size = data_byte_size
        self.total_byte_size = total_byte_size
        self.position = 0
        self.fast_path = fast_path
        self._buffer = bytearray(BLOCK_SIZE)

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def blocks_remaining(self) -> int:
        return (self.total_byte_size - self.position) // BLOCK_SIZE

    def next_block(self) -> Tuple[int, ...]:
        """
        Return the next block as sixteen 32-bit big-endian words.

        Raises:
            ByteSourceConsistencyError: If no block remains, or the underlying
                data ends before its declared length.
        """
        if self.position + BLOCK_SIZE > self.total_byte_size:
            self._fault(
                f"Block requested at offset {self.position} beyond declared total of {self.total_byte_size} bytes"
            )

        words = self._read_fast_block() if self.fast_path else None
        if words is None:
            self._fill_buffer()
            words = _BLOCK_FORMAT.unpack(self._buffer)

        self.position += BLOCK_SIZE
        return words

    def close(self) -> None:
        """Release anything borrowed from the caller."""

    def _fill_buffer(self) -> None:
        i = 0
        while i < BLOCK_SIZE:
            if self.is_in_pad:
                if self.pad_position >= len(self.pad):
                    self._fault("Pad exhausted before the end of the block")
                self._buffer[i] = self.pad[self.pad_position]
                self.pad_position += 1
                i += 1
            elif not self._advance_to_data():
                self.is_in_pad = True
                self.pad_position = 0
            else:
                self._buffer[i] = self._read_data_byte()
                i += 1

    def _fault(self, message: str) -> NoReturn:
        logger.critical(f"{type(self).__name__}: {message}")
        raise ByteSourceConsistencyError(message)

    @abstractmethod
    def _read_fast_block(self) -> Optional[Tuple[int, ...]]:
        """Read a whole block from the data if it lies safely inside it, else return None."""
        pass

    @abstractmethod
    def _advance_to_data(self) -> bool:
        """Move the cursor to the next unread data byte; return False when the data is exhausted."""
        pass

    @abstractmethod
    def _read_data_byte(self) -> int:
        """Consume one data byte at the cursor."""
        pass


def _byte_view(segment) -> memoryview:
    """Flat unsigned-byte view of segment; strided views are copied first."""
    view = memoryview(segment)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    return view.cast("B")


class BufferByteSource(ByteSource):
    """
    Virtual concatenation of in-memory buffers.

    Segments are borrowed through memoryviews for the lifetime of the source
    and released by close().
    """

    def __init__(self, segments: Sequence, pad: bytes, fast_path: bool = True) -> None:
        self.segments: List[memoryview] = [_byte_view(segment) for segment in segments]
        self.array_index = 0
        self.array_position = 0
        super().__init__(pad, sum(view.nbytes for view in self.segments), fast_path=fast_path)

    def close(self) -> None:
        for view in self.segments:
            view.release()
        self.segments = []

    def _read_fast_block(self) -> Optional[Tuple[int, ...]]:
        if self.array_index >= len(self.segments):
            return None
        segment = self.segments[self.array_index]
        if self.array_position + BLOCK_SIZE > segment.nbytes:
            return None
        words = _BLOCK_FORMAT.unpack_from(segment, self.array_position)
        self.array_position += BLOCK_SIZE
        return words

    def _advance_to_data(self) -> bool:
        while self.array_index < len(self.segments):
            if self.array_position < self.segments[self.array_index].nbytes:
                return True
            self.array_index += 1
            self.array_position = 0
        return False

    def _read_data_byte(self) -> int:
        value = self.segments[self.array_index][self.array_position]
        self.array_position += 1
        return value


class FileByteSource(ByteSource):
    """
    Open binary file of known length, streamed without loading it.

    The file object stays owned by the caller; close() does not close it.
    """

    def __init__(self, file_obj: BinaryIO, file_byte_size: int, pad: bytes, fast_path: bool = True) -> None:
        if file_byte_size < 0:
            raise ValueError(f"File size cannot be negative: {file_byte_size}")
        self.file_obj = file_obj
        self.file_byte_size = file_byte_size
        self.file_position = 0
        super().__init__(pad, file_byte_size, fast_path=fast_path)

    def _read_fast_block(self) -> Optional[Tuple[int, ...]]:
        if self.file_position + BLOCK_SIZE > self.file_byte_size:
            return None
        chunk = self.file_obj.read(BLOCK_SIZE)
        if len(chunk) != BLOCK_SIZE:
            self._fault(
                f"File ended at offset {self.file_position + len(chunk)}, "
                f"declared size is {self.file_byte_size} bytes"
            )
        self.file_position += BLOCK_SIZE
        return _BLOCK_FORMAT.unpack(chunk)

    def _advance_to_data(self) -> bool:
        return self.file_position < self.file_byte_size

    def _read_data_byte(self) -> int:
        byte = self.file_obj.read(1)
        if not byte:
            self._fault(
                f"File ended at offset {self.file_position}, declared size is {self.file_byte_size} bytes"
            )
        self.file_position += 1
        return byte[0]
