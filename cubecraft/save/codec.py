"""
Integer/string codec for the save format.

All multi-byte integers are written most significant byte first. This
module is the only place that decides byte order; the serializer is
written purely in terms of these helpers.

Usage:
    buffer = bytearray(8)
    cursor = ByteCursor(buffer)
    encode_i32(cursor, -1)
    encode_u32(cursor, 7)

    cursor = ByteCursor(buffer)
    assert decode_i32(cursor) == -1
"""

from __future__ import annotations

import struct

from cubecraft.save.errors import BufferOverrunError

_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_UINT8 = struct.Struct(">B")


class ByteCursor:
    """
    Bounds-checked position within a byte buffer.

    Every read, write or skip advances the cursor by a fixed width and
    raises BufferOverrunError instead of running past the end.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview, offset: int = 0):
        self._view = memoryview(buffer).cast("B")
        if not 0 <= offset <= len(self._view):
            raise BufferOverrunError(
                f"Cursor offset {offset} outside buffer of {len(self._view)} bytes"
            )
        self._offset = offset

    @property
    def offset(self) -> int:
        """Current position from the start of the buffer."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Bytes left between the cursor and the end of the buffer."""
        return len(self._view) - self._offset

    def __len__(self) -> int:
        return len(self._view)

    def _claim(self, size: int) -> int:
        """Reserve `size` bytes at the cursor, returning their start offset."""
        if size < 0 or size > self.remaining:
            raise BufferOverrunError(
                f"Need {size} bytes at offset {self._offset}, "
                f"only {self.remaining} remain"
            )
        start = self._offset
        self._offset += size
        return start

    def skip(self, size: int) -> None:
        """Advance without reading or writing."""
        self._claim(size)

    def pack(self, fmt: struct.Struct, value: int) -> None:
        start = self._claim(fmt.size)
        fmt.pack_into(self._view, start, value)

    def unpack(self, fmt: struct.Struct) -> int:
        start = self._claim(fmt.size)
        return fmt.unpack_from(self._view, start)[0]

    def write_bytes(self, data: bytes) -> None:
        start = self._claim(len(data))
        self._view[start:start + len(data)] = data

    def read_bytes(self, size: int) -> bytes:
        start = self._claim(size)
        return self._view[start:start + size].tobytes()


def encode_i32(cursor: ByteCursor, value: int) -> None:
    cursor.pack(_INT32, value)


def encode_u32(cursor: ByteCursor, value: int) -> None:
    cursor.pack(_UINT32, value)


def encode_u8(cursor: ByteCursor, value: int) -> None:
    cursor.pack(_UINT8, value)


def decode_i32(cursor: ByteCursor) -> int:
    return cursor.unpack(_INT32)


def decode_u32(cursor: ByteCursor) -> int:
    return cursor.unpack(_UINT32)


def decode_u8(cursor: ByteCursor) -> int:
    return cursor.unpack(_UINT8)


def encode_string(cursor: ByteCursor, text: str | bytes, length: int) -> None:
    """
    Write exactly `length` bytes of text.

    Longer text is truncated; shorter text is padded with zero bytes.
    """
    raw = text.encode("ascii") if isinstance(text, str) else bytes(text)
    raw = raw[:length]
    cursor.write_bytes(raw + b"\0" * (length - len(raw)))


def decode_string(cursor: ByteCursor, length: int) -> bytes:
    """Read exactly `length` bytes verbatim. Padding is left in place."""
    return cursor.read_bytes(length)


def trim_text(raw: bytes) -> str:
    """Convert a zero-padded fixed-width field to text (cut at the first NUL)."""
    return raw.split(b"\0", 1)[0].decode("ascii")
