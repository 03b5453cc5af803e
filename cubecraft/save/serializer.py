"""
Save size calculation, writing and reading.

The writer and reader share one layout (see cubecraft.save.format):
a fixed header, a region of 16-byte chunk header slots, then a region of
4-byte block records. Chunk headers and block records are walked with two
independent cursors so neither region has to be buffered separately.

Usage:
    size = calculate_size(save)
    buffer = make_buffer(size)
    write_save(save, buffer)

    loaded = read_save(buffer)
    assert loaded == save
"""

from __future__ import annotations

from cubecraft.save.codec import (
    ByteCursor,
    decode_i32,
    decode_string,
    decode_u32,
    decode_u8,
    encode_i32,
    encode_string,
    encode_u32,
    encode_u8,
    trim_text,
)
from cubecraft.save.errors import (
    BufferOverrunError,
    FormatError,
    SizeMismatchError,
    TruncatedInputError,
)
from cubecraft.save.format import (
    BLOCK_RECORD_SIZE,
    CHUNK_HEADER_RESERVED,
    CHUNK_HEADER_SIZE,
    MAGIC,
    SAVENAME_MAX,
    SEED_MAX,
    header_size,
)
from cubecraft.save.models import BlockModification, ChunkModification, SaveFile


def calculate_size(save: SaveFile) -> int:
    """Exact number of bytes `save` occupies once serialized."""
    size = header_size()
    for chunk in save.modified_chunks:
        size += CHUNK_HEADER_SIZE
        size += len(chunk.modified_blocks) * BLOCK_RECORD_SIZE
    return size


def make_buffer(size: int) -> bytearray:
    """Allocate a zeroed buffer for the writer."""
    return bytearray(size)


def write_save(save: SaveFile, buffer: bytearray | memoryview) -> None:
    """
    Serialize `save` into `buffer`.

    Args:
        save: The save to serialize
        buffer: Writable buffer of exactly calculate_size(save) bytes

    Raises:
        SizeMismatchError: If the buffer length and the calculated size
            disagree, before or after writing
    """
    expected = calculate_size(save)
    cursor = ByteCursor(buffer)
    if len(cursor) != expected:
        raise SizeMismatchError(
            f"Buffer is {len(cursor)} bytes, save '{save.name}' needs {expected}"
        )

    try:
        encode_string(cursor, MAGIC, len(MAGIC))
        encode_string(cursor, save.name, SAVENAME_MAX)
        encode_string(cursor, save.seed, SEED_MAX)

        encode_i32(cursor, save.spawn_x)
        encode_i32(cursor, save.spawn_y)
        encode_i32(cursor, save.spawn_z)

        chunk_count = len(save.modified_chunks)
        encode_u32(cursor, chunk_count)

        blocks = ByteCursor(buffer, cursor.offset + chunk_count * CHUNK_HEADER_SIZE)
        for chunk in save.modified_chunks:
            encode_i32(cursor, chunk.x)
            encode_i32(cursor, chunk.z)
            encode_u32(cursor, len(chunk.modified_blocks))
            encode_string(cursor, b"", CHUNK_HEADER_RESERVED)

            for block in chunk.modified_blocks:
                encode_u8(blocks, block.x)
                encode_u8(blocks, block.y)
                encode_u8(blocks, block.z)
                encode_u8(blocks, block.type)
    except BufferOverrunError as e:
        raise SizeMismatchError(f"Writer overran the buffer for save '{save.name}': {e}") from e

    if blocks.offset != len(blocks):
        raise SizeMismatchError(
            f"Writer consumed {blocks.offset} of {len(blocks)} bytes for save '{save.name}'"
        )


def serialize_save(save: SaveFile) -> bytes:
    """Size, allocate and write a save in one step."""
    buffer = make_buffer(calculate_size(save))
    write_save(save, buffer)
    return bytes(buffer)


def read_save(buffer: bytes | bytearray | memoryview) -> SaveFile:
    """
    Parse a serialized save.

    The buffer may be longer than the save (trailing bytes are ignored),
    but never shorter.

    Raises:
        FormatError: If the magic signature does not match or a text
            field is not ASCII
        TruncatedInputError: If the buffer ends before the data it declares
    """
    cursor = ByteCursor(buffer)
    if cursor.remaining < len(MAGIC):
        raise TruncatedInputError(
            f"Buffer of {len(cursor)} bytes is too short for the file signature"
        )

    magic = decode_string(cursor, len(MAGIC))
    if magic != MAGIC:
        raise FormatError(f"Magic value does not match (expected {MAGIC!r}, got {magic!r})")

    try:
        raw_name = decode_string(cursor, SAVENAME_MAX)
        raw_seed = decode_string(cursor, SEED_MAX)

        spawn_x = decode_i32(cursor)
        spawn_y = decode_i32(cursor)
        spawn_z = decode_i32(cursor)

        chunk_count = decode_u32(cursor)
        header_bytes = chunk_count * CHUNK_HEADER_SIZE
        if header_bytes > cursor.remaining:
            raise TruncatedInputError(
                f"Save declares {chunk_count} chunks ({header_bytes} header bytes), "
                f"only {cursor.remaining} bytes remain"
            )

        blocks = ByteCursor(buffer, cursor.offset + header_bytes)
        chunks: list[ChunkModification] = []
        for _ in range(chunk_count):
            chunk_x = decode_i32(cursor)
            chunk_z = decode_i32(cursor)
            block_count = decode_u32(cursor)
            cursor.skip(CHUNK_HEADER_RESERVED)

            if block_count * BLOCK_RECORD_SIZE > blocks.remaining:
                raise TruncatedInputError(
                    f"Chunk ({chunk_x}, {chunk_z}) declares {block_count} blocks, "
                    f"only {blocks.remaining} bytes remain"
                )
            modified_blocks = [
                BlockModification(
                    x=decode_u8(blocks),
                    y=decode_u8(blocks),
                    z=decode_u8(blocks),
                    type=decode_u8(blocks),
                )
                for _ in range(block_count)
            ]
            chunks.append(
                ChunkModification(x=chunk_x, z=chunk_z, modified_blocks=modified_blocks)
            )
    except BufferOverrunError as e:
        raise TruncatedInputError(str(e)) from e

    try:
        name = trim_text(raw_name)
        seed = trim_text(raw_seed)
    except UnicodeDecodeError as e:
        raise FormatError(f"Save name or seed is not ASCII text: {e}") from e

    return SaveFile(
        name=name,
        seed=seed,
        spawn_x=spawn_x,
        spawn_y=spawn_y,
        spawn_z=spawn_z,
        modified_chunks=chunks,
    )
