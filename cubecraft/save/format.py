"""
Save file format constants.

Layout of a world save (all integers big-endian):

    magic                   15 bytes   "CUBECRAFTvALPHA", not NUL-terminated
    name                    32 bytes   zero-padded ASCII
    seed                    32 bytes   zero-padded ASCII
    spawn x, y, z           3 x int32
    chunk count             uint32
    chunk headers           count x 16-byte slots:
                              int32 x, int32 z, uint32 block count, 4 reserved
    block records           per chunk, in header order:
                              block count x (u8 x, u8 y, u8 z, u8 type)
"""

MAGIC = b"CUBECRAFTvALPHA"

SAVENAME_MAX = 32
SEED_MAX = 32

SPAWN_SIZE = 3 * 4
CHUNK_COUNT_SIZE = 4

# Only x, z and the block count carry data; the last 4 bytes are reserved.
CHUNK_HEADER_SIZE = 16
CHUNK_HEADER_USED = 12
CHUNK_HEADER_RESERVED = CHUNK_HEADER_SIZE - CHUNK_HEADER_USED

BLOCK_RECORD_SIZE = 4

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
UINT32_MAX = 2 ** 32 - 1
UINT8_MAX = 255


def header_size() -> int:
    """Size of everything that precedes the chunk header region."""
    return len(MAGIC) + SAVENAME_MAX + SEED_MAX + SPAWN_SIZE + CHUNK_COUNT_SIZE
