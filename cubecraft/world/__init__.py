"""
World module - block types and the active world session.
"""

from cubecraft.world.blocks import (
    CHUNK_WIDTH,
    CHUNK_HEIGHT,
    CHUNK_SHAPE,
    BlockType,
    is_solid,
    new_chunk_blocks,
    surface_height,
)
from cubecraft.world.session import WorldSession, world_to_chunk

__all__ = [
    "CHUNK_WIDTH",
    "CHUNK_HEIGHT",
    "CHUNK_SHAPE",
    "BlockType",
    "is_solid",
    "new_chunk_blocks",
    "surface_height",
    "WorldSession",
    "world_to_chunk",
]
