"""
Block types and chunk block arrays.

A chunk's blocks are a numpy uint8 array indexed [x, y, z], with
x and z in [0, CHUNK_WIDTH) and y in [0, CHUNK_HEIGHT).
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np

CHUNK_WIDTH = 16
CHUNK_HEIGHT = 64
CHUNK_SHAPE = (CHUNK_WIDTH, CHUNK_HEIGHT, CHUNK_WIDTH)


class BlockType(IntEnum):
    """Block type ids as stored in save files."""
    AIR = 0        # Removed block
    STONE = 1
    SAND = 2
    DIRT = 3
    GRASS = 4
    WOOD = 5
    TREE = 6
    LEAVES = 7
    GAMECUBE = 8


def is_solid(block_type: int) -> bool:
    return block_type != BlockType.AIR


def new_chunk_blocks(fill: int = BlockType.AIR) -> np.ndarray:
    """Create a chunk block array filled with one block type."""
    return np.full(CHUNK_SHAPE, fill, dtype=np.uint8)


def surface_height(blocks: np.ndarray, x: int, z: int) -> int:
    """
    Get the first free height above the topmost solid block in a column.

    Returns 0 for a column with no solid blocks.
    """
    solid = np.flatnonzero(blocks[x, :, z] != BlockType.AIR)
    if solid.size == 0:
        return 0
    return int(solid[-1]) + 1
