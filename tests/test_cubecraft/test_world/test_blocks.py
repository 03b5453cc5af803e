from cubecraft.world.blocks import (
    BlockType,
    CHUNK_SHAPE,
    is_solid,
    new_chunk_blocks,
    surface_height,
)


def test_new_chunk_blocks():
    blocks = new_chunk_blocks()
    assert blocks.shape == CHUNK_SHAPE
    assert blocks.dtype.itemsize == 1
    assert not blocks.any()


def test_is_solid():
    assert not is_solid(BlockType.AIR)
    assert is_solid(BlockType.LEAVES)


def test_surface_height():
    blocks = new_chunk_blocks()
    assert surface_height(blocks, 0, 0) == 0

    blocks[0, :12, 0] = BlockType.STONE
    blocks[0, 30, 0] = BlockType.LEAVES
    assert surface_height(blocks, 0, 0) == 31
