import numpy as np
import pytest

from cubecraft.save.serializer import read_save, serialize_save
from cubecraft.world.blocks import BlockType, CHUNK_HEIGHT, new_chunk_blocks
from cubecraft.world.session import WorldSession, world_to_chunk


def test_world_to_chunk():
    assert world_to_chunk(0, 0) == (0, 0, 0, 0)
    assert world_to_chunk(17, 31) == (1, 1, 1, 15)
    assert world_to_chunk(-1, -16) == (-1, -1, 15, 0)
    assert world_to_chunk(-17, 5) == (-2, 0, 15, 5)


def test_set_block_records_local_coordinates():
    session = WorldSession("W", "seed")
    session.set_block(-1, 5, 18, BlockType.WOOD)

    chunk = session.chunk_modification(-1, 1)
    assert chunk is not None
    block = chunk.modified_blocks[0]
    assert (block.x, block.y, block.z, block.type) == (15, 5, 2, BlockType.WOOD)


def test_repeated_edit_keeps_one_record():
    session = WorldSession("W", "seed")
    session.set_block(3, 4, 5, BlockType.DIRT)
    session.set_block(3, 4, 5, BlockType.AIR)

    assert session.block_count == 1
    assert session.get_block(3, 4, 5) == BlockType.AIR
    assert session.get_block(3, 5, 5) is None


def test_chunks_keep_discovery_order():
    session = WorldSession("W", "seed")
    session.set_block(40, 0, 0, BlockType.SAND)
    session.set_block(-40, 0, 0, BlockType.SAND)
    session.set_block(41, 0, 0, BlockType.SAND)

    assert [(c.x, c.z) for c in session.modified_chunks] == [(2, 0), (-3, 0)]


def test_height_is_checked():
    session = WorldSession("W", "seed")
    with pytest.raises(ValueError):
        session.set_block(0, CHUNK_HEIGHT, 0, BlockType.STONE)
    with pytest.raises(ValueError):
        session.set_block(0, -1, 0, BlockType.STONE)


def test_apply_to_chunk():
    session = WorldSession("W", "seed")
    session.set_block(16, 10, 16, BlockType.GAMECUBE)
    session.set_block(17, 3, 20, BlockType.AIR)
    blocks = new_chunk_blocks(BlockType.STONE)

    applied = session.apply_to_chunk(1, 1, blocks)

    assert applied == 2
    assert blocks[0, 10, 0] == BlockType.GAMECUBE
    assert blocks[1, 3, 4] == BlockType.AIR
    assert np.count_nonzero(blocks != BlockType.STONE) == 2


def test_apply_to_unmodified_chunk():
    session = WorldSession("W", "seed")
    blocks = new_chunk_blocks(BlockType.DIRT)

    assert session.apply_to_chunk(5, 5, blocks) == 0
    assert np.all(blocks == BlockType.DIRT)


def test_apply_rejects_wrong_shape():
    session = WorldSession("W", "seed")
    with pytest.raises(ValueError):
        session.apply_to_chunk(0, 0, np.zeros((4, 4, 4), dtype=np.uint8))


def test_place_spawn_on_surface():
    session = WorldSession("W", "seed")
    blocks = new_chunk_blocks()
    blocks[2, :20, 3] = BlockType.GRASS

    assert session.place_spawn_on_surface(blocks, 18, -13) == (18, 20, -13)


def test_save_file_roundtrip(sample_save):
    session = WorldSession.from_save_file(sample_save)

    assert session.to_save_file() == sample_save
    assert read_save(serialize_save(session.to_save_file())) == sample_save


def test_snapshot_is_independent():
    session = WorldSession("W", "seed")
    session.set_block(0, 0, 0, BlockType.STONE)
    snapshot = session.to_save_file()

    session.set_block(0, 0, 0, BlockType.SAND)

    assert snapshot.modified_chunks[0].modified_blocks[0].type == BlockType.STONE


def test_from_save_file_merges_duplicate_chunks(caplog):
    from cubecraft.save.models import BlockModification, ChunkModification, SaveFile

    save = SaveFile(
        name="Dup",
        seed="1",
        modified_chunks=[
            ChunkModification(x=0, z=0, modified_blocks=[BlockModification(x=1, y=1, z=1, type=1)]),
            ChunkModification(x=0, z=0, modified_blocks=[BlockModification(x=1, y=1, z=1, type=2)]),
        ],
    )

    session = WorldSession.from_save_file(save)

    assert len(session.modified_chunks) == 1
    assert session.get_block(1, 1, 1) == 2
    assert "twice" in caplog.text


def test_clear():
    session = WorldSession("W", "seed")
    session.set_block(0, 0, 0, BlockType.STONE)
    session.clear()
    assert session.modified_chunks == []
    assert session.block_count == 0


def test_from_save_file_rejects_block_outside_chunk():
    from cubecraft.save.errors import FormatError
    from cubecraft.save.models import BlockModification, ChunkModification, SaveFile

    save = SaveFile(
        name="Tall",
        seed="1",
        modified_chunks=[
            ChunkModification(x=2, z=3, modified_blocks=[BlockModification(x=1, y=200, z=1, type=1)]),
        ],
    )

    with pytest.raises(FormatError, match="chunk \\(2, 3\\)"):
        WorldSession.from_save_file(save)
