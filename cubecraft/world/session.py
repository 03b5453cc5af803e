"""
World session - the active world's persistent state.

A WorldSession holds everything that gets saved for one world: name,
seed, spawn point and the sparse record of player edits. It replaces
process-wide "current world" state: the game owns a session and hands
it to the SaveManager.

Usage:
    session = WorldSession("MyWorld", seed="12345")
    session.set_block(-3, 20, 17, BlockType.STONE)
    save_manager.save_world(session)

    # Later, after generating chunk (cx, cz) from the seed
    blocks = generate_chunk(seed, cx, cz)
    session.apply_to_chunk(cx, cz, blocks)
"""

from __future__ import annotations

import logging

import numpy as np

from cubecraft.save.errors import FormatError
from cubecraft.save.models import BlockModification, ChunkModification, SaveFile
from cubecraft.world.blocks import CHUNK_HEIGHT, CHUNK_SHAPE, CHUNK_WIDTH, surface_height

logger = logging.getLogger(__name__)


def world_to_chunk(x: int, z: int) -> tuple[int, int, int, int]:
    """
    Split world block coordinates into chunk and local coordinates.

    Returns:
        (chunk_x, chunk_z, local_x, local_z)
    """
    chunk_x, local_x = divmod(x, CHUNK_WIDTH)
    chunk_z, local_z = divmod(z, CHUNK_WIDTH)
    return chunk_x, chunk_z, local_x, local_z


class WorldSession:
    """
    Persistent state of the world being played.

    Edits are recorded per chunk in the order chunks were first modified.
    Editing the same block twice keeps one record with the latest type.
    """

    def __init__(
        self,
        name: str,
        seed: str,
        spawn: tuple[int, int, int] = (0, 0, 0),
    ):
        self.name = name
        self.seed = seed
        self.spawn_x, self.spawn_y, self.spawn_z = spawn

        self._chunks: dict[tuple[int, int], ChunkModification] = {}
        # (chunk_x, chunk_z) -> {(x, y, z): record}
        self._blocks: dict[tuple[int, int], dict[tuple[int, int, int], BlockModification]] = {}

    @property
    def spawn(self) -> tuple[int, int, int]:
        return self.spawn_x, self.spawn_y, self.spawn_z

    def set_spawn(self, x: int, y: int, z: int) -> None:
        self.spawn_x, self.spawn_y, self.spawn_z = x, y, z

    def place_spawn_on_surface(self, blocks: np.ndarray, x: int, z: int) -> tuple[int, int, int]:
        """
        Put the spawn point on top of the highest solid block at (x, z).

        Args:
            blocks: Block array of the chunk containing (x, z)
            x, z: World block coordinates
        """
        _, _, local_x, local_z = world_to_chunk(x, z)
        self.set_spawn(x, surface_height(blocks, local_x, local_z), z)
        return self.spawn

    # Recording edits

    def set_block(self, x: int, y: int, z: int, block_type: int) -> None:
        """
        Record a player edit at world block coordinates.

        Args:
            x, y, z: World block coordinates
            block_type: New block type (BlockType.AIR for a removal)
        """
        chunk_x, chunk_z, local_x, local_z = world_to_chunk(x, z)
        self._record(chunk_x, chunk_z, local_x, y, local_z, block_type)

    def _record(
        self,
        chunk_x: int,
        chunk_z: int,
        x: int,
        y: int,
        z: int,
        block_type: int,
    ) -> None:
        if not (0 <= x < CHUNK_WIDTH and 0 <= z < CHUNK_WIDTH):
            raise ValueError(f"Local block position ({x}, {z}) outside chunk")
        if not 0 <= y < CHUNK_HEIGHT:
            raise ValueError(f"Block height {y} outside 0..{CHUNK_HEIGHT - 1}")

        chunk = self._get_or_create_chunk(chunk_x, chunk_z)
        blocks = self._blocks[(chunk_x, chunk_z)]
        existing = blocks.get((x, y, z))
        if existing is not None:
            existing.type = int(block_type)
        else:
            block = BlockModification(x=x, y=y, z=z, type=int(block_type))
            chunk.modified_blocks.append(block)
            blocks[(x, y, z)] = block

    def _get_or_create_chunk(self, chunk_x: int, chunk_z: int) -> ChunkModification:
        key = (chunk_x, chunk_z)
        chunk = self._chunks.get(key)
        if chunk is None:
            chunk = ChunkModification(x=chunk_x, z=chunk_z)
            self._chunks[key] = chunk
            self._blocks[key] = {}
        return chunk

    # Queries

    def get_block(self, x: int, y: int, z: int) -> int | None:
        """Get the recorded type at world coordinates, or None if unmodified."""
        chunk_x, chunk_z, local_x, local_z = world_to_chunk(x, z)
        block = self._blocks.get((chunk_x, chunk_z), {}).get((local_x, y, local_z))
        return None if block is None else block.type

    def chunk_modification(self, chunk_x: int, chunk_z: int) -> ChunkModification | None:
        return self._chunks.get((chunk_x, chunk_z))

    @property
    def modified_chunks(self) -> list[ChunkModification]:
        """Modified chunks in the order they were first edited."""
        return list(self._chunks.values())

    @property
    def block_count(self) -> int:
        return sum(len(blocks) for blocks in self._blocks.values())

    def clear(self) -> None:
        """Forget all recorded edits."""
        self._chunks.clear()
        self._blocks.clear()

    # Applying edits

    def apply_to_chunk(self, chunk_x: int, chunk_z: int, blocks: np.ndarray) -> int:
        """
        Overlay recorded edits onto a freshly generated chunk.

        Args:
            chunk_x, chunk_z: Chunk grid coordinates
            blocks: Block array of shape CHUNK_SHAPE, modified in place

        Returns:
            Number of blocks written
        """
        if blocks.shape != CHUNK_SHAPE:
            raise ValueError(f"Chunk array has shape {blocks.shape}, expected {CHUNK_SHAPE}")

        chunk = self._chunks.get((chunk_x, chunk_z))
        if chunk is None or not chunk.modified_blocks:
            return 0

        records = np.array(
            [(b.x, b.y, b.z, b.type) for b in chunk.modified_blocks],
            dtype=np.int64,
        )
        blocks[records[:, 0], records[:, 1], records[:, 2]] = records[:, 3]
        return len(records)

    # Conversion

    def to_save_file(self) -> SaveFile:
        """Snapshot the session as a SaveFile."""
        return SaveFile(
            name=self.name,
            seed=self.seed,
            spawn_x=self.spawn_x,
            spawn_y=self.spawn_y,
            spawn_z=self.spawn_z,
            modified_chunks=[chunk.model_copy(deep=True) for chunk in self._chunks.values()],
        )

    @classmethod
    def from_save_file(cls, save: SaveFile) -> WorldSession:
        """
        Rebuild a session from a loaded save.

        Records are replayed in file order, so a chunk or block that appears
        more than once collapses into one record holding the last type.

        Raises:
            FormatError: If a block record lies outside its chunk
        """
        session = cls(save.name, save.seed, (save.spawn_x, save.spawn_y, save.spawn_z))
        for chunk in save.modified_chunks:
            if (chunk.x, chunk.z) in session._chunks:
                logger.warning(f"Save '{save.name}' lists chunk ({chunk.x}, {chunk.z}) twice")
            session._get_or_create_chunk(chunk.x, chunk.z)
            for block in chunk.modified_blocks:
                try:
                    session._record(chunk.x, chunk.z, block.x, block.y, block.z, block.type)
                except ValueError as e:
                    raise FormatError(
                        f"Save '{save.name}' chunk ({chunk.x}, {chunk.z}): {e}"
                    ) from e
        return session
