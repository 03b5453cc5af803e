"""
Save data models.

Models are data-only pydantic containers. They check that every field
fits its on-disk width (int32, uint8, fixed-width ASCII text) so the
serializer never receives a value it cannot encode. Chunk-local ranges
(0 <= x < CHUNK_WIDTH, ...) are the world session's concern, not the
model's.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cubecraft.save.format import (
    INT32_MAX,
    INT32_MIN,
    SAVENAME_MAX,
    SEED_MAX,
    UINT8_MAX,
)


def _check_text(value: str, limit: int, field_name: str) -> str:
    try:
        raw = value.encode("ascii")
    except UnicodeEncodeError as e:
        raise ValueError(f"{field_name} must be ASCII text") from e
    if len(raw) > limit:
        raise ValueError(f"{field_name} is {len(raw)} bytes, limit is {limit}")
    if b"\0" in raw:
        raise ValueError(f"{field_name} must not contain NUL bytes")
    return value


class SaveModel(BaseModel):
    """Common configuration for save models."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )


class BlockModification(SaveModel):
    """One changed block, in coordinates local to its chunk."""
    x: int = Field(ge=0, le=UINT8_MAX)
    y: int = Field(ge=0, le=UINT8_MAX)
    z: int = Field(ge=0, le=UINT8_MAX)
    type: int = Field(ge=0, le=UINT8_MAX)


class ChunkModification(SaveModel):
    """All player edits within one chunk, in the order they were made."""
    x: int = Field(ge=INT32_MIN, le=INT32_MAX)
    z: int = Field(ge=INT32_MIN, le=INT32_MAX)
    modified_blocks: list[BlockModification] = Field(default_factory=list)


class SaveFile(SaveModel):
    """
    Root persisted entity: a world's seed, spawn point and sparse diff.

    Attributes:
        name: Storage key, at most SAVENAME_MAX ASCII bytes
        seed: World generation seed, at most SEED_MAX ASCII bytes
        spawn_x, spawn_y, spawn_z: Player spawn point (world coordinates)
        modified_chunks: Chunk edits in discovery order
    """
    name: str = ""
    seed: str = ""
    spawn_x: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    spawn_y: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    spawn_z: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    modified_chunks: list[ChunkModification] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return _check_text(value, SAVENAME_MAX, "name")

    @field_validator("seed")
    @classmethod
    def _validate_seed(cls, value: str) -> str:
        return _check_text(value, SEED_MAX, "seed")

    @property
    def block_count(self) -> int:
        """Total number of modified blocks across all chunks."""
        return sum(len(chunk.modified_blocks) for chunk in self.modified_chunks)
