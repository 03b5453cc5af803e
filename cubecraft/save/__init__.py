"""
Save module - world persistence.

Provides:
- Binary save file format (big-endian, fixed-width fields)
- Exact size calculation, writing and reading
- SaveManager for saving/loading through a storage backend
- Typed errors for corrupt, truncated and mis-sized saves
"""

from cubecraft.save.format import MAGIC, SAVENAME_MAX, SEED_MAX
from cubecraft.save.models import SaveFile, ChunkModification, BlockModification
from cubecraft.save.serializer import (
    calculate_size,
    make_buffer,
    write_save,
    read_save,
    serialize_save,
)
from cubecraft.save.errors import (
    SaveError,
    FormatError,
    TruncatedInputError,
    SizeMismatchError,
    BufferOverrunError,
    SaveValidationError,
)
from cubecraft.save.manager import SaveManager, SaveEvent

__all__ = [
    # Format
    "MAGIC",
    "SAVENAME_MAX",
    "SEED_MAX",
    # Models
    "SaveFile",
    "ChunkModification",
    "BlockModification",
    # Serialization
    "calculate_size",
    "make_buffer",
    "write_save",
    "read_save",
    "serialize_save",
    # Errors
    "SaveError",
    "FormatError",
    "TruncatedInputError",
    "SizeMismatchError",
    "BufferOverrunError",
    "SaveValidationError",
    # Manager
    "SaveManager",
    "SaveEvent",
]
