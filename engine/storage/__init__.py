"""
Storage module - raw save bytes in, raw save bytes out.

Exports:
- StorageBackend: Backend interface
- FilesystemStorage, MemoryCardStorage: Backend implementations
- StorageConfig, load_storage_config, create_storage: Startup selection
- StorageError and subclasses: Backend failures
"""

from engine.storage.backend import StorageBackend
from engine.storage.filesystem import FilesystemStorage
from engine.storage.memory_card import MemoryCardStorage, round_up
from engine.storage.config import StorageConfig, load_storage_config, create_storage
from engine.storage.errors import (
    StorageError,
    SaveNotFoundError,
    StorageReadError,
    StorageWriteError,
    NoSpaceError,
    ConfigError,
)

__all__ = [
    # Backends
    "StorageBackend",
    "FilesystemStorage",
    "MemoryCardStorage",
    "round_up",
    # Configuration
    "StorageConfig",
    "load_storage_config",
    "create_storage",
    # Errors
    "StorageError",
    "SaveNotFoundError",
    "StorageReadError",
    "StorageWriteError",
    "NoSpaceError",
    "ConfigError",
]
