"""
Storage backend interface.

A backend moves raw save bytes to and from a storage medium, keyed by
save name. It knows nothing about the save format.

Implementations:
- FilesystemStorage: one file per save in a worlds directory
- MemoryCardStorage: fixed-capacity removable memory card
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator


class StorageBackend(ABC):
    """
    Base class for save storage.

    Errors are reported with the exceptions in engine.storage.errors and
    are never retried here.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__)

    def init(self) -> None:
        """
        Prepare the medium for use.

        Override to create directories, mount devices, etc.
        """
        pass

    @abstractmethod
    def enumerate(self) -> Iterator[str]:
        """
        Yield the names of all stored saves.

        The iterator is lazy and finite; call again to restart.
        """

    @abstractmethod
    def load(self, name: str) -> bytes:
        """
        Return the raw bytes stored under `name`.

        Raises:
            SaveNotFoundError: If no such save exists
            StorageReadError: If the save cannot be read
        """

    @abstractmethod
    def save(self, name: str, data: bytes) -> None:
        """
        Store `data` under `name`, replacing any previous save.

        Raises:
            StorageWriteError: If the save cannot be written
            NoSpaceError: If the medium is full
        """

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Remove the save stored under `name`.

        Raises:
            SaveNotFoundError: If no such save exists
        """

    def exists(self, name: str) -> bool:
        """Check whether a save is stored under `name`."""
        return any(existing == name for existing in self.enumerate())

    def log(self, text: str) -> None:
        """Append a diagnostic line to the process-wide log."""
        self.logger.info("%s", text)
