"""
Save/Load system - world persistence through a storage backend.

Provides:
- Save/load worlds as binary save files
- Listing and deleting saves
- Save integrity validation (signature and length checks)
- Event publishing for save/load operations
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable

from engine.core.events import EventBus
from engine.storage.backend import StorageBackend
from engine.storage.errors import SaveNotFoundError
from cubecraft.save.errors import (
    FormatError,
    SaveValidationError,
    TruncatedInputError,
)
from cubecraft.save.models import SaveFile
from cubecraft.save.serializer import (
    calculate_size,
    make_buffer,
    read_save,
    write_save,
)

if TYPE_CHECKING:
    from cubecraft.world.session import WorldSession


class SaveEvent(Enum):
    """Save system events."""
    SAVE_STARTED = auto()
    SAVE_COMPLETED = auto()
    SAVE_FAILED = auto()
    LOAD_STARTED = auto()
    LOAD_COMPLETED = auto()
    LOAD_FAILED = auto()
    SAVE_DELETED = auto()


class SaveManager:
    """
    Manages saving and loading worlds.

    Features:
    - Any StorageBackend (filesystem, memory card)
    - Exact-size buffers from the size calculator
    - Event publishing for save/load operations
    - "No such save" treatment for corrupt or foreign files

    Usage:
        save_mgr = SaveManager(storage, event_bus=event_bus)
        save_mgr.save_world(session)
        session = save_mgr.open_world("MyWorld")
    """

    def __init__(
        self,
        storage: StorageBackend,
        event_bus: EventBus | None = None,
    ):
        self.storage = storage
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

    def list_saves(self) -> list[str]:
        """Get the names of all stored worlds."""
        return list(self.storage.enumerate())

    def save_world(self, world: WorldSession | SaveFile) -> int:
        """
        Save a world.

        Args:
            world: The session to snapshot, or a ready SaveFile

        Returns:
            Number of bytes handed to the storage backend

        Raises:
            SaveValidationError: If the name or seed is empty
            SizeMismatchError: If the writer and size calculator disagree
            StorageError: If the backend fails
        """
        save = world if isinstance(world, SaveFile) else world.to_save_file()
        if not save.name:
            raise SaveValidationError("Cannot save a world without a name")
        if not save.seed:
            raise SaveValidationError(f"Cannot save world '{save.name}' without a seed")

        if self.event_bus:
            self.event_bus.publish(SaveEvent.SAVE_STARTED, name=save.name)

        try:
            size = calculate_size(save)
            buffer = make_buffer(size)
            write_save(save, buffer)
            self.storage.save(save.name, bytes(buffer))
        except Exception as e:
            self.logger.error(f"Save of world '{save.name}' failed: {e}")
            if self.event_bus:
                self.event_bus.publish(SaveEvent.SAVE_FAILED, name=save.name, error=str(e))
            raise

        self.logger.info(
            f"Saved world '{save.name}' ({size} bytes, "
            f"{len(save.modified_chunks)} chunks, {save.block_count} blocks)"
        )
        if self.event_bus:
            self.event_bus.publish(SaveEvent.SAVE_COMPLETED, name=save.name, size=size)
        return size

    def load_world(self, name: str) -> SaveFile:
        """
        Load a world's save file.

        Raises:
            SaveNotFoundError: If no save exists under `name`
            FormatError: If the file is not a world save
            TruncatedInputError: If the file is cut short
            StorageError: If the backend fails
        """
        save, _ = self._load(name)
        return save

    def open_world(self, name: str) -> WorldSession:
        """
        Load a world and rebuild its session.

        Raises:
            FormatError: If the file is not a world save, or holds blocks
                outside their chunk
            (and everything load_world raises)
        """
        from cubecraft.world.session import WorldSession

        _, session = self._load(name, WorldSession.from_save_file)
        return session

    def _load(
        self,
        name: str,
        build: Callable[[SaveFile], Any] | None = None,
    ) -> tuple[SaveFile, Any]:
        """Read a save and optionally build game state from it, reporting failures once."""
        if self.event_bus:
            self.event_bus.publish(SaveEvent.LOAD_STARTED, name=name)

        try:
            data = self.storage.load(name)
            save = read_save(data)
            built = build(save) if build else None
        except Exception as e:
            self.logger.error(f"Load of world '{name}' failed: {e}")
            if self.event_bus:
                self.event_bus.publish(SaveEvent.LOAD_FAILED, name=name, error=str(e))
            raise

        if save.name != name:
            self.logger.warning(f"Save file '{name}' contains world named '{save.name}'")

        self.logger.info(
            f"Loaded world '{name}' ({len(save.modified_chunks)} chunks, "
            f"{save.block_count} blocks)"
        )
        if self.event_bus:
            self.event_bus.publish(SaveEvent.LOAD_COMPLETED, name=name)
        return save, built

    def delete_world(self, name: str) -> bool:
        """
        Delete a saved world.

        Returns:
            True if a save was deleted, False if none existed
        """
        try:
            self.storage.delete(name)
        except SaveNotFoundError:
            self.logger.warning(f"Cannot delete world '{name}': not found")
            return False

        if self.event_bus:
            self.event_bus.publish(SaveEvent.SAVE_DELETED, name=name)
        return True

    def validate_save(self, name: str) -> bool:
        """
        Check that a save exists and parses.

        Returns:
            True if the save is valid, False if it is missing or corrupt
        """
        try:
            read_save(self.storage.load(name))
        except (SaveNotFoundError, FormatError, TruncatedInputError) as e:
            self.logger.warning(f"World '{name}' is not a valid save: {e}")
            return False
        return True

    def validate_all(self) -> dict[str, bool]:
        """Validate every stored save."""
        return {name: self.validate_save(name) for name in self.list_saves()}
