"""
Memory card save storage.

Emulates a fixed-size removable memory card. The card's contents live in
a directory (one subdirectory per slot), so saves survive the process.
Each game sees only the files in its own (game code, maker code)
namespace, but every file on the card counts against its capacity.
Files occupy whole sectors and are zero-padded to their sector boundary,
so a load returns the save followed by padding.

Card layout:
    <card_dir>/<slot>/<game_code><maker_code>/<file name>
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from engine.core.events import EventBus, StorageEvent
from engine.storage.backend import StorageBackend
from engine.storage.errors import (
    NoSpaceError,
    SaveNotFoundError,
    StorageError,
    StorageWriteError,
)
from engine.storage.filesystem import FilesystemStorage

CARD_SLOTS = ("A", "B")
CARD_FILENAME_MAX = 32
DEFAULT_CARD_DIR = "memcard"
DEFAULT_SECTOR_SIZE = 8192
DEFAULT_CAPACITY_SECTORS = 59


def round_up(number: int, multiple: int) -> int:
    """Round `number` up to the next multiple of `multiple`."""
    return ((number + multiple - 1) // multiple) * multiple


class MemoryCardStorage(StorageBackend):
    """
    Stores saves on an emulated memory card.

    Usage:
        card = MemoryCardStorage(slot="A", card_dir="memcard")
        card.init()  # mounts the card
        card.save("MyWorld", data)
        data = card.load("MyWorld")  # padded to a sector multiple
        card.eject()
    """

    def __init__(
        self,
        slot: str = "A",
        card_dir: Path | str = DEFAULT_CARD_DIR,
        sector_size: int = DEFAULT_SECTOR_SIZE,
        capacity_sectors: int = DEFAULT_CAPACITY_SECTORS,
        game_code: str = "CCRA",
        maker_code: str = "00",
        event_bus: EventBus | None = None,
    ):
        super().__init__()
        if slot not in CARD_SLOTS:
            raise ValueError(f"Unknown card slot: {slot}")
        if sector_size <= 0 or capacity_sectors <= 0:
            raise ValueError("Card sector size and capacity must be positive")
        self.slot = slot
        self.sector_size = sector_size
        self.capacity_sectors = capacity_sectors
        self.game_code = game_code
        self.maker_code = maker_code
        self.event_bus = event_bus

        self.slot_dir = Path(card_dir) / slot
        self._files = FilesystemStorage(self.slot_dir / f"{game_code}{maker_code}")
        self._mounted = False

    # Mounting

    def init(self) -> None:
        """Mount the card."""
        self.mount()

    def mount(self) -> None:
        if self._mounted:
            return
        self._files.init()
        self._mounted = True
        self.log(f"memory card mounted in slot {self.slot} ({self.game_code}/{self.maker_code})")
        if self.event_bus:
            self.event_bus.publish(StorageEvent.CARD_MOUNTED, slot=self.slot)

    def eject(self) -> None:
        """Handle removal of the card; it must be mounted again before use."""
        self.log(f"memory card was removed from slot {self.slot}")
        self._mounted = False
        if self.event_bus:
            self.event_bus.publish(StorageEvent.CARD_REMOVED, slot=self.slot)

    @property
    def mounted(self) -> bool:
        return self._mounted

    def _require_mounted(self) -> None:
        if not self._mounted:
            raise StorageError(f"No memory card mounted in slot {self.slot}")

    # Capacity

    def _sectors(self, path: Path) -> int:
        return self.file_size(path.stat().st_size) // self.sector_size

    @property
    def used_sectors(self) -> int:
        """Sectors taken by every game's files on the card."""
        if not self.slot_dir.is_dir():
            return 0
        return sum(
            self._sectors(path)
            for path in self.slot_dir.rglob("*")
            if path.is_file() and not path.name.startswith(".")
        )

    @property
    def free_sectors(self) -> int:
        return self.capacity_sectors - self.used_sectors

    def file_size(self, size: int) -> int:
        """Bytes a save of `size` bytes occupies on the card."""
        return round_up(max(size, 1), self.sector_size)

    # StorageBackend

    def enumerate(self) -> Iterator[str]:
        self._require_mounted()
        yield from self._files.enumerate()

    def load(self, name: str) -> bytes:
        self._require_mounted()
        try:
            data = self._files.load(name)
        except SaveNotFoundError as e:
            raise SaveNotFoundError(f"No file '{name}' on card in slot {self.slot}") from e
        self.log(f"read {len(data)} bytes of '{name}' from card in slot {self.slot}")
        return data

    def save(self, name: str, data: bytes) -> None:
        self._require_mounted()
        if not name or len(name.encode("utf-8")) > CARD_FILENAME_MAX:
            raise StorageWriteError(
                f"Card file names must be 1-{CARD_FILENAME_MAX} bytes: {name!r}"
            )

        file_size = self.file_size(len(data))
        needed = file_size // self.sector_size
        available = self.free_sectors
        exists = self._files.exists(name)
        if exists:
            available += self._sectors(self._files.save_dir / name)
        if needed > available:
            raise NoSpaceError(
                f"'{name}' needs {needed} sectors, card in slot {self.slot} has {available} free"
            )

        if not exists:
            self.log(f"file '{name}' does not exist. creating it... size = {len(data)}")
        self._files.save(name, bytes(data) + b"\0" * (file_size - len(data)))
        self.log(f"wrote {file_size} bytes of '{name}' to card in slot {self.slot}")

    def delete(self, name: str) -> None:
        self._require_mounted()
        self.log(f"deleting file '{name}'")
        try:
            self._files.delete(name)
        except SaveNotFoundError as e:
            raise SaveNotFoundError(f"No file '{name}' on card in slot {self.slot}") from e
