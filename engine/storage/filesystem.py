"""
Filesystem save storage.

Each save is a single file named after the save, inside a worlds
directory. Writes go to a hidden temporary file first and replace the target
in one step, so a failed write never leaves a half-written save behind.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Iterator

from engine.storage.backend import StorageBackend
from engine.storage.errors import (
    NoSpaceError,
    SaveNotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

TEMP_SUFFIX = ".tmp"


def temp_path(path: Path) -> Path:
    """Path of the in-progress copy of a save. Dot names are never save names."""
    return path.with_name(f".{path.name}{TEMP_SUFFIX}")


class FilesystemStorage(StorageBackend):
    """
    Stores saves as files in a directory.

    Usage:
        storage = FilesystemStorage("worlds")
        storage.init()
        storage.save("MyWorld", data)
        data = storage.load("MyWorld")
    """

    def __init__(self, save_dir: Path | str = "worlds"):
        super().__init__()
        self.save_dir = Path(save_dir)

    def init(self) -> None:
        """Create the worlds directory if it doesn't exist."""
        if not self.save_dir.is_dir():
            self.log(f"creating worlds directory '{self.save_dir}'")
            try:
                self.save_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create worlds directory {self.save_dir}: {e}") from e

    def _get_path(self, name: str) -> Path:
        """Get the file path for a save, rejecting names that escape the directory."""
        if not name or name.startswith(".") or "/" in name or "\\" in name or "\0" in name:
            raise StorageError(f"Invalid save name: {name!r}")
        return self.save_dir / name

    def enumerate(self) -> Iterator[str]:
        if not self.save_dir.is_dir():
            return
        for path in sorted(self.save_dir.iterdir()):
            if path.name.startswith("."):
                continue
            if path.is_file():
                yield path.name

    def load(self, name: str) -> bytes:
        path = self._get_path(name)
        self.log(f"loading world '{name}' from file '{path}'")
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise SaveNotFoundError(f"Save not found: {name}") from e
        except OSError as e:
            raise StorageReadError(f"Cannot read save {name}: {e}") from e

    def save(self, name: str, data: bytes) -> None:
        path = self._get_path(name)
        tmp = temp_path(path)
        self.log(f"saving world '{name}' to file '{path}'")
        try:
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            if e.errno == errno.ENOSPC:
                raise NoSpaceError(f"No space left to save {name}") from e
            raise StorageWriteError(f"Cannot write save {name}: {e}") from e

    def delete(self, name: str) -> None:
        path = self._get_path(name)
        self.log(f"deleting file '{path}'")
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise SaveNotFoundError(f"Save not found: {name}") from e
        except OSError as e:
            raise StorageWriteError(f"Cannot delete save {name}: {e}") from e

    def exists(self, name: str) -> bool:
        return self._get_path(name).is_file()
