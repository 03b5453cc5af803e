import errno
from unittest.mock import patch

import pytest

from engine.storage.errors import (
    NoSpaceError,
    SaveNotFoundError,
    StorageError,
    StorageWriteError,
)
from engine.storage.filesystem import FilesystemStorage, temp_path


def test_init_creates_directory(tmp_path):
    storage = FilesystemStorage(tmp_path / "nested" / "worlds")
    storage.init()
    assert (tmp_path / "nested" / "worlds").is_dir()

    # Idempotent
    storage.init()


def test_save_and_load(fs_storage):
    fs_storage.save("World", b"\x00\x01\x02")

    assert fs_storage.load("World") == b"\x00\x01\x02"
    assert (fs_storage.save_dir / "World").read_bytes() == b"\x00\x01\x02"


def test_save_replaces_existing(fs_storage):
    fs_storage.save("World", b"old data that is longer")
    fs_storage.save("World", b"new")

    assert fs_storage.load("World") == b"new"
    assert list(fs_storage.enumerate()) == ["World"]


def test_enumerate(fs_storage):
    fs_storage.save("b", b"1")
    fs_storage.save("a", b"2")
    (fs_storage.save_dir / ".hidden").write_bytes(b"")
    (fs_storage.save_dir / ".c.tmp").write_bytes(b"")
    (fs_storage.save_dir / "subdir").mkdir()

    assert list(fs_storage.enumerate()) == ["a", "b"]


def test_enumerate_is_restartable(fs_storage):
    fs_storage.save("a", b"1")
    first = fs_storage.enumerate()
    assert list(first) == ["a"]
    assert list(first) == []
    assert list(fs_storage.enumerate()) == ["a"]


def test_enumerate_missing_directory(tmp_path):
    storage = FilesystemStorage(tmp_path / "never_created")
    assert list(storage.enumerate()) == []


def test_load_missing(fs_storage):
    with pytest.raises(SaveNotFoundError):
        fs_storage.load("Nothing")


def test_delete(fs_storage):
    fs_storage.save("World", b"data")
    assert fs_storage.exists("World")

    fs_storage.delete("World")

    assert not fs_storage.exists("World")
    with pytest.raises(SaveNotFoundError):
        fs_storage.delete("World")


@pytest.mark.parametrize("name", ["", ".", "..", "../escape", "a/b", "a\\b", "a\0b"])
def test_rejects_unsafe_names(fs_storage, name):
    with pytest.raises(StorageError):
        fs_storage.save(name, b"data")


def test_disk_full(fs_storage):
    with patch("engine.storage.filesystem.os.fsync", side_effect=OSError(errno.ENOSPC, "No space")):
        with pytest.raises(NoSpaceError):
            fs_storage.save("World", b"data")

    assert list(fs_storage.save_dir.iterdir()) == []


def test_write_failure(fs_storage):
    with patch("engine.storage.filesystem.os.replace", side_effect=OSError(errno.EACCES, "Denied")):
        with pytest.raises(StorageWriteError):
            fs_storage.save("World", b"data")

    assert not fs_storage.exists("World")


def test_no_space_is_a_write_error():
    assert issubclass(NoSpaceError, StorageWriteError)
    assert issubclass(StorageWriteError, StorageError)


def test_tmp_suffix_names_do_not_collide(fs_storage):
    fs_storage.save("a.tmp", b"precious")
    fs_storage.save("a", b"other")

    assert list(fs_storage.enumerate()) == ["a", "a.tmp"]
    assert fs_storage.load("a.tmp") == b"precious"
    assert fs_storage.load("a") == b"other"


def test_write_goes_through_hidden_temp_file(fs_storage):
    with patch("engine.storage.filesystem.os.replace") as replace:
        fs_storage.save("World", b"data")

    src, dst = replace.call_args.args
    assert src == fs_storage.save_dir / ".World.tmp"
    assert src == temp_path(dst)
    assert dst == fs_storage.save_dir / "World"
    assert list(fs_storage.enumerate()) == []
