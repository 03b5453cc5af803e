import os
import sys
import logging

import pytest

# Ensure engine modules can be imported
sys.path.append(os.getcwd())


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def fs_storage(tmp_path):
    """Initialized filesystem storage in a temporary worlds directory."""
    from engine.storage.filesystem import FilesystemStorage

    storage = FilesystemStorage(tmp_path / "worlds")
    storage.init()
    return storage


@pytest.fixture
def memory_card(tmp_path, event_bus):
    """Mounted memory card with small sectors so tests stay fast."""
    from engine.storage.memory_card import MemoryCardStorage

    card = MemoryCardStorage(
        slot="A",
        card_dir=tmp_path / "memcard",
        sector_size=64,
        capacity_sectors=8,
        event_bus=event_bus,
    )
    card.init()
    return card


@pytest.fixture
def sample_save():
    """Two chunks: (0, 0) holding one block and (-1, 4) holding none."""
    from cubecraft.save.models import SaveFile, ChunkModification, BlockModification

    return SaveFile(
        name="Test",
        seed="seed",
        spawn_x=1,
        spawn_y=2,
        spawn_z=3,
        modified_chunks=[
            ChunkModification(
                x=0,
                z=0,
                modified_blocks=[BlockModification(x=1, y=2, z=3, type=5)],
            ),
            ChunkModification(x=-1, z=4),
        ],
    )


@pytest.fixture
def save_manager(fs_storage, event_bus):
    from cubecraft.save.manager import SaveManager
    return SaveManager(fs_storage, event_bus=event_bus)


@pytest.fixture
def restore_logging():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
