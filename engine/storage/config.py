"""
Storage configuration.

Selects and configures the storage backend at startup. Configuration
lives in a JSON file, validated against STORAGE_CONFIG_SCHEMA before it
is turned into a StorageConfig.

Example storage.json:
    {
        "backend": "memory_card",
        "log_path": "log.txt",
        "card_slot": "B",
        "card_dir": "memcard"
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import jsonschema
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from engine.core.events import EventBus
from engine.storage.backend import StorageBackend
from engine.storage.errors import ConfigError
from engine.storage.filesystem import FilesystemStorage
from engine.storage.memory_card import (
    DEFAULT_CAPACITY_SECTORS,
    DEFAULT_CARD_DIR,
    DEFAULT_SECTOR_SIZE,
    MemoryCardStorage,
)

logger = logging.getLogger(__name__)

STORAGE_CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "backend": {"enum": ["filesystem", "memory_card"]},
        "save_dir": {"type": "string", "minLength": 1},
        "log_path": {"type": ["string", "null"]},
        "card_slot": {"enum": ["A", "B"]},
        "card_dir": {"type": "string", "minLength": 1},
        "card_sector_size": {"type": "integer", "minimum": 1},
        "card_capacity_sectors": {"type": "integer", "minimum": 1},
        "game_code": {"type": "string", "minLength": 4, "maxLength": 4},
        "maker_code": {"type": "string", "minLength": 2, "maxLength": 2},
    },
}


class StorageConfig(BaseModel):
    """Settings for the storage backend and the diagnostic log."""

    model_config = ConfigDict(extra='forbid')

    backend: Literal["filesystem", "memory_card"] = "filesystem"
    save_dir: str = "worlds"
    log_path: str | None = "log.txt"
    card_slot: Literal["A", "B"] = "A"
    card_dir: str = DEFAULT_CARD_DIR
    card_sector_size: int = Field(default=DEFAULT_SECTOR_SIZE, gt=0)
    card_capacity_sectors: int = Field(default=DEFAULT_CAPACITY_SECTORS, gt=0)
    game_code: str = "CCRA"
    maker_code: str = "00"


def load_storage_config(path: Path | str) -> StorageConfig:
    """
    Load storage settings from a JSON file.

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Storage config not found: {path}, using defaults")
        return StorageConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load storage config {path}: {e}") from e

    try:
        jsonschema.validate(instance=data, schema=STORAGE_CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigError(f"Validation error in {path}: {e.message}") from e

    try:
        return StorageConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid storage config {path}: {e}") from e


def create_storage(config: StorageConfig, event_bus: EventBus | None = None) -> StorageBackend:
    """Build the configured backend and prepare it for use."""
    if config.backend == "memory_card":
        storage: StorageBackend = MemoryCardStorage(
            slot=config.card_slot,
            card_dir=config.card_dir,
            sector_size=config.card_sector_size,
            capacity_sectors=config.card_capacity_sectors,
            game_code=config.game_code,
            maker_code=config.maker_code,
            event_bus=event_bus,
        )
    else:
        storage = FilesystemStorage(config.save_dir)

    storage.init()
    logger.info(f"Using {config.backend} save storage")
    return storage
