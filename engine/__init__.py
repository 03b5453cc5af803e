"""
Engine

Game-agnostic infrastructure shared by the game layer: events, logging
and save storage backends.

Quick Start:
    from engine.core import EventBus, setup_logging
    from engine.storage import load_storage_config, create_storage

    setup_logging("log.txt")
    config = load_storage_config("storage.json")
    storage = create_storage(config, event_bus=EventBus())
"""

__version__ = "0.1.0"
