"""
Save verification script.

Loads the storage configuration, then checks that every stored world
has a valid signature and is not truncated.

Usage:
    python verify_saves.py [storage.json]

Exit codes:
    0 - All saves are valid
    1 - Some saves are invalid, or storage could not be opened
"""

import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from engine.core import setup_logging
from engine.storage import StorageError, ConfigError, load_storage_config, create_storage
from cubecraft.save import SaveManager


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("SaveVerification")

    config_path = Path(argv[0]) if argv else Path("storage.json")
    try:
        config = load_storage_config(config_path)
        # Append to the game's log rather than starting a new one
        setup_logging(config.log_path, fresh=False, console=True)
        storage = create_storage(config)
    except (ConfigError, StorageError) as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        return 1

    manager = SaveManager(storage)
    try:
        results = manager.validate_all()
    except StorageError as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        return 1

    for name, valid in results.items():
        logger.info(f"{'OK     ' if valid else 'INVALID'} {name}")

    invalid = [name for name, valid in results.items() if not valid]
    if invalid:
        logger.error(f"VERIFICATION FAILED: {len(invalid)} of {len(results)} saves invalid")
        return 1

    logger.info(f"VERIFICATION SUCCESSFUL: {len(results)} saves valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
