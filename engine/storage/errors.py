class StorageError(Exception):
    """Base exception for storage backend failures."""


class SaveNotFoundError(StorageError):
    """Raised when no save exists under the requested name."""


class StorageReadError(StorageError):
    """Raised when a save exists but cannot be read."""


class StorageWriteError(StorageError):
    """Raised when a save cannot be written."""


class NoSpaceError(StorageWriteError):
    """Raised when the medium has no room left for a save."""


class ConfigError(Exception):
    """Raised when a storage configuration file is invalid."""
