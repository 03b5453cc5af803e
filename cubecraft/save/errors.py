class SaveError(Exception):
    """Base exception for save/load errors."""


class FormatError(SaveError):
    """Raised when a buffer is not a world save (bad magic, unreadable field)."""


class TruncatedInputError(SaveError):
    """Raised when a save declares more data than the buffer holds."""


class SizeMismatchError(SaveError):
    """Raised when the writer's buffer does not match the calculated size.

    This can only come from a disagreement between the size calculator and
    the writer, never from external input.
    """


class BufferOverrunError(SaveError):
    """Raised by the codec when a cursor would move past the end of its buffer."""


class SaveValidationError(SaveError):
    """Raised when a save model fails validation."""
