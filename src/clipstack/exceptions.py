class ClipstackError(Exception):
    """Base exception for all expected clipstack errors."""

    message: str
    exit_code: int

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class EntryNotFoundError(ClipstackError):
    """No entry (or content file) exists for the given id."""

    entry_id: str

    def __init__(self, entry_id: str):
        super().__init__(f"Entry not found: {entry_id}")
        self.entry_id = entry_id


class PinLimitExceededError(ClipstackError):
    """Pinning would exceed the pinned entry cap."""

    limit: int

    def __init__(self, limit: int):
        super().__init__(f"Maximum pinned entries ({limit}) reached. Unpin something first.")
        self.limit = limit


class StorageIOError(ClipstackError):
    """Filesystem failures while creating, writing, syncing or renaming storage files."""


class IndexCorruptError(ClipstackError):
    """The index file exists but cannot be read or parsed."""


class ClipboardError(ClipstackError):
    """The system clipboard tools are missing or failed."""
