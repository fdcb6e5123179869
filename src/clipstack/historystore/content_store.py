from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from clipstack.exceptions import EntryNotFoundError, StorageIOError
from clipstack.lib.atomic_io import atomic_write

logger = logging.getLogger(__name__)

CONTENT_SUFFIX = ".txt"


class ContentStore:
    """
    One file per entry holding the raw payload bytes, named `<id>.txt`.
    """

    root: Path

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, entry_id: str) -> Path:
        return self.root / f"{entry_id}{CONTENT_SUFFIX}"

    def exists(self, entry_id: str) -> bool:
        return self.path_for(entry_id).is_file()

    def put(self, entry_id: str, data: bytes) -> None:
        logger.debug("Writing %d bytes for entry %s", len(data), entry_id)
        atomic_write(self.path_for(entry_id), data)

    def get(self, entry_id: str) -> bytes:
        path = self.path_for(entry_id)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise EntryNotFoundError(entry_id) from e
        except OSError as e:
            raise StorageIOError(f"Failed to read content {path}: {e}") from e

    def remove(self, entry_id: str) -> None:
        path = self.path_for(entry_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageIOError(f"Failed to remove content {path}: {e}") from e

    def ids(self) -> Iterator[str]:
        """
        Yields the id of every content file on disk, in no particular order.
        """
        try:
            paths = list(self.root.iterdir())
        except OSError as e:
            raise StorageIOError(f"Failed to list content in {self.root}: {e}") from e
        for path in paths:
            if path.is_file() and path.suffix == CONTENT_SUFFIX:
                yield path.stem
