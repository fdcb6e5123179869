from __future__ import annotations

import logging
from pathlib import Path

import msgspec

from clipstack.exceptions import IndexCorruptError
from clipstack.lib.atomic_io import atomic_write

from .models import ClipIndex, dumps_index, load_index_bytes

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "index.json"
RECOVER_HINT = "Run 'clipstack recover' to rebuild from content files"


class IndexStore:
    """
    Reads and writes the single index file. Writes always go through the atomic writer.
    """

    path: Path
    max_entries: int

    def __init__(self, root: Path, max_entries: int) -> None:
        self.path = root / INDEX_FILE_NAME
        self.max_entries = max_entries

    def empty(self) -> ClipIndex:
        return ClipIndex(max_entries=self.max_entries, entries=[])

    def read_strict(self) -> ClipIndex | None:
        """
        Parses the index file. Returns None when there is no index yet.

        Raises:
            IndexCorruptError: if the file exists but cannot be read or decoded.
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise IndexCorruptError(f"Cannot read index ({e})") from e

        try:
            return load_index_bytes(data)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise IndexCorruptError(f"Index corrupted ({e})") from e

    def load(self) -> ClipIndex:
        """
        Loads the index, degrading to an empty one when the file is missing or corrupt.
        """
        try:
            index = self.read_strict()
        except IndexCorruptError as e:
            logger.warning("%s, returning empty history", e.message)
            logger.warning(RECOVER_HINT)
            return self.empty()
        return index if index is not None else self.empty()

    def save(self, index: ClipIndex) -> None:
        atomic_write(self.path, dumps_index(index))
