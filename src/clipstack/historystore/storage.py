from __future__ import annotations

import logging
import time
from pathlib import Path

from msgspec.structs import replace

from clipstack.exceptions import EntryNotFoundError, IndexCorruptError, PinLimitExceededError, StorageIOError
from clipstack.lib.atomic_io import cleanup_temp_files

from .content_store import ContentStore
from .index_store import IndexStore
from .models import (
    DEFAULT_MAX_ENTRIES,
    MAX_PINNED,
    ClipEntry,
    ClipIndex,
    build_entry,
    clamp_max_entries,
    content_hash,
)
from .recovery import merge_by_hash, scan_orphans

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class Storage:
    """
    Clipboard history persisted as an index file plus one content file per entry.

    Every mutation is a load-modify-save of the whole index. There is no locking
    across processes: two concurrent writers can drop each other's index entry,
    leaving an unreferenced content file that `attempt_recovery` reattaches.
    """

    _base_dir: Path
    _max_entries: int
    content: ContentStore
    index_store: IndexStore

    def __init__(self, base_dir: Path, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        try:
            base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Failed to create storage dir {base_dir}: {e}") from e

        self._base_dir = base_dir
        self._max_entries = clamp_max_entries(max_entries)
        self.content = ContentStore(base_dir)
        self.index_store = IndexStore(base_dir, self._max_entries)

        _ = cleanup_temp_files(base_dir)
        self._sync_max_entries()

    # ---------- Accessors ----------

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def max_entries(self) -> int:
        return self._max_entries

    # ---------- Reads ----------

    def load_index(self) -> ClipIndex:
        return self.index_store.load()

    def load_content(self, entry_id: str) -> str:
        return self.content.get(entry_id).decode("utf-8")

    def pinned_count(self) -> int:
        return self.load_index().pinned_count()

    # ---------- Writes ----------

    def save_entry(self, text: str) -> ClipEntry:
        """
        Stores text as the most recent entry.

        Identical content already in history is moved to the front instead of being
        duplicated; its id, content file and pin state are left alone.
        """
        data = text.encode("utf-8")
        digest = content_hash(data)

        index = self.load_index()
        if (pos := index.position_of_hash(digest)) is not None:
            existing = index.entries.pop(pos)
            index.entries.insert(0, existing)
            self.index_store.save(index)
            return existing

        entry_id, timestamp = self._next_id(index)
        entry = build_entry(entry_id, timestamp, text)
        self.content.put(entry_id, data)

        index.entries.insert(0, entry)
        evicted = self._evict_unpinned(index)
        self.index_store.save(index)
        self._remove_content(evicted)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        index = self.load_index()
        index.entries = [e for e in index.entries if e.id != entry_id]
        self.index_store.save(index)
        self.content.remove(entry_id)

    def toggle_pin(self, entry_id: str) -> bool:
        """
        Flips the pin flag of an entry and returns the new state.

        Raises:
            EntryNotFoundError: if no entry has this id.
            PinLimitExceededError: if pinning would exceed MAX_PINNED.
        """
        index = self.load_index()
        entry = index.find(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)

        self._set_pin(index, entry, not entry.pinned)
        return not entry.pinned

    def set_pinned(self, entry_id: str, pinned: bool) -> None:
        """
        Sets the pin flag explicitly, e.g. to restore state after an undo. Unknown ids are ignored.
        """
        index = self.load_index()
        entry = index.find(entry_id)
        if entry is None:
            return
        self._set_pin(index, entry, pinned)

    def clear(self) -> None:
        """
        Removes all entries and content files. The retention bound is kept.
        """
        index = self.load_index()
        for entry in index.entries:
            self.content.remove(entry.id)
        for entry_id in list(self.content.ids()):
            self.content.remove(entry_id)
        self.index_store.save(self.index_store.empty())

    def attempt_recovery(self) -> int:
        """
        Rebuilds the index from whatever index entries still parse plus every content
        file on disk. Returns the number of entries in the rebuilt index.

        Orphaned files come back unpinned. The retention bound is not applied here;
        the next write evicts any overflow.
        """
        logger.info("Starting storage recovery...")

        known: list[ClipEntry] = []
        try:
            if (index := self.index_store.read_strict()) is not None:
                known = index.entries
                logger.info("Loaded %d entries from existing index", len(known))
        except IndexCorruptError as e:
            logger.warning("%s, scanning files...", e.message)

        orphans = scan_orphans(self.content, {e.id for e in known})
        logger.info("Found %d orphaned content files", len(orphans))

        entries = merge_by_hash(known, orphans)
        logger.info("Total entries after dedup: %d", len(entries))

        self.index_store.save(ClipIndex(max_entries=self._max_entries, entries=entries))
        logger.info("Recovery complete")
        return len(entries)

    # ---------- Internal ----------

    def _set_pin(self, index: ClipIndex, entry: ClipEntry, pinned: bool) -> None:
        if pinned and not entry.pinned and index.pinned_count() >= MAX_PINNED:
            raise PinLimitExceededError(MAX_PINNED)
        if pinned == entry.pinned:
            return
        pos = index.position_of_id(entry.id)
        index.entries[pos] = replace(entry, pinned=pinned)
        self.index_store.save(index)

    def _next_id(self, index: ClipIndex) -> tuple[str, int]:
        """
        Millisecond timestamp id, bumped forward while it collides with an existing entry.
        """
        taken = {e.id for e in index.entries}
        timestamp = _now_ms()
        while str(timestamp) in taken or self.content.exists(str(timestamp)):
            timestamp += 1
        return str(timestamp), timestamp

    def _evict_unpinned(self, index: ClipIndex) -> list[ClipEntry]:
        """
        Drops the oldest unpinned entries until the unpinned count fits max_entries.
        Returns the evicted entries; their content files are not touched here.
        """
        evicted: list[ClipEntry] = []
        excess = index.unpinned_count() - self._max_entries
        for pos in range(len(index.entries) - 1, -1, -1):
            if excess <= 0:
                break
            if not index.entries[pos].pinned:
                evicted.append(index.entries.pop(pos))
                excess -= 1
        if evicted:
            logger.info("Evicted %d old entries", len(evicted))
        return evicted

    def _remove_content(self, entries: list[ClipEntry]) -> None:
        for entry in entries:
            self.content.remove(entry.id)

    def _sync_max_entries(self) -> None:
        """
        Brings the stored bound in line with the configured one and evicts any overflow.
        A corrupt index is left alone for `attempt_recovery`.
        """
        try:
            index = self.index_store.read_strict()
        except IndexCorruptError:
            return
        if index is None:
            return

        changed = index.max_entries != self._max_entries
        index.max_entries = self._max_entries
        evicted = self._evict_unpinned(index)
        if changed or evicted:
            self.index_store.save(index)
        self._remove_content(evicted)
