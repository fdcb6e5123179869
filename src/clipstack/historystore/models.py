# pyright: standard
from __future__ import annotations

import hashlib
import unicodedata

from msgspec import Struct, field

from clipstack.serialization import from_json, to_pretty_json

MAX_PREVIEW_LEN = 100
DEFAULT_MAX_ENTRIES = 100
ABSOLUTE_MAX_ENTRIES = 10_000
MAX_PINNED = 25

HASH_PREFIX = "sha256:"


class ClipEntry(Struct, frozen=True):
    """
    Metadata for one stored snippet. The payload itself lives in the content store.

    id doubles as the content filename stem; timestamp is milliseconds since epoch.
    """

    id: str
    timestamp: int
    size: int
    preview: str
    hash: str
    pinned: bool = False


class ClipIndex(Struct):
    """
    Ordered ledger of entries, most recently touched first.

    max_entries bounds unpinned entries only.
    """

    max_entries: int
    entries: list[ClipEntry] = field(default_factory=list)

    def find(self, entry_id: str) -> ClipEntry | None:
        return next((e for e in self.entries if e.id == entry_id), None)

    def position_of_id(self, entry_id: str) -> int:
        return next(i for i, e in enumerate(self.entries) if e.id == entry_id)

    def position_of_hash(self, content_hash: str) -> int | None:
        return next((i for i, e in enumerate(self.entries) if e.hash == content_hash), None)

    def pinned_count(self) -> int:
        return sum(1 for e in self.entries if e.pinned)

    def unpinned_count(self) -> int:
        return sum(1 for e in self.entries if not e.pinned)


def clamp_max_entries(value: int) -> int:
    return max(1, min(value, ABSOLUTE_MAX_ENTRIES))


def content_hash(data: bytes) -> str:
    return HASH_PREFIX + hashlib.sha256(data).hexdigest()


def make_preview(text: str, limit: int = MAX_PREVIEW_LEN) -> str:
    """
    First `limit` code points of text with control characters replaced by spaces.
    """
    return "".join(" " if unicodedata.category(c) == "Cc" else c for c in text[:limit])


def build_entry(entry_id: str, timestamp: int, text: str, pinned: bool = False) -> ClipEntry:
    data = text.encode("utf-8")
    return ClipEntry(
        id=entry_id,
        timestamp=timestamp,
        size=len(data),
        preview=make_preview(text),
        hash=content_hash(data),
        pinned=pinned,
    )


def dumps_index(index: ClipIndex) -> bytes:
    return to_pretty_json(index)


def load_index_bytes(data: bytes | str) -> ClipIndex:
    return from_json(ClipIndex, data)
