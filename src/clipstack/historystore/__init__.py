"""
Persistent clipboard history.

Provides:
- Entry/index models and the preview and hash rules
- Content store (one file per entry) and index persistence
- Storage, the engine handling dedup, pin-aware eviction and recovery
- Two-phase fuzzy search over previews, then full content
"""

from .content_store import ContentStore
from .index_store import INDEX_FILE_NAME, IndexStore
from .models import (
    ABSOLUTE_MAX_ENTRIES,
    DEFAULT_MAX_ENTRIES,
    MAX_PINNED,
    MAX_PREVIEW_LEN,
    ClipEntry,
    ClipIndex,
    clamp_max_entries,
    content_hash,
    make_preview,
)
from .recovery import merge_by_hash, scan_orphans, timestamp_from_id
from .search import MatchLocation, SearchHit, fuzzy_score, search_entries
from .storage import Storage

__all__ = [
    "ABSOLUTE_MAX_ENTRIES",
    "DEFAULT_MAX_ENTRIES",
    "MAX_PINNED",
    "MAX_PREVIEW_LEN",
    "INDEX_FILE_NAME",
    "ClipEntry",
    "ClipIndex",
    "clamp_max_entries",
    "content_hash",
    "make_preview",
    "ContentStore",
    "IndexStore",
    "merge_by_hash",
    "scan_orphans",
    "timestamp_from_id",
    "Storage",
    "MatchLocation",
    "SearchHit",
    "fuzzy_score",
    "search_entries",
]
