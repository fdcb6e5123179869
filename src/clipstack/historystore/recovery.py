from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Set

from clipstack.exceptions import EntryNotFoundError

from .content_store import ContentStore
from .models import ClipEntry, build_entry

logger = logging.getLogger(__name__)

_NUMERIC_ID_RE = re.compile(r"[+-]?[0-9]+")


def timestamp_from_id(entry_id: str) -> int:
    """
    Ids are millisecond timestamps; anything else maps to 0.
    """
    if _NUMERIC_ID_RE.fullmatch(entry_id):
        return int(entry_id)
    return 0


def scan_orphans(content: ContentStore, known_ids: Set[str]) -> list[ClipEntry]:
    """
    Builds unpinned entries for every content file whose id is not in known_ids.

    Files that vanish mid-scan or are not valid UTF-8 are skipped.
    """
    orphans: list[ClipEntry] = []
    for entry_id in content.ids():
        if entry_id in known_ids:
            continue
        try:
            text = content.get(entry_id).decode("utf-8")
        except EntryNotFoundError:
            continue
        except UnicodeDecodeError as e:
            logger.warning("Skipping content file %s: not valid UTF-8 (%s)", content.path_for(entry_id), e)
            continue
        orphans.append(build_entry(entry_id, timestamp_from_id(entry_id), text))
    return orphans


def merge_by_hash(existing: Iterable[ClipEntry], discovered: Iterable[ClipEntry]) -> list[ClipEntry]:
    """
    Collapses entries sharing a hash into one, newest timestamp first.

    A pinned entry always wins over an unpinned one. Otherwise the first candidate
    seen is kept: entries from the existing index before discovered ones, and newer
    discovered entries before older ones.
    """
    by_hash: dict[str, ClipEntry] = {}
    newest_first = sorted(discovered, key=lambda e: e.timestamp, reverse=True)
    for entry in [*existing, *newest_first]:
        kept = by_hash.get(entry.hash)
        if kept is None or (entry.pinned and not kept.pinned):
            by_hash[entry.hash] = entry

    return sorted(by_hash.values(), key=lambda e: e.timestamp, reverse=True)
