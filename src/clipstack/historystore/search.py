from __future__ import annotations

import logging
from enum import StrEnum

from msgspec import Struct

from clipstack.exceptions import EntryNotFoundError

from .models import ClipEntry
from .storage import Storage

logger = logging.getLogger(__name__)

SCORE_MATCH = 16
BONUS_CONSECUTIVE = 8
BONUS_BOUNDARY = 8
BONUS_SUBSTRING = 32
MAX_GAP_PENALTY = 8


class MatchLocation(StrEnum):
    PREVIEW = "preview"
    CONTENT = "content"


class SearchHit(Struct, frozen=True):
    entry: ClipEntry
    score: int
    location: MatchLocation


def _is_boundary(text: str, pos: int) -> bool:
    return pos == 0 or not text[pos - 1].isalnum()


def fuzzy_score(text: str, query: str) -> int | None:
    """
    Case-insensitive subsequence match. Returns None when some query character
    cannot be matched in order.

    A contiguous substring hit always gets the substring bonus; otherwise the
    characters are matched greedily, rewarding runs and word starts and
    penalising gaps.
    """
    if not query:
        return 0
    haystack = text.lower()
    needle = query.lower()

    if (pos := haystack.find(needle)) != -1:
        boundary = BONUS_BOUNDARY if _is_boundary(haystack, pos) else 0
        return len(needle) * (SCORE_MATCH + BONUS_CONSECUTIVE) + BONUS_SUBSTRING + boundary

    score = 0
    last = -1
    for ch in needle:
        idx = haystack.find(ch, last + 1)
        if idx == -1:
            return None
        score += SCORE_MATCH
        if last >= 0:
            if idx == last + 1:
                score += BONUS_CONSECUTIVE
            else:
                score -= min(idx - last - 1, MAX_GAP_PENALTY)
        if _is_boundary(haystack, idx):
            score += BONUS_BOUNDARY
        last = idx
    return score


def search_entries(storage: Storage, query: str, limit: int | None = None) -> list[SearchHit]:
    """
    Two-phase search over the history.

    Previews are matched first since they are already in the index. Only entries
    whose preview misses get their full content loaded from disk. Preview hits rank
    ahead of content hits; each group is ordered by score.
    """
    entries = storage.load_index().entries
    if not query:
        hits = [SearchHit(entry=e, score=0, location=MatchLocation.PREVIEW) for e in entries]
        return hits[:limit]

    preview_hits: list[SearchHit] = []
    misses: list[ClipEntry] = []
    for entry in entries:
        score = fuzzy_score(entry.preview, query)
        if score is None:
            misses.append(entry)
        else:
            preview_hits.append(SearchHit(entry=entry, score=score, location=MatchLocation.PREVIEW))

    content_hits: list[SearchHit] = []
    for entry in misses:
        try:
            content = storage.load_content(entry.id)
        except (EntryNotFoundError, UnicodeDecodeError) as e:
            logger.debug("Skipping %s during search: %s", entry.id, e)
            continue
        if (score := fuzzy_score(content, query)) is not None:
            content_hits.append(SearchHit(entry=entry, score=score, location=MatchLocation.CONTENT))

    preview_hits.sort(key=lambda h: h.score, reverse=True)
    content_hits.sort(key=lambda h: h.score, reverse=True)
    return [*preview_hits, *content_hits][:limit]
