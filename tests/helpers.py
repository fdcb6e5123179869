# pyright: standard

from pathlib import Path

from clipstack.historystore import INDEX_FILE_NAME, ClipEntry, ClipIndex
from clipstack.historystore.models import build_entry, dumps_index


def write_content(storage_dir: Path, entry_id: str, text: str) -> Path:
    """Test helper to drop a raw content file into a storage directory."""
    storage_dir.mkdir(parents=True, exist_ok=True)
    path = storage_dir / f"{entry_id}.txt"
    path.write_text(text, encoding="utf-8")
    return path


def write_index(storage_dir: Path, entries: list[ClipEntry], max_entries: int = 100) -> Path:
    """Test helper to write an index file directly, bypassing Storage."""
    storage_dir.mkdir(parents=True, exist_ok=True)
    path = storage_dir / INDEX_FILE_NAME
    path.write_bytes(dumps_index(ClipIndex(max_entries=max_entries, entries=entries)))
    return path


def make_stored_entry(storage_dir: Path, timestamp: int, text: str, pinned: bool = False) -> ClipEntry:
    """Writes the content file and returns the matching entry (not yet indexed)."""
    entry_id = str(timestamp)
    _ = write_content(storage_dir, entry_id, text)
    return build_entry(entry_id, timestamp, text, pinned=pinned)


def content_files(storage_dir: Path) -> list[Path]:
    return sorted(storage_dir.glob("*.txt"))
