from dataclasses import dataclass
from pathlib import Path

from clipstack.config import resolve_max_entries, resolve_storage_dir
from clipstack.historystore import Storage


@dataclass(slots=True, frozen=True)
class CliOptions:
    storage_dir: Path | None = None
    max_entries: int | None = None


def open_storage(options: CliOptions | None) -> Storage:
    """Builds a Storage from global CLI options, falling back to env vars and defaults."""
    options = options or CliOptions()
    return Storage(resolve_storage_dir(options.storage_dir), resolve_max_entries(options.max_entries))
