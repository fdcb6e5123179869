import logging
import os
from pathlib import Path

from pydantic import PositiveInt, TypeAdapter, ValidationError

from clipstack.historystore.models import DEFAULT_MAX_ENTRIES, clamp_max_entries

logger = logging.getLogger(__name__)

STORAGE_DIR_ENV = "CLIPSTACK_DIR"
MAX_ENTRIES_ENV = "CLIPSTACK_MAX_ENTRIES"


def default_storage_dir() -> Path:
    """
    $CLIPSTACK_DIR, else $XDG_DATA_HOME/clipstack, else ~/.local/share/clipstack.
    """
    if env_dir := os.environ.get(STORAGE_DIR_ENV):
        return Path(env_dir)
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "clipstack"


def resolve_storage_dir(cli_value: Path | None) -> Path:
    return cli_value if cli_value is not None else default_storage_dir()


def resolve_max_entries(cli_value: int | None) -> int:
    """
    CLI option first, then $CLIPSTACK_MAX_ENTRIES, then the default; always clamped.
    """
    if cli_value is not None:
        return clamp_max_entries(cli_value)

    raw = os.environ.get(MAX_ENTRIES_ENV)
    if raw is None:
        return DEFAULT_MAX_ENTRIES

    try:
        value = TypeAdapter(PositiveInt).validate_python(raw.strip())
    except ValidationError:
        logger.warning("Ignoring invalid %s=%r, using %d", MAX_ENTRIES_ENV, raw, DEFAULT_MAX_ENTRIES)
        return DEFAULT_MAX_ENTRIES
    return clamp_max_entries(value)
