import logging
import os
import threading
from contextlib import suppress
from pathlib import Path
from tempfile import mkstemp

from clipstack.exceptions import StorageIOError

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"


def atomic_write(path: Path, data: bytes) -> None:
    """
    Writes data to path so that readers only ever see the old or the new contents.

    The payload goes to a uniquely named temp file in the same directory, is fsynced,
    then renamed over the target. The parent directory is synced afterwards.
    """
    prefix = f"{path.stem}.{threading.get_ident()}_"
    try:
        fd, tmp = mkstemp(suffix=TMP_SUFFIX, prefix=prefix, dir=path.parent)
    except OSError as e:
        raise StorageIOError(f"Failed to create temp file for {path}: {e}") from e

    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, "wb") as f:
            _ = f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        raise StorageIOError(f"Failed to write {path}: {e}") from e
    finally:
        tmp_path.unlink(missing_ok=True)

    _sync_dir(path.parent)


def cleanup_temp_files(directory: Path) -> int:
    """
    Removes temp files left behind by interrupted writes. Returns how many were removed.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise StorageIOError(f"Failed to scan {directory} for temp files: {e}") from e

    removed = 0
    for entry in entries:
        if entry.is_file() and entry.name.endswith(TMP_SUFFIX):
            logger.info("Removing orphaned temp file: %s", entry)
            with suppress(FileNotFoundError):
                entry.unlink()
                removed += 1
    return removed


def _sync_dir(directory: Path) -> None:
    # Not every platform allows opening a directory for fsync.
    try:
        dir_fd = os.open(directory, os.O_RDONLY)
    except OSError:
        return
    try:
        with suppress(OSError):
            os.fsync(dir_fd)
    finally:
        os.close(dir_fd)
