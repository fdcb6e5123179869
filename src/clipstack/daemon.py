import hashlib
import logging
import threading
from collections.abc import Callable

from clipstack.clipboard import Clipboard
from clipstack.exceptions import ClipboardError, ClipstackError
from clipstack.historystore import Storage

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.25


class Daemon:
    """
    Polls the clipboard and the primary selection, saving every new value to storage.
    """

    storage: Storage
    clipboard: Clipboard
    poll_interval: float
    _stop: threading.Event
    _last_hashes: dict[str, bytes]

    def __init__(self, storage: Storage, clipboard: Clipboard, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        self.storage = storage
        self.clipboard = clipboard
        self.poll_interval = poll_interval
        self._stop = threading.Event()
        self._last_hashes = {}

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    def run(self) -> None:
        self._stop.clear()
        logger.info("clipstack daemon started, monitoring clipboard + primary selection...")
        while not self._stop.is_set():
            self.poll_once()
            _ = self._stop.wait(self.poll_interval)
        logger.info("clipstack daemon stopped")

    def stop(self) -> None:
        self._stop.set()

    def poll_once(self) -> None:
        self._check_and_save("clipboard", self.clipboard.paste)
        self._check_and_save("primary", self.clipboard.paste_primary)

    def _check_and_save(self, source: str, read: Callable[[], str]) -> None:
        try:
            text = read()
        except ClipboardError:
            # Empty or unavailable selections surface as errors; nothing to save.
            return
        if not text:
            return

        digest = hashlib.sha256(text.encode("utf-8")).digest()
        if self._last_hashes.get(source) == digest:
            return
        self._last_hashes[source] = digest

        try:
            entry = self.storage.save_entry(text)
        except ClipstackError as e:
            logger.error("[%s] Error saving entry: %s", source, e.message)
            return
        logger.info("[%s] Saved: %d bytes, preview: %s...", source, entry.size, entry.preview[:40])
