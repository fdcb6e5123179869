import logging
import socketserver
from typing import final, override

from clipstack.clipboard import Clipboard
from clipstack.exceptions import ClipboardError, ClipstackError
from clipstack.historystore import Storage

logger = logging.getLogger(__name__)

DEFAULT_PORT = 7779


@final
class ClipServer(socketserver.TCPServer):
    """
    Accepts plain TCP connections on localhost; everything sent before EOF becomes one entry.

    Meant to sit behind an SSH reverse tunnel: `cat file | nc localhost 7779`.
    """

    allow_reuse_address = True

    storage: Storage
    clipboard: Clipboard | None

    def __init__(self, storage: Storage, clipboard: Clipboard | None, port: int = DEFAULT_PORT) -> None:
        self.storage = storage
        self.clipboard = clipboard
        super().__init__(("127.0.0.1", port), _ClipRequestHandler)

    def receive(self, payload: bytes) -> None:
        if not payload:
            return
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Dropping connection: payload is not valid UTF-8 (%s)", e)
            return

        try:
            entry = self.storage.save_entry(text)
        except ClipstackError as e:
            logger.error("Error saving entry: %s", e.message)
            return

        if self.clipboard is not None:
            try:
                self.clipboard.copy(text)
            except ClipboardError as e:
                logger.warning("Couldn't copy to system clipboard: %s", e.message)

        logger.info("Received %d bytes: %s...", entry.size, entry.preview[:40])


class _ClipRequestHandler(socketserver.StreamRequestHandler):
    @override
    def handle(self) -> None:
        server = self.server
        assert isinstance(server, ClipServer)
        try:
            payload = self.rfile.read()
        except OSError as e:
            logger.error("Error reading from connection: %s", e)
            return
        server.receive(payload)
