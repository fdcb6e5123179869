import logging
import sys

import typer

from clipstack.clipboard import Clipboard
from clipstack.exceptions import ClipboardError
from clipstack.historystore import Storage

logger = logging.getLogger(__name__)


def copy(storage: Storage, clipboard: Clipboard) -> None:
    content = sys.stdin.read()

    try:
        clipboard.copy(content)
    except ClipboardError as e:
        logger.warning("Couldn't copy to system clipboard: %s", e.message)

    entry = storage.save_entry(content)
    typer.echo(f"Copied {entry.size} bytes", err=True)


def paste(clipboard: Clipboard) -> None:
    typer.echo(clipboard.paste(), nl=False)
