import typer

from clipstack.historystore import Storage


def show(storage: Storage, entry_id: str) -> None:
    typer.echo(storage.load_content(entry_id), nl=False)


def delete(storage: Storage, entry_id: str) -> None:
    storage.delete_entry(entry_id)
    print(f"Deleted entry {entry_id}")


def pin(storage: Storage, entry_id: str) -> None:
    pinned = storage.toggle_pin(entry_id)
    print(f"{'Pinned' if pinned else 'Unpinned'} entry {entry_id}")


def clear(storage: Storage) -> None:
    storage.clear()
    print("Clipboard history cleared")


def recover(storage: Storage) -> None:
    recovered = storage.attempt_recovery()
    print(f"Recovered {recovered} entries")
