from clipstack.historystore import Storage
from clipstack.serialization import to_json
from clipstack.utils import format_size, format_timestamp, list_preview


def list_entries(storage: Storage, count: int, json_output: bool = False) -> None:
    index = storage.load_index()
    shown = index.entries[:count]

    if json_output:
        print(to_json(shown).decode("utf-8"))
        return

    if not index.entries:
        print("No clipboard history.")
        return

    for entry in shown:
        pin = "*" if entry.pinned else " "
        print(f"{format_timestamp(entry.timestamp)} [{format_size(entry.size):>7}] {pin} {list_preview(entry.preview)}")

    if len(index.entries) > count:
        print(f"... and {len(index.entries) - count} more")
