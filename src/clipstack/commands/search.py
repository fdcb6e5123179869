from clipstack.historystore import Storage
from clipstack.historystore.search import MatchLocation, search_entries
from clipstack.serialization import to_json
from clipstack.utils import format_relative_time, format_size, list_preview


def search(storage: Storage, query: str, count: int, json_output: bool = False) -> None:
    hits = search_entries(storage, query, limit=count)

    if json_output:
        print(to_json(hits).decode("utf-8"))
        return

    if not hits:
        print("No matches.")
        return

    for hit in hits:
        entry = hit.entry
        pin = "*" if entry.pinned else " "
        where = "  (match in content)" if hit.location is MatchLocation.CONTENT else ""
        print(
            f"{entry.id} {format_relative_time(entry.timestamp):>8} [{format_size(entry.size):>7}] {pin} "
            + f"{list_preview(entry.preview)}{where}"
        )
