from rich.console import Console
from rich.table import Table

from clipstack.historystore import Storage
from clipstack.utils import format_size, format_timestamp


def show_stats(storage: Storage) -> None:
    index = storage.load_index()
    total_size = sum(e.size for e in index.entries)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Entries:", str(len(index.entries)))
    table.add_row("Pinned:", str(index.pinned_count()))
    table.add_row("Max entries:", str(index.max_entries))
    table.add_row("Total size:", format_size(total_size))
    if index.entries:
        table.add_row("Oldest:", format_timestamp(index.entries[-1].timestamp))
        table.add_row("Newest:", format_timestamp(index.entries[0].timestamp))
    table.add_row("Storage:", str(storage.base_dir))

    Console().print(table)
