from collections.abc import Sequence
from pathlib import Path
from sys import exit
from typing import Annotated, Any, final, override

import typer
from typer.core import TyperGroup

from clipstack.cli_options import CliOptions, open_storage
from clipstack.exceptions import ClipstackError

app: typer.Typer


@final
class ClipstackGroup(TyperGroup):
    @override
    def main(  # pyright: ignore[reportAny]
        self,
        args: Sequence[str] | None = None,
        prog_name: str | None = None,
        complete_var: str | None = None,
        standalone_mode: bool = True,
        windows_expand_args: bool = True,
        **extra: Any,  # pyright: ignore[reportAny, reportExplicitAny]
    ) -> Any:  # pyright: ignore[reportExplicitAny]
        try:
            return super().main(args, prog_name, complete_var, standalone_mode, windows_expand_args, **extra)  #  pyright: ignore[reportAny]
        except ClipstackError as e:
            typer.secho(f"Error: {e.message}", err=True, fg=typer.colors.RED)
            exit(e.exit_code)
        except Exception as e:
            typer.secho("Unexpected Internal Error", err=True, fg=typer.colors.RED)
            typer.echo(str(e), err=True)
            exit(1)


app = typer.Typer(cls=ClipstackGroup, no_args_is_help=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    storage_dir: Annotated[
        Path | None,
        typer.Option("--storage-dir", help="Custom storage directory.", file_okay=False),
    ] = None,
    max_entries: Annotated[
        int | None,
        typer.Option(
            "--max-entries",
            help="Maximum number of unpinned entries to keep (1-10000). Overrides $CLIPSTACK_MAX_ENTRIES.",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging on stderr.")] = False,
) -> None:
    """
    Clipboard manager with a crash-safe, deduplicated history.
    """
    from clipstack.logging_setup import configure_logging

    configure_logging(verbose)
    ctx.obj = CliOptions(storage_dir=storage_dir, max_entries=max_entries)


@app.command("copy")
def copy(ctx: typer.Context) -> None:
    """
    Copy stdin to the clipboard and save it to history.
    """
    from clipstack.clipboard import Clipboard
    from clipstack.commands import copy

    copy.copy(open_storage(ctx.obj), Clipboard())


@app.command("paste")
def paste() -> None:
    """
    Print the current clipboard to stdout.
    """
    from clipstack.clipboard import Clipboard
    from clipstack.commands import copy

    copy.paste(Clipboard())


@app.command("list")
def list_(
    ctx: typer.Context,
    count: Annotated[int, typer.Option("--count", "-n", help="Number of entries to show.", min=1)] = 10,
    json_output: Annotated[bool, typer.Option("--json", help="Output entries as JSON.")] = False,
) -> None:
    """
    List clipboard history, most recent first.
    """
    from clipstack.commands import list_entries

    list_entries.list_entries(open_storage(ctx.obj), count, json_output)


@app.command("search")
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Fuzzy query matched against previews, then full content.")],
    count: Annotated[int, typer.Option("--count", "-n", help="Maximum number of matches to show.", min=1)] = 10,
    json_output: Annotated[bool, typer.Option("--json", help="Output matches as JSON.")] = False,
) -> None:
    """
    Search clipboard history.
    """
    from clipstack.commands import search

    search.search(open_storage(ctx.obj), query, count, json_output)


@app.command("show")
def show(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id as shown by `list --json`.")],
) -> None:
    """
    Print the full content of an entry.
    """
    from clipstack.commands import entry

    entry.show(open_storage(ctx.obj), entry_id)


@app.command("delete")
def delete(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id to delete.")],
) -> None:
    """
    Delete an entry and its content.
    """
    from clipstack.commands import entry

    entry.delete(open_storage(ctx.obj), entry_id)


@app.command("pin")
def pin(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id to pin or unpin.")],
) -> None:
    """
    Toggle whether an entry is protected from pruning.
    """
    from clipstack.commands import entry

    entry.pin(open_storage(ctx.obj), entry_id)


@app.command("clear")
def clear(ctx: typer.Context) -> None:
    """
    Clear clipboard history. The configured max entries is kept.
    """
    from clipstack.commands import entry

    entry.clear(open_storage(ctx.obj))


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """
    Show storage statistics.
    """
    from clipstack.commands import stats

    stats.show_stats(open_storage(ctx.obj))


@app.command("recover")
def recover(ctx: typer.Context) -> None:
    """
    Rebuild the index from content files on disk.
    """
    from clipstack.commands import entry

    entry.recover(open_storage(ctx.obj))


@app.command("daemon")
def daemon(
    ctx: typer.Context,
    interval: Annotated[float, typer.Option(help="Polling interval in seconds.", min=0.01)] = 0.25,
) -> None:
    """
    Monitor the clipboard and primary selection, saving every change.
    """
    from clipstack.clipboard import Clipboard
    from clipstack.commands import background

    background.daemon(open_storage(ctx.obj), Clipboard(), interval)


@app.command("serve")
def serve(
    ctx: typer.Context,
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on.")] = 7779,
) -> None:
    """
    Accept clipboard content over TCP on localhost (use with an SSH reverse tunnel).
    """
    from clipstack.clipboard import Clipboard
    from clipstack.commands import background

    background.serve(open_storage(ctx.obj), Clipboard(), port)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
