# pyright: standard
import json
from pathlib import Path

from pytest_mock import MockerFixture
from typer.testing import CliRunner

from clipstack.exceptions import ClipboardError
from clipstack.historystore import MAX_PINNED, Storage
from clipstack.main import app
from tests.helpers import write_content

runner = CliRunner()


def _invoke(storage_dir: Path, *args: str, input: str | None = None):
    return runner.invoke(app, ["--storage-dir", str(storage_dir), *args], input=input)


def test_copy_saves_stdin_and_copies_to_clipboard(storage_dir: Path, mocker: MockerFixture) -> None:
    # GIVEN a working clipboard
    copy = mocker.patch("clipstack.clipboard.Clipboard.copy")

    # WHEN I run `clipstack copy` with content on stdin
    result = _invoke(storage_dir, "copy", input="from stdin")

    # THEN the content is copied and stored
    assert result.exit_code == 0
    copy.assert_called_once_with("from stdin")
    assert "Copied 10 bytes" in result.stderr
    entries = Storage(storage_dir).load_index().entries
    assert [e.preview for e in entries] == ["from stdin"]


def test_copy_still_saves_when_clipboard_fails(storage_dir: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("clipstack.clipboard.Clipboard.copy", side_effect=ClipboardError("wl-copy missing"))

    result = _invoke(storage_dir, "copy", input="kept anyway")

    assert result.exit_code == 0
    assert len(Storage(storage_dir).load_index().entries) == 1


def test_paste_prints_clipboard(storage_dir: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("clipstack.clipboard.Clipboard.paste", return_value="pasted")

    result = _invoke(storage_dir, "paste")

    assert result.exit_code == 0
    assert result.stdout == "pasted"


def test_list_shows_recent_entries_with_footer(storage_dir: Path) -> None:
    # GIVEN 4 entries, the newest containing a newline
    storage = Storage(storage_dir)
    for text in ["one", "two", "three", "multi\nline"]:
        _ = storage.save_entry(text)

    # WHEN listing two of them
    result = _invoke(storage_dir, "list", "-n", "2")

    # THEN the newest two are shown, previews sanitized, plus a footer
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("multi line")
    assert lines[1].endswith("three")
    assert lines[2] == "... and 2 more"


def test_list_json(storage_dir: Path) -> None:
    storage = Storage(storage_dir)
    entry = storage.save_entry("json me")
    _ = storage.toggle_pin(entry.id)

    result = _invoke(storage_dir, "list", "--json")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data == [
        {
            "id": entry.id,
            "timestamp": entry.timestamp,
            "size": 7,
            "preview": "json me",
            "hash": entry.hash,
            "pinned": True,
        }
    ]


def test_list_empty(storage_dir: Path) -> None:
    result = _invoke(storage_dir, "list")
    assert result.exit_code == 0
    assert "No clipboard history." in result.stdout


def test_search_finds_preview_and_content_matches(storage_dir: Path) -> None:
    # GIVEN one entry matching on its preview and one only past the preview
    storage = Storage(storage_dir)
    _ = storage.save_entry("q" * 150 + " deploy token")
    _ = storage.save_entry("deploy script")
    _ = storage.save_entry("unrelated")

    # WHEN searching
    result = _invoke(storage_dir, "search", "deploy")

    # THEN the preview hit is listed first, the content hit is marked, both with relative times
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("deploy script")
    assert lines[1].endswith("(match in content)")
    assert all("s ago" in line for line in lines)


def test_search_json(storage_dir: Path) -> None:
    entry = Storage(storage_dir).save_entry("find me")

    result = _invoke(storage_dir, "search", "find", "--json")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [(hit["entry"]["id"], hit["location"]) for hit in data] == [(entry.id, "preview")]


def test_search_without_matches(storage_dir: Path) -> None:
    _ = Storage(storage_dir).save_entry("something")

    result = _invoke(storage_dir, "search", "zzz")

    assert result.exit_code == 0
    assert "No matches." in result.stdout


def test_show_prints_full_content(storage_dir: Path) -> None:
    entry = Storage(storage_dir).save_entry("full\ncontent")

    result = _invoke(storage_dir, "show", entry.id)

    assert result.exit_code == 0
    assert result.stdout == "full\ncontent"


def test_show_missing_entry_is_an_error(storage_dir: Path) -> None:
    result = _invoke(storage_dir, "show", "12345")

    assert result.exit_code == 1
    assert "Error: Entry not found: 12345" in result.stderr


def test_delete(storage_dir: Path) -> None:
    entry = Storage(storage_dir).save_entry("bye")

    result = _invoke(storage_dir, "delete", entry.id)

    assert result.exit_code == 0
    assert Storage(storage_dir).load_index().entries == []


def test_pin_toggles(storage_dir: Path) -> None:
    entry = Storage(storage_dir).save_entry("pin")

    first = _invoke(storage_dir, "pin", entry.id)
    second = _invoke(storage_dir, "pin", entry.id)

    assert "Pinned entry" in first.stdout
    assert "Unpinned entry" in second.stdout


def test_pin_limit_is_reported(storage_dir: Path) -> None:
    # GIVEN MAX_PINNED pinned entries
    storage = Storage(storage_dir)
    for i in range(MAX_PINNED):
        storage.set_pinned(storage.save_entry(f"p{i}").id, True)
    extra = storage.save_entry("one too many")

    # WHEN pinning another one from the CLI
    result = _invoke(storage_dir, "pin", extra.id)

    # THEN the command fails with a readable message
    assert result.exit_code == 1
    assert f"Maximum pinned entries ({MAX_PINNED}) reached" in result.stderr


def test_clear_keeps_max_entries(storage_dir: Path) -> None:
    _ = Storage(storage_dir, max_entries=42).save_entry("x")

    result = runner.invoke(app, ["--storage-dir", str(storage_dir), "--max-entries", "42", "clear"])

    assert result.exit_code == 0
    assert "Clipboard history cleared" in result.stdout
    index = Storage(storage_dir, max_entries=42).load_index()
    assert index.entries == []
    assert index.max_entries == 42


def test_stats(storage_dir: Path) -> None:
    storage = Storage(storage_dir)
    _ = storage.save_entry("a" * 2048)

    result = _invoke(storage_dir, "stats")

    assert result.exit_code == 0
    assert "Entries:" in result.stdout
    assert "2.0KB" in result.stdout
    assert "Max entries:" in result.stdout


def test_max_entries_option_prunes_on_startup(storage_dir: Path) -> None:
    storage = Storage(storage_dir)
    for i in range(20):
        _ = storage.save_entry(f"entry {i}")

    result = runner.invoke(app, ["--storage-dir", str(storage_dir), "--max-entries", "15", "stats"])

    assert result.exit_code == 0
    assert len(Storage(storage_dir, max_entries=15).load_index().entries) == 15


def test_max_entries_env_var(storage_dir: Path, monkeypatch) -> None:
    storage = Storage(storage_dir)
    for i in range(12):
        _ = storage.save_entry(f"entry {i}")
    monkeypatch.setenv("CLIPSTACK_MAX_ENTRIES", "10")

    result = _invoke(storage_dir, "stats")

    assert result.exit_code == 0
    assert len(Storage(storage_dir, max_entries=10).load_index().entries) == 10


def test_recover_rebuilds_corrupt_index(storage_dir: Path) -> None:
    # GIVEN orphaned content files and a broken index
    _ = write_content(storage_dir, "1700000001000", "first")
    _ = write_content(storage_dir, "1700000002000", "second")
    (storage_dir / "index.json").write_text("{broken", encoding="utf-8")

    # WHEN I run `clipstack recover`
    result = _invoke(storage_dir, "recover")

    # THEN both entries are back
    assert result.exit_code == 0
    assert "Recovered 2 entries" in result.stdout
    assert [e.preview for e in Storage(storage_dir).load_index().entries] == ["second", "first"]


def test_corrupt_index_lists_empty_and_suggests_recovery(storage_dir: Path) -> None:
    storage_dir.mkdir(parents=True)
    (storage_dir / "index.json").write_text("{broken", encoding="utf-8")

    result = _invoke(storage_dir, "list")

    assert result.exit_code == 0
    assert "No clipboard history." in result.stdout
    assert "clipstack recover" in result.stderr
