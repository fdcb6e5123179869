# pyright: standard
from pathlib import Path

import pytest

from clipstack.historystore import Storage


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    return tmp_path / "clipstack"


@pytest.fixture
def storage(storage_dir: Path) -> Storage:
    """A Storage with the default retention bound in a fresh directory."""
    return Storage(storage_dir)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("CLIPSTACK_DIR", raising=False)
    monkeypatch.delenv("CLIPSTACK_MAX_ENTRIES", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
