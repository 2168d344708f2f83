from __future__ import annotations

from pathlib import Path

import pytest

from playpub.output.console import MockConsole
from playpub.store.mock import MockStoreApi


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def store() -> MockStoreApi:
    return MockStoreApi()


@pytest.fixture
def release_dir(tmp_path: Path) -> Path:
    """Directory with app-release.apk, app-release.aab and app-arm64.aab."""
    out = tmp_path / "build"
    out.mkdir()
    for name in ("app-release.apk", "app-release.aab", "app-arm64.aab"):
        (out / name).write_bytes(b"PK\x03\x04" + name.encode())
    return out
