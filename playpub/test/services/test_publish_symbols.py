from __future__ import annotations

import io
import os
import zipfile
from pathlib import Path

import pytest

from playpub.core.result import Err, Ok
from playpub.services.publish.errors import LocalIOError
from playpub.services.publish.symbols import load_symbols, package_symbols_dir


def _members(data: bytes) -> set[str]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return set(zf.namelist())


def test_directory_is_zipped_with_relative_paths(tmp_path: Path) -> None:
    root = tmp_path / "symbols"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")

    result = package_symbols_dir(root)

    assert isinstance(result, Ok)
    assert _members(result.value) == {"a.txt", "sub/b.txt"}


def test_deeply_nested_tree(tmp_path: Path) -> None:
    root = tmp_path / "symbols"
    deep = root
    for i in range(50):
        deep = deep / f"d{i}"
    deep.mkdir(parents=True)
    (deep / "libapp.so").write_bytes(b"\x7fELF")

    result = package_symbols_dir(root)

    assert isinstance(result, Ok)
    (member,) = _members(result.value)
    assert member.endswith("d49/libapp.so")
    assert member.count("/") == 50


def test_symlinked_directory_is_not_followed(tmp_path: Path) -> None:
    root = tmp_path / "symbols"
    (root / "arm64-v8a").mkdir(parents=True)
    (root / "arm64-v8a" / "libapp.so").write_bytes(b"so")
    try:
        os.symlink(root, root / "arm64-v8a" / "loop", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    result = package_symbols_dir(root)

    assert isinstance(result, Ok)
    assert _members(result.value) == {"arm64-v8a/libapp.so"}


def test_empty_subdirectory_is_dropped(tmp_path: Path) -> None:
    root = tmp_path / "symbols"
    (root / "x86_64").mkdir(parents=True)
    (root / "arm64-v8a").mkdir()
    (root / "arm64-v8a" / "libapp.so").write_bytes(b"so")

    result = package_symbols_dir(root)

    assert isinstance(result, Ok)
    assert _members(result.value) == {"arm64-v8a/libapp.so"}


def test_files_with_epoch_mtime_are_packaged(tmp_path: Path) -> None:
    root = tmp_path / "symbols"
    root.mkdir()
    lib = root / "libapp.so"
    lib.write_bytes(b"so")
    os.utime(lib, (0, 0))

    result = package_symbols_dir(root)

    assert isinstance(result, Ok)
    assert _members(result.value) == {"libapp.so"}


def test_zip_file_is_passed_through(tmp_path: Path) -> None:
    archive = tmp_path / "native-debug-symbols.zip"
    archive.write_bytes(b"PK\x05\x06" + b"\x00" * 18)

    result = load_symbols(archive)

    assert isinstance(result, Ok)
    assert result.value.media == archive
    assert not result.value.packaged


def test_directory_payload_is_packaged(tmp_path: Path) -> None:
    (tmp_path / "libapp.so").write_bytes(b"so")

    result = load_symbols(tmp_path)

    assert isinstance(result, Ok)
    assert result.value.packaged
    assert result.value.source == tmp_path


def test_missing_path(tmp_path: Path) -> None:
    result = load_symbols(tmp_path / "missing")

    assert isinstance(result, Err)
    assert isinstance(result.error, LocalIOError)
    assert "Unable to find 'debugSymbols'" in result.error.message
