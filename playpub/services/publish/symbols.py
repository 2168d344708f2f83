"""Native debug symbols preparation.

Symbols are supplied either as a ready ``native-debug-symbols.zip`` or as the
directory it would have been built from (one subdirectory per ABI). A
directory is zipped in memory; archive paths are relative to the directory
itself, so ``symbols/arm64-v8a/libapp.so`` becomes ``arm64-v8a/libapp.so``.

The walk is an explicit stack and never follows symlinked directories, so a
link pointing back up the tree cannot loop forever.
Only files are archived, so an empty subdirectory is dropped.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from playpub.core.result import Err, Ok, Result
from playpub.services.publish.errors import LocalIOError, PublishError
from playpub.store.api import Media


@dataclass(frozen=True, slots=True)
class SymbolsPayload:
    source: Path
    media: Media

    @property
    def packaged(self) -> bool:
        return isinstance(self.media, bytes)


def _collect_files(root: Path) -> Result[list[tuple[Path, str]], PublishError]:
    out: list[tuple[Path, str]] = []
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            return Err(LocalIOError(path=current, message=f"failed to list directory: {e}"))

        for entry in entries:
            if entry.is_dir():
                if entry.is_symlink():
                    continue
                stack.append(entry)
            elif entry.is_file():
                out.append((entry, entry.relative_to(root).as_posix()))
    return Ok(out)


def package_symbols_dir(root: Path) -> Result[bytes, PublishError]:
    """Zip every file below ``root`` into an in-memory archive."""
    files = _collect_files(root)
    if isinstance(files, Err):
        return files

    buf = io.BytesIO()
    # Build outputs from some CI caches carry mtime=0, which ZIP cannot store.
    with ZipFile(buf, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
        for src, arc in files.value:
            try:
                zf.write(src, arcname=arc)
            except OSError as e:
                return Err(LocalIOError(path=src, message=f"failed to read symbols file: {e}"))
    return Ok(buf.getvalue())


def load_symbols(path: Path) -> Result[SymbolsPayload, PublishError]:
    """Prepare the debug symbols upload: zip a directory, stream a file as-is."""
    if path.is_dir():
        packaged = package_symbols_dir(path)
        if isinstance(packaged, Err):
            return packaged
        return Ok(SymbolsPayload(source=path, media=packaged.value))

    if path.is_file():
        return Ok(SymbolsPayload(source=path, media=path))

    return Err(LocalIOError(path=path, message=f"Unable to find 'debugSymbols' @ {path}"))
