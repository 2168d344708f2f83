from __future__ import annotations

import re
from pathlib import Path

from playpub.core.result import Err, Ok, Result
from playpub.output.console import ConsoleProtocol
from playpub.services.publish.errors import LocalIOError, PublishError
from playpub.services.publish.model import LocalizedNote

# whatsnew-<BCP 47 locale>, e.g. whatsnew-en-US, whatsnew-fr
_NOTES_FILE = re.compile(r"whatsnew-(?P<locale>.+)")


def notes_locale(name: str) -> str | None:
    """Return the locale encoded in a release notes file name, if any."""
    match = _NOTES_FILE.fullmatch(name)
    if match is None:
        return None
    return match.group("locale")


def read_localized_notes(
    directory: Path | None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[tuple[LocalizedNote, ...], PublishError]:
    """Read ``whatsnew-<locale>`` files from ``directory``.

    No directory, or a directory without matching files, gives an empty
    tuple. Other files and subdirectories are ignored.
    """
    if directory is None:
        return Ok(())

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        return Err(
            LocalIOError(path=directory, message=f"Unable to read 'whatsnew' directory: {e}")
        )

    notes: list[LocalizedNote] = []
    for entry in entries:
        locale = notes_locale(entry.name)
        if locale is None or not entry.is_file():
            continue
        try:
            text = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Err(LocalIOError(path=entry, message=f"failed to read release notes: {e}"))

        if console is not None:
            console.debug(f"Found localized 'whatsnew-*' for Lang({locale})")
        notes.append(LocalizedNote(language=locale, text=text))

    return Ok(tuple(notes))
